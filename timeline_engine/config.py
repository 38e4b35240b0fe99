"""
Layout Configuration

Every tunable number of the layout pipeline lives here: thresholds,
widths, and the penalty weights of the track cost model. Control flow
never contains these literals, so the cost model can be tuned or tested
in isolation.

One config per layer, aggregated by LayoutEngineConfig.
"""

from __future__ import annotations
from dataclasses import dataclass

from .contracts.events import DEFAULT_THEME_COLOR


@dataclass(frozen=True)
class TimeScaleConfig:
    """Configuration for the time scale builder."""
    break_gap_pixels: float = 400.0     # Gaps at least this wide (at current density) are elided
    break_gap_years: float = 1.0        # Gaps below one year are never elided
    break_width: float = 48.0
    event_slot_width: float = 28.0      # Width claimed per clustered event
    single_event_min_width: float = 28.0
    min_year_span: float = 1e-6

    def __post_init__(self):
        if self.break_width <= 0 or self.event_slot_width <= 0:
            raise ValueError("break_width and event_slot_width must be positive")
        if self.single_event_min_width < 0:
            raise ValueError("single_event_min_width must not be negative")
        if self.min_year_span <= 0:
            raise ValueError("min_year_span must be positive")


@dataclass(frozen=True)
class TrackCostConfig:
    """Configuration for nudging and the track cost model."""
    card_width: float = 216.0
    min_node_spacing: float = 12.0
    trailing_padding: float = 50.0

    layer_penalty: float = 800.0
    zigzag_penalty: float = 50.0
    crowd_penalty: float = 200.0
    crowd_distance: float = 10.0
    overlap_base_penalty: float = 1000.0
    overlap_ratio_penalty: float = 30000.0
    connector_penalty: float = 500.0
    connector_distance: float = 40.0

    fallback_color: str = DEFAULT_THEME_COLOR

    def __post_init__(self):
        if self.card_width <= 0:
            raise ValueError("card_width must be positive")
        if self.min_node_spacing < 0:
            raise ValueError("min_node_spacing must not be negative")


@dataclass(frozen=True)
class ZoomConfig:
    """Configuration for zoom bounds and the zoom-to-density mapping."""
    card_width: float = 216.0
    parallel_tracks: float = 2.5
    overlap_tolerance: float = 0.7      # Cards may be squeezed to 30% visible
    min_zoom_floor: int = 20
    max_zoom: int = 300
    default_zoom: int = 100
    base_pixels_per_year: float = 200.0  # Density at 100% zoom

    def __post_init__(self):
        if self.card_width <= 0 or self.parallel_tracks <= 0:
            raise ValueError("card_width and parallel_tracks must be positive")
        if not 0.0 <= self.overlap_tolerance < 1.0:
            raise ValueError("overlap_tolerance must be in [0, 1)")
        if not 0 < self.min_zoom_floor <= self.max_zoom:
            raise ValueError("min_zoom_floor must be positive and not exceed max_zoom")
        if not self.min_zoom_floor <= self.default_zoom <= self.max_zoom:
            raise ValueError("default_zoom must lie between min_zoom_floor and max_zoom")
        if self.base_pixels_per_year <= 0:
            raise ValueError("base_pixels_per_year must be positive")


@dataclass
class LayoutEngineConfig:
    """Unified configuration for the entire layout engine."""
    time_scale: TimeScaleConfig = None
    tracks: TrackCostConfig = None
    zoom: ZoomConfig = None
    enable_breaks: bool = True

    def __post_init__(self):
        self.time_scale = self.time_scale or TimeScaleConfig()
        self.tracks = self.tracks or TrackCostConfig()
        self.zoom = self.zoom or ZoomConfig()
