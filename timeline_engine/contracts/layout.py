"""
Layout Contracts

Output types of the layout pipeline: the time scale (coordinate system),
track-assigned layout events, and zoom bounds.

LIFECYCLE:
==========
Every value here is rebuilt in full on each layout pass.
Nothing is mutated in place and nothing persists across passes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .events import TimelineEvent


# =============================================================================
# TIME SCALE
# =============================================================================

class SegmentKind(Enum):
    """Kind of axis segment."""
    CONTINUOUS = "continuous"   # Real time span, linearly scaled
    BREAK = "break"             # Fixed-width elision between active ranges


@dataclass(frozen=True)
class TimeSegment:
    """
    A contiguous pixel range on the time axis.

    For CONTINUOUS segments scale is the local pixels-per-year of this
    segment (not the global zoom density). BREAK segments carry scale 0.
    """
    start_year: float
    end_year: float
    pixel_start: float
    pixel_width: float
    scale: float
    kind: SegmentKind

    @property
    def pixel_end(self) -> float:
        return self.pixel_start + self.pixel_width

    @property
    def is_break(self) -> bool:
        return self.kind == SegmentKind.BREAK

    def contains_time(self, time_value: float) -> bool:
        return self.start_year <= time_value <= self.end_year


@dataclass(frozen=True)
class TimeScale:
    """
    Ordered segments laid out left to right with no gaps or overlaps.

    INVARIANT: total_width == sum(segment.pixel_width)
    """
    segments: Tuple[TimeSegment, ...] = ()
    total_width: float = 0.0

    @property
    def break_count(self) -> int:
        return sum(1 for s in self.segments if s.is_break)

    @property
    def continuous_segments(self) -> Tuple[TimeSegment, ...]:
        return tuple(s for s in self.segments if not s.is_break)

    @property
    def is_empty(self) -> bool:
        return not self.segments


# =============================================================================
# TRACKS
# =============================================================================

class TrackPosition(Enum):
    """Vertical side of the axis."""
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Track:
    """One of the four display lanes. Layer 0 is nearest the axis."""
    position: TrackPosition
    layer: int


# Enumeration order doubles as the tie-break order of the cost model
TRACK_ORDER: Tuple[Track, ...] = (
    Track(TrackPosition.TOP, 0),
    Track(TrackPosition.BOTTOM, 0),
    Track(TrackPosition.TOP, 1),
    Track(TrackPosition.BOTTOM, 1),
)


# =============================================================================
# LAYOUT OUTPUT
# =============================================================================

@dataclass(frozen=True)
class LayoutEvent:
    """
    A source event annotated with its final placement.

    pixel_original is the Date Mapper output; pixel_center is the nudged
    position and is never left of pixel_original.
    """
    event: TimelineEvent
    track: Track
    pixel_original: float
    pixel_center: float
    timeline_position_percent: float  # 0-100 of the final total width
    color_token: str

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def year(self) -> int:
        return self.event.year

    @property
    def month(self) -> Optional[int]:
        return self.event.month

    @property
    def position(self) -> TrackPosition:
        return self.track.position

    @property
    def layer(self) -> int:
        return self.track.layer


@dataclass(frozen=True)
class SmartLayout:
    """
    Fully calculated layout.

    DETERMINISTIC:
    Same events + same density + same break toggle = identical layout.

    total_width may exceed time_scale.total_width when nudging pushed the
    last card past the end of the axis. time_scale itself is left intact so
    its segment-sum invariant keeps holding.
    """
    layout_events: Tuple[LayoutEvent, ...] = ()
    total_width: float = 0.0
    time_scale: TimeScale = field(default_factory=TimeScale)
    occupancy: Tuple[Tuple[Track, Tuple[Tuple[float, float], ...]], ...] = ()

    def intervals_for(self, track: Track) -> Tuple[Tuple[float, float], ...]:
        """Committed card spans of one track, in placement order."""
        for candidate, intervals in self.occupancy:
            if candidate == track:
                return intervals
        return ()


@dataclass(frozen=True)
class ZoomBounds:
    """Content-derived zoom range, in percent."""
    min_zoom: int
    max_zoom: int
    perfect_zoom: int
    fit_zoom: int
    natural_width: float
    available_width: float
