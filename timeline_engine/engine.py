"""
Engine Orchestration Module

This module provides the single entry point that coordinates validation,
zoom resolution, layout and observability.

DESIGN PRINCIPLES:
==================
1. The core algorithms stay pure; this module owns the only state
   (request sequence counter and observability collectors)
2. Every request reruns the whole pipeline from scratch
3. A newer request supersedes older ones: their snapshots report
   is_current() == False and can simply be dropped by the caller
4. Malformed event records are reported as typed errors, never raised
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set, Tuple, Union
import time

from .config import LayoutEngineConfig
from .contracts.base import Error, ErrorCode
from .contracts.events import AuditEventType, TimelineEvent, TimelineInfo, event_from_mapping
from .contracts.layout import SmartLayout, TimeScale, ZoomBounds
from .core.palette import generate_timeline_colors
from .core.smart_layout import calculate_smart_layout
from .core.time_scale import generate_time_segments
from .core.zoom_bounds import calculate_zoom_bounds, clamp_zoom, zoom_to_pixels_per_year
from .observability import ObservabilityEngine


@dataclass(frozen=True)
class LayoutRequest:
    """
    Inputs of one layout computation.

    zoom_percent None selects the content's perfect zoom.
    enable_breaks None falls back to the engine configuration.
    """
    events: Tuple[Any, ...] = ()
    zoom_percent: Optional[float] = None
    enable_breaks: Optional[bool] = None
    container_width: float = 1000.0
    info: TimelineInfo = field(default_factory=TimelineInfo)


@dataclass(frozen=True)
class LayoutSnapshot:
    """Result of one orchestrated layout computation."""
    sequence: int
    zoom_percent: int
    pixels_per_year: float
    enable_breaks: bool
    zoom_bounds: ZoomBounds
    layout: SmartLayout
    palette: Tuple[str, ...]
    info: TimelineInfo
    errors: Tuple[Error, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.layout.layout_events


class TimelineLayoutEngine:
    """
    Unified layout engine for the version timeline.

    FLOW:
    =====
    1. Validation: raw records -> TimelineEvent (errors collected)
    2. Zoom: content-derived bounds, requested zoom clamped into them
    3. Layout: time scale -> date mapping -> nudging -> tracks
    4. Observability: audit entry and metrics per computation
    """

    def __init__(
        self,
        config: Optional[LayoutEngineConfig] = None,
        observability: Optional[ObservabilityEngine] = None
    ):
        self._config = config or LayoutEngineConfig()
        self._observability = observability or ObservabilityEngine()
        self._latest_sequence = 0

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def normalize_events(self, raw_events: Iterable[Any]) -> Tuple[List[TimelineEvent], List[Error]]:
        """
        Convert raw records into TimelineEvents.

        Malformed records and repeated ids are skipped and reported.
        """
        events: List[TimelineEvent] = []
        errors: List[Error] = []
        seen_ids: Set[str] = set()

        for index, raw in enumerate(raw_events):
            result = event_from_mapping(raw)
            if result.is_failure:
                errors.append(result.error.with_context("index", str(index)))
                continue

            event = result.value
            if event.id in seen_ids:
                errors.append(Error.create(
                    ErrorCode.DUPLICATE_EVENT_ID,
                    "event id already used by an earlier record",
                    event_id=event.id,
                    index=str(index),
                ))
                continue

            seen_ids.add(event.id)
            events.append(event)

        for error in errors:
            self._observability.log_error(error)
            self._observability.collect_metric(
                "layout_invalid_events_total", 1, {"error_code": error.code.name}
            )

        return events, errors

    # =========================================================================
    # DIRECT ENTRY POINTS
    # =========================================================================

    def time_scale(
        self,
        raw_events: Iterable[Any],
        pixels_per_year: float,
        enable_breaks: Optional[bool] = None
    ) -> Tuple[TimeScale, List[Error]]:
        """Build only the coordinate system."""
        events, errors = self.normalize_events(raw_events)
        breaks = self._config.enable_breaks if enable_breaks is None else enable_breaks
        scale = generate_time_segments(
            events, pixels_per_year, enable_breaks=breaks, config=self._config.time_scale
        )
        return scale, errors

    def zoom_bounds(
        self,
        events: Union[int, Iterable[Any]],
        container_width: float
    ) -> ZoomBounds:
        """Compute only the zoom range from raw events or a bare event count."""
        if isinstance(events, int):
            count = max(0, events)
        else:
            count = len(self.normalize_events(events)[0])
        bounds = calculate_zoom_bounds(count, container_width, self._config.zoom)
        self._observability.log_audit(
            action="zoom_bounds",
            event_type=AuditEventType.ZOOM_BOUNDS,
            event_count=str(count),
            perfect_zoom=str(bounds.perfect_zoom),
        )
        return bounds

    # =========================================================================
    # FULL COMPUTATION
    # =========================================================================

    def compute(self, request: LayoutRequest) -> LayoutSnapshot:
        """Run the whole pipeline for one request."""
        self._latest_sequence += 1
        sequence = self._latest_sequence
        started = time.perf_counter()

        events, errors = self.normalize_events(request.events)
        enable_breaks = (
            self._config.enable_breaks if request.enable_breaks is None else request.enable_breaks
        )

        bounds = calculate_zoom_bounds(events, request.container_width, self._config.zoom)
        if request.zoom_percent is None:
            zoom = bounds.perfect_zoom
        else:
            zoom = clamp_zoom(request.zoom_percent, bounds)
        pixels_per_year = zoom_to_pixels_per_year(zoom, self._config.zoom)

        distinct_years = len({e.year for e in events})
        palette = tuple(generate_timeline_colors(distinct_years, request.info.theme))

        layout = calculate_smart_layout(
            events,
            palette,
            pixels_per_year,
            enable_breaks=enable_breaks,
            event_types=request.info.event_types,
            config=self._config,
            available_width=request.container_width,
        )

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._record(sequence, layout, elapsed_ms, zoom)

        return LayoutSnapshot(
            sequence=sequence,
            zoom_percent=zoom,
            pixels_per_year=pixels_per_year,
            enable_breaks=enable_breaks,
            zoom_bounds=bounds,
            layout=layout,
            palette=palette,
            info=request.info,
            errors=tuple(errors),
        )

    def is_current(self, snapshot: LayoutSnapshot) -> bool:
        """False once a newer request has been computed."""
        return snapshot.sequence == self._latest_sequence

    def _record(self, sequence: int, layout: SmartLayout, elapsed_ms: float, zoom: int):
        layer1 = sum(1 for e in layout.layout_events if e.layer == 1)

        self._observability.collect_metric("layout_duration_ms", elapsed_ms)
        self._observability.collect_metric("layout_events_total", len(layout.layout_events))
        self._observability.collect_metric("layout_breaks", layout.time_scale.break_count)
        self._observability.collect_metric("layout_layer1_events", layer1)
        self._observability.collect_metric("layout_total_width_px", layout.total_width)
        self._observability.log_audit(
            action="layout",
            event_type=AuditEventType.LAYOUT,
            entity_id=f"layout_{sequence}",
            events=str(len(layout.layout_events)),
            zoom=str(zoom),
            total_width=f"{layout.total_width:.1f}",
        )

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def config(self) -> LayoutEngineConfig:
        return self._config

    @property
    def observability(self) -> ObservabilityEngine:
        return self._observability

    @property
    def latest_sequence(self) -> int:
        return self._latest_sequence
