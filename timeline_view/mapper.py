"""
Layout to View Mapper

Converts engine output into pre-calculated, renderable view contracts.

MAPPING BOUNDARY:
=================
This is the ONLY place where engine layouts become views.
All conversion happens here, nowhere else.

MAPPING RULES:
==============
1. Never recompute placement (positions and tracks come from the engine)
2. Preserve engine ordering of cards
3. Views are deterministic: no clocks, no random ids
"""

from __future__ import annotations
import hashlib
import math
import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from timeline_engine.contracts import (
    EventTypeConfig, LayoutEvent, SmartLayout, TimelineEvent, TimelineInfo,
    TimeSegment, ZoomBounds,
)
from timeline_engine.core import map_date_to_pixel, timeline_gradient
from timeline_engine.engine import LayoutSnapshot

from .visualization import (
    AxisSegmentView, AxisTick, BreakMarkerView, EventCardView,
    HighlightSpan, TimelineView,
)
from .presentation import LegendEntryViewModel, ZoomControlViewModel


MONTH_NAMES = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)


def format_event_time(year: int, month: Optional[int] = None) -> str:
    """'Mar 2025' when a month is known, otherwise '2025'."""
    if month and 1 <= month <= 12:
        return f"{MONTH_NAMES[month - 1]} {year}"
    return str(year)


def split_highlights(
    text: Optional[str],
    keywords: Optional[Iterable[str]]
) -> Tuple[HighlightSpan, ...]:
    """
    Split text into plain and highlighted runs.

    Matching is case-insensitive and keywords are literal text. Longer
    keywords win when two keywords match at the same offset.
    """
    if not text:
        return ()
    words = sorted({k for k in (keywords or ()) if k}, key=lambda k: (-len(k), k))
    if not words:
        return (HighlightSpan(text=text, highlighted=False),)

    pattern = re.compile("(" + "|".join(re.escape(w) for w in words) + ")", re.IGNORECASE)
    spans = []
    # re.split with one capturing group alternates plain, match, plain, ...
    for index, part in enumerate(pattern.split(text)):
        if part:
            spans.append(HighlightSpan(text=part, highlighted=index % 2 == 1))
    return tuple(spans)


class TimelineViewMapper:
    """
    Maps engine layouts to timeline views.

    SINGLE POINT OF CONVERSION:
    ===========================
    All engine -> view conversion goes through this class.
    """

    # =========================================================================
    # FULL VIEW
    # =========================================================================

    def map_snapshot(self, snapshot: LayoutSnapshot) -> TimelineView:
        """Map an orchestrated snapshot."""
        return self.map_layout(snapshot.layout, snapshot.info, snapshot.palette)

    def map_layout(
        self,
        layout: SmartLayout,
        info: TimelineInfo,
        palette: Sequence[str] = ()
    ) -> TimelineView:
        """Map a SmartLayout to a TimelineView."""
        years = sorted({e.year for e in layout.layout_events})
        year_colors: Dict[int, str] = {}
        if palette:
            year_colors = {year: palette[i % len(palette)] for i, year in enumerate(years)}

        axis_segments = []
        break_markers = []
        ticks = []
        for segment in layout.time_scale.segments:
            if segment.is_break:
                break_markers.append(self._map_break(segment))
            else:
                axis_segments.append(self._map_axis_segment(segment, year_colors, info))
                ticks.extend(self._year_ticks(segment, layout))

        cards = tuple(self._map_card(e, info.event_types) for e in layout.layout_events)

        return TimelineView(
            view_id=self._view_id(layout),
            title=info.title,
            company=info.company,
            total_width=layout.total_width,
            axis_segments=tuple(axis_segments),
            break_markers=tuple(break_markers),
            ticks=tuple(ticks),
            cards=cards,
        )

    # =========================================================================
    # AXIS
    # =========================================================================

    def _map_axis_segment(
        self,
        segment: TimeSegment,
        year_colors: Mapping[int, str],
        info: TimelineInfo
    ) -> AxisSegmentView:
        colors = [
            color for year, color in sorted(year_colors.items())
            if segment.start_year <= year < segment.end_year
        ]
        return AxisSegmentView(
            start_x=segment.pixel_start,
            width=segment.pixel_width,
            start_year=segment.start_year,
            end_year=segment.end_year,
            fill=timeline_gradient(colors) or info.theme_color,
        )

    def _map_break(self, segment: TimeSegment) -> BreakMarkerView:
        first_idle = int(math.ceil(segment.start_year))
        last_idle = int(math.ceil(segment.end_year)) - 1
        if last_idle < first_idle:
            label = ""
        elif last_idle == first_idle:
            label = str(first_idle)
        else:
            label = f"{first_idle} - {last_idle}"

        return BreakMarkerView(
            start_x=segment.pixel_start,
            width=segment.pixel_width,
            center_x=segment.pixel_start + segment.pixel_width / 2,
            label=label,
        )

    def _year_ticks(self, segment: TimeSegment, layout: SmartLayout) -> List[AxisTick]:
        ticks = []
        year = int(math.ceil(segment.start_year))
        while year < segment.end_year:
            ticks.append(AxisTick(
                x=map_date_to_pixel(year, 1, layout.time_scale),
                label=str(year),
            ))
            year += 1
        return ticks

    # =========================================================================
    # CARDS
    # =========================================================================

    def _map_card(
        self,
        item: LayoutEvent,
        event_types: Mapping[str, EventTypeConfig]
    ) -> EventCardView:
        event = item.event
        type_config = event_types.get(event.type) if event_types else None

        return EventCardView(
            event_id=event.id,
            x=item.pixel_center,
            anchor_x=item.pixel_original,
            position=item.position.value,
            layer=item.layer,
            timeline_position_percent=item.timeline_position_percent,
            color_token=item.color_token,
            time_label=format_event_time(event.year, event.month),
            title_spans=split_highlights(event.title, event.highlight),
            description_spans=split_highlights(event.description, event.highlight),
            type_label=type_config.label if type_config else None,
        )

    def _view_id(self, layout: SmartLayout) -> str:
        digest = hashlib.sha256()
        digest.update(f"{layout.total_width:.3f}".encode())
        for item in layout.layout_events:
            digest.update(
                f"|{item.id}:{item.pixel_center:.3f}:{item.position.value}:{item.layer}".encode()
            )
        return f"view_{digest.hexdigest()[:12]}"

    # =========================================================================
    # CONTROLS
    # =========================================================================

    def map_zoom_control(self, bounds: ZoomBounds, zoom_percent: int) -> ZoomControlViewModel:
        """Zoom slider state for the current zoom."""
        return ZoomControlViewModel(
            zoom_percent=zoom_percent,
            min_zoom=bounds.min_zoom,
            max_zoom=bounds.max_zoom,
            perfect_zoom=bounds.perfect_zoom,
            label=f"{zoom_percent}%",
            can_zoom_in=zoom_percent < bounds.max_zoom,
            can_zoom_out=zoom_percent > bounds.min_zoom,
            is_perfect=zoom_percent == bounds.perfect_zoom,
        )

    def map_legend(
        self,
        events: Iterable[TimelineEvent],
        event_types: Mapping[str, EventTypeConfig]
    ) -> Tuple[LegendEntryViewModel, ...]:
        """Legend entries for types that have events, sorted by order."""
        counts: Dict[str, int] = {}
        for event in events:
            counts[event.type] = counts.get(event.type, 0) + 1

        entries = [
            LegendEntryViewModel(
                type_id=type_id,
                label=config.label,
                color=config.color,
                count=counts[type_id],
                order=config.order,
            )
            for type_id, config in event_types.items()
            if counts.get(type_id, 0) > 0
        ]
        entries.sort(key=lambda e: (e.order, e.type_id))
        return tuple(entries)
