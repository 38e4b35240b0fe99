"""
Smart Layout
============

End-to-end layout pass: time scale -> date mapping -> color ->
nudging -> track assignment.

Input: TimelineEvents (read-only), a color palette, zoom density.
Output: SmartLayout (frozen, rebuilt from scratch on every call).

DETERMINISTIC:
==============
No randomness and no hidden state. Ties in pixel position are broken by
event id, so identical inputs always produce identical layouts.
"""

from __future__ import annotations
from typing import Dict, Iterable, Mapping, Optional, Sequence

from ..config import LayoutEngineConfig
from ..contracts.events import EventTypeConfig, TimelineEvent
from ..contracts.layout import LayoutEvent, SmartLayout, TimeScale
from .date_mapper import map_date_to_pixel
from .palette import resolve_event_color
from .time_scale import generate_time_segments
from .track_assignment import PositionedEvent, assign_tracks, nudge_positions


def _percent_of(pixel: float, total_width: float) -> float:
    if total_width <= 0:
        return 0.0
    return min(100.0, max(0.0, pixel / total_width * 100))


def calculate_smart_layout(
    events: Iterable[TimelineEvent],
    color_palette: Sequence[str],
    pixels_per_year: float,
    enable_breaks: bool = True,
    event_types: Optional[Mapping[str, EventTypeConfig]] = None,
    config: Optional[LayoutEngineConfig] = None,
    available_width: Optional[float] = None
) -> SmartLayout:
    """
    Lay out events on the timeline.

    An empty event list yields an empty layout (zero width); rendering an
    empty state is the caller's concern.
    """
    config = config or LayoutEngineConfig()
    events = list(events)
    if not events:
        return SmartLayout()

    # 1. Coordinate system
    time_scale: TimeScale = generate_time_segments(
        events,
        pixels_per_year,
        enable_breaks=enable_breaks,
        config=config.time_scale,
        available_width=available_width,
    )

    # 2. Positions and colors
    year_index: Dict[int, int] = {
        year: index for index, year in enumerate(sorted({e.year for e in events}))
    }
    positioned = []
    for event in events:
        pixel = map_date_to_pixel(event.year, event.month, time_scale)
        color = resolve_event_color(
            event,
            year_index[event.year],
            color_palette,
            event_types,
            fallback=config.tracks.fallback_color,
        )
        positioned.append(PositionedEvent(
            event=event,
            pixel_original=pixel,
            pixel_center=pixel,
            color_token=color,
        ))

    # 3. Minimum-distance nudging
    nudged = nudge_positions(positioned, config.tracks.min_node_spacing)
    total_width = max(
        time_scale.total_width,
        nudged[-1].pixel_center + config.tracks.trailing_padding,
    )

    # 4. Track selection
    placements, occupancy = assign_tracks(nudged, config.tracks)

    layout_events = tuple(
        LayoutEvent(
            event=item.event,
            track=track,
            pixel_original=item.pixel_original,
            pixel_center=item.pixel_center,
            timeline_position_percent=_percent_of(item.pixel_center, total_width),
            color_token=item.color_token,
        )
        for item, track in placements
    )

    return SmartLayout(
        layout_events=layout_events,
        total_width=total_width,
        time_scale=time_scale,
        occupancy=occupancy.snapshot(),
    )
