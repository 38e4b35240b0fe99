"""
Core Layout Algorithms

RESPONSIBILITY: Pure, synchronous layout computation
ALLOWED INPUTS: TimelineEvents, densities, widths, configuration
OUTPUTS: TimeScale, SmartLayout, ZoomBounds

WHAT THIS LAYER MUST NOT DO:
============================
- Perform I/O or keep state across calls
- Mutate its inputs
- Raise on any well-typed input (degenerate numbers are clamped)

Layers, leaves first:
1. time_scale       - axis segments and breaks
2. date_mapper      - (year, month) -> pixel
3. track_assignment - nudging and the track cost model
4. smart_layout     - the full layout pass
5. zoom_bounds      - content-derived zoom range (independent sibling)
"""

from .time_scale import detect_active_ranges, generate_time_segments
from .date_mapper import (
    date_to_time_value, map_date_to_pixel, map_datetime_to_pixel,
    map_time_to_pixel, pixel_to_time_value,
)
from .track_assignment import (
    PositionedEvent, TrackOccupancy, TrackCost,
    nudge_positions, track_cost, choose_track, assign_tracks,
)
from .smart_layout import calculate_smart_layout
from .zoom_bounds import (
    calculate_zoom_bounds, clamp_zoom, zoom_to_pixels_per_year, round_half_up,
)
from .palette import generate_timeline_colors, timeline_gradient, resolve_event_color

__all__ = [
    'detect_active_ranges', 'generate_time_segments',
    'date_to_time_value', 'map_date_to_pixel', 'map_datetime_to_pixel',
    'map_time_to_pixel', 'pixel_to_time_value',
    'PositionedEvent', 'TrackOccupancy', 'TrackCost',
    'nudge_positions', 'track_cost', 'choose_track', 'assign_tracks',
    'calculate_smart_layout',
    'calculate_zoom_bounds', 'clamp_zoom', 'zoom_to_pixels_per_year', 'round_half_up',
    'generate_timeline_colors', 'timeline_gradient', 'resolve_event_color',
]
