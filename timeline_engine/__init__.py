"""
Timeline Layout Engine

This package lays out dated events on a horizontal version timeline.
Each layer communicates only through explicit contracts, never through
shared mutable state.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Responsibility: Immutable input, output and audit types
   - Outputs: TimelineEvent, TimeScale, SmartLayout, ZoomBounds, Error
   - MUST NOT: Contain behavior beyond derived properties

2. CORE LAYOUT (core/)
   - Responsibility: Time scale, date mapping, track assignment, zoom bounds
   - Allowed inputs: TimelineEvents and configuration
   - Outputs: TimeScale, SmartLayout, ZoomBounds (rebuilt on every call)
   - MUST NOT: Keep state, perform I/O, raise on well-typed input

3. ENGINE (engine.py)
   - Responsibility: Boundary validation, zoom resolution, supersede order
   - Allowed inputs: Raw event records and a LayoutRequest
   - Outputs: LayoutSnapshot with explicit errors

4. OBSERVABILITY & AUDIT LAYER (observability/)
   - Responsibility: Audit log and metrics of layout passes
   - MUST NOT: Modify layout behavior

5. HTTP API (api/)
   - Responsibility: Stateless JSON surface over the engine

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: All data structures are frozen/immutable
- Deterministic: Identical inputs always produce identical layouts
- Explicit errors: Malformed records are reported, never silently dropped
"""

from .config import LayoutEngineConfig, TimeScaleConfig, TrackCostConfig, ZoomConfig
from .contracts import (
    TimelineEvent, TimelineInfo, TimelineTheme, EventTypeConfig,
    TimeScale, TimeSegment, SegmentKind, SmartLayout, LayoutEvent,
    Track, TrackPosition, ZoomBounds, Error, ErrorCode,
)
from .core import (
    generate_time_segments, map_date_to_pixel, calculate_smart_layout,
    calculate_zoom_bounds, generate_timeline_colors,
)
from .engine import LayoutRequest, LayoutSnapshot, TimelineLayoutEngine

__all__ = [
    'LayoutEngineConfig', 'TimeScaleConfig', 'TrackCostConfig', 'ZoomConfig',
    'TimelineEvent', 'TimelineInfo', 'TimelineTheme', 'EventTypeConfig',
    'TimeScale', 'TimeSegment', 'SegmentKind', 'SmartLayout', 'LayoutEvent',
    'Track', 'TrackPosition', 'ZoomBounds', 'Error', 'ErrorCode',
    'generate_time_segments', 'map_date_to_pixel', 'calculate_smart_layout',
    'calculate_zoom_bounds', 'generate_timeline_colors',
    'LayoutRequest', 'LayoutSnapshot', 'TimelineLayoutEngine',
]

__version__ = "0.1.0"
