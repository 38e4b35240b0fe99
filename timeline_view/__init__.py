"""
Timeline View Layer

Renderable contracts for the external painting surface.

LAYER STRUCTURE:
================
1. visualization/ - axis, break, tick and card views (TimelineView)
2. presentation/  - control view models (zoom slider, legend)
3. mapper         - the single engine -> view conversion point

The painting surface consumes these views as-is and performs no layout
of its own.
"""

from .mapper import TimelineViewMapper, format_event_time, split_highlights

__all__ = ['TimelineViewMapper', 'format_event_time', 'split_highlights']
