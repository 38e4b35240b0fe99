from .timeline import (
    HighlightSpan, AxisSegmentView, BreakMarkerView, AxisTick,
    EventCardView, TimelineView,
)

__all__ = [
    'HighlightSpan', 'AxisSegmentView', 'BreakMarkerView', 'AxisTick',
    'EventCardView', 'TimelineView',
]
