"""
Contracts Module

This module defines the explicit data types exchanged between the
layout layers. All inter-layer communication MUST use these contracts.
No layer may import implementation details from another layer.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. All contracts include explicit error states
3. Layout outputs are rebuilt in full on every pass, never mutated
4. All timestamps use UTC and are never mutated
"""

from .base import ErrorCode, Error, Result, Timestamp
from .events import (
    TimelineEvent, EventTypeConfig, TimelineTheme, TimelineInfo,
    DEFAULT_EVENT_TYPES, DEFAULT_THEME_COLOR, event_from_mapping,
    AuditEventType, AuditLogEntry, MetricPoint,
)
from .layout import (
    SegmentKind, TimeSegment, TimeScale, TrackPosition, Track, TRACK_ORDER,
    LayoutEvent, SmartLayout, ZoomBounds,
)

__all__ = [
    'ErrorCode', 'Error', 'Result', 'Timestamp',
    'TimelineEvent', 'EventTypeConfig', 'TimelineTheme', 'TimelineInfo',
    'DEFAULT_EVENT_TYPES', 'DEFAULT_THEME_COLOR', 'event_from_mapping',
    'AuditEventType', 'AuditLogEntry', 'MetricPoint',
    'SegmentKind', 'TimeSegment', 'TimeScale', 'TrackPosition', 'Track',
    'TRACK_ORDER', 'LayoutEvent', 'SmartLayout', 'ZoomBounds',
]
