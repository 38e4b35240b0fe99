"""
Event Contracts

Immutable input records and audit/metric records.

INPUT OWNERSHIP:
================
Timeline events are owned by the external event store.
The engine reads them and NEVER writes back.

Raw records arriving from the store (plain mappings) are converted at the
boundary by event_from_mapping(), which returns a Result instead of raising.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .base import Error, ErrorCode, Result, Timestamp


DEFAULT_THEME_COLOR = "#0A7171"


# =============================================================================
# TIMELINE EVENTS (Read-only input)
# =============================================================================

@dataclass(frozen=True)
class TimelineEvent:
    """
    A dated event shown on the version timeline.

    month is 1-12 or None. A missing month places the event at mid-year.
    """
    id: str
    year: int
    month: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    type: str = ""
    highlight: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class EventTypeConfig:
    """Display configuration for one event type."""
    label: str
    color: str          # Hex color, e.g. "#ff4d4f"
    order: int = 0      # Legend sort weight


DEFAULT_EVENT_TYPES: Dict[str, EventTypeConfig] = {
    'major': EventTypeConfig(label='Major release', color='#ff4d4f', order=0),
    'minor': EventTypeConfig(label='Minor release', color='#1890ff', order=1),
    'patch': EventTypeConfig(label='Patch release', color='#52c41a', order=2),
    'milestone': EventTypeConfig(label='Milestone', color='#faad14', order=3),
}


class TimelineTheme(Enum):
    """Named palette families for the timeline axis."""
    TEAL = "teal"
    BLUE = "blue"
    PURPLE = "purple"
    ORANGE = "orange"
    GREEN = "green"
    RAINBOW = "rainbow"
    MONOCHROME = "monochrome"

    @classmethod
    def parse(cls, value: Optional[str]) -> TimelineTheme:
        """Unknown or missing theme names fall back to teal."""
        for theme in cls:
            if theme.value == value:
                return theme
        return cls.TEAL


@dataclass(frozen=True)
class TimelineInfo:
    """Timeline header and styling owned by the theme store."""
    title: str = ""
    company: Optional[str] = None
    theme_color: str = DEFAULT_THEME_COLOR
    theme: TimelineTheme = TimelineTheme.TEAL
    event_types: Mapping[str, EventTypeConfig] = field(
        default_factory=lambda: dict(DEFAULT_EVENT_TYPES)
    )


# =============================================================================
# BOUNDARY CONVERSION
# =============================================================================

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def event_from_mapping(raw: Any) -> Result:
    """
    Convert a raw event record into a TimelineEvent.

    Returns Result.failure with an explicit ErrorCode for malformed
    records. Never raises.
    """
    if isinstance(raw, TimelineEvent):
        return Result.success(raw)
    if not isinstance(raw, Mapping):
        return Result.failure(Error.create(
            ErrorCode.MALFORMED_EVENT,
            "event record must be a mapping",
            record_type=type(raw).__name__,
        ))

    event_id = raw.get('id')
    if _is_int(event_id):
        event_id = str(event_id)
    if not isinstance(event_id, str) or not event_id:
        return Result.failure(Error.create(
            ErrorCode.INVALID_EVENT_ID,
            "event id must be a non-empty string",
        ))

    year = raw.get('year')
    if isinstance(year, float) and year.is_integer():
        year = int(year)
    if not _is_int(year):
        return Result.failure(Error.create(
            ErrorCode.INVALID_YEAR,
            "event year must be an integer",
            event_id=event_id,
        ))

    month = raw.get('month')
    if month is not None:
        if isinstance(month, float) and month.is_integer():
            month = int(month)
        if not _is_int(month) or not 1 <= month <= 12:
            return Result.failure(Error.create(
                ErrorCode.INVALID_MONTH,
                "event month must be an integer between 1 and 12",
                event_id=event_id,
            ))

    highlight = raw.get('highlight')
    if highlight is not None:
        if (not isinstance(highlight, (list, tuple))
                or not all(isinstance(h, str) for h in highlight)):
            return Result.failure(Error.create(
                ErrorCode.INVALID_HIGHLIGHT,
                "highlight must be a list of strings",
                event_id=event_id,
            ))
        highlight = tuple(highlight)

    description = raw.get('description')
    return Result.success(TimelineEvent(
        id=event_id,
        year=year,
        month=month,
        title=str(raw.get('title') or ""),
        description=str(description) if description is not None else None,
        type=str(raw.get('type') or ""),
        highlight=highlight,
    ))


# =============================================================================
# AUDIT AND METRIC RECORDS
# =============================================================================

class AuditEventType(Enum):
    """Explicit audit event types."""
    LAYOUT = "layout"
    ZOOM_BOUNDS = "zoom_bounds"
    VALIDATION = "validation"
    ERROR = "error"
    SYSTEM = "system"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: Timestamp
    layer: str  # Which layer generated this
    action: str
    entity_id: Optional[str] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MetricPoint:
    """Immutable metric data point."""
    metric_name: str
    value: float
    timestamp: Timestamp
    labels: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
