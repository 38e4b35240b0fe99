"""
Timeline Visualization Contracts

Responsibility:
Renderable, pre-calculated views of a computed layout.
Input: SmartLayout (engine) -> Output: TimelineView (visualization)
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class HighlightSpan:
    """A run of card text, flagged when it matches a highlight keyword."""
    text: str
    highlighted: bool


@dataclass(frozen=True)
class AxisSegmentView:
    """A continuous stretch of the axis ready for painting."""
    start_x: float
    width: float
    start_year: float
    end_year: float
    fill: str               # Single color or CSS gradient


@dataclass(frozen=True)
class BreakMarkerView:
    """A compressed gap drawn as a break glyph."""
    start_x: float
    width: float
    center_x: float
    label: str              # e.g. "2016 - 2019"


@dataclass(frozen=True)
class AxisTick:
    """A year tick on the axis."""
    x: float
    label: str


@dataclass(frozen=True)
class EventCardView:
    """A placed event card."""
    event_id: str
    x: float                # Card center after nudging
    anchor_x: float         # Date position on the axis (connector foot)
    position: str           # "top" | "bottom"
    layer: int
    timeline_position_percent: float
    color_token: str
    time_label: str
    title_spans: Tuple[HighlightSpan, ...]
    description_spans: Tuple[HighlightSpan, ...]
    type_label: Optional[str]


@dataclass(frozen=True)
class TimelineView:
    """
    Fully calculated timeline visualization.

    DETERMINISTIC:
    Same layout + same info = identical view.
    No layout logic allowed in the rendering surface - all pre-calculated here.
    """
    view_id: str
    title: str
    company: Optional[str]
    total_width: float
    axis_segments: Tuple[AxisSegmentView, ...]
    break_markers: Tuple[BreakMarkerView, ...]
    ticks: Tuple[AxisTick, ...]
    cards: Tuple[EventCardView, ...]

    @property
    def is_empty(self) -> bool:
        return not self.cards
