"""
Presentation Contracts

Responsibility:
Define ViewModel contracts for the timeline's control components.
Strictly decoupled from layout logic.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ZoomControlViewModel:
    """ViewModel for the zoom slider and its buttons."""
    zoom_percent: int
    min_zoom: int
    max_zoom: int
    perfect_zoom: int
    label: str           # e.g., "125%"
    can_zoom_in: bool
    can_zoom_out: bool
    is_perfect: bool


@dataclass(frozen=True)
class LegendEntryViewModel:
    """ViewModel for one event-type legend entry."""
    type_id: str
    label: str
    color: str
    count: int
    order: int
