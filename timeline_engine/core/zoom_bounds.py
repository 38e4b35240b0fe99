"""
Zoom Bounds Calculator
======================

Derives the zoom control's range from content instead of fixed constants.

DEFINITIONS:
============
- natural width: width that lays out every card across ~2.5 parallel
  tracks with no overlap. This is the 100% zoom reference.
- limit width: natural width squeezed until cards are only
  (1 - overlap_tolerance) visible. This is the compression floor.
- fit zoom: zoom at which all content fits the available width.

Stateless; recomputed whenever event count or container width changes.
"""

from __future__ import annotations
import math
from typing import Iterable, Optional, Union

from ..config import ZoomConfig
from ..contracts.layout import ZoomBounds


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _event_count(events: Union[int, Iterable]) -> int:
    if isinstance(events, int):
        return max(0, events)
    return sum(1 for _ in events)


def calculate_zoom_bounds(
    events: Union[int, Iterable],
    container_width: float,
    config: Optional[ZoomConfig] = None
) -> ZoomBounds:
    """
    Compute min/max/perfect/fit zoom percentages.

    events may be the event list or its length. container_width is the
    width available to events, with edge and label margins already
    removed by the caller.
    """
    config = config or ZoomConfig()
    count = _event_count(events)
    available_width = max(1.0, float(container_width))

    natural_width = max(
        config.card_width,
        count / config.parallel_tracks * config.card_width,
    )
    limit_width = natural_width * (1 - config.overlap_tolerance)

    fit_zoom = round_half_up(available_width / natural_width * 100)
    limit_zoom = round_half_up(limit_width / natural_width * 100)

    max_zoom = config.max_zoom
    min_zoom = min(max_zoom, max(config.min_zoom_floor, limit_zoom))

    # Content that already fits comfortably opens at fit zoom; anything
    # else opens at 100% and scrolls.
    perfect_zoom = fit_zoom if fit_zoom >= config.default_zoom else config.default_zoom
    perfect_zoom = min(max_zoom, max(min_zoom, perfect_zoom))

    return ZoomBounds(
        min_zoom=min_zoom,
        max_zoom=max_zoom,
        perfect_zoom=perfect_zoom,
        fit_zoom=fit_zoom,
        natural_width=natural_width,
        available_width=available_width,
    )


def clamp_zoom(zoom_percent: float, bounds: ZoomBounds) -> int:
    """Clamp a requested zoom into the bounds' range."""
    return min(bounds.max_zoom, max(bounds.min_zoom, round_half_up(zoom_percent)))


def zoom_to_pixels_per_year(
    zoom_percent: float,
    config: Optional[ZoomConfig] = None
) -> float:
    """Axis density (pixels per year) for a zoom percentage."""
    config = config or ZoomConfig()
    return config.base_pixels_per_year * max(0.0, zoom_percent) / 100
