"""
Date Mapper
===========

Pure conversion between calendar dates and pixel offsets on a built
TimeScale. No side effects; safe to call without running the layout pass
(e.g. for a "today" marker).
"""

from __future__ import annotations
from datetime import date
from typing import Optional

from ..contracts.layout import TimeScale, TimeSegment


def date_to_time_value(year: float, month: Optional[int] = None) -> float:
    """
    Continuous time value of a (year, month) pair.

    A missing month maps to mid-year so month-less events do not bias
    toward January.
    """
    if month:
        return year + (month - 1) / 12
    return year + 0.5


def _continuous_segment_at(time_value: float, time_scale: TimeScale) -> Optional[TimeSegment]:
    """
    Continuous segment containing a time value.

    Two ranges split around a zero-year break share a boundary year; the
    later segment owns it, since year y spans [y, y+1).
    """
    found = None
    for segment in time_scale.segments:
        if not segment.is_break and segment.contains_time(time_value):
            found = segment
    return found


def map_time_to_pixel(time_value: float, time_scale: TimeScale) -> float:
    """Map a continuous time value onto the axis."""
    segments = time_scale.segments
    if not segments:
        return 0.0

    segment = _continuous_segment_at(time_value, time_scale)
    if segment is not None:
        return segment.pixel_start + (time_value - segment.start_year) * segment.scale

    for segment in segments:
        if segment.is_break and segment.contains_time(time_value):
            return segment.pixel_start + segment.pixel_width / 2

    if time_value < segments[0].start_year:
        return 0.0
    last = segments[-1]
    if time_value > last.end_year:
        return last.pixel_end

    return 0.0


def map_date_to_pixel(
    year: float,
    month: Optional[int],
    time_scale: TimeScale
) -> float:
    """Pixel offset of a (year, month) date on the given scale."""
    return map_time_to_pixel(date_to_time_value(year, month), time_scale)


def map_datetime_to_pixel(moment: date, time_scale: TimeScale) -> float:
    """Pixel offset of a calendar date, with day-of-month precision."""
    month_fraction = (moment.day - 1) / 31
    time_value = moment.year + (moment.month - 1 + month_fraction) / 12
    return map_time_to_pixel(time_value, time_scale)


def pixel_to_time_value(pixel: float, time_scale: TimeScale) -> Optional[float]:
    """
    Inverse of map_time_to_pixel.

    Continuous segments interpolate back linearly. A pixel inside a break
    resolves to the break's start year. Pixels outside the axis clamp to
    its first or last year. Returns None for an empty scale.
    """
    segments = time_scale.segments
    if not segments:
        return None

    if pixel <= segments[0].pixel_start:
        return segments[0].start_year
    if pixel >= segments[-1].pixel_end:
        return segments[-1].end_year

    # Continuous segments own the pixels they share with a neighbouring
    # break; between two continuous segments the later one wins.
    owner = None
    for segment in segments:
        if segment.is_break or segment.scale <= 0:
            continue
        if segment.pixel_start <= pixel <= segment.pixel_end:
            owner = segment
    if owner is not None:
        return owner.start_year + (pixel - owner.pixel_start) / owner.scale

    for segment in segments:
        if segment.pixel_start <= pixel <= segment.pixel_end:
            return segment.start_year

    return segments[-1].end_year
