"""
Time Scale Builder
==================

Turns event years into the axis coordinate system: an ordered list of
CONTINUOUS segments separated by fixed-width BREAK segments wherever idle
time is elided.

The builder owns no event identity - it only counts how many events fall
in each active range so crowded ranges can be widened.

ELASTICITY:
===========
A range's width is max(natural, required). natural follows the zoom
density; required grows with the number of events in the range, so a
short but busy period gets room even at low zoom. Each continuous segment
therefore carries its own local scale (pixels per year).

CALENDAR SPAN:
==============
A calendar year y occupies [y, y + 1). A range of years a..b spans
start_year = a, end_year = b + 1, which keeps every month (and the
mid-year default) of its last year inside the segment.
"""

from __future__ import annotations
from bisect import bisect_left, bisect_right
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..config import TimeScaleConfig
from ..contracts.events import TimelineEvent
from ..contracts.layout import SegmentKind, TimeScale, TimeSegment


YearSource = Union[TimelineEvent, int, float]


def event_years(events: Iterable[YearSource]) -> List[float]:
    """Extract years from events or bare year values (duplicates kept)."""
    years = []
    for item in events:
        year = item.year if isinstance(item, TimelineEvent) else item
        years.append(year)
    return years


def detect_active_ranges(
    years: Sequence[float],
    pixels_per_year: float,
    config: Optional[TimeScaleConfig] = None
) -> List[Tuple[float, float]]:
    """
    Merge sorted distinct years into active (start, end) ranges.

    A year joins the open range when the gap to the range end is visually
    small at the current density OR shorter than break_gap_years. Otherwise
    the open range is closed and a new one starts at that year.
    """
    config = config or TimeScaleConfig()
    distinct = sorted(set(years))
    if not distinct:
        return []

    ranges: List[Tuple[float, float]] = []
    range_start = range_end = distinct[0]

    for year in distinct[1:]:
        year_gap = year - range_end
        pixel_gap = year_gap * pixels_per_year

        if pixel_gap < config.break_gap_pixels or year_gap < config.break_gap_years:
            range_end = year
        else:
            ranges.append((range_start, range_end))
            range_start = range_end = year

    ranges.append((range_start, range_end))
    return ranges


def _required_width(
    event_count: int,
    config: TimeScaleConfig,
    available_width: Optional[float]
) -> float:
    if event_count > 1:
        required = (event_count - 0.5) * config.event_slot_width
    else:
        required = config.single_event_min_width

    # Dense clusters widen at most to one viewport; beyond that the
    # nudging pass spreads the remaining cards.
    if available_width is not None and available_width > 0:
        required = min(required, max(available_width, config.single_event_min_width))
    return required


def generate_time_segments(
    events: Iterable[YearSource],
    pixels_per_year: float,
    enable_breaks: bool = True,
    config: Optional[TimeScaleConfig] = None,
    available_width: Optional[float] = None
) -> TimeScale:
    """
    Build the time scale for the given events at the given density.

    Returns an empty TimeScale when there are no events.
    """
    config = config or TimeScaleConfig()
    years = sorted(event_years(events))
    if not years:
        return TimeScale()

    density = max(0.0, float(pixels_per_year))

    if enable_breaks:
        ranges = detect_active_ranges(years, density, config)
    else:
        ranges = [(years[0], years[-1])]

    segments: List[TimeSegment] = []
    cursor = 0.0

    for index, (range_start, range_end) in enumerate(ranges):
        if index > 0:
            previous_end = ranges[index - 1][1] + 1
            segments.append(TimeSegment(
                start_year=previous_end,
                end_year=range_start,
                pixel_start=cursor,
                pixel_width=config.break_width,
                scale=0.0,
                kind=SegmentKind.BREAK,
            ))
            cursor += config.break_width

        start_year = range_start
        end_year = range_end + 1
        year_span = max(end_year - start_year, config.min_year_span)

        event_count = bisect_right(years, range_end) - bisect_left(years, range_start)
        natural_width = year_span * density
        width = max(natural_width, _required_width(event_count, config, available_width))

        segments.append(TimeSegment(
            start_year=start_year,
            end_year=end_year,
            pixel_start=cursor,
            pixel_width=width,
            scale=width / year_span,
            kind=SegmentKind.CONTINUOUS,
        ))
        cursor += width

    return TimeScale(segments=tuple(segments), total_width=cursor)
