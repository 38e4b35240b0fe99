"""
Date Mapper Tests
=================

Pure date <-> pixel conversions on a built time scale.
"""

from datetime import date

import pytest

from timeline_engine.contracts import TimeScale, TimelineEvent
from timeline_engine.core.date_mapper import (
    date_to_time_value, map_date_to_pixel, map_datetime_to_pixel,
    map_time_to_pixel, pixel_to_time_value,
)
from timeline_engine.core.time_scale import generate_time_segments


@pytest.fixture
def split_scale():
    """2000 and 2023 at 200px/year: [0,200) | break [200,248) | [248,448)."""
    events = [TimelineEvent(id="a", year=2000), TimelineEvent(id="b", year=2023)]
    return generate_time_segments(events, 200)


class TestTimeValue:

    def test_missing_month_is_mid_year(self):
        assert date_to_time_value(2020) == 2020.5

    def test_january_is_year_start(self):
        assert date_to_time_value(2020, 1) == 2020

    def test_month_fraction(self):
        assert date_to_time_value(2020, 4) == pytest.approx(2020.25)


class TestMapDateToPixel:

    def test_mid_year_default(self, split_scale):
        assert map_date_to_pixel(2000, None, split_scale) == pytest.approx(100)

    def test_month_precision(self, split_scale):
        assert map_date_to_pixel(2000, 1, split_scale) == pytest.approx(0)
        assert map_date_to_pixel(2000, 7, split_scale) == pytest.approx(100)

    def test_second_range_offsets_past_break(self, split_scale):
        assert map_date_to_pixel(2023, None, split_scale) == pytest.approx(348)

    def test_date_inside_break_maps_to_break_midpoint(self, split_scale):
        assert map_date_to_pixel(2010, 5, split_scale) == pytest.approx(224)

    def test_before_first_segment_clamps_to_zero(self, split_scale):
        assert map_date_to_pixel(1990, 1, split_scale) == 0

    def test_after_last_segment_clamps_to_end(self, split_scale):
        assert map_date_to_pixel(2030, 1, split_scale) == pytest.approx(448)

    def test_empty_scale(self):
        assert map_date_to_pixel(2020, 3, TimeScale()) == 0

    def test_datetime_mapping(self, split_scale):
        assert map_datetime_to_pixel(date(2000, 7, 1), split_scale) == pytest.approx(100)


class TestPixelToTimeValue:

    def test_inverse_inside_continuous_segment(self, split_scale):
        assert pixel_to_time_value(100, split_scale) == pytest.approx(2000.5)
        assert pixel_to_time_value(348, split_scale) == pytest.approx(2023.5)

    def test_break_resolves_to_break_start(self, split_scale):
        assert pixel_to_time_value(224, split_scale) == 2001

    def test_outside_axis_clamps(self, split_scale):
        assert pixel_to_time_value(-5, split_scale) == 2000
        assert pixel_to_time_value(10_000, split_scale) == 2024

    def test_empty_scale_returns_none(self):
        assert pixel_to_time_value(10, TimeScale()) is None

    def test_round_trip(self, split_scale):
        for time_value in (2000.0, 2000.25, 2000.9, 2023.1, 2023.75):
            pixel = map_time_to_pixel(time_value, split_scale)
            assert pixel_to_time_value(pixel, split_scale) == pytest.approx(time_value)


class TestAdjacentYearSplit:
    """
    2020 and January 2021 at 500px/year split around a zero-year break:
    [0,500) | break [500,548) | [548,1048). Both ranges share year 2021.
    """

    @pytest.fixture
    def adjacent_scale(self):
        events = [
            TimelineEvent(id="a", year=2020),
            TimelineEvent(id="b", year=2021, month=1),
        ]
        return generate_time_segments(events, 500)

    def test_scale_shape(self, adjacent_scale):
        starts = [(s.kind.value, s.pixel_start) for s in adjacent_scale.segments]
        assert starts == [("continuous", 0), ("break", 500), ("continuous", 548)]

    def test_year_start_lands_in_its_own_range(self, adjacent_scale):
        assert map_date_to_pixel(2021, 1, adjacent_scale) == pytest.approx(548)

    def test_previous_december_stays_left_of_break(self, adjacent_scale):
        assert map_date_to_pixel(2020, 12, adjacent_scale) == pytest.approx(500 * 11 / 12)

    def test_inverse_of_range_start(self, adjacent_scale):
        assert pixel_to_time_value(548, adjacent_scale) == pytest.approx(2021)
        assert map_time_to_pixel(pixel_to_time_value(548, adjacent_scale), adjacent_scale) == pytest.approx(548)
