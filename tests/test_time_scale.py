"""
Time Scale Builder Tests
========================

AXIS VERIFICATION:
==================
These tests verify that the time scale builder:
1. Elides idle spans with fixed-width breaks
2. Widens crowded ranges beyond their natural width
3. Keeps segments contiguous with a consistent total width
"""

import pytest

from timeline_engine.config import TimeScaleConfig
from timeline_engine.contracts import SegmentKind, TimelineEvent
from timeline_engine.core.time_scale import detect_active_ranges, generate_time_segments


def make_events(*years):
    return [TimelineEvent(id=f"e{i}", year=year) for i, year in enumerate(years)]


class TestActiveRanges:

    def test_close_years_merge(self):
        # 1 year at 200px/year = 200px < 400px
        assert detect_active_ranges([2000, 2001, 2002], 200) == [(2000, 2002)]

    def test_wide_gap_splits(self):
        assert detect_active_ranges([2000, 2023], 200) == [(2000, 2000), (2023, 2023)]

    def test_gap_exactly_at_pixel_threshold_splits(self):
        # 2 years * 200px = 400px is not below the threshold
        assert detect_active_ranges([2000, 2002], 200) == [(2000, 2000), (2002, 2002)]

    def test_duplicates_collapse(self):
        assert detect_active_ranges([2005, 2005, 2005], 200) == [(2005, 2005)]

    def test_empty(self):
        assert detect_active_ranges([], 200) == []

    def test_sub_year_gap_always_merges(self):
        config = TimeScaleConfig(break_gap_pixels=10)
        assert detect_active_ranges([2000.0, 2000.5], 1000, config) == [(2000.0, 2000.5)]


class TestGenerateTimeSegments:

    def test_empty_input_gives_empty_scale(self):
        scale = generate_time_segments([], 200)
        assert scale.segments == ()
        assert scale.total_width == 0
        assert scale.is_empty

    def test_single_year(self):
        scale = generate_time_segments(make_events(2020), 200)
        assert len(scale.segments) == 1
        segment = scale.segments[0]
        assert segment.kind == SegmentKind.CONTINUOUS
        assert segment.start_year == 2020
        assert segment.end_year == 2021
        assert segment.pixel_width == 200
        assert segment.scale == 200

    def test_large_gap_produces_one_break(self):
        """Years 2000 and 2023 at 200px/year: one 48px break between two ranges."""
        scale = generate_time_segments(make_events(2000, 2023), 200)

        kinds = [s.kind for s in scale.segments]
        assert kinds == [SegmentKind.CONTINUOUS, SegmentKind.BREAK, SegmentKind.CONTINUOUS]
        assert scale.break_count == 1

        gap = scale.segments[1]
        assert gap.pixel_width == 48
        assert gap.scale == 0
        assert gap.start_year == 2001
        assert gap.end_year == 2023
        assert scale.total_width == 200 + 48 + 200

    def test_breaks_disabled_gives_single_segment(self):
        scale = generate_time_segments(make_events(2000, 2023), 200, enable_breaks=False)
        assert len(scale.segments) == 1
        assert scale.break_count == 0
        assert scale.total_width == 24 * 200

    def test_dense_single_year_is_widened(self):
        """20 events in one year: (20 - 0.5) * 28 = 546px regardless of zoom."""
        scale = generate_time_segments(make_events(*([2020] * 20)), 10)
        assert scale.total_width == pytest.approx(546)
        assert scale.segments[0].scale == pytest.approx(546)

    def test_natural_width_wins_when_larger(self):
        scale = generate_time_segments(make_events(*([2020] * 5)), 500)
        assert scale.total_width == 500

    def test_available_width_caps_widening(self):
        scale = generate_time_segments(make_events(*([2020] * 100)), 10, available_width=800)
        assert scale.total_width == 800

    def test_bare_years_accepted(self):
        scale = generate_time_segments([2000, 2001], 100)
        assert scale.total_width == 200

    def test_negative_density_clamps_to_zero(self):
        scale = generate_time_segments(make_events(2020), -50)
        assert scale.total_width == 28

    def test_segments_are_contiguous(self):
        scale = generate_time_segments(make_events(1990, 1991, 2000, 2010, 2011, 2030), 150)
        for left, right in zip(scale.segments, scale.segments[1:]):
            assert left.pixel_end == pytest.approx(right.pixel_start)
        assert scale.segments[0].pixel_start == 0
        assert scale.total_width == pytest.approx(sum(s.pixel_width for s in scale.segments))

    def test_adjacent_years_split_at_high_density(self):
        """One year apart at 500px/year is 500px, which reaches the 400px threshold."""
        scale = generate_time_segments(make_events(2020, 2020, 2021), 500)
        assert scale.break_count == 1
        assert scale.total_width == 500 + 48 + 500


class TestTimeScaleConfig:

    def test_rejects_non_positive_break_width(self):
        with pytest.raises(ValueError):
            TimeScaleConfig(break_width=0)

    def test_rejects_non_positive_year_span(self):
        with pytest.raises(ValueError):
            TimeScaleConfig(min_year_span=0)

    def test_custom_break_width(self):
        scale = generate_time_segments(
            make_events(2000, 2023), 200, config=TimeScaleConfig(break_width=30)
        )
        assert scale.segments[1].pixel_width == 30
