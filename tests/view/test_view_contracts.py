"""
View Contract Tests

Tests that enforce the rendering boundary contract.

TEST CATEGORIES:
================
1. Immutability - views cannot be mutated
2. Labels - time labels and highlight spans are pre-calculated
3. Axis - segments, ticks and break markers mirror the time scale
4. Controls - zoom slider and legend view models
"""

import pytest
from dataclasses import FrozenInstanceError

from timeline_engine.contracts import TimelineEvent, TimelineInfo, ZoomBounds
from timeline_engine.contracts.events import DEFAULT_EVENT_TYPES
from timeline_engine.core.smart_layout import calculate_smart_layout
from timeline_engine.engine import LayoutRequest, TimelineLayoutEngine
from timeline_view import TimelineViewMapper, format_event_time, split_highlights
from timeline_view.visualization import HighlightSpan


@pytest.fixture
def mapper():
    return TimelineViewMapper()


@pytest.fixture
def split_layout():
    """2000 and 2023 at 200px/year: continuous | break | continuous."""
    events = [
        TimelineEvent(id="a", year=2000, title="Launch", type="major"),
        TimelineEvent(id="b", year=2023, month=3, title="IPO day", highlight=("ipo",)),
    ]
    return calculate_smart_layout(events, ("red", "blue"), 200)


# =============================================================================
# IMMUTABILITY TESTS
# =============================================================================

class TestViewImmutability:

    def test_timeline_view_is_frozen(self, mapper, split_layout):
        view = mapper.map_layout(split_layout, TimelineInfo())
        with pytest.raises(FrozenInstanceError):
            view.total_width = 0

    def test_card_is_frozen(self, mapper, split_layout):
        card = mapper.map_layout(split_layout, TimelineInfo()).cards[0]
        with pytest.raises(FrozenInstanceError):
            card.x = 0


# =============================================================================
# LABEL TESTS
# =============================================================================

class TestLabels:

    def test_format_with_month(self):
        assert format_event_time(2025, 3) == "Mar 2025"

    def test_format_without_month(self):
        assert format_event_time(2025) == "2025"

    def test_split_highlights_case_insensitive(self):
        assert split_highlights("Record IPO in 2011", ["ipo"]) == (
            HighlightSpan("Record ", False),
            HighlightSpan("IPO", True),
            HighlightSpan(" in 2011", False),
        )

    def test_split_highlights_literal_keywords(self):
        assert split_highlights("Raised $5.2M", ["$5.2M"]) == (
            HighlightSpan("Raised ", False),
            HighlightSpan("$5.2M", True),
        )

    def test_split_highlights_without_keywords(self):
        assert split_highlights("Plain", None) == (HighlightSpan("Plain", False),)
        assert split_highlights("", ["x"]) == ()
        assert split_highlights(None, ["x"]) == ()

    def test_longer_keyword_wins(self):
        spans = split_highlights("UniFi Protect", ["UniFi", "UniFi Protect"])
        assert spans == (HighlightSpan("UniFi Protect", True),)


# =============================================================================
# AXIS TESTS
# =============================================================================

class TestAxis:

    def test_segments_and_breaks(self, mapper, split_layout):
        view = mapper.map_layout(split_layout, TimelineInfo())
        assert [s.start_x for s in view.axis_segments] == [0, 248]
        assert len(view.break_markers) == 1

        marker = view.break_markers[0]
        assert marker.center_x == pytest.approx(224)
        assert marker.label == "2001 - 2022"

    def test_year_ticks(self, mapper, split_layout):
        view = mapper.map_layout(split_layout, TimelineInfo())
        assert [(t.x, t.label) for t in view.ticks] == [(0, "2000"), (248, "2023")]

    def test_tick_after_adjacent_year_break(self, mapper):
        events = [TimelineEvent(id="a", year=2020), TimelineEvent(id="b", year=2021, month=1)]
        view = mapper.map_layout(calculate_smart_layout(events, (), 500), TimelineInfo())
        assert [(t.x, t.label) for t in view.ticks] == [(0, "2020"), (548, "2021")]
        assert view.break_markers[0].start_x == 500

    def test_segment_fill_uses_year_colors(self, mapper, split_layout):
        view = mapper.map_layout(split_layout, TimelineInfo(), ("red", "blue"))
        assert [s.fill for s in view.axis_segments] == ["red", "blue"]

    def test_segment_fill_falls_back_to_theme_color(self, mapper, split_layout):
        view = mapper.map_layout(split_layout, TimelineInfo(theme_color="#123456"))
        assert view.axis_segments[0].fill == "#123456"

    def test_single_year_gap_label(self, mapper):
        events = [TimelineEvent(id="a", year=2000), TimelineEvent(id="b", year=2002)]
        layout = calculate_smart_layout(events, (), 400)
        view = mapper.map_layout(layout, TimelineInfo())
        assert [m.label for m in view.break_markers] == ["2001"]


# =============================================================================
# CARD TESTS
# =============================================================================

class TestCards:

    def test_cards_mirror_layout(self, mapper, split_layout):
        view = mapper.map_layout(split_layout, TimelineInfo())
        for card, item in zip(view.cards, split_layout.layout_events):
            assert card.event_id == item.id
            assert card.x == item.pixel_center
            assert card.anchor_x == item.pixel_original
            assert card.position == item.position.value
            assert card.layer == item.layer

    def test_card_labels(self, mapper, split_layout):
        cards = {c.event_id: c for c in mapper.map_layout(split_layout, TimelineInfo()).cards}
        assert cards["a"].time_label == "2000"
        assert cards["a"].type_label == "Major release"
        assert cards["b"].time_label == "Mar 2023"
        assert cards["b"].type_label is None
        assert cards["b"].title_spans == (
            HighlightSpan("IPO", True), HighlightSpan(" day", False),
        )

    def test_view_id_is_deterministic(self, mapper, split_layout):
        first = mapper.map_layout(split_layout, TimelineInfo())
        second = mapper.map_layout(split_layout, TimelineInfo())
        assert first == second
        assert first.view_id.startswith("view_")

    def test_map_snapshot(self, mapper):
        engine = TimelineLayoutEngine()
        snapshot = engine.compute(LayoutRequest(events=({"id": "x", "year": 2020},)))
        view = mapper.map_snapshot(snapshot)
        assert len(view.cards) == 1
        assert view.total_width == snapshot.layout.total_width

    def test_empty_layout(self, mapper):
        engine = TimelineLayoutEngine()
        view = mapper.map_snapshot(engine.compute(LayoutRequest()))
        assert view.is_empty
        assert view.axis_segments == ()


# =============================================================================
# CONTROL TESTS
# =============================================================================

class TestControls:

    BOUNDS = ZoomBounds(
        min_zoom=30, max_zoom=300, perfect_zoom=100, fit_zoom=80,
        natural_width=1000, available_width=800,
    )

    def test_zoom_control_in_range(self, mapper):
        control = mapper.map_zoom_control(self.BOUNDS, 100)
        assert control.label == "100%"
        assert control.can_zoom_in and control.can_zoom_out
        assert control.is_perfect

    def test_zoom_control_at_limits(self, mapper):
        assert not mapper.map_zoom_control(self.BOUNDS, 300).can_zoom_in
        assert not mapper.map_zoom_control(self.BOUNDS, 30).can_zoom_out

    def test_legend_counts_and_order(self, mapper):
        events = [
            TimelineEvent(id="1", year=2020, type="patch"),
            TimelineEvent(id="2", year=2020, type="major"),
            TimelineEvent(id="3", year=2021, type="patch"),
            TimelineEvent(id="4", year=2021, type="unknown"),
        ]
        legend = mapper.map_legend(events, DEFAULT_EVENT_TYPES)
        assert [(e.type_id, e.count) for e in legend] == [("major", 1), ("patch", 2)]
        assert legend[0].color == "#ff4d4f"
