"""
End-to-End Layout Demo

Runs the complete pipeline on a sample product history:
Raw records -> Engine (validation, zoom, layout) -> View mapper -> printout
"""

from timeline_engine import LayoutRequest, TimelineInfo, TimelineLayoutEngine, TimelineTheme
from timeline_view import TimelineViewMapper


SAMPLE_EVENTS = [
    {"id": "e1", "year": 2003, "title": "Founder works on Wi-Fi hardware", "type": "milestone"},
    {"id": "e2", "year": 2005, "title": "Company founded", "type": "milestone"},
    {"id": "e3", "year": 2005, "title": "First outdoor radio line", "type": "major"},
    {"id": "e4", "year": 2006, "month": 6, "title": "304 km point-to-point record",
     "type": "milestone", "highlight": ["record"]},
    {"id": "e5", "year": 2007, "title": "Integrated-antenna station", "type": "major"},
    {"id": "e6", "year": 2008, "title": "Community forum opens", "type": "minor"},
    {"id": "e7", "year": 2011, "month": 10, "title": "IPO", "type": "milestone",
     "highlight": ["IPO"]},
    {"id": "e8", "year": 2011, "month": 11, "title": "Managed Wi-Fi line", "type": "major"},
    {"id": "e9", "year": 2019, "month": 3, "title": "Surveillance platform", "type": "major"},
    {"id": "e10", "year": 2019, "month": 4, "title": "Fiber product line", "type": "minor"},
    {"id": "bad", "year": "next year", "title": "Malformed record"},
]


def print_header(title: str):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def main():
    engine = TimelineLayoutEngine()
    mapper = TimelineViewMapper()
    info = TimelineInfo(title="Milestones", company="SAMPLE NETWORKS", theme=TimelineTheme.BLUE)

    print_header("LAYER 1: ZOOM BOUNDS")
    snapshot = engine.compute(LayoutRequest(
        events=tuple(SAMPLE_EVENTS),
        container_width=1200,
        info=info,
    ))
    bounds = snapshot.zoom_bounds
    print(f"min={bounds.min_zoom}% max={bounds.max_zoom}% "
          f"perfect={bounds.perfect_zoom}% fit={bounds.fit_zoom}%")
    print(f"effective zoom {snapshot.zoom_percent}% -> {snapshot.pixels_per_year:g} px/year")

    print_header("LAYER 2: TIME SCALE")
    for segment in snapshot.layout.time_scale.segments:
        print(f"  {segment.kind.value:<10} {segment.start_year:>7g} -> {segment.end_year:<7g} "
              f"x={segment.pixel_start:8.1f} w={segment.pixel_width:7.1f}")
    print(f"total width {snapshot.layout.total_width:.1f}px")

    print_header("LAYER 3: TRACKS")
    for item in snapshot.layout.layout_events:
        print(f"  {item.id:<4} {item.position.value:<6} L{item.layer} "
              f"x={item.pixel_center:8.1f} ({item.timeline_position_percent:5.1f}%)")

    for error in snapshot.errors:
        print(f"  rejected: {error.code.name} {dict(error.context)}")

    print_header("LAYER 4: VIEW")
    view = mapper.map_snapshot(snapshot)
    print(f"view {view.view_id}: {len(view.cards)} cards, {len(view.ticks)} ticks, "
          f"{len(view.break_markers)} breaks")
    for card in view.cards:
        title = "".join(f"[{s.text}]" if s.highlighted else s.text for s in card.title_spans)
        print(f"  {card.time_label:<9} {title}")

    zoom = mapper.map_zoom_control(snapshot.zoom_bounds, snapshot.zoom_percent)
    print(f"zoom control: {zoom.label} (in={zoom.can_zoom_in}, out={zoom.can_zoom_out})")

    print_header("OBSERVABILITY")
    for name, values in engine.observability.get_metric_aggregates().items():
        print(f"  {name}: count={values['count']} avg={values['avg']:.2f}")


if __name__ == "__main__":
    main()
