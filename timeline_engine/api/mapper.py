"""
API Mapper
==========

Transforms engine contracts (TimeScale, SmartLayout, ZoomBounds, views)
into JSON-ready dicts for the HTTP layer.

Field names stay snake_case; enum values are emitted as their string
values.
"""
from dataclasses import asdict
from typing import Any, Dict, List

from ..contracts.base import Error
from ..contracts.layout import LayoutEvent, SmartLayout, TimeScale, TimeSegment, ZoomBounds
from ..engine import LayoutSnapshot


def map_segment_to_dto(segment: TimeSegment) -> Dict[str, Any]:
    return {
        "kind": segment.kind.value,
        "start_year": segment.start_year,
        "end_year": segment.end_year,
        "pixel_start": segment.pixel_start,
        "pixel_width": segment.pixel_width,
        "scale": segment.scale,
    }


def map_time_scale_to_dto(scale: TimeScale) -> Dict[str, Any]:
    return {
        "total_width": scale.total_width,
        "break_count": scale.break_count,
        "segments": [map_segment_to_dto(s) for s in scale.segments],
    }


def map_layout_event_to_dto(item: LayoutEvent) -> Dict[str, Any]:
    return {
        "id": item.id,
        "year": item.year,
        "month": item.month,
        "title": item.event.title,
        "type": item.event.type,
        "position": item.position.value,
        "layer": item.layer,
        "pixel_original": item.pixel_original,
        "pixel_center": item.pixel_center,
        "timeline_position_percent": item.timeline_position_percent,
        "color": item.color_token,
    }


def map_layout_to_dto(layout: SmartLayout) -> Dict[str, Any]:
    return {
        "total_width": layout.total_width,
        "time_scale": map_time_scale_to_dto(layout.time_scale),
        "events": [map_layout_event_to_dto(e) for e in layout.layout_events],
    }


def map_zoom_bounds_to_dto(bounds: ZoomBounds) -> Dict[str, Any]:
    return asdict(bounds)


def map_error_to_dto(error: Error) -> Dict[str, Any]:
    return {
        "code": error.code.name,
        "message": error.message,
        "context": dict(error.context),
    }


def map_errors_to_dto(errors) -> List[Dict[str, Any]]:
    return [map_error_to_dto(e) for e in errors]


def map_snapshot_to_dto(snapshot: LayoutSnapshot) -> Dict[str, Any]:
    """Map a LayoutSnapshot to the layout response body (view excluded)."""
    return {
        "sequence": snapshot.sequence,
        "zoom_percent": snapshot.zoom_percent,
        "pixels_per_year": snapshot.pixels_per_year,
        "enable_breaks": snapshot.enable_breaks,
        "zoom_bounds": map_zoom_bounds_to_dto(snapshot.zoom_bounds),
        "layout": map_layout_to_dto(snapshot.layout),
        "palette": list(snapshot.palette),
        "errors": map_errors_to_dto(snapshot.errors),
    }


def map_view_to_dto(view) -> Dict[str, Any]:
    """TimelineView and view models are plain frozen dataclasses."""
    return asdict(view)
