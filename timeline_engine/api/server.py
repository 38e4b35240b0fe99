"""
Timeline Layout Engine: HTTP API Server
=======================================

Stateless layout surface. Every request recomputes from the posted
events; nothing is persisted.

Endpoints:
- GET  /health                -> Liveness
- POST /api/v1/time-scale     -> Axis segments only
- POST /api/v1/layout         -> Full layout, zoom bounds and view
- POST /api/v1/zoom-bounds    -> Zoom range for an event count
- GET  /api/v1/metrics        -> Aggregated layout metrics

Usage:
    uvicorn timeline_engine.api.server:app --reload
"""
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..config import LayoutEngineConfig, ZoomConfig
from ..contracts.events import (
    DEFAULT_EVENT_TYPES, DEFAULT_THEME_COLOR, EventTypeConfig, TimelineInfo, TimelineTheme
)
from ..engine import LayoutRequest, TimelineLayoutEngine
from timeline_view import TimelineViewMapper
from .mapper import (
    map_errors_to_dto, map_snapshot_to_dto, map_time_scale_to_dto,
    map_view_to_dto, map_zoom_bounds_to_dto,
)

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

# Global Engine Instance
engine_instance: Optional[TimelineLayoutEngine] = None
view_mapper = TimelineViewMapper()

_FALSE_VALUES = ("0", "false", "no", "off")


def config_from_env() -> LayoutEngineConfig:
    """Engine configuration with environment overrides applied."""
    enable_breaks = os.environ.get("TIMELINE_ENABLE_BREAKS", "true").strip().lower()
    base_ppy = float(os.environ.get("TIMELINE_BASE_PIXELS_PER_YEAR", "200"))

    return LayoutEngineConfig(
        zoom=ZoomConfig(base_pixels_per_year=base_ppy),
        enable_breaks=enable_breaks not in _FALSE_VALUES,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the layout engine on startup."""
    global engine_instance

    print("[*] Initializing Timeline Layout Engine...")

    try:
        config = config_from_env()
        print(f"[*] Config: breaks={'on' if config.enable_breaks else 'off'}, "
              f"base_ppy={config.zoom.base_pixels_per_year:g}")
        engine_instance = TimelineLayoutEngine(config)
        print("[*] Engine initialized successfully.")
    except ValueError as e:
        print(f"[!] FAILED to initialize engine: {e}")
        raise e

    yield

    print("[*] Shutting down layout engine.")
    engine_instance = None


app = FastAPI(
    title="Timeline Layout Engine API",
    version="0.1.0",
    description="Axis compression, track assignment and zoom bounds for version timelines",
    lifespan=lifespan
)

# CORS (Allow the dashboard)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _engine() -> TimelineLayoutEngine:
    if not engine_instance:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return engine_instance


# =============================================================================
# REQUEST MODELS
# =============================================================================

class EventTypeModel(BaseModel):
    label: str
    color: str
    order: int = 0


class TimeScaleRequestModel(BaseModel):
    # Raw records; malformed ones are reported under "errors"
    events: List[Any] = Field(default_factory=list)
    pixels_per_year: float = Field(200.0, ge=0)
    enable_breaks: Optional[bool] = None


class LayoutRequestModel(BaseModel):
    events: List[Any] = Field(default_factory=list)
    zoom_percent: Optional[float] = Field(None, gt=0)
    enable_breaks: Optional[bool] = None
    container_width: float = Field(1000.0, gt=0)
    title: str = ""
    company: Optional[str] = None
    theme: str = TimelineTheme.TEAL.value
    theme_color: Optional[str] = None
    event_types: Optional[Dict[str, EventTypeModel]] = None

    def to_info(self) -> TimelineInfo:
        if self.event_types is None:
            event_types = dict(DEFAULT_EVENT_TYPES)
        else:
            event_types = {
                type_id: EventTypeConfig(label=t.label, color=t.color, order=t.order)
                for type_id, t in self.event_types.items()
            }
        return TimelineInfo(
            title=self.title,
            company=self.company,
            theme_color=self.theme_color or DEFAULT_THEME_COLOR,
            theme=TimelineTheme.parse(self.theme),
            event_types=event_types,
        )


class ZoomBoundsRequestModel(BaseModel):
    event_count: int = Field(..., ge=0)
    container_width: float = Field(..., gt=0)


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """System status."""
    _engine()
    return {"status": "online"}


@app.post("/api/v1/time-scale")
async def post_time_scale(body: TimeScaleRequestModel):
    """Axis segments for the posted events at the given density."""
    scale, errors = _engine().time_scale(
        body.events, body.pixels_per_year, enable_breaks=body.enable_breaks
    )
    dto = map_time_scale_to_dto(scale)
    dto["errors"] = map_errors_to_dto(errors)
    return dto


@app.post("/api/v1/layout")
async def post_layout(body: LayoutRequestModel):
    """
    Full layout pass.

    The response carries the raw layout, the zoom bounds and the
    pre-calculated view (axis, ticks, break markers, cards, controls).
    """
    engine = _engine()
    snapshot = engine.compute(LayoutRequest(
        events=tuple(body.events),
        zoom_percent=body.zoom_percent,
        enable_breaks=body.enable_breaks,
        container_width=body.container_width,
        info=body.to_info(),
    ))

    dto = map_snapshot_to_dto(snapshot)
    dto["view"] = map_view_to_dto(view_mapper.map_snapshot(snapshot))
    dto["zoom_control"] = map_view_to_dto(
        view_mapper.map_zoom_control(snapshot.zoom_bounds, snapshot.zoom_percent)
    )
    dto["legend"] = [
        map_view_to_dto(entry)
        for entry in view_mapper.map_legend(
            (e.event for e in snapshot.layout.layout_events),
            snapshot.info.event_types,
        )
    ]
    return dto


@app.post("/api/v1/zoom-bounds")
async def post_zoom_bounds(body: ZoomBoundsRequestModel):
    """Zoom range for an event count and container width."""
    bounds = _engine().zoom_bounds(body.event_count, body.container_width)
    return map_zoom_bounds_to_dto(bounds)


@app.get("/api/v1/metrics")
async def get_metrics():
    """Aggregates of every recorded layout metric."""
    return {"metrics": _engine().observability.get_metric_aggregates()}
