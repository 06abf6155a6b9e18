"""Earthquake Dashboard API - FastAPI presentation surface.

Thin JSON layer over the Orchestrator: read endpoints expose the
dashboard view, write endpoints forward user intents. The feed pipeline
starts and stops with the app's lifespan.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from quakeview.core.config import Config
from quakeview.core.formatter import (
    EMPTY_LIST_MESSAGE,
    format_event_count,
    format_event_item,
    format_last_updated,
    format_search_banner,
)
from quakeview.core.map_view import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    MIN_ZOOM,
    build_markers,
)
from quakeview.orchestrator import DashboardView, Orchestrator


logger = logging.getLogger(__name__)


# ===== Request Models =====

class MinMagnitudeUpdate(BaseModel):
    min_magnitude: float = Field(allow_inf_nan=False)


class PendingSearchUpdate(BaseModel):
    text: str


class AutoRefreshUpdate(BaseModel):
    enabled: bool
    interval_seconds: float | None = Field(default=None, gt=0, allow_inf_nan=False)


# ===== Helpers =====

def _get_orchestrator(request: Request) -> Orchestrator:
    return request.app.state.orchestrator


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _status_to_dict(view: DashboardView) -> dict[str, Any]:
    """Convert the non-list parts of the view to a response dict."""
    return {
        "loading": view.loading,
        "error": view.error,
        "last_fetched_at": _isoformat(view.last_fetched_at),
        "last_updated_label": format_last_updated(view.last_fetched_at),
        "total": view.total,
        "visible_count": len(view.visible),
        "event_count_label": format_event_count(len(view.visible)),
        "filters": {
            "min_magnitude": view.filters.min_magnitude,
            "pending_search": view.filters.pending_search,
            "committed_search": view.filters.committed_search,
        },
        "search_banner": format_search_banner(view.filters.committed_search),
        "auto_refresh": {
            "enabled": view.auto_refresh_enabled,
            "interval_seconds": view.auto_refresh_interval_seconds,
        },
    }


def _selection_to_dict(view: DashboardView) -> dict[str, Any]:
    selected_id = view.selected.id if view.selected else None
    return {
        "selected": format_event_item(view.selected, selected_id) if view.selected else None,
        "focus": asdict(view.focus) if view.focus else None,
    }


def create_app(
    config: Config | None = None,
    orchestrator: Orchestrator | None = None,
) -> FastAPI:
    """Build the API app.

    Args:
        config: Configuration used to build an orchestrator
        orchestrator: Pre-built orchestrator (takes precedence over config)

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        pipeline = orchestrator or Orchestrator(config)
        app.state.orchestrator = pipeline
        await pipeline.start()
        try:
            yield
        finally:
            await pipeline.stop()

    app = FastAPI(
        title="QuakeView API",
        description="Filtered, periodically refreshed view of the USGS earthquake feed",
        version="1.0.0",
        lifespan=lifespan,
    )

    # ===== Read Endpoints =====

    @app.get("/api/events")
    async def get_events(request: Request):
        """Visible earthquakes, filtered and in feed order."""
        view = _get_orchestrator(request).view()
        selected_id = view.selected.id if view.selected else None
        return {
            "events": [format_event_item(e, selected_id) for e in view.visible],
            "count": len(view.visible),
            "empty_message": EMPTY_LIST_MESSAGE if not view.visible and not view.loading else None,
        }

    @app.get("/api/status")
    async def get_status(request: Request):
        """Loading flag, last error, last update time, filters."""
        return _status_to_dict(_get_orchestrator(request).view())

    @app.get("/api/markers")
    async def get_markers(request: Request):
        """Map markers for visible earthquakes that have coordinates."""
        view = _get_orchestrator(request).view()
        return {
            "center": {"lat": DEFAULT_CENTER[0], "lng": DEFAULT_CENTER[1]},
            "zoom": DEFAULT_ZOOM,
            "min_zoom": MIN_ZOOM,
            "markers": [asdict(m) for m in build_markers(list(view.visible))],
            "focus": asdict(view.focus) if view.focus else None,
        }

    @app.get("/api/selection")
    async def get_selection(request: Request):
        return _selection_to_dict(_get_orchestrator(request).view())

    # ===== Intent Endpoints =====

    @app.put("/api/filters/min-magnitude")
    async def update_min_magnitude(body: MinMagnitudeUpdate, request: Request):
        pipeline = _get_orchestrator(request)
        pipeline.set_min_magnitude(body.min_magnitude)
        return _status_to_dict(pipeline.view())

    @app.put("/api/search/pending")
    async def update_pending_search(body: PendingSearchUpdate, request: Request):
        pipeline = _get_orchestrator(request)
        pipeline.set_pending_search(body.text)
        return _status_to_dict(pipeline.view())

    @app.post("/api/search/commit")
    async def submit_search(request: Request):
        pipeline = _get_orchestrator(request)
        pipeline.commit_search()
        return _status_to_dict(pipeline.view())

    @app.delete("/api/search")
    async def reset_search(request: Request):
        pipeline = _get_orchestrator(request)
        pipeline.clear_search()
        return _status_to_dict(pipeline.view())

    @app.post("/api/refresh")
    async def refresh(request: Request):
        """Manual refresh; skipped if a fetch is already running."""
        pipeline = _get_orchestrator(request)
        started = await pipeline.refresh()
        return {"started": started, **_status_to_dict(pipeline.view())}

    @app.put("/api/auto-refresh")
    async def update_auto_refresh(body: AutoRefreshUpdate, request: Request):
        pipeline = _get_orchestrator(request)
        try:
            pipeline.set_auto_refresh(body.enabled, body.interval_seconds)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _status_to_dict(pipeline.view())

    @app.put("/api/selection/{earthquake_id}")
    async def select_earthquake(earthquake_id: str, request: Request):
        pipeline = _get_orchestrator(request)
        pipeline.select(earthquake_id)
        return _selection_to_dict(pipeline.view())

    @app.delete("/api/selection")
    async def clear_selection(request: Request):
        pipeline = _get_orchestrator(request)
        pipeline.clear_selection()
        return _selection_to_dict(pipeline.view())

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
