"""
pack-viz: View API Server
=========================

Stateless HTTP surface over the render engine. Every request carries its
own record snapshot; nothing is stored between requests.

Endpoints:
- GET  /health                 -> Engine status
- GET  /api/v1/views           -> Available view ids
- POST /api/v1/views/{view_id} -> Rendered view for the posted snapshot

Usage:
    uvicorn packviz.api.server:app --reload
"""
import os
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..engine import PackVizEngine, EngineConfig, VIEW_IDS
from ..visualization.layout import LayoutConfig
from .mapper import map_view_to_dto

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

engine_instance: Optional[PackVizEngine] = None


def config_from_env() -> EngineConfig:
    """Engine configuration with environment overrides."""
    layout = LayoutConfig(
        width=float(os.environ.get("PACKVIZ_CANVAS_WIDTH", LayoutConfig.width)),
        height=float(os.environ.get("PACKVIZ_CANVAS_HEIGHT", LayoutConfig.height)),
    )
    # Requests always post the snapshot as {"records": [...]}
    return EngineConfig(layout=layout, host_shape="records")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the render engine on startup."""
    global engine_instance

    config = config_from_env()
    print(f"[*] Initializing render engine (canvas {config.layout.width}x{config.layout.height})")

    try:
        engine_instance = PackVizEngine(config)
        print("[*] Engine initialized successfully.")
    except Exception as e:
        print(f"[!] FAILED to initialize engine: {e}")
        raise e

    yield

    print("[*] Shutting down render engine.")
    engine_instance = None

app = FastAPI(
    title="pack-viz API",
    version="0.1.0",
    description="Hierarchy, roster and reference-graph views over record snapshots",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


class RenderRequest(BaseModel):
    """One render call: the snapshot plus an optional focal record key."""
    records: List[Any] = Field(default_factory=list)  # entries are validated at ingestion
    current_record_key: Optional[str] = None


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """System status."""
    if not engine_instance:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return {"status": "online"}


@app.get("/api/v1/views")
async def list_views():
    """Available view ids, in display order."""
    return {"views": list(VIEW_IDS)}


@app.post("/api/v1/views/{view_id}")
async def render_view(view_id: str, request: RenderRequest):
    """
    Render a view from the posted snapshot.

    Missing data yields a fallback view (availability "missing"), not an
    HTTP error.
    """
    if not engine_instance:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    if view_id not in VIEW_IDS:
        raise HTTPException(status_code=404, detail=f"Unknown view: {view_id}")

    view = engine_instance.render(
        view_id,
        {"records": request.records},
        request.current_record_key
    )
    return map_view_to_dto(view)
