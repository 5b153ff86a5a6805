"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Load environment variables
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from drafting.config import analysis_config_from_env, engine_config_from_env
from drafting.knowledge import load_synergy_rules

from . import __version__
from .api.rest.routes import router as draft_router
from .api.websocket.handlers import handle_analysis_websocket
from .application.use_cases.draft_session import DraftSessionRegistry
from .infrastructure.adapters.http_analysis_adapter import HttpAnalysisAdapter
from .infrastructure.adapters.json_catalog_adapter import JsonCatalogAdapter

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    engine_config = engine_config_from_env()
    analysis_config = analysis_config_from_env()
    synergy_path = engine_config.synergy_rules_path

    if not hasattr(app.state, "registry"):
        app.state.registry = DraftSessionRegistry(
            JsonCatalogAdapter(engine_config.catalog_path),
            default_mode=engine_config.default_mode,
            synergy_rules=load_synergy_rules(str(synergy_path) if synergy_path else None),
        )
    if not hasattr(app.state, "analysis_service"):
        app.state.analysis_service = HttpAnalysisAdapter(analysis_config)
    if not hasattr(app.state, "analysis_timeout_s"):
        app.state.analysis_timeout_s = analysis_config.timeout_s
    logger.info(f"Draft Lab API {__version__} ready")
    yield
    # Shutdown


app = FastAPI(
    title="Draft Lab API",
    description="Champion draft simulation and composition analysis API for League of Legends",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",  # Alternative dev port
        "*",  # Allow all for development
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    catalog_configured: bool
    analysis_configured: bool


@app.get("/", tags=["meta"])
async def root():
    """API root with information and available endpoints."""
    return {
        "name": "Draft Lab API",
        "version": __version__,
        "description": "Champion draft simulator",
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "sequence": "GET /api/sequence/{mode}",
            "sessions": "POST /api/sessions",
            "select": "POST /api/sessions/{session_id}/select",
            "analysis": "POST /api/sessions/{session_id}/analysis",
            "websocket": "WS /ws/analysis",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health_check():
    """Check API health and configuration status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        catalog_configured=bool(os.environ.get("DRAFTING_CATALOG")),
        analysis_configured=bool(os.environ.get("ANALYSIS_SERVICE_URL")),
    )


# Include REST routes
app.include_router(draft_router)


# WebSocket endpoint for draft analysis with progress
@app.websocket("/ws/analysis")
async def websocket_analysis(websocket: WebSocket):
    """WebSocket endpoint for draft analysis.

    Connect to this endpoint and send:
    {
        "action": "analyze",
        "sessionId": "..."
    }

    You will receive progress updates:
    {
        "status": "connecting" | "processing" | "completed" | "cancelled" | "error",
        "progress": 0-100,
        "message": "Status message"
    }

    Send {"action": "cancel"} to abort a pending analysis. The draft itself
    is never changed by an analysis request.
    """
    await handle_analysis_websocket(
        websocket,
        websocket.app.state.registry,
        websocket.app.state.analysis_service,
        websocket.app.state.analysis_timeout_s,
    )
