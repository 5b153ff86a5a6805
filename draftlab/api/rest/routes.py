"""REST API routes for draft sessions."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from drafting.catalog import parse_position
from drafting.errors import DraftError, Rejection
from drafting.models import ActionKind, Side
from drafting.sequencer import get_sequence

from ..transformers.draft_transformer import (
    transform_entity,
    transform_saved_to_frontend,
    transform_sequence,
    transform_view_to_frontend,
)
from ...application.ports.analysis_service import AnalysisServicePort
from ...application.use_cases.draft_session import (
    DraftCommandResult,
    DraftSessionRegistry,
    DraftSessionUseCase,
)
from ...application.use_cases.request_analysis import RequestAnalysisUseCase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["draft"])

REJECTION_STATUS: Dict[Rejection, int] = {
    Rejection.INVALID_TURN: 409,
    Rejection.DUPLICATE_ENTITY: 409,
    Rejection.SLOT_UNAVAILABLE: 409,
    Rejection.EMPTY_HISTORY: 409,
    Rejection.UNKNOWN_MODE: 400,
    Rejection.INVALID_SLOT: 400,
    Rejection.INVALID_SNAPSHOT: 400,
    Rejection.UNKNOWN_ENTITY: 404,
}


class CreateSessionRequest(BaseModel):
    """Request body for opening a draft session."""

    mode: Optional[str] = Field(default=None, description="competitive or solo_queue")


class SelectRequest(BaseModel):
    """Request body for a sequenced pick or ban."""

    entity_id: str = Field(..., alias="entityId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class DirectRequest(BaseModel):
    """Request body for sandbox placement outside the turn order."""

    side: Side
    slot_kind: ActionKind = Field(..., alias="slotKind")
    index: int
    entity_id: Optional[str] = Field(default=None, alias="entityId")

    model_config = ConfigDict(populate_by_name=True)


class SwapRequest(BaseModel):
    """Request body for swapping two picks of one side."""

    side: Side
    first: int
    second: int


class ResetRequest(BaseModel):
    """Request body for resetting a session."""

    mode: Optional[str] = None


def _error(status_code: int, code: str, message: str, details: Dict[str, Any] | None = None) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            }
        },
    )


def _registry(request: Request) -> DraftSessionRegistry:
    return request.app.state.registry


def _session(request: Request, session_id: str) -> DraftSessionUseCase:
    session = _registry(request).get(session_id)
    if session is None:
        raise _error(404, "SESSION_NOT_FOUND", "Draft session not found", {"sessionId": session_id})
    return session


def _respond(result: DraftCommandResult) -> Dict[str, Any]:
    if not result.success:
        rejection = result.rejection or Rejection.INVALID_SNAPSHOT
        raise _error(
            REJECTION_STATUS.get(rejection, 400),
            rejection.name,
            result.error or rejection.value,
            result.details,
        )
    return transform_view_to_frontend(result.view)


@router.get("/sequence/{mode}")
async def get_draft_sequence(mode: str):
    """Get the turn order for a draft mode."""
    try:
        sequence = get_sequence(mode)
    except DraftError as e:
        raise _error(400, e.rejection.name, str(e), e.details)
    return {"mode": mode, "turns": transform_sequence(list(sequence))}


@router.get("/catalog")
async def get_catalog(request: Request):
    """Get every selectable champion."""
    return {"champions": [transform_entity(e) for e in _registry(request).entities()]}


@router.post("/sessions", status_code=201)
async def create_session(request: Request, body: Optional[CreateSessionRequest] = None):
    """Open a new draft session."""
    try:
        session = _registry(request).create(body.mode if body else None)
    except DraftError as e:
        raise _error(400, e.rejection.name, str(e), e.details)
    return transform_view_to_frontend(session.view)


@router.get("/sessions/{session_id}")
async def get_session(request: Request, session_id: str):
    """Get the live draft, its insights and the turn to play."""
    return transform_view_to_frontend(_session(request, session_id).view)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(request: Request, session_id: str):
    """Discard a draft session."""
    if not _registry(request).remove(session_id):
        raise _error(404, "SESSION_NOT_FOUND", "Draft session not found", {"sessionId": session_id})


@router.get("/sessions/{session_id}/available")
async def get_available(
    request: Request,
    session_id: str,
    position: Optional[str] = Query(None, description="Eligible position filter"),
    search: Optional[str] = Query(None, description="Name substring filter"),
):
    """Get champions that are neither picked nor banned."""
    session = _session(request, session_id)
    pos = None
    if position:
        pos = parse_position(position)
        if pos is None:
            raise _error(400, "INVALID_REQUEST", f"Unknown position: {position}", {"position": position})
    return {"champions": [transform_entity(e) for e in session.available(pos, search)]}


@router.post("/sessions/{session_id}/select")
async def select_champion(request: Request, session_id: str, body: SelectRequest):
    """Pick or ban for the current turn."""
    return _respond(await _session(request, session_id).select(body.entity_id))


@router.post("/sessions/{session_id}/undo")
async def undo(request: Request, session_id: str):
    """Revert the last sequenced selection or swap."""
    return _respond(await _session(request, session_id).undo())


@router.post("/sessions/{session_id}/direct")
async def set_direct(request: Request, session_id: str, body: DirectRequest):
    """Place or clear a slot directly (sandbox mode)."""
    session = _session(request, session_id)
    return _respond(await session.set_direct(body.side, body.slot_kind, body.index, body.entity_id))


@router.post("/sessions/{session_id}/swap")
async def swap_picks(request: Request, session_id: str, body: SwapRequest):
    """Swap two picks of the same side."""
    return _respond(await _session(request, session_id).swap(body.side, body.first, body.second))


@router.post("/sessions/{session_id}/reset")
async def reset(request: Request, session_id: str, body: Optional[ResetRequest] = None):
    """Clear the draft, optionally switching mode."""
    return _respond(await _session(request, session_id).reset(body.mode if body else None))


@router.get("/sessions/{session_id}/export")
async def export_draft(request: Request, session_id: str):
    """Get the compact saved form of the draft."""
    return transform_saved_to_frontend(_session(request, session_id).export_saved())


@router.post("/sessions/{session_id}/import")
async def import_draft(request: Request, session_id: str, saved: Dict[str, Any] = Body(...)):
    """Replace the draft with a saved one; clears undo history."""
    return _respond(await _session(request, session_id).import_saved(saved))


@router.post("/sessions/{session_id}/analysis")
async def request_analysis(request: Request, session_id: str):
    """Hand the draft to the analysis service and relay its answer."""
    session = _session(request, session_id)
    service: AnalysisServicePort = request.app.state.analysis_service
    use_case = RequestAnalysisUseCase(service, request.app.state.analysis_timeout_s)

    result = await use_case.execute(session.snapshot())
    if not result.success:
        logger.warning(f"Analysis failed for {session_id}: {result.error}")
        raise _error(
            502,
            "ANALYSIS_FAILED",
            result.error or "Analysis service unavailable",
            {"sessionId": session_id},
        )
    return {"sessionId": session_id, "analysis": result.analysis}
