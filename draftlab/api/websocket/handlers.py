"""WebSocket handlers for draft analysis with progress and cancellation."""

import asyncio
import contextlib
import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from ...application.ports.analysis_service import AnalysisServicePort, ProgressCallbackPort
from ...application.use_cases.draft_session import DraftSessionRegistry
from ...application.use_cases.request_analysis import RequestAnalysisUseCase
from ...domain.value_objects.types import ProgressStatus

logger = logging.getLogger(__name__)


class WebSocketProgressCallback(ProgressCallbackPort):
    """Progress callback that sends updates via WebSocket."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket

    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Send progress update via WebSocket."""
        await self._websocket.send_json({
            "status": status,
            "progress": progress,
            "message": message,
        })


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({
        "status": ProgressStatus.ERROR.value,
        "progress": 0,
        "message": message,
    })


async def handle_analysis_websocket(
    websocket: WebSocket,
    registry: DraftSessionRegistry,
    analysis_service: AnalysisServicePort,
    timeout_s: float | None = None,
) -> None:
    """Handle WebSocket connection for draft analysis.

    Expected client message format:
    {
        "action": "analyze",
        "sessionId": "..."
    }
    While the request is pending the client may send {"action": "cancel"}.

    Server sends progress updates:
    {
        "status": "connecting" | "processing" | "completed" | "cancelled" | "error",
        "progress": 0-100,
        "message": "Human-readable status"
    }

    Args:
        websocket: FastAPI WebSocket connection
        registry: Live draft sessions
        analysis_service: Analysis service port
        timeout_s: Optional request timeout
    """
    await websocket.accept()

    try:
        data = await websocket.receive_json()

        action = data.get("action")
        if action != "analyze":
            await _send_error(websocket, f"Unknown action: {action}")
            return

        session_id = data.get("sessionId")
        if not session_id:
            await _send_error(websocket, "sessionId is required")
            return

        session = registry.get(session_id)
        if session is None:
            await _send_error(websocket, f"Draft session not found: {session_id}")
            return

        await websocket.send_json({
            "status": ProgressStatus.CONNECTING.value,
            "progress": 0,
            "message": "Initializing...",
        })

        use_case = RequestAnalysisUseCase(analysis_service, timeout_s)
        task = asyncio.create_task(
            use_case.execute(session.snapshot(), WebSocketProgressCallback(websocket))
        )
        listener = asyncio.create_task(websocket.receive_json())

        done, _ = await asyncio.wait({task, listener}, return_when=asyncio.FIRST_COMPLETED)

        if task in done:
            listener.cancel()
            with contextlib.suppress(asyncio.CancelledError, WebSocketDisconnect):
                await listener
            result = task.result()
            if not result.success:
                # The use case has already reported the error
                return
            await websocket.send_json({
                "status": ProgressStatus.COMPLETED.value,
                "progress": 100,
                "message": "Analysis ready!",
                "analysis": result.analysis,
            })
            return

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

        message = listener.result()
        logger.info(f"Analysis for {session_id} aborted by client")
        if message.get("action") == "cancel":
            await websocket.send_json({
                "status": ProgressStatus.CANCELLED.value,
                "progress": 0,
                "message": "Analysis cancelled",
            })
        else:
            await _send_error(websocket, f"Unknown action: {message.get('action')}")

    except WebSocketDisconnect:
        pass  # Client disconnected
    except json.JSONDecodeError:
        await _send_error(websocket, "Invalid JSON message")
    except Exception as e:
        logger.error(f"Analysis websocket error: {e}")
        with contextlib.suppress(Exception):
            await _send_error(websocket, f"Error: {str(e)}")
    finally:
        with contextlib.suppress(Exception):
            await websocket.close()
