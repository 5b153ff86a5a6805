"""Use case for requesting a natural-language draft analysis."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict

from ..ports.analysis_service import AnalysisServicePort, ProgressCallbackPort

# Thread pool for running blocking I/O operations
_executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class RequestAnalysisResult:
    """Result of an analysis request."""

    success: bool
    analysis: Dict[str, Any] | None = None
    error: str | None = None


class RequestAnalysisUseCase:
    """Use case for handing a draft snapshot to the analysis service.

    The snapshot is a plain copy taken before the call, so cancelling the
    awaiting task (client disconnect, explicit cancel) never reaches the
    draft session itself. ``asyncio.CancelledError`` is left to propagate.
    """

    def __init__(
        self,
        analysis_service: AnalysisServicePort,
        timeout_s: float | None = None,
    ):
        self._analysis_service = analysis_service
        self._timeout_s = timeout_s

    async def execute(
        self,
        snapshot: Dict[str, Any],
        progress_callback: ProgressCallbackPort | None = None,
    ) -> RequestAnalysisResult:
        """Execute the analysis request.

        Args:
            snapshot: Draft snapshot to send
            progress_callback: Optional callback for progress updates

        Returns:
            Analysis result with the service response untouched
        """
        loop = asyncio.get_event_loop()

        try:
            if progress_callback:
                await progress_callback.report_progress(
                    10, "Sending draft to analysis service...", "processing"
                )

            # Run blocking I/O in thread pool
            call = partial(self._analysis_service.request_analysis, snapshot)
            future = loop.run_in_executor(_executor, call)
            if self._timeout_s:
                analysis = await asyncio.wait_for(future, timeout=self._timeout_s)
            else:
                analysis = await future

            if progress_callback:
                await progress_callback.report_progress(
                    90, "Analysis received...", "processing"
                )

            return RequestAnalysisResult(success=True, analysis=analysis)

        except asyncio.TimeoutError:
            error = f"Analysis service did not answer within {self._timeout_s}s"
            if progress_callback:
                await progress_callback.report_progress(0, error, "error")
            return RequestAnalysisResult(success=False, error=error)
        except Exception as e:
            if progress_callback:
                await progress_callback.report_progress(
                    0, f"Error: {str(e)}", "error"
                )
            return RequestAnalysisResult(
                success=False,
                error=str(e),
            )
