"""Port (interface) for the natural-language draft analysis service."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class AnalysisServicePort(ABC):
    """Port for handing a draft snapshot to an external analysis service."""

    @abstractmethod
    def request_analysis(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """Send the snapshot and return the service response untouched.

        Args:
            snapshot: Full draft snapshot (report format)

        Returns:
            Whatever the service answered with
        """
        ...


class ProgressCallbackPort(ABC):
    """Port for reporting progress during long operations."""

    @abstractmethod
    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Report progress update.

        Args:
            progress: Progress percentage (0-100)
            message: Human-readable status message
            status: Status type (connecting, processing, completed, cancelled, error)
        """
        ...
