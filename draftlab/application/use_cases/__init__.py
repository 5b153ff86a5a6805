"""Application use cases."""

from .draft_session import (
    DraftCommandResult,
    DraftSessionRegistry,
    DraftSessionUseCase,
)
from .request_analysis import (
    RequestAnalysisResult,
    RequestAnalysisUseCase,
)

__all__ = [
    "DraftCommandResult",
    "DraftSessionRegistry",
    "DraftSessionUseCase",
    "RequestAnalysisResult",
    "RequestAnalysisUseCase",
]
