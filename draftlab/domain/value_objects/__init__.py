"""Domain value objects."""

from .types import ProgressStatus, SessionId

__all__ = [
    "ProgressStatus",
    "SessionId",
]
