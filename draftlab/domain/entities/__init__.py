"""Domain entities."""

from .session import DraftSessionView, TeamInsights

__all__ = [
    "DraftSessionView",
    "TeamInsights",
]
