from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class Rejection(str, Enum):
    """Why a draft operation was refused. The draft is never modified by a refused call."""

    INVALID_TURN = "InvalidTurn"
    DUPLICATE_ENTITY = "DuplicateEntity"
    SLOT_UNAVAILABLE = "SlotUnavailable"
    EMPTY_HISTORY = "EmptyHistory"
    UNKNOWN_MODE = "UnknownMode"
    INVALID_SLOT = "InvalidSlot"
    UNKNOWN_ENTITY = "UnknownEntity"
    INVALID_SNAPSHOT = "InvalidSnapshot"


REJECTION_MESSAGES: Dict[Rejection, str] = {
    Rejection.INVALID_TURN: "The draft is already complete.",
    Rejection.DUPLICATE_ENTITY: "That champion has already been picked or banned.",
    Rejection.SLOT_UNAVAILABLE: "No open slot is left for this turn; the draft is out of sync.",
    Rejection.EMPTY_HISTORY: "There is nothing to undo.",
    Rejection.UNKNOWN_MODE: "Unsupported draft mode.",
    Rejection.INVALID_SLOT: "Slot index is out of range.",
    Rejection.UNKNOWN_ENTITY: "Unknown champion.",
    Rejection.INVALID_SNAPSHOT: "The saved draft is malformed.",
}


def rejection_message(rejection: Rejection) -> str:
    return REJECTION_MESSAGES.get(rejection, rejection.value)


class DraftError(Exception):
    """Raised by pure lookups (sequence tables, snapshot restore) on bad input."""

    def __init__(
        self,
        rejection: Rejection,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or rejection_message(rejection))
        self.rejection = rejection
        self.details = details or {}


class UnknownModeError(DraftError, ValueError):
    def __init__(self, mode: Any) -> None:
        super().__init__(
            Rejection.UNKNOWN_MODE,
            f"Unsupported draft mode: {mode!r}",
            {"mode": str(mode)},
        )
