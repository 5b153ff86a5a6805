from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .errors import UnknownModeError
from .models import ActionKind, DraftMode, Side


@dataclass(frozen=True)
class DraftTurn:
    side: Side
    action: ActionKind
    phase: str


def _turns(phase: str, action: ActionKind, sides: str) -> Tuple[DraftTurn, ...]:
    # sides is a compact "BRRB..." string
    lookup = {"B": Side.BLUE, "R": Side.RED}
    return tuple(DraftTurn(lookup[s], action, phase) for s in sides)


SOLO_QUEUE_SEQUENCE: Tuple[DraftTurn, ...] = (
    _turns("Ban Phase", ActionKind.BAN, "BRBRBRBRBR")
    + _turns("Pick Phase", ActionKind.PICK, "BRRBBRRBBR")
)

COMPETITIVE_SEQUENCE: Tuple[DraftTurn, ...] = (
    _turns("Ban Phase 1", ActionKind.BAN, "BRBRBR")
    + _turns("Pick Phase 1", ActionKind.PICK, "BRRBBR")
    + _turns("Ban Phase 2", ActionKind.BAN, "RBRB")
    + _turns("Pick Phase 2", ActionKind.PICK, "RBBR")
)

_SEQUENCES: Dict[DraftMode, Tuple[DraftTurn, ...]] = {
    DraftMode.SOLO_QUEUE: SOLO_QUEUE_SEQUENCE,
    DraftMode.COMPETITIVE: COMPETITIVE_SEQUENCE,
}


def parse_mode(mode: Union[DraftMode, str]) -> DraftMode:
    if isinstance(mode, DraftMode):
        return mode
    try:
        return DraftMode(str(mode).strip().lower())
    except ValueError:
        raise UnknownModeError(mode) from None


def get_sequence(mode: Union[DraftMode, str]) -> Tuple[DraftTurn, ...]:
    """Return the fixed turn order for ``mode``; unknown modes raise ``UnknownModeError``."""
    return _SEQUENCES[parse_mode(mode)]


def turn_at(mode: Union[DraftMode, str], index: int) -> Optional[DraftTurn]:
    sequence = get_sequence(mode)
    if 0 <= index < len(sequence):
        return sequence[index]
    return None


def supported_modes() -> Tuple[DraftMode, ...]:
    return tuple(_SEQUENCES.keys())
