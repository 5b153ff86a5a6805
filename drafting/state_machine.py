from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple, Union

from .errors import Rejection, UnknownModeError, rejection_message
from .models import (
    BANS_PER_TEAM,
    PICKS_PER_TEAM,
    ActionKind,
    DraftMode,
    DraftState,
    DraftStatus,
    Entity,
    Side,
    SlotRef,
    empty_state,
    get_slot,
    iter_slots,
    locate_all,
    place,
    team,
)
from .sequencer import DraftTurn, get_sequence, parse_mode


@dataclass(frozen=True)
class DraftResult:
    ok: bool
    state: DraftState
    rejection: Optional[Rejection] = None

    @property
    def message(self) -> Optional[str]:
        return rejection_message(self.rejection) if self.rejection else None


def status_of(state: DraftState) -> DraftStatus:
    if state.turn_index >= len(get_sequence(state.mode)):
        return DraftStatus.COMPLETE
    return DraftStatus.IN_PROGRESS


def validate_state(state: DraftState) -> Optional[Rejection]:
    """Structural check for states arriving from outside the machine."""
    try:
        sequence = get_sequence(state.mode)
    except UnknownModeError:
        return Rejection.UNKNOWN_MODE
    if not 0 <= state.turn_index <= len(sequence):
        return Rejection.INVALID_SNAPSHOT
    for side in Side:
        t = team(state, side)
        if len(t.picks) != PICKS_PER_TEAM or len(t.bans) != BANS_PER_TEAM:
            return Rejection.INVALID_SNAPSHOT
    if any(len(refs) > 1 for refs in locate_all(state).values()):
        return Rejection.DUPLICATE_ENTITY
    return None


def _slot_count(kind: ActionKind) -> int:
    return PICKS_PER_TEAM if kind is ActionKind.PICK else BANS_PER_TEAM


class DraftMachine:
    """Owns one draft: sequenced selections, undo, sandbox placement and reset.

    Every operation returns a ``DraftResult``; a rejected call leaves the state,
    history and internal index exactly as they were. Not thread-safe: callers
    serialize access.
    """

    def __init__(self, mode: Union[DraftMode, str] = DraftMode.COMPETITIVE) -> None:
        self._state = empty_state(parse_mode(mode))
        self._history: List[DraftState] = []
        self._locations: Dict[str, SlotRef] = {}

    @property
    def state(self) -> DraftState:
        return self._state

    @property
    def mode(self) -> DraftMode:
        return self._state.mode

    @property
    def history(self) -> Tuple[DraftState, ...]:
        return tuple(self._history)

    @property
    def history_depth(self) -> int:
        return len(self._history)

    @property
    def sequence(self) -> Tuple[DraftTurn, ...]:
        return get_sequence(self._state.mode)

    @property
    def status(self) -> DraftStatus:
        return status_of(self._state)

    @property
    def is_complete(self) -> bool:
        return self.status is DraftStatus.COMPLETE

    @property
    def current_turn(self) -> Optional[DraftTurn]:
        sequence = self.sequence
        if self._state.turn_index < len(sequence):
            return sequence[self._state.turn_index]
        return None

    def location(self, entity_id: str) -> Optional[SlotRef]:
        return self._locations.get(entity_id)

    def _ok(self) -> DraftResult:
        return DraftResult(ok=True, state=self._state)

    def _reject(self, rejection: Rejection) -> DraftResult:
        return DraftResult(ok=False, state=self._state, rejection=rejection)

    def _reindex(self) -> None:
        self._locations = {
            slot.entity.id: ref for ref, slot in iter_slots(self._state) if slot.entity is not None
        }

    def apply_selection(self, entity: Entity) -> DraftResult:
        turn = self.current_turn
        if turn is None:
            return self._reject(Rejection.INVALID_TURN)
        if entity.id in self._locations:
            return self._reject(Rejection.DUPLICATE_ENTITY)

        index = team(self._state, turn.side).first_empty(turn.action)
        if index is None:
            return self._reject(Rejection.SLOT_UNAVAILABLE)

        ref = SlotRef(turn.side, turn.action, index)
        new_state = replace(place(self._state, ref, entity), turn_index=self._state.turn_index + 1)

        self._history.append(self._state)
        self._state = new_state
        self._locations[entity.id] = ref
        return self._ok()

    def undo(self) -> DraftResult:
        if not self._history:
            return self._reject(Rejection.EMPTY_HISTORY)
        self._state = self._history.pop()
        self._reindex()
        return self._ok()

    def set_direct(
        self,
        side: Side,
        kind: ActionKind,
        index: int,
        entity: Optional[Entity],
    ) -> DraftResult:
        """Place (or clear) a slot outside the turn order. History and turn index are untouched.

        An entity already sitting elsewhere, on either side, is moved out of its old slot.
        """
        if not 0 <= index < _slot_count(kind):
            return self._reject(Rejection.INVALID_SLOT)

        target = SlotRef(side, kind, index)
        previous = get_slot(self._state, target).entity
        if entity is not None and previous == entity:
            return self._ok()

        state = self._state
        locations = dict(self._locations)
        if previous is not None and locations.get(previous.id) == target:
            del locations[previous.id]
        if entity is not None:
            prior = locations.pop(entity.id, None)
            if prior is not None and prior != target:
                state = place(state, prior, None)
            locations[entity.id] = target
        state = place(state, target, entity)

        self._state = state
        self._locations = locations
        return self._ok()

    def swap_picks(self, side: Side, first: int, second: int) -> DraftResult:
        if not (0 <= first < PICKS_PER_TEAM and 0 <= second < PICKS_PER_TEAM):
            return self._reject(Rejection.INVALID_SLOT)
        if first == second:
            return self._ok()

        ref_a = SlotRef(side, ActionKind.PICK, first)
        ref_b = SlotRef(side, ActionKind.PICK, second)
        a = get_slot(self._state, ref_a).entity
        b = get_slot(self._state, ref_b).entity
        new_state = place(place(self._state, ref_a, b), ref_b, a)

        self._history.append(self._state)
        self._state = new_state
        if a is not None:
            self._locations[a.id] = ref_b
        if b is not None:
            self._locations[b.id] = ref_a
        return self._ok()

    def reset(self, mode: Union[DraftMode, str, None] = None) -> DraftResult:
        try:
            new_mode = self._state.mode if mode is None else parse_mode(mode)
        except UnknownModeError:
            return self._reject(Rejection.UNKNOWN_MODE)
        self._state = empty_state(new_mode)
        self._history = []
        self._locations = {}
        return self._ok()

    def load(self, state: DraftState) -> DraftResult:
        """Replace the live draft with ``state`` and drop the undo history."""
        problem = validate_state(state)
        if problem is not None:
            return self._reject(problem)
        self._state = state
        self._history = []
        self._reindex()
        return self._ok()
