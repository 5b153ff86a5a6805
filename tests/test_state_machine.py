from typing import List

from drafting.errors import Rejection
from drafting.models import (
    ActionKind,
    DraftMode,
    DraftState,
    DraftStatus,
    Entity,
    Position,
    Side,
    SlotRef,
    bans,
    occupied_ids,
    place,
    roster,
    team,
)
from drafting.state_machine import DraftMachine, validate_state


def _entities(n: int) -> List[Entity]:
    return [Entity(id=f"c{i}", name=f"Champion {i}") for i in range(n)]


def test_full_competitive_draft_completes() -> None:
    machine = DraftMachine(DraftMode.COMPETITIVE)
    pool = _entities(21)
    for entity in pool[:20]:
        result = machine.apply_selection(entity)
        assert result.ok, result.rejection

    assert machine.status is DraftStatus.COMPLETE
    assert machine.current_turn is None
    assert len(roster(machine.state, Side.BLUE)) == 5
    assert len(roster(machine.state, Side.RED)) == 5
    assert len(bans(machine.state, Side.BLUE)) == 5
    assert len(bans(machine.state, Side.RED)) == 5
    assert len(occupied_ids(machine.state)) == 20

    result = machine.apply_selection(pool[20])
    assert not result.ok
    assert result.rejection is Rejection.INVALID_TURN
    assert machine.history_depth == 20


def test_full_solo_queue_draft_completes() -> None:
    machine = DraftMachine(DraftMode.SOLO_QUEUE)
    pool = _entities(20)
    for entity in pool:
        assert machine.apply_selection(entity).ok

    assert machine.state.turn_index == 20
    assert machine.status is DraftStatus.COMPLETE
    assert machine.is_complete
    assert occupied_ids(machine.state) == {e.id for e in pool}
    assert len(roster(machine.state, Side.BLUE)) == 5
    assert len(bans(machine.state, Side.RED)) == 5


def test_directly_placed_entity_cannot_be_selected() -> None:
    machine = DraftMachine(DraftMode.COMPETITIVE)
    a, b = _entities(2)
    assert machine.set_direct(Side.RED, ActionKind.PICK, 2, a).ok
    state = machine.state

    result = machine.apply_selection(a)

    assert result.rejection is Rejection.DUPLICATE_ENTITY
    assert machine.state is state
    assert machine.history_depth == 0

    assert machine.apply_selection(b).ok
    assert occupied_ids(machine.state) == {"c0", "c1"}
    assert machine.location("c0") == SlotRef(Side.RED, ActionKind.PICK, 2)


def test_selection_fills_lowest_open_slot_of_turn_side() -> None:
    machine = DraftMachine(DraftMode.COMPETITIVE)
    a, b, c = _entities(3)
    machine.apply_selection(a)  # blue ban
    machine.apply_selection(b)  # red ban
    machine.apply_selection(c)  # blue ban

    blue = team(machine.state, Side.BLUE)
    assert blue.bans[0].entity == a
    assert blue.bans[1].entity == c
    assert team(machine.state, Side.RED).bans[0].entity == b
    assert machine.state.turn_index == 3
    assert machine.location("c2") == SlotRef(Side.BLUE, ActionKind.BAN, 1)


def test_pick_slots_keep_their_positions() -> None:
    machine = DraftMachine(DraftMode.SOLO_QUEUE)
    for entity in _entities(11):
        machine.apply_selection(entity)
    first_pick = team(machine.state, Side.BLUE).picks[0]
    assert first_pick.entity.id == "c10"
    assert first_pick.position is Position.TOP


def test_undo_restores_previous_state_exactly() -> None:
    machine = DraftMachine()
    a, b = _entities(2)
    machine.apply_selection(a)
    before = machine.state

    assert machine.apply_selection(b).ok
    assert machine.undo().ok

    assert machine.state == before
    assert machine.history_depth == 1
    assert machine.location("c1") is None
    assert machine.location("c0") is not None


def test_undo_on_fresh_draft_is_rejected() -> None:
    machine = DraftMachine()
    before = machine.state
    result = machine.undo()
    assert not result.ok
    assert result.rejection is Rejection.EMPTY_HISTORY
    assert result.message == "There is nothing to undo."
    assert machine.state is before


def test_duplicate_selection_changes_nothing() -> None:
    machine = DraftMachine()
    a, _ = _entities(2)
    machine.apply_selection(a)
    state = machine.state
    depth = machine.history_depth

    result = machine.apply_selection(a)

    assert not result.ok
    assert result.rejection is Rejection.DUPLICATE_ENTITY
    assert machine.state is state
    assert machine.history_depth == depth


def test_selection_with_no_open_slot_is_rejected() -> None:
    machine = DraftMachine(DraftMode.COMPETITIVE)
    pool = _entities(6)
    # fill every blue ban by hand while the turn pointer still wants a blue ban
    for idx, entity in enumerate(pool[:5]):
        assert machine.set_direct(Side.BLUE, ActionKind.BAN, idx, entity).ok

    state = machine.state
    result = machine.apply_selection(pool[5])

    assert result.rejection is Rejection.SLOT_UNAVAILABLE
    assert machine.state is state
    assert machine.state.turn_index == 0
    assert machine.history_depth == 0


def test_set_direct_moves_entity_across_sides() -> None:
    machine = DraftMachine()
    a, b = _entities(2)
    machine.set_direct(Side.BLUE, ActionKind.PICK, 0, a)
    machine.set_direct(Side.BLUE, ActionKind.PICK, 1, b)

    result = machine.set_direct(Side.RED, ActionKind.PICK, 2, a)

    assert result.ok
    assert team(machine.state, Side.BLUE).picks[0].entity is None
    assert team(machine.state, Side.RED).picks[2].entity == a
    assert machine.location("c0") == SlotRef(Side.RED, ActionKind.PICK, 2)
    assert occupied_ids(machine.state) == {"c0", "c1"}
    assert machine.state.turn_index == 0
    assert machine.history_depth == 0


def test_set_direct_overwrite_and_clear() -> None:
    machine = DraftMachine()
    a, b = _entities(2)
    machine.set_direct(Side.RED, ActionKind.BAN, 3, a)
    machine.set_direct(Side.RED, ActionKind.BAN, 3, b)

    assert team(machine.state, Side.RED).bans[3].entity == b
    assert machine.location("c0") is None

    assert machine.set_direct(Side.RED, ActionKind.BAN, 3, None).ok
    assert occupied_ids(machine.state) == set()
    assert machine.location("c1") is None


def test_set_direct_same_entity_is_noop() -> None:
    machine = DraftMachine()
    (a,) = _entities(1)
    machine.set_direct(Side.BLUE, ActionKind.PICK, 4, a)
    state = machine.state
    assert machine.set_direct(Side.BLUE, ActionKind.PICK, 4, a).ok
    assert machine.state is state


def test_set_direct_out_of_range() -> None:
    machine = DraftMachine()
    (a,) = _entities(1)
    result = machine.set_direct(Side.BLUE, ActionKind.PICK, 5, a)
    assert result.rejection is Rejection.INVALID_SLOT
    result = machine.set_direct(Side.BLUE, ActionKind.BAN, -1, a)
    assert result.rejection is Rejection.INVALID_SLOT
    assert occupied_ids(machine.state) == set()


def test_swap_picks_is_undoable() -> None:
    machine = DraftMachine()
    a, b = _entities(2)
    machine.set_direct(Side.BLUE, ActionKind.PICK, 0, a)
    machine.set_direct(Side.BLUE, ActionKind.PICK, 2, b)
    before = machine.state

    assert machine.swap_picks(Side.BLUE, 0, 2).ok
    picks = team(machine.state, Side.BLUE).picks
    assert picks[0].entity == b and picks[2].entity == a
    assert picks[0].position is Position.TOP
    assert machine.location("c0") == SlotRef(Side.BLUE, ActionKind.PICK, 2)
    assert machine.history_depth == 1

    assert machine.undo().ok
    assert machine.state == before
    assert machine.location("c0") == SlotRef(Side.BLUE, ActionKind.PICK, 0)


def test_swap_picks_with_empty_slot_and_bad_index() -> None:
    machine = DraftMachine()
    (a,) = _entities(1)
    machine.set_direct(Side.RED, ActionKind.PICK, 1, a)

    assert machine.swap_picks(Side.RED, 1, 4).ok
    assert team(machine.state, Side.RED).picks[1].entity is None
    assert team(machine.state, Side.RED).picks[4].entity == a

    assert machine.swap_picks(Side.RED, 0, 5).rejection is Rejection.INVALID_SLOT
    depth = machine.history_depth
    assert machine.swap_picks(Side.RED, 3, 3).ok
    assert machine.history_depth == depth


def test_reset_clears_everything_and_can_switch_mode() -> None:
    machine = DraftMachine(DraftMode.COMPETITIVE)
    for entity in _entities(4):
        machine.apply_selection(entity)

    assert machine.reset(DraftMode.SOLO_QUEUE).ok
    assert machine.mode is DraftMode.SOLO_QUEUE
    assert machine.state == DraftState(mode=DraftMode.SOLO_QUEUE)
    assert machine.history_depth == 0
    assert machine.location("c0") is None


def test_reset_with_unknown_mode_keeps_draft() -> None:
    machine = DraftMachine()
    machine.apply_selection(_entities(1)[0])
    state = machine.state

    result = machine.reset("aram")

    assert result.rejection is Rejection.UNKNOWN_MODE
    assert machine.state is state
    assert machine.history_depth == 1


def test_load_replaces_state_and_drops_history() -> None:
    source = DraftMachine(DraftMode.SOLO_QUEUE)
    for entity in _entities(12):
        source.apply_selection(entity)

    machine = DraftMachine()
    machine.apply_selection(Entity(id="x", name="X"))
    assert machine.load(source.state).ok

    assert machine.state == source.state
    assert machine.mode is DraftMode.SOLO_QUEUE
    assert machine.history_depth == 0
    assert machine.location("c11") == SlotRef(Side.RED, ActionKind.PICK, 0)
    assert machine.apply_selection(Entity(id="c0", name="dup")).rejection is Rejection.DUPLICATE_ENTITY


def test_load_rejects_duplicated_entity() -> None:
    (a,) = _entities(1)
    state = DraftState(mode=DraftMode.COMPETITIVE)
    state = place(state, SlotRef(Side.BLUE, ActionKind.BAN, 0), a)
    state = place(state, SlotRef(Side.RED, ActionKind.PICK, 0), a)

    assert validate_state(state) is Rejection.DUPLICATE_ENTITY
    machine = DraftMachine()
    assert machine.load(state).rejection is Rejection.DUPLICATE_ENTITY
    assert machine.state == DraftState(mode=DraftMode.COMPETITIVE)
