from pathlib import Path

import pytest

from drafting.catalog import index_catalog, load_catalog
from drafting.errors import DraftError, Rejection
from drafting.models import ActionKind, DraftMode, Side, team
from drafting.persistence import from_saved, load_draft, save_draft, to_saved
from drafting.state_machine import DraftMachine


FIXTURES = Path(__file__).parent / "fixtures"


def _catalog():
    return index_catalog(load_catalog(FIXTURES / "catalog.json"))


def _machine(catalog, *ids: str) -> DraftMachine:
    machine = DraftMachine(DraftMode.COMPETITIVE)
    for entity_id in ids:
        assert machine.apply_selection(catalog[entity_id]).ok
    return machine


def test_saved_form_keeps_empty_slots() -> None:
    catalog = _catalog()
    machine = _machine(catalog, "zed", "ahri", "lux")
    saved = to_saved(machine.state)

    assert saved["mode"] == "competitive"
    assert saved["turn_index"] == 3
    assert saved["blue"]["bans"] == ["zed", "lux", None, None, None]
    assert saved["red"]["bans"] == ["ahri", None, None, None, None]
    assert saved["blue"]["picks"] == [None] * 5
    assert "history" not in saved


def test_restore_rebuilds_the_same_state(tmp_path) -> None:
    catalog = _catalog()
    machine = _machine(catalog, "zed", "ahri", "lux", "syndra", "jinx", "caitlyn", "malphite")
    machine.set_direct(Side.RED, ActionKind.PICK, 3, catalog["braum"])

    path = tmp_path / "draft.json"
    save_draft(path, machine.state)
    restored = load_draft(path, catalog)

    assert restored == machine.state
    assert team(restored, Side.BLUE).picks[0].entity.name == "Malphite"


def test_short_lists_are_padded_and_camel_case_index_accepted() -> None:
    catalog = _catalog()
    state = from_saved(
        {"mode": "solo_queue", "turnIndex": 1, "blue": {"bans": ["zed"]}},
        catalog,
    )
    assert state.mode is DraftMode.SOLO_QUEUE
    assert state.turn_index == 1
    assert team(state, Side.BLUE).bans[0].entity.id == "zed"
    assert len(team(state, Side.RED).picks) == 5


def test_restore_errors() -> None:
    catalog = _catalog()
    cases = [
        ({"mode": "aram"}, Rejection.UNKNOWN_MODE),
        ({"mode": "competitive", "blue": {"picks": ["teemo"]}}, Rejection.UNKNOWN_ENTITY),
        ({"mode": "competitive", "blue": {"bans": ["zed"] + [None] * 5}}, Rejection.INVALID_SNAPSHOT),
        ({"mode": "competitive", "turn_index": 0, "blue": {"picks": 5}}, Rejection.INVALID_SNAPSHOT),
        ({"mode": "competitive", "red": {"bans": "zed"}}, Rejection.INVALID_SNAPSHOT),
        ({"mode": "competitive", "turn_index": 21}, Rejection.INVALID_SNAPSHOT),
        ({"mode": "competitive", "turn_index": "soon"}, Rejection.INVALID_SNAPSHOT),
        (
            {"mode": "competitive", "blue": {"bans": ["zed"]}, "red": {"picks": ["zed"]}},
            Rejection.DUPLICATE_ENTITY,
        ),
    ]
    for data, expected in cases:
        with pytest.raises(DraftError) as exc:
            from_saved(data, catalog)
        assert exc.value.rejection is expected, data
