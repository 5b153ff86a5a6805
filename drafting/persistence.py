from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import DraftError, Rejection
from .models import BANS_PER_TEAM, PICKS_PER_TEAM, DraftState, Entity, Side, Slot, TeamState
from .sequencer import parse_mode
from .state_machine import validate_state


def _team_to_saved(t: TeamState) -> Dict[str, List[Optional[str]]]:
    return {
        "picks": [s.entity.id if s.entity else None for s in t.picks],
        "bans": [s.entity.id if s.entity else None for s in t.bans],
    }


def to_saved(state: DraftState) -> Dict[str, Any]:
    """Compact form: ids only. History is never part of it."""
    return {
        "mode": state.mode.value,
        "turn_index": state.turn_index,
        Side.BLUE.value: _team_to_saved(state.blue),
        Side.RED.value: _team_to_saved(state.red),
    }


def _lookup(catalog: Mapping[str, Entity], entity_id: Any) -> Optional[Entity]:
    if entity_id is None:
        return None
    entity = catalog.get(str(entity_id))
    if entity is None:
        raise DraftError(
            Rejection.UNKNOWN_ENTITY,
            f"Saved draft references unknown champion: {entity_id}",
            {"entityId": str(entity_id)},
        )
    return entity


def _ids(raw: Any, limit: int, label: str) -> List[Any]:
    if raw is not None and not isinstance(raw, (list, tuple)):
        raise DraftError(Rejection.INVALID_SNAPSHOT, f"Expected a list for {label}")
    ids = list(raw or [])
    if len(ids) > limit:
        raise DraftError(Rejection.INVALID_SNAPSHOT, f"Too many entries in {label}: {len(ids)}")
    return ids + [None] * (limit - len(ids))


def _team_from_saved(raw: Any, catalog: Mapping[str, Entity], side: Side) -> TeamState:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise DraftError(Rejection.INVALID_SNAPSHOT, f"Expected an object for '{side.value}'")
    base = TeamState()
    picks = _ids(raw.get("picks"), PICKS_PER_TEAM, f"{side.value}.picks")
    bans = _ids(raw.get("bans"), BANS_PER_TEAM, f"{side.value}.bans")
    return TeamState(
        picks=tuple(replace(slot, entity=_lookup(catalog, i)) for slot, i in zip(base.picks, picks)),
        bans=tuple(Slot(entity=_lookup(catalog, i)) for i in bans),
    )


def from_saved(data: Mapping[str, Any], catalog: Mapping[str, Entity]) -> DraftState:
    """Rebuild a full state from the compact form plus an id -> entity catalog."""
    if not isinstance(data, Mapping):
        raise DraftError(Rejection.INVALID_SNAPSHOT)
    mode = parse_mode(data.get("mode") or "")
    try:
        turn_index = int(data.get("turn_index", data.get("turnIndex", 0)) or 0)
    except (TypeError, ValueError):
        raise DraftError(Rejection.INVALID_SNAPSHOT, "turn_index must be an integer") from None

    state = DraftState(
        mode=mode,
        blue=_team_from_saved(data.get(Side.BLUE.value), catalog, Side.BLUE),
        red=_team_from_saved(data.get(Side.RED.value), catalog, Side.RED),
        turn_index=turn_index,
    )
    problem = validate_state(state)
    if problem is not None:
        raise DraftError(problem)
    return state


def save_draft(path: str | Path, state: DraftState) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_saved(state), f, indent=2)


def load_draft(path: str | Path, catalog: Mapping[str, Entity]) -> DraftState:
    with open(path, "r", encoding="utf-8") as f:
        return from_saved(json.load(f), catalog)
