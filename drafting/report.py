from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .alerts import detect_alerts
from .analytics import score
from .catalog import entity_to_record
from .knowledge import SynergyRule
from .models import (
    ActionKind,
    Alert,
    AnalyticsResult,
    DraftState,
    Side,
    roster,
    team,
)
from .persistence import to_saved
from .sequencer import DraftTurn, get_sequence
from .state_machine import status_of


def analytics_to_dict(result: AnalyticsResult) -> Dict[str, Any]:
    return {
        "damage_profile": {
            "ad": result.damage.ad,
            "ap": result.damage.ap,
            "hybrid": result.damage.hybrid,
        },
        "cc_score": {"value": result.cc.value, "label": result.cc.label.value},
        "engage_score": {"value": result.engage.value, "label": result.engage.label.value},
        "team_dna": {category.value: count for category, count in result.archetypes.items()},
        "unmapped_tags": list(result.unmapped_tags),
    }


def alert_to_dict(alert: Alert) -> Dict[str, Any]:
    return {"type": alert.kind.value, "title": alert.title, "message": alert.message}


def turn_to_dict(turn: Optional[DraftTurn]) -> Optional[Dict[str, Any]]:
    if turn is None:
        return None
    return {"side": turn.side.value, "action": turn.action.value, "phase": turn.phase}


def _slots(state: DraftState, side: Side, kind: ActionKind) -> List[Dict[str, Any]]:
    out = []
    for idx, slot in enumerate(team(state, side).slots(kind)):
        out.append(
            {
                "index": idx,
                "position": slot.position.value if slot.position else None,
                "entity_id": slot.entity.id if slot.entity else None,
                "name": slot.entity.name if slot.entity else None,
            }
        )
    return out


def build_report(
    state: DraftState,
    synergy_rules: Optional[Iterable[SynergyRule]] = None,
) -> Dict[str, Any]:
    sequence = get_sequence(state.mode)
    current = sequence[state.turn_index] if state.turn_index < len(sequence) else None
    rules = tuple(synergy_rules) if synergy_rules is not None else None

    teams: Dict[str, Any] = {}
    for side in Side:
        members = roster(state, side)
        teams[side.value] = {
            "picks": _slots(state, side, ActionKind.PICK),
            "bans": _slots(state, side, ActionKind.BAN),
            "analytics": analytics_to_dict(score(members)),
            "alerts": [alert_to_dict(a) for a in detect_alerts(members, rules)],
        }

    return {
        "meta": {
            "mode": state.mode.value,
            "status": status_of(state).value,
            "turn_index": state.turn_index,
            "total_turns": len(sequence),
            "current_turn": turn_to_dict(current),
        },
        "teams": teams,
        "saved": to_saved(state),
    }


def state_to_dict(state: DraftState) -> Dict[str, Any]:
    """Full state with complete champion records in every filled slot."""

    def _team(side: Side) -> Dict[str, Any]:
        t = team(state, side)
        return {
            "picks": [
                {
                    "position": s.position.value if s.position else None,
                    "champion": entity_to_record(s.entity) if s.entity else None,
                }
                for s in t.picks
            ],
            "bans": [{"champion": entity_to_record(s.entity) if s.entity else None} for s in t.bans],
        }

    return {
        "mode": state.mode.value,
        "turn_index": state.turn_index,
        Side.BLUE.value: _team(Side.BLUE),
        Side.RED.value: _team(Side.RED),
    }
