"""Transform draft session data to the frontend format."""

from typing import Any, Dict, List, Optional

from drafting.models import ActionKind, Alert, AnalyticsResult, DraftState, Entity, Side, team
from drafting.sequencer import DraftTurn

from ...domain.entities.session import DraftSessionView, TeamInsights


def _to_camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _camelize(obj: Any) -> Any:
    """Recursively convert dict keys to camelCase."""
    if isinstance(obj, dict):
        return {_to_camel_case(str(k)): _camelize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_camelize(v) for v in obj]
    return obj


def transform_entity(entity: Entity) -> Dict[str, Any]:
    return {
        "id": entity.id,
        "name": entity.name,
        "positions": [p.value for p in entity.positions],
        "damageType": entity.damage_type.value,
        "ccTypes": list(entity.cc_tags),
        "engagePotential": entity.engage.value if entity.engage else None,
        "teamArchetypes": list(entity.archetypes),
        "classes": list(entity.classes),
    }


def transform_turn(turn: Optional[DraftTurn]) -> Optional[Dict[str, Any]]:
    if turn is None:
        return None
    return {"side": turn.side.value, "type": turn.action.value, "phase": turn.phase}


def transform_sequence(sequence: List[DraftTurn]) -> List[Dict[str, Any]]:
    return [
        {"index": i, "side": t.side.value, "type": t.action.value, "phase": t.phase}
        for i, t in enumerate(sequence)
    ]


def _transform_team(state: DraftState, side: Side) -> Dict[str, Any]:
    t = team(state, side)
    return {
        "picks": [
            {
                "index": i,
                "position": s.position.value if s.position else None,
                "champion": transform_entity(s.entity) if s.entity else None,
            }
            for i, s in enumerate(t.slots(ActionKind.PICK))
        ],
        "bans": [
            {"index": i, "champion": transform_entity(s.entity) if s.entity else None}
            for i, s in enumerate(t.slots(ActionKind.BAN))
        ],
    }


def transform_analytics(result: AnalyticsResult) -> Dict[str, Any]:
    return {
        "damageProfile": {
            "ad": result.damage.ad,
            "ap": result.damage.ap,
            "hybrid": result.damage.hybrid,
        },
        "ccScore": {"value": result.cc.value, "label": result.cc.label.value},
        "engageScore": {"value": result.engage.value, "label": result.engage.label.value},
        "teamDNA": {category.value: count for category, count in result.archetypes.items()},
        "unmappedTags": list(result.unmapped_tags),
    }


def transform_alert(alert: Alert) -> Dict[str, Any]:
    return {"type": alert.kind.value, "title": alert.title, "message": alert.message}


def _transform_insights(insights: TeamInsights) -> Dict[str, Any]:
    return {
        "analytics": transform_analytics(insights.analytics),
        "alerts": [transform_alert(a) for a in insights.alerts],
    }


def transform_view_to_frontend(view: DraftSessionView) -> Dict[str, Any]:
    """Transform a session view to the frontend format.

    Args:
        view: Session view from the use case

    Returns:
        Session in frontend format
    """
    state = view.state
    return {
        "sessionId": view.session_id,
        "mode": state.mode.value,
        "status": view.status.value,
        "turnIndex": state.turn_index,
        "totalTurns": view.total_turns,
        "currentTurn": transform_turn(view.current_turn),
        "historyDepth": view.history_depth,
        "blue": _transform_team(state, Side.BLUE),
        "red": _transform_team(state, Side.RED),
        "insights": {
            "blue": _transform_insights(view.blue),
            "red": _transform_insights(view.red),
        },
    }


def transform_saved_to_frontend(saved: Dict[str, Any]) -> Dict[str, Any]:
    return _camelize(saved)
