from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import DraftError, Rejection
from .models import DamageType, Entity, Level, Position


_POSITION_ALIASES: Dict[str, Position] = {
    "top": Position.TOP,
    "toplane": Position.TOP,
    "top_lane": Position.TOP,
    "jungle": Position.JUNGLE,
    "jng": Position.JUNGLE,
    "jg": Position.JUNGLE,
    "jungler": Position.JUNGLE,
    "mid": Position.MIDDLE,
    "middle": Position.MIDDLE,
    "midlane": Position.MIDDLE,
    "mid_lane": Position.MIDDLE,
    "bot": Position.BOTTOM,
    "bottom": Position.BOTTOM,
    "adc": Position.BOTTOM,
    "carry": Position.BOTTOM,
    "marksman": Position.BOTTOM,
    "support": Position.SUPPORT,
    "sup": Position.SUPPORT,
    "supp": Position.SUPPORT,
    "utility": Position.SUPPORT,
}

_DAMAGE_ALIASES: Dict[str, DamageType] = {
    "ad": DamageType.AD,
    "physical": DamageType.AD,
    "ap": DamageType.AP,
    "magic": DamageType.AP,
    "hybrid": DamageType.HYBRID,
    "mixed": DamageType.MIXED,
}

_LEVEL_ALIASES: Dict[str, Level] = {
    "low": Level.LOW,
    "medium": Level.MEDIUM,
    "med": Level.MEDIUM,
    "high": Level.HIGH,
}


def parse_position(value: Any) -> Optional[Position]:
    if isinstance(value, Position):
        return value
    if not value:
        return None
    return _POSITION_ALIASES.get(str(value).strip().lower())


def parse_damage_type(value: Any) -> DamageType:
    if isinstance(value, DamageType):
        return value
    return _DAMAGE_ALIASES.get(str(value or "").strip().lower(), DamageType.MIXED)


def parse_level(value: Any) -> Optional[Level]:
    if isinstance(value, Level):
        return value
    if not value:
        return None
    return _LEVEL_ALIASES.get(str(value).strip().lower())


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _str_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value if v)


def entity_from_record(record: Dict[str, Any]) -> Entity:
    entity_id = _first(record, "id", "key")
    name = _first(record, "name")
    if not entity_id or not name:
        raise ValueError(f"Catalog record needs 'id' and 'name': {record!r}")

    positions = []
    for raw in _str_list(_first(record, "positions", "roles")):
        pos = parse_position(raw)
        if pos is not None and pos not in positions:
            positions.append(pos)

    return Entity(
        id=str(entity_id),
        name=str(name),
        positions=tuple(positions),
        damage_type=parse_damage_type(_first(record, "damage_type", "damageType")),
        cc_tags=_str_list(_first(record, "cc_tags", "ccTypes")),
        engage=parse_level(_first(record, "engage", "engagePotential")),
        archetypes=_str_list(_first(record, "archetypes", "teamArchetypes")),
        classes=_str_list(_first(record, "classes", "class", "championClass")),
    )


def entity_to_record(entity: Entity) -> Dict[str, Any]:
    return {
        "id": entity.id,
        "name": entity.name,
        "positions": [p.value for p in entity.positions],
        "damage_type": entity.damage_type.value,
        "cc_tags": list(entity.cc_tags),
        "engage": entity.engage.value if entity.engage else None,
        "archetypes": list(entity.archetypes),
        "classes": list(entity.classes),
    }


def parse_catalog(records: Iterable[Dict[str, Any]]) -> List[Entity]:
    entities: List[Entity] = []
    seen = set()
    for record in records:
        entity = entity_from_record(record)
        if entity.id in seen:
            raise ValueError(f"Duplicate catalog id: {entity.id}")
        seen.add(entity.id)
        entities.append(entity)
    return entities


def load_catalog(path: str | Path) -> List[Entity]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("champions") or data.get("entities") or []
    return parse_catalog(data)


def index_catalog(entities: Iterable[Entity]) -> Dict[str, Entity]:
    return {e.id: e for e in entities}


def resolve(catalog: Dict[str, Entity], key: str) -> Entity:
    """Look up by id, falling back to a case-insensitive display-name match."""
    if key in catalog:
        return catalog[key]
    lowered = key.strip().lower()
    for entity in catalog.values():
        if entity.name.lower() == lowered or entity.id.lower() == lowered:
            return entity
    raise DraftError(Rejection.UNKNOWN_ENTITY, f"Unknown champion: {key}", {"entityId": key})
