from __future__ import annotations

from typing import Iterable, List, Optional

from .models import DraftState, Entity, Position, occupied_ids


def available_entities(catalog: Iterable[Entity], state: DraftState) -> List[Entity]:
    """Catalog entities not sitting in any pick or ban slot, in catalog order."""
    taken = occupied_ids(state)
    return [e for e in catalog if e.id not in taken]


def is_available(entity: Entity, state: DraftState) -> bool:
    return entity.id not in occupied_ids(state)


def filter_entities(
    entities: Iterable[Entity],
    position: Optional[Position] = None,
    query: Optional[str] = None,
) -> List[Entity]:
    needle = (query or "").strip().lower()
    out: List[Entity] = []
    for e in entities:
        if position is not None and position not in e.positions:
            continue
        if needle and needle not in e.name.lower():
            continue
        out.append(e)
    return out
