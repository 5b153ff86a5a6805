from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple


PICKS_PER_TEAM = 5
BANS_PER_TEAM = 5


class Side(str, Enum):
    BLUE = "blue"
    RED = "red"


class ActionKind(str, Enum):
    PICK = "pick"
    BAN = "ban"


class DraftMode(str, Enum):
    SOLO_QUEUE = "solo_queue"
    COMPETITIVE = "competitive"


class DraftStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class Position(str, Enum):
    """Pick-slot positions, in slot-index order."""

    TOP = "top"
    JUNGLE = "jungle"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    SUPPORT = "support"


POSITION_ORDER: Tuple[Position, ...] = tuple(Position)


class DamageType(str, Enum):
    AD = "AD"
    AP = "AP"
    HYBRID = "Hybrid"
    MIXED = "Mixed"


class Level(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ArchetypeCategory(str, Enum):
    """Team DNA display categories."""

    ENGAGE_DIVE = "Engage/Dive"
    POKE_SIEGE = "Poke/Siege"
    PEEL_PROTECT = "Peel/Protect"
    PICK_ASSASSINATE = "Pick/Assassinate"
    SPLIT_PUSH = "Split Push"
    SKIRMISH = "Skirmish"


class AlertKind(str, Enum):
    SYNERGY = "synergy"
    CLASH = "clash"


@dataclass(frozen=True)
class Entity:
    id: str
    name: str
    positions: Tuple[Position, ...] = ()
    damage_type: DamageType = DamageType.MIXED
    cc_tags: Tuple[str, ...] = ()
    engage: Optional[Level] = None
    archetypes: Tuple[str, ...] = ()
    classes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Slot:
    entity: Optional[Entity] = None
    position: Optional[Position] = None  # picks only

    @property
    def is_empty(self) -> bool:
        return self.entity is None


@dataclass(frozen=True)
class SlotRef:
    side: Side
    kind: ActionKind
    index: int


def _empty_picks() -> Tuple[Slot, ...]:
    return tuple(Slot(position=p) for p in POSITION_ORDER)


def _empty_bans() -> Tuple[Slot, ...]:
    return tuple(Slot() for _ in range(BANS_PER_TEAM))


@dataclass(frozen=True)
class TeamState:
    picks: Tuple[Slot, ...] = field(default_factory=_empty_picks)
    bans: Tuple[Slot, ...] = field(default_factory=_empty_bans)

    def slots(self, kind: ActionKind) -> Tuple[Slot, ...]:
        return self.picks if kind is ActionKind.PICK else self.bans

    def first_empty(self, kind: ActionKind) -> Optional[int]:
        for idx, slot in enumerate(self.slots(kind)):
            if slot.is_empty:
                return idx
        return None


@dataclass(frozen=True)
class DraftState:
    mode: DraftMode
    blue: TeamState = field(default_factory=TeamState)
    red: TeamState = field(default_factory=TeamState)
    turn_index: int = 0


@dataclass(frozen=True)
class DamageProfile:
    ad: int = 0
    ap: int = 0
    hybrid: int = 0


@dataclass(frozen=True)
class Score:
    value: int = 0
    label: Level = Level.LOW


@dataclass(frozen=True)
class AnalyticsResult:
    damage: DamageProfile
    cc: Score
    engage: Score
    archetypes: Dict[ArchetypeCategory, int]
    unmapped_tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Alert:
    kind: AlertKind
    title: str
    message: str


def empty_state(mode: DraftMode) -> DraftState:
    return DraftState(mode=mode)


def team(state: DraftState, side: Side) -> TeamState:
    return state.blue if side is Side.BLUE else state.red


def get_slot(state: DraftState, ref: SlotRef) -> Slot:
    return team(state, ref.side).slots(ref.kind)[ref.index]


def iter_slots(state: DraftState) -> Iterator[Tuple[SlotRef, Slot]]:
    for side in Side:
        t = team(state, side)
        for kind in (ActionKind.PICK, ActionKind.BAN):
            for idx, slot in enumerate(t.slots(kind)):
                yield SlotRef(side, kind, idx), slot


def place(state: DraftState, ref: SlotRef, entity: Optional[Entity]) -> DraftState:
    """Return a copy of ``state`` with ``entity`` written into ``ref``."""
    t = team(state, ref.side)
    slots = list(t.slots(ref.kind))
    slots[ref.index] = replace(slots[ref.index], entity=entity)
    if ref.kind is ActionKind.PICK:
        new_team = replace(t, picks=tuple(slots))
    else:
        new_team = replace(t, bans=tuple(slots))
    if ref.side is Side.BLUE:
        return replace(state, blue=new_team)
    return replace(state, red=new_team)


def occupied_ids(state: DraftState) -> Set[str]:
    return {slot.entity.id for _, slot in iter_slots(state) if slot.entity is not None}


def locate_all(state: DraftState) -> Dict[str, List[SlotRef]]:
    out: Dict[str, List[SlotRef]] = {}
    for ref, slot in iter_slots(state):
        if slot.entity is not None:
            out.setdefault(slot.entity.id, []).append(ref)
    return out


def roster(state: DraftState, side: Side) -> List[Entity]:
    return [s.entity for s in team(state, side).picks if s.entity is not None]


def bans(state: DraftState, side: Side) -> List[Entity]:
    return [s.entity for s in team(state, side).bans if s.entity is not None]
