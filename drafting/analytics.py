from __future__ import annotations

from typing import Dict, Iterable, Optional, Set

from .knowledge import TAG_CATEGORIES
from .models import (
    AnalyticsResult,
    ArchetypeCategory,
    DamageProfile,
    DamageType,
    Entity,
    Level,
    Score,
)


ENGAGE_POINTS: Dict[Level, int] = {Level.LOW: 1, Level.MEDIUM: 2, Level.HIGH: 3}


def _label(value: int, size: int) -> Level:
    if size == 0:
        return Level.LOW
    average = value / size
    if average < 1.5:
        return Level.LOW
    if average < 2.5:
        return Level.MEDIUM
    return Level.HIGH


def cc_points(entity: Entity) -> int:
    n = len(entity.cc_tags)
    if n > 2:
        return 3
    if n > 0:
        return 2
    return 1


def engage_points(entity: Entity) -> int:
    if entity.engage is None:
        return 1
    return ENGAGE_POINTS.get(entity.engage, 1)


def damage_profile(roster: Iterable[Optional[Entity]]) -> DamageProfile:
    ad = ap = hybrid = 0
    for e in roster:
        if e is None:
            continue
        if e.damage_type is DamageType.AD:
            ad += 1
        elif e.damage_type is DamageType.AP:
            ap += 1
        elif e.damage_type is DamageType.HYBRID:
            hybrid += 1
    return DamageProfile(ad=ad, ap=ap, hybrid=hybrid)


def archetype_histogram(roster: Iterable[Entity]) -> Dict[ArchetypeCategory, int]:
    histogram = {category: 0 for category in ArchetypeCategory}
    for e in roster:
        for tag in e.archetypes:
            for category in TAG_CATEGORIES.get(tag, ()):
                histogram[category] += 1
    return histogram


def score(roster: Iterable[Optional[Entity]]) -> AnalyticsResult:
    """Score a roster. Empty slots (``None``) are skipped; member order does not matter."""
    members = [e for e in roster if e is not None]
    size = len(members)

    cc_value = sum(cc_points(e) for e in members)
    engage_value = sum(engage_points(e) for e in members)

    unmapped: Set[str] = {t for e in members for t in e.archetypes if t not in TAG_CATEGORIES}

    return AnalyticsResult(
        damage=damage_profile(members),
        cc=Score(cc_value, _label(cc_value, size)),
        engage=Score(engage_value, _label(engage_value, size)),
        archetypes=archetype_histogram(members),
        unmapped_tags=tuple(sorted(unmapped)),
    )
