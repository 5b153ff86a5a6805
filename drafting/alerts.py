from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .analytics import damage_profile
from .knowledge import FRONTLINE_CLASSES, SYNERGY_RULES, SynergyRule
from .models import Alert, AlertKind, Entity


MIN_SYNERGY_ROSTER = 2
MIN_CLASH_ROSTER = 4
SKEW_THRESHOLD = 4


@dataclass(frozen=True)
class ClashRule:
    title: str
    message: str
    triggered: Callable[[Sequence[Entity]], bool]


def _ad_skew(roster: Sequence[Entity]) -> bool:
    return damage_profile(roster).ad >= SKEW_THRESHOLD


def _ap_skew(roster: Sequence[Entity]) -> bool:
    return damage_profile(roster).ap >= SKEW_THRESHOLD


def _no_frontline(roster: Sequence[Entity]) -> bool:
    return not any(FRONTLINE_CLASSES.intersection(e.classes) for e in roster)


CLASH_RULES: Tuple[ClashRule, ...] = (
    ClashRule(
        "Skewed Physical Damage",
        "Your team is heavily physical damage. Consider adding a magic damage source "
        "to be harder to itemize against.",
        _ad_skew,
    ),
    ClashRule(
        "Skewed Magic Damage",
        "Your team is heavily magic damage. Consider adding a physical damage source.",
        _ap_skew,
    ),
    ClashRule(
        "No Frontline",
        "Your team lacks a tank or fighter. It will be vulnerable to enemy engage and "
        "have trouble protecting carries.",
        _no_frontline,
    ),
)


def check_synergies(
    roster: Sequence[Entity],
    rules: Iterable[SynergyRule] = SYNERGY_RULES,
) -> List[Alert]:
    if len(roster) < MIN_SYNERGY_ROSTER:
        return []
    names = {e.name for e in roster}
    return [
        Alert(AlertKind.SYNERGY, rule.title, rule.description)
        for rule in rules
        if rule.champions <= names
    ]


def check_clashes(
    roster: Sequence[Entity],
    rules: Iterable[ClashRule] = CLASH_RULES,
) -> List[Alert]:
    if len(roster) < MIN_CLASH_ROSTER:
        return []
    return [Alert(AlertKind.CLASH, rule.title, rule.message) for rule in rules if rule.triggered(roster)]


def detect_alerts(
    roster: Iterable[Optional[Entity]],
    synergy_rules: Optional[Iterable[SynergyRule]] = None,
    clash_rules: Optional[Iterable[ClashRule]] = None,
) -> List[Alert]:
    """Synergy alerts first, then clash alerts, each in rule-declaration order."""
    members = [e for e in roster if e is not None]
    return check_synergies(members, SYNERGY_RULES if synergy_rules is None else synergy_rules) + check_clashes(
        members, CLASH_RULES if clash_rules is None else clash_rules
    )
