from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .models import ArchetypeCategory


@dataclass(frozen=True)
class SynergyRule:
    champions: FrozenSet[str]  # display names
    title: str
    description: str


SYNERGY_RULES: Tuple[SynergyRule, ...] = (
    SynergyRule(
        frozenset({"Malphite", "Yasuo"}),
        "Unstoppable Force + Last Breath",
        "Yasuo can instantly cast his ultimate on all enemies knocked up by Malphite's "
        "ultimate, creating a devastating teamfight combo.",
    ),
    SynergyRule(
        frozenset({"Lucian", "Braum"}),
        "Lightslinger & Unbreakable",
        "Braum's passive, Concussive Blows, can be procced almost instantly by Lucian's "
        "double-shot passive, allowing for rapid stuns in lane.",
    ),
    SynergyRule(
        frozenset({"Xayah", "Rakan"}),
        "The Lovers' Duo",
        "Xayah and Rakan have unique, enhanced interactions with each other's abilities, "
        "including a longer range on Rakan's dash to Xayah and a shared recall.",
    ),
    SynergyRule(
        frozenset({"Amumu", "Miss Fortune"}),
        "Curse of the Sad Bullet Time",
        "Amumu's AoE ultimate holds enemies in place, guaranteeing Miss Fortune can land a "
        "full-duration, maximum damage Bullet Time.",
    ),
    SynergyRule(
        frozenset({"Orianna", "Rengar"}),
        "The Ball Delivery System",
        "Rengar can carry Orianna's ball into the enemy team while stealthed, setting up a "
        "surprise multi-person Shockwave.",
    ),
    SynergyRule(
        frozenset({"Katarina", "Galio"}),
        "Hero's Death Lotus",
        "Galio's wide area taunt from his ultimate forces enemies to stand still, allowing "
        "Katarina to deal massive damage with her Death Lotus.",
    ),
)


ARCHETYPE_SYNONYMS: Dict[ArchetypeCategory, FrozenSet[str]] = {
    ArchetypeCategory.ENGAGE_DIVE: frozenset(
        {"Dive", "Engage", "Vanguard", "Teamfight", "Juggernaut", "Diver"}
    ),
    ArchetypeCategory.POKE_SIEGE: frozenset({"Poke", "Siege", "Artillery", "ZoneControl"}),
    ArchetypeCategory.PEEL_PROTECT: frozenset(
        {"Peel", "Warden", "Disengage", "Enchanter", "Protective", "Catcher"}
    ),
    ArchetypeCategory.PICK_ASSASSINATE: frozenset({"Pick", "Assassin", "BurstMage", "Slayer"}),
    ArchetypeCategory.SPLIT_PUSH: frozenset({"SplitPush", "Duelist"}),
    ArchetypeCategory.SKIRMISH: frozenset({"Skirmisher"}),
}


def _invert(table: Dict[ArchetypeCategory, FrozenSet[str]]) -> Dict[str, Tuple[ArchetypeCategory, ...]]:
    out: Dict[str, List[ArchetypeCategory]] = {}
    for category in ArchetypeCategory:
        for tag in table.get(category, frozenset()):
            out.setdefault(tag, []).append(category)
    return {tag: tuple(cats) for tag, cats in out.items()}


# raw tag -> every category it feeds, in display order
TAG_CATEGORIES: Dict[str, Tuple[ArchetypeCategory, ...]] = _invert(ARCHETYPE_SYNONYMS)

FRONTLINE_CLASSES: FrozenSet[str] = frozenset({"Tank", "Fighter"})


def synergy_rules_from_json(data: List[Dict[str, Any]]) -> Tuple[SynergyRule, ...]:
    rules = []
    for item in data:
        names = item.get("champions") or []
        title = item.get("name") or item.get("title")
        if not names or not title:
            raise ValueError(f"Synergy rule needs 'champions' and 'name': {item!r}")
        rules.append(
            SynergyRule(frozenset(str(n) for n in names), str(title), str(item.get("description") or ""))
        )
    return tuple(rules)


def load_synergy_rules(path: Optional[str] = None) -> Tuple[SynergyRule, ...]:
    # Allow override via env var; fall back to the built-in table
    override = path or os.environ.get("DRAFTING_SYNERGY_RULES")
    if override:
        p = Path(override)
        if p.exists():
            return synergy_rules_from_json(json.loads(p.read_text(encoding="utf-8")))
    return SYNERGY_RULES
