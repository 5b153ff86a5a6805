import json
from pathlib import Path
from typing import List

import pytest

from drafting.alerts import check_clashes, check_synergies, detect_alerts
from drafting.catalog import index_catalog, load_catalog
from drafting.knowledge import load_synergy_rules, synergy_rules_from_json
from drafting.models import AlertKind, Entity


FIXTURES = Path(__file__).parent / "fixtures"


def _roster(*ids: str) -> List[Entity]:
    catalog = index_catalog(load_catalog(FIXTURES / "catalog.json"))
    return [catalog[i] for i in ids]


def _titles(alerts) -> List[str]:
    return [a.title for a in alerts]


def test_four_physical_carries_raise_single_clash() -> None:
    alerts = detect_alerts(_roster("darius", "zed", "jinx", "caitlyn"))
    assert len(alerts) == 1
    assert alerts[0].kind is AlertKind.CLASH
    assert alerts[0].title.lower() == "skewed physical damage"


def test_magic_skew_and_missing_frontline() -> None:
    assert _titles(detect_alerts(_roster("orianna", "syndra", "lux", "ahri", "malphite"))) == [
        "Skewed Magic Damage"
    ]
    assert _titles(detect_alerts(_roster("ahri", "lux", "syndra", "xayah"))) == ["No Frontline"]


def test_clashes_need_four_members() -> None:
    members = _roster("lucian", "jinx", "caitlyn")
    assert check_clashes(members) == []
    assert detect_alerts(members) == []


def test_known_pair_raises_synergy() -> None:
    alerts = detect_alerts(_roster("yasuo", "malphite"))
    assert len(alerts) == 1
    assert alerts[0].kind is AlertKind.SYNERGY
    assert alerts[0].title == "Unstoppable Force + Last Breath"


def test_synergy_needs_every_named_member() -> None:
    assert check_synergies(_roster("yasuo")) == []
    assert check_synergies(_roster("yasuo", "lucian")) == []


def test_synergies_come_before_clashes() -> None:
    alerts = detect_alerts(_roster("lucian", "braum", "darius", "zed", "jinx"))
    assert [a.kind for a in alerts] == [AlertKind.SYNERGY, AlertKind.CLASH]
    assert _titles(alerts) == ["Lightslinger & Unbreakable", "Skewed Physical Damage"]


def test_empty_slots_are_ignored() -> None:
    members = _roster("xayah", "rakan")
    assert _titles(detect_alerts([None, members[0], None, members[1], None])) == ["The Lovers' Duo"]


def test_custom_synergy_rules(tmp_path) -> None:
    rules = synergy_rules_from_json(
        [{"champions": ["Jinx", "Janna"], "name": "Get Excited", "description": "Peel for days."}]
    )
    members = _roster("jinx", "janna", "yasuo", "malphite")
    alerts = detect_alerts(members, synergy_rules=rules)
    assert _titles(alerts) == ["Get Excited"]
    assert detect_alerts(members, synergy_rules=[]) == []

    path = tmp_path / "synergies.json"
    path.write_text(json.dumps([{"champions": ["Jinx", "Janna"], "name": "Get Excited"}]), encoding="utf-8")
    loaded = load_synergy_rules(str(path))
    assert [r.title for r in loaded] == ["Get Excited"]


def test_synergy_rule_needs_a_name() -> None:
    with pytest.raises(ValueError):
        synergy_rules_from_json([{"champions": ["Jinx"]}])
