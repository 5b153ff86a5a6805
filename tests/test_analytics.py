from pathlib import Path
from typing import Dict, List

from drafting.analytics import cc_points, damage_profile, engage_points, score
from drafting.catalog import index_catalog, load_catalog
from drafting.models import ArchetypeCategory, Entity, Level


FIXTURES = Path(__file__).parent / "fixtures"


def _catalog() -> Dict[str, Entity]:
    return index_catalog(load_catalog(FIXTURES / "catalog.json"))


def _roster(*ids: str) -> List[Entity]:
    catalog = _catalog()
    return [catalog[i] for i in ids]


def test_empty_roster_scores_low() -> None:
    result = score([])
    assert result.damage.ad == result.damage.ap == result.damage.hybrid == 0
    assert result.cc.value == 0 and result.cc.label is Level.LOW
    assert result.engage.value == 0 and result.engage.label is Level.LOW
    assert all(count == 0 for count in result.archetypes.values())
    assert set(result.archetypes) == set(ArchetypeCategory)


def test_damage_profile_skips_mixed_and_empty_slots() -> None:
    members = _roster("darius", "orianna", "kaisa", "braum")
    profile = damage_profile(members + [None])
    assert (profile.ad, profile.ap, profile.hybrid) == (1, 1, 1)


def test_cc_points_by_tag_count() -> None:
    lucian, yasuo, orianna, braum = _roster("lucian", "yasuo", "orianna", "braum")
    assert cc_points(lucian) == 1
    assert cc_points(yasuo) == 2
    assert cc_points(orianna) == 2
    assert cc_points(braum) == 3


def test_engage_points_default_to_one() -> None:
    assert engage_points(Entity(id="x", name="X")) == 1
    (leona,) = _roster("leona")
    assert engage_points(leona) == 3


def test_cc_and_engage_labels_follow_team_average() -> None:
    # cc 3 + 3 + 2 over three members -> High; engage 2 + 3 + 1 -> Medium
    result = score(_roster("braum", "leona", "jinx"))
    assert result.cc.value == 8
    assert result.cc.label is Level.HIGH
    assert result.engage.value == 6
    assert result.engage.label is Level.MEDIUM

    result = score(_roster("leona", "malphite", "amumu"))
    assert result.engage.value == 9
    assert result.engage.label is Level.HIGH

    result = score(_roster("lucian", "katarina"))
    assert result.cc.label is Level.LOW
    assert result.engage.label is Level.LOW


def test_tag_counts_toward_every_category_it_maps_to() -> None:
    result = score(_roster("malphite", "rengar", "janna"))
    assert result.archetypes[ArchetypeCategory.ENGAGE_DIVE] == 2
    assert result.archetypes[ArchetypeCategory.PICK_ASSASSINATE] == 2
    assert result.archetypes[ArchetypeCategory.PEEL_PROTECT] == 2
    assert result.archetypes[ArchetypeCategory.SKIRMISH] == 0


def test_unmapped_tags_are_reported_not_counted() -> None:
    result = score(_roster("kayle"))
    assert result.unmapped_tags == ("Scaling",)
    assert result.archetypes[ArchetypeCategory.SPLIT_PUSH] == 1
    assert sum(result.archetypes.values()) == 1


def test_score_is_order_independent() -> None:
    members = _roster("yasuo", "malphite", "orianna", "xayah", "rakan")
    forward = score(members)
    backward = score(list(reversed(members)))
    assert forward == backward
