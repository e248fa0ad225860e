# apps/heroes/tests/test_normalizer.py
import pytest

from apps.core.exceptions import ValidationError
from apps.heroes.conf import CDN_BASE_URL, AttackType, PrimaryAttribute
from apps.heroes.services.normalizer import complexity_for, normalize_hero, normalize_heroes
from apps.matches.tests.factories import raw_hero


def test_constants_row_is_normalized():
    hero = normalize_hero(raw_hero(1, "Anti-Mage", roles=["Carry", "Escape"]))

    assert hero.id == 1
    assert hero.name == "npc_dota_hero_anti-mage"
    assert str(hero) == "Anti-Mage"
    assert hero.primary_attr is PrimaryAttribute.AGILITY
    assert hero.attack_type is AttackType.MELEE
    assert hero.roles == ("Carry", "Escape")
    assert hero.complexity == 2
    assert hero.image_url.endswith("/heroes/anti-mage.png")
    assert hero.ref().display_name == "Anti-Mage"


def test_hero_stats_row_uses_the_provider_image():
    raw = raw_hero(74, "Invoker", img="/apps/dota2/images/dota_react/heroes/invoker.png?", pro_pick=120)

    hero = normalize_hero(raw)

    assert hero.image_url == f"{CDN_BASE_URL}/apps/dota2/images/dota_react/heroes/invoker.png"
    assert hero.complexity == 3


def test_internal_name_is_derived_when_absent():
    hero = normalize_hero({"id": 11, "localized_name": "Shadow Fiend", "roles": None})

    assert hero.name == "npc_dota_hero_shadow_fiend"
    assert hero.roles == ()
    assert hero.primary_attr is None


@pytest.mark.parametrize(
    ("name", "provided", "expected"),
    [
        ("Meepo", None, 3),
        ("Pudge", None, 2),
        ("Axe", None, 1),
        ("Axe", 3, 3),
        ("Invoker", 9, 3),
    ],
)
def test_complexity(name, provided, expected):
    assert complexity_for(name, provided) == expected


@pytest.mark.parametrize(
    ("raw", "field"),
    [
        ({"id": 3, "localized_name": "   "}, "localized_name"),
        ({"id": 3}, "localized_name"),
        ({"id": "3", "localized_name": "Bane"}, "id"),
        ({"id": 0, "localized_name": "Bane"}, "id"),
    ],
)
def test_malformed_rows_raise(raw, field):
    with pytest.raises(ValidationError) as exc_info:
        normalize_hero(raw)

    assert exc_info.value.field == field


def test_catalogue_drops_bad_rows_and_keeps_first_duplicate():
    rows = [
        raw_hero(1, "Anti-Mage"),
        {"id": 2, "localized_name": ""},
        raw_hero(1, "Impostor"),
        raw_hero(5, "Crystal Maiden", primary_attr="int", attack_type="Ranged"),
    ]

    heroes = normalize_heroes(rows)

    assert sorted(heroes) == [1, 5]
    assert heroes[1].localized_name == "Anti-Mage"
    assert heroes[5].attack_type is AttackType.RANGED
