"""
Tests for the item capability classifier.
"""

import pytest

from rulecore.actions.classifier import (
    classify,
    has_placeable_area,
    is_ammunition,
    is_maneuver,
    is_spell,
    main_resource,
    resolve_ability_modifier,
    uses_charges,
    uses_recharge,
)
from rulecore.core.constants import ConsumeKind, PowerType, ResourcePoolKey, WeaponType
from rulecore.core.error_handling import ConfigurationError
from rulecore.items import Feature, Superpower, Tool, UsesConfig, Weapon


def test_classify_longbow(ayla):
    caps = classify(ayla.get_item("longbow"))
    assert caps.has_attack
    assert caps.has_damage
    assert not caps.has_save
    assert caps.has_target
    assert not caps.has_placeable_area
    assert caps.consume_kind == ConsumeKind.AMMO
    assert caps.main_resource is None


def test_classify_area_feature(ayla):
    caps = classify(ayla.get_item("fire-breath"))
    assert caps.has_save
    assert caps.has_placeable_area
    assert caps.is_area_scaling
    assert caps.uses_recharge
    assert not caps.uses_charges


def test_classify_healing(ayla):
    caps = classify(ayla.get_item("second-wind"))
    assert caps.is_healing
    assert caps.uses_charges


def test_loot_has_no_capability(ayla):
    caps = classify(ayla.get_item("gold"))
    assert not any(
        [caps.has_attack, caps.has_damage, caps.has_save, caps.uses_charges]
    )
    assert caps.consume_kind is None


def test_superpower_kind_checks(ayla):
    assert is_spell(ayla.get_item("fire-bolt"))
    assert is_maneuver(ayla.get_item("precise-strike"))


def test_kind_check_on_non_superpower_is_a_configuration_error(ayla):
    with pytest.raises(ConfigurationError):
        is_spell(ayla.get_item("longbow"))


@pytest.mark.parametrize(
    "power_type, pool",
    [
        (PowerType.SPELL, ResourcePoolKey.MANA),
        (PowerType.MANEUVER, ResourcePoolKey.STAMINA),
        (PowerType.CONCOCTION, ResourcePoolKey.CATALYSTS),
    ],
)
def test_main_resource(power_type, pool):
    power = Superpower(id="p", name="P", power_type=power_type)
    assert main_resource(power) == pool


def test_placeable_area_needs_an_area_target(ayla):
    assert has_placeable_area(ayla.get_item("burning-hands"))
    assert not has_placeable_area(ayla.get_item("rapier"))


def test_uses_recharge_and_charges():
    plain = Feature(id="f", name="F")
    assert not uses_recharge(plain)
    assert not uses_charges(plain)
    no_period = Feature(id="f", name="F", uses=UsesConfig(value=2, max=2))
    assert not uses_charges(no_period)
    formula_max = Feature(
        id="f", name="F", uses=UsesConfig(value=1, max="@attributes.prof", per="lr")
    )
    assert uses_charges(formula_max)
    zero_max = Feature(id="f", name="F", uses=UsesConfig(value=0, max="0", per="lr"))
    assert not uses_charges(zero_max)


def test_ammunition(ayla):
    assert is_ammunition(ayla.get_item("arrows"))
    assert not is_ammunition(ayla.get_item("healing-potion"))
    assert not is_ammunition(None)


# ============================================================================
# ABILITY MODIFIER
# ============================================================================


def test_explicit_ability_wins(ayla):
    assert resolve_ability_modifier(ayla.get_item("thieves-tools"), ayla) == "dex"


def test_superpower_abilities(ayla):
    assert resolve_ability_modifier(ayla.get_item("fire-bolt"), ayla) == "int"
    assert resolve_ability_modifier(ayla.get_item("precise-strike"), ayla) == "dex"


def test_tool_default_ability(ayla):
    assert resolve_ability_modifier(Tool(id="t", name="T"), ayla) == "int"


def test_weapon_abilities(ayla):
    assert resolve_ability_modifier(ayla.get_item("longbow"), ayla) == "dex"
    # Finesse picks the higher of dex (3) and str (1).
    assert resolve_ability_modifier(ayla.get_item("rapier"), ayla) == "dex"
    club = Weapon(id="club", name="Club", weapon_type=WeaponType.SIMPLE_MELEE)
    assert resolve_ability_modifier(club, ayla) == "str"


def test_finesse_prefers_strength_when_higher(ayla):
    ayla.abilities["str"] = 5
    assert resolve_ability_modifier(ayla.get_item("rapier"), ayla) == "str"


def test_other_items_fall_back_to_strength(ayla):
    assert resolve_ability_modifier(ayla.get_item("fire-breath"), ayla) == "str"
    natural = Weapon(id="claw", name="Claw", weapon_type=WeaponType.NATURAL)
    assert resolve_ability_modifier(natural, ayla) == "str"


def test_unowned_item_has_no_inferred_ability(ayla):
    assert resolve_ability_modifier(ayla.get_item("rapier"), None) is None
    assert resolve_ability_modifier(ayla.get_item("thieves-tools"), None) == "dex"
    assert resolve_ability_modifier(ayla.get_item("gold"), ayla) is None
