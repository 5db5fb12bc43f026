"""
Tests for the item variants and their deserialization.
"""

import pytest

from rulecore.core.constants import (
    ActionType,
    ConsumableType,
    ItemType,
    PowerType,
    ScalingMode,
)
from rulecore.core.error_handling import ConfigurationError
from rulecore.items import (
    Consumable,
    Loot,
    Superpower,
    Weapon,
    deserialize_item,
)


def test_deserialize_weapon():
    item = deserialize_item(
        {
            "item_type": "weapon",
            "id": "rapier",
            "name": "Rapier",
            "action_type": "mwak",
            "weapon_type": "martialM",
            "properties": {"fin": True},
            "damage": [{"formula": "1d8 + @mod", "damage_type": "piercing"}],
        }
    )
    assert isinstance(item, Weapon)
    assert item.kind == ItemType.WEAPON
    assert item.action_type == ActionType.MELEE_WEAPON_ATTACK
    assert item.is_finesse
    assert item.damage[0].damage_type == "piercing"


def test_deserialize_superpower_with_scaling():
    item = deserialize_item(
        {
            "item_type": "superpower",
            "id": "burning-hands",
            "name": "Burning Hands",
            "power_type": "spell",
            "cost": 2,
            "scaling": {"mode": "augment", "formula": "1d6"},
        }
    )
    assert isinstance(item, Superpower)
    assert item.power_type == PowerType.SPELL
    assert item.scaling.mode == ScalingMode.AUGMENT
    assert item.effective_cost == 2


@pytest.mark.parametrize("mode", ["tiered", "cantrip"])
def test_deserialize_tiered_superpower(mode):
    item = deserialize_item(
        {
            "item_type": "superpower",
            "id": "fire-bolt",
            "name": "Fire Bolt",
            "power_type": "spell",
            "scaling": {"mode": mode, "formula": "1d10"},
        }
    )
    assert item.scaling.mode == ScalingMode.TIERED


def test_deserialize_ammunition():
    item = deserialize_item(
        {
            "item_type": "consumable",
            "id": "arrows",
            "name": "Arrows",
            "consumable_type": "ammo",
            "quantity": 20,
        }
    )
    assert isinstance(item, Consumable)
    assert item.consumable_type == ConsumableType.AMMO
    assert item.quantity == 20


def test_loot_has_no_activation():
    item = deserialize_item({"item_type": "loot", "id": "gold", "name": "Gold"})
    assert isinstance(item, Loot)
    assert not hasattr(item, "action_type")


def test_unknown_item_type_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        deserialize_item({"item_type": "vehicle", "id": "cart", "name": "Cart"})


def test_spent_cost_below_cost_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        deserialize_item(
            {
                "item_type": "superpower",
                "id": "fireball",
                "name": "Fireball",
                "power_type": "spell",
                "cost": 3,
                "spent_cost": 2,
            }
        )


def test_empty_damage_formula_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        deserialize_item(
            {
                "item_type": "weapon",
                "id": "club",
                "name": "Club",
                "damage": [{"formula": " ", "damage_type": "bludgeoning"}],
            }
        )


@pytest.mark.parametrize(
    "cost, spent_cost, expected",
    [
        (2, None, 2),
        (2, 2, 2),
        (2, 4, 4),
        (0, None, 0),
    ],
)
def test_effective_cost(cost, spent_cost, expected):
    power = Superpower(
        id="power",
        name="Power",
        power_type=PowerType.MANEUVER,
        cost=cost,
        spent_cost=spent_cost,
    )
    assert power.effective_cost == expected
