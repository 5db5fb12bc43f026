"""
Tests for the character model and character loading.
"""

import json

import pytest

from rulecore.character import Character, character_from_dict, load_character
from rulecore.core.constants import ActionType, ResourcePoolKey
from rulecore.core.error_handling import ConfigurationError
from rulecore.items import Superpower, Weapon


def test_example_character_loads(ayla):
    assert ayla.name == "Ayla"
    assert ayla.level == 9
    assert isinstance(ayla.get_item("longbow"), Weapon)
    assert isinstance(ayla.get_item("burning-hands"), Superpower)
    assert ayla.get_item("missing") is None
    assert ayla.get_item(None) is None


def test_derived_save_dcs(ayla):
    assert ayla.get_spell_dc() == 15
    assert ayla.get_maneuver_dc() == 14
    assert ayla.get_spell_dc(base=10) == 17


def test_explicit_save_dc_wins(ayla):
    ayla.attributes.spell_dc = 18
    assert ayla.get_spell_dc() == 18


def test_missing_abilities_default_to_zero():
    character = Character(id="c", name="C", abilities={"str": 2})
    assert character.get_ability_value("dex") == 0
    assert character.get_ability_value(None) == 0
    assert set(character.abilities) == {"str", "dex", "con", "int", "wis", "cha"}


def test_bonuses_by_action_type(ayla):
    assert ayla.get_bonus(ActionType.RANGED_WEAPON_ATTACK).attack == "1"
    assert ayla.get_bonus(ActionType.MELEE_SPELL_ATTACK).damage == "1"
    assert ayla.get_bonus(ActionType.HEAL).damage == ""


def test_roll_data_is_detached(ayla):
    data = ayla.get_roll_data()
    assert data["abilities"]["dex"]["value"] == 3
    assert data["attributes"]["prof"] == 3
    assert data["attributes"]["hp"]["value"] == 42
    assert data["attributes"]["spelldc"] == 15
    assert data["resources"]["mana"] == {"value": 12, "limit": 12}
    data["attributes"]["hp"]["value"] = 0
    assert ayla.attributes.model_extra["hp"]["value"] == 42


def test_resource_pools(ayla):
    assert ayla.resources.get(ResourcePoolKey.STAMINA).value == 6
    assert ayla.resources.get(ResourcePoolKey.CATALYSTS).limit == 4


def test_remove_item(ayla):
    assert ayla.remove_item("gold")
    assert not ayla.has_item("gold")
    assert not ayla.remove_item("gold")


def test_invalid_item_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        character_from_dict(
            {
                "id": "c",
                "name": "C",
                "items": [{"item_type": "vehicle", "id": "cart", "name": "Cart"}],
            }
        )


def test_load_missing_file_returns_none(tmp_path):
    assert load_character(tmp_path / "missing.json") is None


def test_load_malformed_file_returns_none(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{")
    assert load_character(path) is None


def test_load_non_object_returns_none(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([1, 2, 3]))
    assert load_character(path) is None
