"""
Tests for area template requests and item labels.
"""

from rulecore.actions.area import area_scale, build_area_request
from rulecore.actions.interfaces import LoggingNotifier
from rulecore.actions.labels import build_item_labels
from rulecore.core.constants import TemplateShape
from rulecore.items import ArmorConfig, DamagePart, Equipment, Feature, TargetConfig


def test_area_scale(ayla):
    burning_hands = ayla.get_item("burning-hands")
    assert area_scale(burning_hands) == 3
    assert area_scale(burning_hands, spent_cost=5) == 5
    assert area_scale(ayla.get_item("fire-breath")) == 1
    assert area_scale(ayla.get_item("rapier")) == 1


def test_cone_request(ayla):
    request = build_area_request(ayla.get_item("burning-hands"), 3)
    assert request.shape == TemplateShape.CONE
    assert request.distance == 45
    assert request.angle == 53
    assert request.width is None


def test_line_request_overrides_target_type(ayla):
    request = build_area_request(ayla.get_item("fire-breath"), 1, target_type="line")
    assert request.target_type == "line"
    assert request.shape == TemplateShape.RAY
    assert request.distance == 30
    assert request.width == 5
    assert request.angle is None


def test_circle_request(ayla):
    request = build_area_request(ayla.get_item("fire-breath"), 2, target_type="sphere")
    assert request.shape == TemplateShape.CIRCLE
    assert request.distance == 10


def test_unknown_target_type_is_reported(ayla):
    notifier = LoggingNotifier()
    assert build_area_request(ayla.get_item("longbow"), 1, notifier=notifier) is None
    assert notifier.messages == [
        ("error", "Failed placing template for Longbow; creature")
    ]


# ============================================================================
# LABELS
# ============================================================================


def test_augmented_spell_labels(ayla):
    labels = build_item_labels(ayla.get_item("burning-hands"), ayla)
    assert labels.cost == "3 mana, augmented from 2"
    assert labels.save == "DC 15 Dexterity"
    assert labels.damage == "3d6"
    assert labels.damage_types == "Fire"
    assert labels.target == "cone"


def test_maneuver_cost_label(ayla):
    maneuver = ayla.get_item("precise-strike")
    assert build_item_labels(maneuver, ayla).cost == "1 stamina"
    maneuver.spent_cost = 2
    assert build_item_labels(maneuver, ayla).cost == "2 stamina, enhanced from 1"


def test_recharge_label(ayla):
    breath = ayla.get_item("fire-breath")
    assert build_item_labels(breath, ayla).recharge == "Recharge [5+]"
    breath.recharge.value = 6
    assert build_item_labels(breath, ayla).recharge == "Recharge [6]"


def test_save_label_without_owner(ayla):
    assert build_item_labels(ayla.get_item("burning-hands")).save == "DC Dexterity"
    assert build_item_labels(ayla.get_item("fire-breath")).save == "DC 13 Dexterity"


def test_negative_damage_term_label():
    curse = Feature(
        id="curse",
        name="Curse",
        damage=[
            DamagePart(formula="2d6", damage_type="necrotic"),
            DamagePart(formula="-1", damage_type="necrotic"),
        ],
        target=TargetConfig(custom="one creature"),
    )
    labels = build_item_labels(curse)
    assert labels.damage == "2d6 - 1"
    assert labels.damage_types == "Necrotic, Necrotic"
    assert labels.target == "one creature"


def test_uses_label_needs_owner(ayla):
    second_wind = ayla.get_item("second-wind")
    assert build_item_labels(second_wind, ayla).uses == "1/@attributes.prof per sr"
    assert build_item_labels(second_wind).uses == ""


def test_armor_label():
    shield = Equipment(id="shield", name="Shield", armor=ArmorConfig(value=2, soak=1))
    assert build_item_labels(shield).armor == "2 Defense, 1 Soak"


def test_loot_has_no_labels(ayla):
    labels = build_item_labels(ayla.get_item("gold"), ayla)
    assert labels.model_dump() == build_item_labels(ayla.get_item("gold")).model_dump()
    assert labels.damage == ""
