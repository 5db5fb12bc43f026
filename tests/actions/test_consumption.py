"""
Tests for resource consumption: planning, deduction and target listing.
"""

import asyncio

import pytest

from rulecore.actions.consumption import (
    chain_plans,
    consume_resource,
    get_consumption_targets,
    plan_consumption,
    plan_power_cost,
)
from rulecore.core.constants import ConsumeKind, ConsumePhase
from rulecore.core.error_handling import (
    ConsumeTargetNotFound,
    InsufficientResource,
    MissingConsumeTarget,
)
from rulecore.items import ConsumeConfig, Feature, Superpower, UsesConfig


@pytest.fixture
def wand_user(ayla):
    """Ayla with a wand holding charges and a feature spending them."""
    ayla.items.append(
        Feature(
            id="wand",
            name="Wand of Sparks",
            uses=UsesConfig(value=5, max=7, per="charges"),
        )
    )
    ayla.items.append(
        Feature(
            id="spark",
            name="Spark",
            consume=ConsumeConfig(type=ConsumeKind.CHARGES, target="wand", amount=2),
        )
    )
    return ayla


def test_charges_are_deducted(wand_user, store):
    result = asyncio.run(
        consume_resource(
            wand_user.get_item("spark"), wand_user, ConsumePhase.CARD, store
        )
    )
    assert result.performed
    assert result.previous == 5
    assert result.remaining == 3
    assert wand_user.get_item("wand").uses.value == 3
    assert result.summary == "2 Wand of Sparks (5 → 3)"


def test_insufficient_charges_mutate_nothing(wand_user, store):
    wand_user.get_item("wand").uses.value = 1
    with pytest.raises(InsufficientResource):
        asyncio.run(
            consume_resource(
                wand_user.get_item("spark"), wand_user, ConsumePhase.CARD, store
            )
        )
    assert wand_user.get_item("wand").uses.value == 1
    assert store.mutations == []


def test_exact_amount_leaves_zero(wand_user, store):
    wand_user.get_item("wand").uses.value = 2
    result = asyncio.run(
        consume_resource(
            wand_user.get_item("spark"), wand_user, ConsumePhase.CARD, store
        )
    )
    assert result.remaining == 0


def test_missing_target(wand_user):
    spark = wand_user.get_item("spark")
    spark.consume.target = None
    with pytest.raises(MissingConsumeTarget):
        plan_consumption(spark, wand_user, ConsumePhase.CARD)


def test_target_not_found(wand_user):
    spark = wand_user.get_item("spark")
    spark.consume.target = "broken-wand"
    with pytest.raises(ConsumeTargetNotFound):
        plan_consumption(spark, wand_user, ConsumePhase.CARD)


def test_unowned_item_cannot_consume(wand_user):
    with pytest.raises(ConsumeTargetNotFound):
        plan_consumption(wand_user.get_item("spark"), None, ConsumePhase.CARD)


def test_ammo_is_only_consumed_on_attack(ayla, store):
    longbow = ayla.get_item("longbow")
    assert plan_consumption(longbow, ayla, ConsumePhase.CARD) is None
    result = asyncio.run(consume_resource(longbow, ayla, ConsumePhase.ATTACK, store))
    assert result.kind == ConsumeKind.AMMO
    assert ayla.get_item("arrows").quantity == 19


def test_charges_are_not_consumed_on_attack(wand_user):
    spark = wand_user.get_item("spark")
    assert plan_consumption(spark, wand_user, ConsumePhase.ATTACK) is None


def test_nothing_to_consume(ayla, store):
    result = asyncio.run(
        consume_resource(ayla.get_item("rapier"), ayla, ConsumePhase.ATTACK, store)
    )
    assert not result.performed
    assert result.summary == ""


def test_attribute_consumption(ayla, store):
    rage = Feature(
        id="blood-magic",
        name="Blood Magic",
        consume=ConsumeConfig(
            type=ConsumeKind.ATTRIBUTE, target="attributes.hp.value", amount=5
        ),
    )
    ayla.items.append(rage)
    asyncio.run(consume_resource(rage, ayla, ConsumePhase.CARD, store))
    assert ayla.attributes.model_extra["hp"]["value"] == 37


def test_attribute_that_is_not_a_number(ayla):
    rage = Feature(
        id="rage",
        name="Rage",
        consume=ConsumeConfig(type=ConsumeKind.ATTRIBUTE, target="attributes.hp"),
    )
    with pytest.raises(ConsumeTargetNotFound):
        plan_consumption(rage, ayla, ConsumePhase.CARD)


def test_material_consumption(ayla, store):
    bribe = Feature(
        id="bribe",
        name="Bribe",
        consume=ConsumeConfig(type=ConsumeKind.MATERIAL, target="gold", amount=10),
    )
    result = asyncio.run(consume_resource(bribe, ayla, ConsumePhase.CARD, store))
    assert ayla.get_item("gold").quantity == 25
    assert result.summary == "10 Gold Coins (35 → 25)"


# ============================================================================
# POWER COST
# ============================================================================


def test_power_cost_plan(ayla):
    plan = plan_power_cost(ayla.get_item("burning-hands"), ayla)
    assert plan.amount == 3
    assert plan.quantity == 12
    assert plan.remaining == 9
    assert plan.path == "resources.mana.value"
    assert plan.label == "mana"


def test_power_cost_override(ayla):
    plan = plan_power_cost(ayla.get_item("burning-hands"), ayla, spent_cost=5)
    assert plan.amount == 5


def test_insufficient_pool(ayla):
    ayla.resources.mana.value = 2
    with pytest.raises(InsufficientResource):
        plan_power_cost(ayla.get_item("burning-hands"), ayla)


def test_at_will_and_free_powers_cost_nothing(ayla):
    assert plan_power_cost(ayla.get_item("fire-bolt"), ayla) is None
    free = Superpower(id="free", name="Free", power_type="maneuver", cost=0)
    assert plan_power_cost(free, ayla) is None
    assert plan_power_cost(ayla.get_item("burning-hands"), None) is None
    assert plan_power_cost(ayla.get_item("rapier"), ayla) is None


@pytest.fixture
def mana_burner(ayla):
    """Burning Hands also burning two points of mana from its consume field."""
    burning_hands = ayla.get_item("burning-hands")
    burning_hands.consume = ConsumeConfig(
        type=ConsumeKind.ATTRIBUTE, target="resources.mana.value", amount=2
    )
    return burning_hands


def test_plans_on_the_same_field_are_chained(ayla, mana_burner):
    plans = chain_plans(
        mana_burner,
        [
            plan_power_cost(mana_burner, ayla),
            plan_consumption(mana_burner, ayla, ConsumePhase.CARD),
        ],
    )
    assert [(plan.quantity, plan.remaining) for plan in plans] == [(12, 9), (9, 7)]


def test_chained_plans_need_the_combined_amount(ayla, mana_burner):
    ayla.resources.mana.value = 4
    plans = [
        plan_power_cost(mana_burner, ayla),
        plan_consumption(mana_burner, ayla, ConsumePhase.CARD),
    ]
    with pytest.raises(InsufficientResource):
        chain_plans(mana_burner, plans)


def test_plans_on_different_fields_are_kept(ayla, wand_user):
    spark = wand_user.get_item("spark")
    plan = plan_consumption(spark, wand_user, ConsumePhase.CARD)
    assert chain_plans(spark, [plan]) == [plan]


# ============================================================================
# TARGETS
# ============================================================================


def test_ammo_targets(ayla):
    assert get_consumption_targets(ayla.get_item("longbow"), ayla) == {
        "arrows": "Arrows (20)"
    }


def test_attribute_targets(ayla):
    item = Feature(id="f", name="F", consume=ConsumeConfig(type=ConsumeKind.ATTRIBUTE))
    targets = get_consumption_targets(item, ayla)
    assert "attributes.hp.value" in targets
    assert "resources.stamina.value" in targets


def test_material_targets(ayla):
    item = Feature(id="f", name="F", consume=ConsumeConfig(type=ConsumeKind.MATERIAL))
    assert get_consumption_targets(item, ayla) == {
        "arrows": "Arrows (20)",
        "gold": "Gold Coins (35)",
    }


def test_charges_targets(wand_user):
    targets = get_consumption_targets(wand_user.get_item("spark"), wand_user)
    assert targets["wand"] == "Wand of Sparks (5 Charges)"
    assert targets["second-wind"] == "Second Wind (@attributes.prof per sr)"
    assert targets["healing-potion"] == "Potion of Healing (1 Charges)"


def test_no_targets_without_consume_kind(ayla):
    assert get_consumption_targets(ayla.get_item("rapier"), ayla) == {}
