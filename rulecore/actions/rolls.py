"""
Roll composer.

Builds the ordered terms of attack, damage, tool check and free formula
rolls, together with the roll data their '@path' references resolve
against. Composition is pure; rolling goes through a formula evaluator.
"""

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, Field

from rulecore.actions.classifier import (
    has_attack,
    has_damage,
    is_healing,
    resolve_ability_modifier,
)
from rulecore.actions.interfaces import FormulaEvaluator
from rulecore.actions.scaling import scale_item_damage
from rulecore.character import Character
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.dice_parser import RollBreakdown
from rulecore.core.error_handling import RollNotAvailable
from rulecore.core.utils import filter_join
from rulecore.items import ActivatedItem, Consumable, Item, Superpower, Tool, Weapon

LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


class ComposedRoll(BaseModel):
    """A roll ready to be evaluated."""

    base: str = Field(
        default="",
        description="The die every roll of this kind starts from, e.g. '1d20'.",
    )
    parts: list[str] = Field(
        default_factory=list,
        description="The ordered terms added to the base die.",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="The roll data the terms reference.",
    )
    title: str = Field(default="")
    flavor: str = Field(default="")

    @property
    def formula(self) -> str:
        return filter_join([self.base, *self.parts], " + ")

    def roll(self, evaluator: FormulaEvaluator) -> RollBreakdown:
        """
        Evaluates the composed roll.

        Args:
            evaluator (FormulaEvaluator): The evaluator rolling the dice.

        Returns:
            RollBreakdown: The total and the dice rolled.

        """
        return evaluator.evaluate(self.formula, self.data)


def _proficiency_multiplier(item: Item) -> float:
    proficient = getattr(item, "proficient", None)
    if proficient is None:
        return 1
    return float(proficient)


def get_roll_data(
    item: Item,
    actor: Optional[Character],
    config: Optional[RulesConfig] = None,
    spent_cost: Optional[int] = None,
) -> dict[str, Any]:
    """
    Prepares the data the formulas of an item are evaluated against.

    The data holds the owner's roll data, a copy of the item data under
    'item' (with 'effectiveCost' for superpowers), the ability modifier
    under 'mod' and the proficiency bonus under 'prof'.

    Args:
        item (Item): The item being rolled.
        actor (Optional[Character]): The owner of the item.
        config (Optional[RulesConfig]): The ruleset configuration.
        spent_cost (Optional[int]): The cost spent on this invocation.

    Returns:
        dict[str, Any]: A detached roll-data context.

    """
    item_data = item.model_dump(mode="json")
    if isinstance(item, Superpower):
        item_data["effectiveCost"] = spent_cost or item.effective_cost
    if actor is None:
        return {"item": item_data}

    data = actor.get_roll_data()
    data["item"] = item_data
    ability = resolve_ability_modifier(item, actor, config)
    data["mod"] = actor.get_ability_value(ability)
    data["prof"] = math.floor(
        _proficiency_multiplier(item) * actor.attributes.prof
    )
    return data


def _is_nonzero_bonus(bonus: str) -> bool:
    # A formula bonus counts as set unless its leading number is zero.
    if not bonus or not bonus.strip():
        return False
    match = LEADING_INTEGER.match(bonus)
    if match is None:
        return True
    return int(match.group(1)) != 0


def compose_attack_roll(
    item: Item,
    actor: Optional[Character],
    config: Optional[RulesConfig] = None,
) -> ComposedRoll:
    """
    Composes the attack roll of an item.

    The terms are the ability modifier, the proficiency bonus (unless the
    item is a weapon its owner is not proficient with) and, when the item
    or the owner's bonuses for the action type define one, the attack bonus.

    Args:
        item (Item): The item attacking.
        actor (Optional[Character]): The owner of the item.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        ComposedRoll: The attack roll on a d20.

    Raises:
        RollNotAvailable: If the item has no attack.

    """
    if not has_attack(item):
        raise RollNotAvailable(
            f"{item.name} cannot make an attack roll",
            {"item": item.name},
        )
    data = get_roll_data(item, actor, config)
    parts = ["@mod"]
    if not isinstance(item, Weapon) or item.proficient:
        parts.append("@prof")

    actor_bonus = actor.get_bonus(item.action_type).attack if actor else ""
    bonuses = [
        bonus for bonus in (item.attack_bonus, actor_bonus) if _is_nonzero_bonus(bonus)
    ]
    if bonuses:
        parts.append("@atk")
        data["atk"] = filter_join(bonuses, " + ")

    title = f"{item.name} - Attack Roll"
    return ComposedRoll(base="1d20", parts=parts, data=data, title=title, flavor=title)


def _damage_type_label(item: ActivatedItem, config: RulesConfig) -> str:
    return ", ".join(
        config.damage_type_names.get(part.damage_type, part.damage_type)
        for part in item.damage
        if part.damage_type
    )


def compose_damage_roll(
    item: Item,
    actor: Optional[Character],
    spent_cost_override: Optional[int] = None,
    ammo: Optional[Item] = None,
    config: Optional[RulesConfig] = None,
    scaled_parts: Optional[list[str]] = None,
) -> ComposedRoll:
    """
    Composes the damage (or healing) roll of an item.

    The terms are the item damage formulas after superpower scaling, the
    owner's damage bonus for the action type when it is non-zero, and the
    damage of the ammunition consumed by the attack.

    Args:
        item (Item): The item dealing damage.
        actor (Optional[Character]): The owner of the item.
        spent_cost_override (Optional[int]): The cost spent on this invocation.
        ammo (Optional[Item]): The ammunition consumed by the attack, if any.
        config (Optional[RulesConfig]): The ruleset configuration.
        scaled_parts (Optional[list[str]]): Damage formulas already scaled, skipping scaling.

    Returns:
        ComposedRoll: The damage roll.

    Raises:
        RollNotAvailable: If the item deals no damage.
        ConfigurationError: If the item has an unknown scaling mode.

    """
    if not has_damage(item):
        raise RollNotAvailable(
            f"{item.name} cannot make a damage roll",
            {"item": item.name},
        )
    config = config or get_rules_config()
    data = get_roll_data(item, actor, config, spent_cost_override)
    if scaled_parts is not None:
        parts = list(scaled_parts)
    else:
        parts = scale_item_damage(item, actor, spent_cost_override, data, config)

    if actor is not None:
        bonus = actor.get_bonus(item.action_type).damage
        if _is_nonzero_bonus(bonus):
            parts.append(bonus)

    kind = "Healing Roll" if is_healing(item) else "Damage Roll"
    title = f"{item.name} - {kind}"
    types = _damage_type_label(item, config)
    flavor = f"{title} ({types})" if types else title

    if isinstance(ammo, Consumable):
        ammo_formula = "+".join(part.formula for part in ammo.damage)
        if ammo_formula:
            parts.append("@ammo")
            data["ammo"] = ammo_formula
        flavor += f" [{ammo.name}]"

    return ComposedRoll(parts=parts, data=data, title=title, flavor=flavor)


def compose_tool_check(
    item: Item,
    actor: Optional[Character],
    config: Optional[RulesConfig] = None,
) -> ComposedRoll:
    """
    Composes the ability check of a tool.

    Args:
        item (Item): The tool.
        actor (Optional[Character]): The owner of the tool.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        ComposedRoll: The check on a d20 with the ability modifier and proficiency.

    Raises:
        RollNotAvailable: If the item is not a tool.

    """
    if not isinstance(item, Tool):
        raise RollNotAvailable(
            f"{item.name} is not a tool",
            {"item": item.name, "item_type": item.kind.value},
        )
    title = f"{item.name} - Tool Check"
    return ComposedRoll(
        base="1d20",
        parts=["@mod", "@prof"],
        data=get_roll_data(item, actor, config),
        title=title,
        flavor=title,
    )


def compose_formula_roll(
    item: Item,
    actor: Optional[Character],
    config: Optional[RulesConfig] = None,
) -> ComposedRoll:
    """
    Composes the free formula roll of an item.

    Raises:
        RollNotAvailable: If the item has no formula.

    """
    if not isinstance(item, ActivatedItem) or not item.formula:
        raise RollNotAvailable(
            f"{item.name} does not have a formula to roll",
            {"item": item.name},
        )
    title = f"{item.name} - Other Formula"
    return ComposedRoll(
        parts=[item.formula],
        data=get_roll_data(item, actor, config),
        title=title,
        flavor=item.chat_flavor or title,
    )


def resolve_max_uses(
    item: Item,
    actor: Optional[Character],
    evaluator: FormulaEvaluator,
) -> int:
    """
    Resolves the maximum uses of an item, which may be a formula.

    Args:
        item (Item): The item with limited uses.
        actor (Optional[Character]): The owner the formula is resolved against.
        evaluator (FormulaEvaluator): Evaluates formula maximums.

    Returns:
        int: The maximum number of uses, 0 when unknown.

    """
    if not isinstance(item, ActivatedItem):
        return 0
    maximum = item.uses.max
    if isinstance(maximum, int):
        return maximum
    text = maximum.strip()
    if not text:
        return 0
    if LEADING_INTEGER.fullmatch(text):
        return int(text)
    if actor is None:
        return 0
    return evaluator.evaluate(text, actor.get_roll_data()).value
