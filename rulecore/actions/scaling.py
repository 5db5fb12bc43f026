"""
Damage formula scaler.

Superpower damage grows in two ways: tiered scaling adds the scaling formula
once per tier above the first (cantrips), while augment/enhance scaling adds
it once per resource point spent above the base cost. Both operate on the
ordered damage formulas of an item; the first formula is the primary one.
"""

import math
from typing import Any, Optional

from catchery import log_debug, log_warning
from pydantic import BaseModel, Field

from rulecore.character import Character
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.constants import ScalingMode
from rulecore.core.dice_parser import (
    alter_formula,
    leading_die_term,
    parse_die_term,
    substitute_variables,
)
from rulecore.core.error_handling import configuration_error
from rulecore.items import Item, Superpower


class ScalingParams(BaseModel):
    """The inputs of a scaling computation."""

    formula: str = Field(
        default="",
        description="The scaling formula applied per step.",
    )
    level: int = Field(
        default=0,
        description="Character or monster tier level, used by tiered scaling.",
        ge=0,
    )
    base_cost: int = Field(default=0, description="The base cost of the power.")
    effective_cost: Optional[int] = Field(
        default=None,
        description="The cost actually spent, base cost when None.",
    )
    tier_size: int = Field(default=8, description="Levels per tier.", ge=1)
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Roll data used to resolve '@path' references while merging.",
    )


def tier_applications(level: int, tier_size: int = 8) -> int:
    """
    Returns how many times tiered scaling applies at a level.

    Args:
        level (int): The character or monster tier level.
        tier_size (int): Levels per tier.

    Returns:
        int: The number of extra applications, 0 in the first tier.

    """
    return max(1, math.ceil(level / tier_size)) - 1


def augment_steps(base_cost: int, effective_cost: Optional[int]) -> int:
    """
    Returns how many resource points were spent above the base cost.

    Args:
        base_cost (int): The base cost of the power.
        effective_cost (Optional[int]): The cost spent, base cost when None.

    Returns:
        int: The number of augment steps, never negative.

    """
    if effective_cost is None:
        effective_cost = base_cost
    return max(effective_cost - base_cost, 0)


def _resolve(formula: str, data: Optional[dict[str, Any]]) -> str:
    if not data:
        return formula
    resolved = substitute_variables(formula, data).strip()
    if resolved.startswith("(") and resolved.endswith(")") and "(" not in resolved[1:]:
        return resolved[1:-1]
    return resolved


def merge_scaled_formula(
    primary: str,
    scaling: str,
    times: int,
    data: Optional[dict[str, Any]] = None,
) -> str:
    """
    Adds a scaling formula, applied a number of times, to a primary formula.

    When the scaled formula is a single dice term of the same kind as the
    leading dice term of the primary formula, the dice counts are added
    ('3d6' and '1d6' become '4d6'). Otherwise the scaled formula is appended
    ('3d6+2' and '1d8' become '3d6+2 + 1d8').

    Args:
        primary (str): The primary damage formula.
        scaling (str): The scaling formula.
        times (int): How many times the scaling formula applies.
        data (Optional[dict[str, Any]]): Roll data for '@path' references.

    Returns:
        str: The scaled primary formula.

    """
    if times <= 0:
        return primary
    scaled = alter_formula(scaling, times)
    scaled_die = parse_die_term(_resolve(scaled, data))
    if scaled_die is not None:
        resolved = _resolve(primary, data)
        leading = leading_die_term(resolved)
        if leading is not None and leading[0].same_kind(scaled_die):
            die, rest = leading
            die.number += scaled_die.number
            return f"{die.formula}{rest}"
    return f"{primary} + {scaled}"


def scale_damage_formula(
    parts: list[str],
    mode: ScalingMode | str,
    params: ScalingParams,
) -> list[str]:
    """
    Scales an ordered list of damage formulas.

    Args:
        parts (list[str]): The damage formulas, the first one being the primary.
        mode (ScalingMode | str): The scaling mode of the item.
        params (ScalingParams): The scaling formula and the level or costs.

    Returns:
        list[str]: A new list with the scaled formulas.

    Raises:
        ConfigurationError: If the scaling mode is not recognized.

    """
    try:
        mode = ScalingMode(mode)
    except ValueError as e:
        raise configuration_error(
            f"Unexpected scaling mode: {mode}",
            {"mode": str(mode), "parts": parts},
        ) from e

    scaled = list(parts)
    if mode == ScalingMode.NONE or not scaled:
        return scaled

    if mode == ScalingMode.TIERED:
        times = tier_applications(params.level, params.tier_size)
        if times == 0:
            return scaled
        scaling = params.formula or " + ".join(parts)
        scaled[0] = merge_scaled_formula(scaled[0], scaling, times, params.data)
        return scaled

    steps = augment_steps(params.base_cost, params.effective_cost)
    if steps == 0:
        return scaled
    if not params.formula:
        log_warning(
            "Augmented power without a scaling formula, damage is not scaled",
            {"mode": mode.value, "steps": steps},
        )
        return scaled
    scaled.append(alter_formula(params.formula, steps))
    return scaled


def scale_item_damage(
    item: Item,
    actor: Optional[Character],
    spent_cost_override: Optional[int] = None,
    data: Optional[dict[str, Any]] = None,
    config: Optional[RulesConfig] = None,
) -> list[str]:
    """
    Returns the damage formulas of an item after superpower scaling.

    Augment and enhance scaling only apply when an explicit spent cost that
    differs from the base cost is given.

    Args:
        item (Item): The item rolling damage.
        actor (Optional[Character]): The owner, whose level drives tiered scaling.
        spent_cost_override (Optional[int]): The cost spent on this invocation.
        data (Optional[dict[str, Any]]): Roll data for '@path' references.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        list[str]: The scaled damage formulas.

    """
    parts = [part.formula for part in getattr(item, "damage", [])]
    if not isinstance(item, Superpower):
        return parts
    config = config or get_rules_config()
    mode = item.scaling.mode

    if mode in (ScalingMode.AUGMENT, ScalingMode.ENHANCE) and (
        spent_cost_override is None or spent_cost_override == item.cost
    ):
        return parts

    params = ScalingParams(
        formula=item.scaling.formula,
        level=actor.level if actor else 0,
        base_cost=item.cost,
        effective_cost=spent_cost_override,
        tier_size=config.tier_size,
        data=data or {},
    )
    scaled = scale_damage_formula(parts, mode, params)
    if scaled != parts:
        log_debug(
            f"Scaled damage of {item.name}",
            {"mode": mode.value, "before": parts, "after": scaled},
        )
    return scaled
