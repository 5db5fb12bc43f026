"""Recharge resolver."""

from typing import Optional

from catchery import log_debug
from pydantic import BaseModel, Field

from rulecore.actions.interfaces import EntityStore, FormulaEvaluator
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.dice_parser import RollBreakdown
from rulecore.core.error_handling import RechargeNotConfigured
from rulecore.items import ActivatedItem, Item


class RechargeResult(BaseModel):
    """The outcome of a recharge check."""

    roll: RollBreakdown = Field(description="The recharge die roll.")
    threshold: int = Field(description="The result the die had to meet.")
    success: bool = Field(description="Whether the ability is charged again.")

    @property
    def flavor(self) -> str:
        return f"recharge check - {'success!' if self.success else 'failure!'}"


async def roll_recharge(
    item: Item,
    evaluator: FormulaEvaluator,
    store: EntityStore,
    config: Optional[RulesConfig] = None,
) -> RechargeResult:
    """
    Rolls the recharge check of an item.

    The check succeeds when the die meets or exceeds the recharge threshold,
    in which case the item is marked as charged. The check is rolled once;
    a failure leaves the item as it was.

    Args:
        item (Item): The item to recharge.
        evaluator (FormulaEvaluator): Rolls the recharge die.
        store (EntityStore): Persists the charged flag.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        RechargeResult: The roll and whether it succeeded.

    Raises:
        RechargeNotConfigured: If the item has no recharge threshold.

    """
    if not isinstance(item, ActivatedItem) or not item.recharge.value:
        raise RechargeNotConfigured(
            f"No recharge value for {item.name}",
            {"item": item.name},
        )
    config = config or get_rules_config()
    threshold = item.recharge.value
    roll = evaluator.evaluate(config.recharge_die)
    success = roll.value >= threshold
    if success:
        await store.apply_mutation(item, "recharge.charged", True)
    log_debug(
        f"{item.name} recharge check: {roll.value} against {threshold}+",
        {"item": item.name, "success": success},
    )
    return RechargeResult(roll=roll, threshold=threshold, success=success)
