"""Consumable items: ammunition, potions, scrolls and the like."""

from typing import Literal

from pydantic import Field

from rulecore.core.constants import ConsumableType
from rulecore.items.base_item import ActivatedItem, PhysicalItem


class Consumable(ActivatedItem, PhysicalItem):
    """
    An item used up by quantity or charges.

    Ammunition stores the extra damage it deals in its own damage parts.
    """

    item_type: Literal["consumable"] = "consumable"

    consumable_type: ConsumableType = Field(default=ConsumableType.POTION)
