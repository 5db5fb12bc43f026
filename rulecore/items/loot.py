"""Loot items."""

from typing import Literal

from rulecore.items.base_item import PhysicalItem


class Loot(PhysicalItem):
    """A carried item without any activation."""

    item_type: Literal["loot"] = "loot"
