"""Tool items."""

from typing import Literal

from pydantic import Field

from rulecore.items.base_item import ActivatedItem, PhysicalItem


class Tool(ActivatedItem, PhysicalItem):
    """A tool used for ability checks."""

    item_type: Literal["tool"] = "tool"

    proficient: float = Field(
        default=0,
        description="Proficiency multiplier: 0, 0.5, 1 or 2.",
        ge=0,
    )
