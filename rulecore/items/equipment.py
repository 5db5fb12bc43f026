"""Equipment items: armor, shields, clothing and trinkets."""

from typing import Literal

from pydantic import BaseModel, Field

from rulecore.items.base_item import ActivatedItem, PhysicalItem


class ArmorConfig(BaseModel):
    """Protection granted by a piece of equipment."""

    type: str = Field(default="", description="Equipment category.")
    value: int = Field(default=0, description="Defense granted.")
    soak: int = Field(default=0, description="Damage soaked.")


class Equipment(ActivatedItem, PhysicalItem):
    """A wearable piece of equipment."""

    item_type: Literal["equipment"] = "equipment"

    armor: ArmorConfig = Field(default_factory=ArmorConfig)
    equipped: bool = Field(default=False)
    proficient: bool = Field(default=True)
