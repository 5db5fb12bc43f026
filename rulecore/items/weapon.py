"""Weapon items."""

from typing import Literal

from pydantic import Field

from rulecore.core.constants import WeaponType
from rulecore.items.base_item import ActivatedItem, PhysicalItem


class Weapon(ActivatedItem, PhysicalItem):
    """
    Represents a weapon that can be wielded by characters.

    Melee weapons use strength unless they are finesse weapons, ranged
    weapons use dexterity.
    """

    item_type: Literal["weapon"] = "weapon"

    weapon_type: WeaponType = Field(
        default=WeaponType.SIMPLE_MELEE,
        description="The weapon category.",
    )
    properties: dict[str, bool] = Field(
        default_factory=dict,
        description="Weapon properties, e.g. {'fin': True} for finesse.",
    )
    proficient: bool = Field(
        default=True,
        description="Whether the wielder is proficient with the weapon.",
    )
    equipped: bool = Field(default=False)

    @property
    def is_finesse(self) -> bool:
        return bool(self.properties.get("fin"))
