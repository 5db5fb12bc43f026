"""
Base item module for the rules core.

Defines the fields shared by every item kind and the declarative sub-records
(damage parts, saves, limited uses, recharge, consumption, targets) that
activatable items carry.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from rulecore.core.constants import (
    ActionType,
    ConsumeKind,
    ItemType,
    SaveScaling,
    UsePeriod,
)


class DamagePart(BaseModel):
    """One (formula, damage type) pair of a damage or healing roll."""

    formula: str = Field(description="The damage formula, e.g. '1d8 + @mod'.")
    damage_type: str = Field(default="", description="The damage type key.")

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.formula or not self.formula.strip():
            raise ValueError("formula must be a non-empty string")


class SaveConfig(BaseModel):
    """The saving throw an item forces."""

    type: Optional[str] = Field(
        default=None,
        description="The ability key of the save, None when there is no save.",
    )
    scaling: Optional[SaveScaling] = Field(
        default=None,
        description="Where the difficulty comes from.",
    )
    dc: Optional[int] = Field(
        default=None,
        description="The stored difficulty, used by flat scaling.",
    )


class UsesConfig(BaseModel):
    """Limited uses of an item."""

    value: int = Field(default=0, description="Uses currently left.", ge=0)
    max: int | str = Field(
        default=0,
        description="Maximum uses, either a number or a formula.",
    )
    per: Optional[UsePeriod] = Field(
        default=None,
        description="The refresh period, None when uses never refresh.",
    )
    auto_destroy: bool = Field(
        default=False,
        description="Whether the item is destroyed when its last use is spent.",
    )
    auto_use: bool = Field(
        default=True,
        description="Whether using the item spends a use by default.",
    )


class RechargeConfig(BaseModel):
    """The d6 recharge mechanic of an item."""

    value: Optional[int] = Field(
        default=None,
        description="The threshold (1-6) the die must meet, None when unused.",
        ge=1,
        le=6,
    )
    charged: bool = Field(default=False, description="Whether the ability is ready.")


class ConsumeConfig(BaseModel):
    """The external resource an item consumes."""

    type: Optional[ConsumeKind] = Field(
        default=None,
        description="The kind of resource, None when nothing is consumed.",
    )
    target: Optional[str] = Field(
        default=None,
        description="Item id or attribute path of the consumed resource.",
    )
    amount: int = Field(default=1, description="Amount consumed per use.", ge=1)


class TargetConfig(BaseModel):
    """The target of an item."""

    value: Optional[int] = Field(default=None, description="Number or size of targets.")
    type: str = Field(default="", description="Target type key, e.g. 'cone'.")
    custom: Optional[str] = Field(default=None, description="Free-form target text.")


class ActionBonus(BaseModel):
    """Flat bonuses an actor applies to one action type."""

    attack: str = Field(default="", description="Attack bonus formula.")
    damage: str = Field(default="", description="Damage bonus formula.")


class BaseItem(BaseModel):
    """Base class for every item kind.

    Items are a closed sum type: each kind is a subclass carrying a literal
    `item_type` tag and only the fields meaningful to that kind.
    """

    id: str = Field(description="Unique identifier of the item.")
    name: str = Field(description="Display name of the item.")
    description: str = Field(default="", description="Flavor text of the item.")

    @property
    def kind(self) -> ItemType:
        return ItemType(getattr(self, "item_type"))


class PhysicalItem(BaseItem):
    """An item that exists in some quantity."""

    quantity: int = Field(default=1, description="How many are carried.", ge=0)
    weight: float = Field(default=0, description="Weight of one unit.", ge=0)


class ActivatedItem(BaseItem):
    """Fields shared by every item that can be used as an action."""

    ability: Optional[str] = Field(
        default=None,
        description="Ability used by the item, None to infer it from the owner.",
    )
    action_type: ActionType = Field(
        default=ActionType.NONE,
        description="How the item is used.",
    )
    attack_bonus: str = Field(default="", description="Item attack bonus formula.")
    damage: list[DamagePart] = Field(
        default_factory=list,
        description="Ordered damage parts; the first one is the primary term.",
    )
    effects: list[str] = Field(
        default_factory=list,
        description="Effects applied by the item.",
    )
    formula: str = Field(default="", description="A free formula the item can roll.")
    chat_flavor: str = Field(default="", description="Flavor text of free rolls.")
    save: SaveConfig = Field(default_factory=SaveConfig)
    target: TargetConfig = Field(default_factory=TargetConfig)
    uses: UsesConfig = Field(default_factory=UsesConfig)
    recharge: RechargeConfig = Field(default_factory=RechargeConfig)
    consume: ConsumeConfig = Field(default_factory=ConsumeConfig)
