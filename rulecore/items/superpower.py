"""
Superpower items: spells, maneuvers and concoctions.

A superpower draws from one of the owner's resource pools and may scale its
damage with the owner's tier (cantrips) or with extra resource spent
(augmented spells, enhanced maneuvers).
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from rulecore.core.constants import Availability, PowerType, ScalingMode
from rulecore.items.base_item import ActivatedItem


class ScalingConfig(BaseModel):
    """How the damage of a superpower grows."""

    mode: ScalingMode = Field(default=ScalingMode.NONE)
    formula: str = Field(
        default="",
        description="The formula added per scaling step.",
    )


class Superpower(ActivatedItem):
    """A spell, maneuver or concoction."""

    item_type: Literal["superpower"] = "superpower"

    power_type: PowerType = Field(description="Spell, maneuver or concoction.")
    cost: int = Field(default=1, description="Base resource cost.", ge=0)
    spent_cost: Optional[int] = Field(
        default=None,
        description="Cost actually paid for the current invocation.",
    )
    scaling: ScalingConfig = Field(default_factory=ScalingConfig)
    availability: Availability = Field(default=Availability.KNOWN)
    themes: list[str] = Field(default_factory=list)
    components: dict[str, bool] = Field(default_factory=dict)
    concentration: bool = Field(default=False)

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if self.spent_cost is not None and self.spent_cost < self.cost:
            raise ValueError(
                f"spent_cost ({self.spent_cost}) must not be lower than cost ({self.cost})"
            )

    @property
    def effective_cost(self) -> int:
        """
        Returns the cost paid for this invocation.

        Returns:
            int: The spent cost, or the base cost when nothing extra was spent.

        """
        return self.spent_cost or self.cost
