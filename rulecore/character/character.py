"""
Character module for the rules core.

Defines the actor that owns items: its ability modifiers, proficiency,
casting abilities, per-action-type bonuses, the three resource pools and the
items it carries.
"""

from copy import deepcopy
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from rulecore.core.constants import ABILITY_KEYS, ActionType, ResourcePoolKey
from rulecore.items import ActionBonus, Item


class ResourcePool(BaseModel):
    """A numeric pool a superpower draws from."""

    value: int = Field(default=0, description="Current amount.", ge=0)
    limit: int = Field(default=0, description="Maximum amount.", ge=0)
    name: str = Field(default="", description="Display name, e.g. 'mana'.")


class ResourcePools(BaseModel):
    """The three pools superpowers draw from."""

    mana: ResourcePool = Field(default_factory=lambda: ResourcePool(name="mana"))
    stamina: ResourcePool = Field(default_factory=lambda: ResourcePool(name="stamina"))
    catalysts: ResourcePool = Field(
        default_factory=lambda: ResourcePool(name="catalysts")
    )

    def get(self, key: ResourcePoolKey) -> ResourcePool:
        return getattr(self, key.value)


class CharacterAttributes(BaseModel):
    """
    Derived attributes of a character.

    Extra keys are kept as free-form attributes, e.g. {"hp": {"value": 10}},
    so consumption targets such as "attributes.hp.value" can address them.
    """

    model_config = ConfigDict(extra="allow")

    prof: int = Field(default=2, description="Proficiency bonus.")
    spellcasting_ability: Optional[str] = Field(
        default=None,
        description="Ability used by spells and concoctions.",
    )
    maneuver_ability: Optional[str] = Field(
        default=None,
        description="Ability used by maneuvers.",
    )
    spell_dc: Optional[int] = Field(
        default=None,
        description="Explicit spell save DC, derived when None.",
    )
    maneuver_dc: Optional[int] = Field(
        default=None,
        description="Explicit maneuver save DC, derived when None.",
    )


class Character(BaseModel):
    """
    The actor owning items.

    Ability values are modifiers: the ruleset has no separate ability scores.
    """

    id: str = Field(description="Unique identifier of the character.")
    name: str = Field(description="Display name of the character.")
    level: int = Field(
        default=1,
        description="Character level or monster tier level.",
        ge=0,
    )
    abilities: dict[str, int] = Field(
        default_factory=lambda: {key: 0 for key in ABILITY_KEYS},
        description="Ability modifiers by ability key.",
    )
    attributes: CharacterAttributes = Field(default_factory=CharacterAttributes)
    bonuses: dict[ActionType, ActionBonus] = Field(
        default_factory=dict,
        description="Attack and damage bonuses by action type.",
    )
    resources: ResourcePools = Field(default_factory=ResourcePools)
    items: list[Item] = Field(default_factory=list)

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        for key in ABILITY_KEYS:
            self.abilities.setdefault(key, 0)

    # ============================================================================
    # ITEMS
    # ============================================================================

    def get_item(self, item_id: Optional[str]) -> Optional[Item]:
        """
        Finds an owned item by id.

        Args:
            item_id (Optional[str]): The id to look for.

        Returns:
            Optional[Item]: The item, or None when the character does not own it.

        """
        if not item_id:
            return None
        return next((item for item in self.items if item.id == item_id), None)

    def has_item(self, item_id: str) -> bool:
        return self.get_item(item_id) is not None

    def remove_item(self, item_id: str) -> bool:
        """
        Removes an owned item.

        Args:
            item_id (str): The id of the item to remove.

        Returns:
            bool: True if the item was owned and removed.

        """
        for index, item in enumerate(self.items):
            if item.id == item_id:
                del self.items[index]
                return True
        return False

    # ============================================================================
    # DERIVED STATISTICS
    # ============================================================================

    def get_ability_value(self, ability: Optional[str]) -> int:
        if not ability:
            return 0
        return self.abilities.get(ability, 0)

    def get_spell_dc(self, base: int = 8) -> int:
        """
        Returns the save DC of the character's spells and concoctions.

        Args:
            base (int): The base of the derived difficulty.

        Returns:
            int: The explicit DC, or base + proficiency + spellcasting modifier.

        """
        if self.attributes.spell_dc is not None:
            return self.attributes.spell_dc
        return (
            base
            + self.attributes.prof
            + self.get_ability_value(self.attributes.spellcasting_ability)
        )

    def get_maneuver_dc(self, base: int = 8) -> int:
        """
        Returns the save DC of the character's maneuvers.

        Args:
            base (int): The base of the derived difficulty.

        Returns:
            int: The explicit DC, or base + proficiency + maneuver modifier.

        """
        if self.attributes.maneuver_dc is not None:
            return self.attributes.maneuver_dc
        return (
            base
            + self.attributes.prof
            + self.get_ability_value(self.attributes.maneuver_ability)
        )

    def get_bonus(self, action_type: ActionType) -> ActionBonus:
        return self.bonuses.get(action_type) or ActionBonus()

    def get_roll_data(self) -> dict[str, Any]:
        """
        Returns the data formulas can reference through '@path'.

        Returns:
            dict[str, Any]: A detached copy of the character's roll data.

        """
        attributes = deepcopy(self.attributes.model_extra or {})
        attributes.update(
            {
                "prof": self.attributes.prof,
                "spelldc": self.get_spell_dc(),
                "maneuverdc": self.get_maneuver_dc(),
            }
        )
        return {
            "abilities": {key: {"value": value} for key, value in self.abilities.items()},
            "attributes": attributes,
            "level": self.level,
            "resources": {
                key.value: self.resources.get(key).model_dump(include={"value", "limit"})
                for key in ResourcePoolKey
            },
        }
