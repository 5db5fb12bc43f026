"""
Items module for the rules core.

Every item kind is a variant of the closed `Item` union, discriminated by its
`item_type` tag.
"""

from typing import Annotated, Any, Union

from pydantic import Field, TypeAdapter

from rulecore.core.error_handling import configuration_error
from rulecore.items.base_item import (
    ActionBonus,
    ActivatedItem,
    BaseItem,
    ConsumeConfig,
    DamagePart,
    PhysicalItem,
    RechargeConfig,
    SaveConfig,
    TargetConfig,
    UsesConfig,
)
from rulecore.items.consumable import Consumable
from rulecore.items.equipment import ArmorConfig, Equipment
from rulecore.items.feature import Feature
from rulecore.items.loot import Loot
from rulecore.items.superpower import ScalingConfig, Superpower
from rulecore.items.tool import Tool
from rulecore.items.weapon import Weapon

Item = Annotated[
    Union[Weapon, Superpower, Feature, Equipment, Consumable, Tool, Loot],
    Field(discriminator="item_type"),
]

_ITEM_ADAPTER: TypeAdapter[Item] = TypeAdapter(Item)


def deserialize_item(data: dict[str, Any]) -> Item:
    """
    Deserialize a dictionary into the matching item variant.

    Args:
        data (dict[str, Any]): The dictionary representation of the item.

    Returns:
        Item: The deserialized item.

    Raises:
        ConfigurationError: If the item type is unknown or the data is invalid.

    """
    try:
        return _ITEM_ADAPTER.validate_python(data)
    except ValueError as e:
        raise configuration_error(
            f"Invalid item data for '{data.get('name', '?')}': {e}",
            {"item_type": data.get("item_type"), "id": data.get("id")},
        ) from e


__all__ = [
    "ActionBonus",
    "ActivatedItem",
    "ArmorConfig",
    "BaseItem",
    "Consumable",
    "ConsumeConfig",
    "DamagePart",
    "Equipment",
    "Feature",
    "Item",
    "Loot",
    "PhysicalItem",
    "RechargeConfig",
    "SaveConfig",
    "ScalingConfig",
    "Superpower",
    "TargetConfig",
    "Tool",
    "UsesConfig",
    "Weapon",
    "deserialize_item",
]
