"""
Item capability classifier.

Derives the capability flags of an item (attack, damage, save, target,
placeable area, resources) and the ability modifier it rolls with. All
functions are pure functions of the item and actor data.
"""

from typing import Optional

from pydantic import BaseModel, Field

from rulecore.character import Character
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.constants import (
    ActionType,
    ConsumableType,
    ConsumeKind,
    PowerType,
    ResourcePoolKey,
)
from rulecore.core.error_handling import configuration_error
from rulecore.items import (
    ActivatedItem,
    Consumable,
    Feature,
    Item,
    Superpower,
    Tool,
    UsesConfig,
    Weapon,
)


class ItemCapabilities(BaseModel):
    """The capability flags of an item."""

    has_attack: bool = Field(default=False)
    has_damage: bool = Field(default=False)
    has_save: bool = Field(default=False)
    has_effects: bool = Field(default=False)
    has_target: bool = Field(default=False)
    has_placeable_area: bool = Field(default=False)
    is_area_scaling: bool = Field(default=False)
    is_healing: bool = Field(default=False)
    uses_recharge: bool = Field(default=False)
    uses_charges: bool = Field(default=False)
    consume_kind: Optional[ConsumeKind] = Field(default=None)
    main_resource: Optional[ResourcePoolKey] = Field(default=None)


# ============================================================================
# SUPERPOWER KIND CHECKS
# ============================================================================


def _require_superpower(item: Item, check: str) -> Superpower:
    if not isinstance(item, Superpower):
        raise configuration_error(
            f"Do not check if a non-superpower item is a {check}!",
            {"item": item.name, "item_type": item.kind.value},
        )
    return item


def is_spell(item: Item) -> bool:
    return _require_superpower(item, "spell").power_type == PowerType.SPELL


def is_maneuver(item: Item) -> bool:
    return _require_superpower(item, "maneuver").power_type == PowerType.MANEUVER


def is_concoction(item: Item) -> bool:
    return _require_superpower(item, "concoction").power_type == PowerType.CONCOCTION


# ============================================================================
# CAPABILITY FLAGS
# ============================================================================


def has_attack(item: Item) -> bool:
    return isinstance(item, ActivatedItem) and item.action_type.is_attack


def has_damage(item: Item) -> bool:
    return isinstance(item, ActivatedItem) and len(item.damage) > 0


def has_save(item: Item) -> bool:
    return isinstance(item, ActivatedItem) and bool(item.save.type)


def has_effects(item: Item) -> bool:
    return isinstance(item, ActivatedItem) and len(item.effects) > 0


def is_healing(item: Item) -> bool:
    return has_damage(item) and item.action_type == ActionType.HEAL


def has_target(item: Item) -> bool:
    return isinstance(item, ActivatedItem) and item.target.type not in ("", "none")


def is_area_scaling(item: Item, config: Optional[RulesConfig] = None) -> bool:
    """
    Checks whether the item's area of effect scales with the resource spent.

    Args:
        item (Item): The item to inspect.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        bool: True if the target type is one of the area target types.

    """
    config = config or get_rules_config()
    return (
        isinstance(item, ActivatedItem)
        and item.target.type in config.area_target_types
    )


def has_placeable_area(item: Item, config: Optional[RulesConfig] = None) -> bool:
    # Placeable areas are exactly the scaling ones.
    return is_area_scaling(item, config)


def main_resource(
    item: Item, config: Optional[RulesConfig] = None
) -> Optional[ResourcePoolKey]:
    """
    Returns the resource pool a superpower draws from.

    Args:
        item (Item): The item to inspect.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        Optional[ResourcePoolKey]: The pool, or None for non-superpowers.

    """
    if not isinstance(item, Superpower):
        return None
    config = config or get_rules_config()
    return config.main_resource_by_power_type.get(item.power_type)


def _has_positive_max(uses: UsesConfig) -> bool:
    if isinstance(uses.max, int):
        return uses.max > 0
    text = uses.max.strip()
    if not text:
        return False
    try:
        return int(text) > 0
    except ValueError:
        # A formula maximum is resolved against the owner later.
        return True


def uses_recharge(item: Item) -> bool:
    return isinstance(item, ActivatedItem) and bool(item.recharge.value)


def uses_charges(item: Item) -> bool:
    """
    Checks whether using the item spends one of its limited uses.

    Items with a maximum but no refresh period are never spent this way.

    Args:
        item (Item): The item to inspect.

    Returns:
        bool: True if a use is spent on activation.

    """
    if not isinstance(item, ActivatedItem):
        return False
    charges = item.uses.per is not None and _has_positive_max(item.uses)
    if isinstance(item, Feature):
        return charges and item.consume.amount > 0
    return charges


def classify(item: Item, config: Optional[RulesConfig] = None) -> ItemCapabilities:
    """
    Derives every capability flag of an item.

    Args:
        item (Item): The item to classify.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        ItemCapabilities: The capability flags.

    """
    config = config or get_rules_config()
    return ItemCapabilities(
        has_attack=has_attack(item),
        has_damage=has_damage(item),
        has_save=has_save(item),
        has_effects=has_effects(item),
        has_target=has_target(item),
        has_placeable_area=has_placeable_area(item, config),
        is_area_scaling=is_area_scaling(item, config),
        is_healing=is_healing(item),
        uses_recharge=uses_recharge(item),
        uses_charges=uses_charges(item),
        consume_kind=item.consume.type if isinstance(item, ActivatedItem) else None,
        main_resource=main_resource(item, config),
    )


# ============================================================================
# ABILITY MODIFIER
# ============================================================================


def resolve_ability_modifier(
    item: Item,
    actor: Optional[Character],
    config: Optional[RulesConfig] = None,
) -> Optional[str]:
    """
    Determines which ability modifier the item rolls with.

    Resolution order: the item's own ability; for superpowers the owner's
    maneuver or spellcasting ability; for tools the default tool ability;
    for melee weapons strength, or the higher of strength and dexterity for
    finesse weapons; for ranged weapons dexterity. Any other owned item
    falls back to strength instead of None; only unowned items without an
    ability of their own get None.

    Args:
        item (Item): The item being used.
        actor (Optional[Character]): The owner, None for unowned items.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        Optional[str]: The ability key, or None when it cannot be determined.

    """
    if not isinstance(item, ActivatedItem):
        return None
    if item.ability:
        return item.ability
    if actor is None:
        return None
    config = config or get_rules_config()

    if isinstance(item, Superpower):
        if is_maneuver(item):
            return actor.attributes.maneuver_ability
        return actor.attributes.spellcasting_ability

    if isinstance(item, Tool):
        return config.default_tool_ability

    if isinstance(item, Weapon):
        if item.weapon_type in config.melee_weapon_types:
            if item.is_finesse:
                dex = actor.get_ability_value("dex")
                strength = actor.get_ability_value("str")
                return "dex" if dex >= strength else "str"
            return "str"
        if item.weapon_type in config.ranged_weapon_types:
            return "dex"

    return "str"


def is_ammunition(item: Optional[Item]) -> bool:
    return isinstance(item, Consumable) and item.consumable_type == ConsumableType.AMMO
