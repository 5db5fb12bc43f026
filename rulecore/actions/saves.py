"""Save DC resolver."""

from typing import Optional

from rulecore.character import Character
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.constants import SaveScaling
from rulecore.core.error_handling import configuration_error
from rulecore.items import ActivatedItem, Item


def resolve_save_dc(
    item: Item,
    actor: Optional[Character],
    config: Optional[RulesConfig] = None,
) -> Optional[int]:
    """
    Returns the difficulty of the saving throw an item forces.

    Spell and alchemical saves use the owner's spell DC, maneuver saves the
    owner's maneuver DC and flat saves the DC stored on the item. Without an
    owner only flat saves can be resolved.

    Args:
        item (Item): The item forcing the save.
        actor (Optional[Character]): The owner, None for unowned items.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        Optional[int]: The save DC, or None if there is no save or it cannot be computed.

    Raises:
        ConfigurationError: If an owned item declares an unknown save scaling.

    """
    if not isinstance(item, ActivatedItem) or not item.save.type:
        return None
    scaling = item.save.scaling

    if actor is None:
        return item.save.dc if scaling == SaveScaling.FLAT else None

    config = config or get_rules_config()
    if scaling in (SaveScaling.SPELL, SaveScaling.ALCHEMICAL):
        return actor.get_spell_dc(config.base_save_dc)
    if scaling == SaveScaling.MANEUVER:
        return actor.get_maneuver_dc(config.base_save_dc)
    if scaling == SaveScaling.FLAT:
        return item.save.dc
    raise configuration_error(
        f"Unexpected save scaling of {item.name}: {scaling}",
        {"item": item.name, "save": item.save.model_dump()},
    )
