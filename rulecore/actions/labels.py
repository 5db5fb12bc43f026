"""
Item labels.

Short texts describing an item on a character sheet or a usage report:
superpower cost, recharge, save, damage formulas and damage types.
"""

from typing import Optional

from pydantic import BaseModel, Field

from rulecore.actions.classifier import main_resource, uses_charges
from rulecore.actions.saves import resolve_save_dc
from rulecore.character import Character
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.constants import PowerType
from rulecore.core.utils import filter_join
from rulecore.items import ActivatedItem, Equipment, Item, Superpower


class ItemLabels(BaseModel):
    """Display labels of an item."""

    cost: str = Field(default="")
    recharge: str = Field(default="")
    save: str = Field(default="")
    damage: str = Field(default="")
    damage_types: str = Field(default="")
    target: str = Field(default="")
    uses: str = Field(default="")
    armor: str = Field(default="")


def _cost_label(item: Superpower, config: RulesConfig) -> str:
    pool = main_resource(item, config)
    resource = pool.value if pool else "resource"
    label = f"{item.effective_cost} {resource}"
    if item.effective_cost != item.cost:
        verb = "enhanced" if item.power_type == PowerType.MANEUVER else "augmented"
        label += f", {verb} from {item.cost}"
    return label


def build_item_labels(
    item: Item,
    actor: Optional[Character] = None,
    config: Optional[RulesConfig] = None,
) -> ItemLabels:
    """
    Builds the display labels of an item.

    Args:
        item (Item): The item to describe.
        actor (Optional[Character]): The owner, needed for derived save DCs.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        ItemLabels: The labels; empty strings where a label does not apply.

    """
    config = config or get_rules_config()
    labels = ItemLabels()

    if isinstance(item, Superpower):
        labels.cost = _cost_label(item, config)
    if isinstance(item, Equipment):
        labels.armor = filter_join(
            [
                f"{item.armor.value} Defense" if item.armor.value else "",
                f"{item.armor.soak} Soak" if item.armor.soak else "",
            ],
            ", ",
        )
    if not isinstance(item, ActivatedItem):
        return labels

    if item.recharge.value:
        plus = "+" if item.recharge.value < 6 else ""
        labels.recharge = f"Recharge [{item.recharge.value}{plus}]"

    if item.save.type:
        dc = resolve_save_dc(item, actor, config)
        name = config.save_names.get(item.save.type, item.save.type)
        labels.save = filter_join(["DC", dc if dc is not None else "", name], " ")

    if item.damage:
        labels.damage = " + ".join(part.formula for part in item.damage).replace(
            "+ -", "- "
        )
        labels.damage_types = ", ".join(
            config.damage_type_names.get(part.damage_type, part.damage_type)
            for part in item.damage
        )

    labels.target = item.target.custom or item.target.type
    if actor is not None and uses_charges(item):
        labels.uses = f"{item.uses.value}/{item.uses.max} per {item.uses.per.value}"
    return labels
