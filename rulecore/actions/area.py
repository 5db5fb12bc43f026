"""Area effect template requests."""

from typing import Optional

from rulecore.actions.classifier import is_area_scaling
from rulecore.actions.interfaces import AreaEffectRequest, Notifier
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.constants import TemplateShape
from rulecore.items import ActivatedItem, Item, Superpower


def area_scale(
    item: Item,
    spent_cost: Optional[int] = None,
    config: Optional[RulesConfig] = None,
) -> int:
    """
    Returns the multiplier of the standard area size for an item.

    Areas that scale with the resource spent grow with the effective cost of
    the power; every other area has the standard size.

    Args:
        item (Item): The item placing the area.
        spent_cost (Optional[int]): The cost spent, the item's effective cost when None.
        config (Optional[RulesConfig]): The ruleset configuration.

    Returns:
        int: The size multiplier.

    """
    if isinstance(item, Superpower) and is_area_scaling(item, config):
        return spent_cost or item.effective_cost
    return 1


def build_area_request(
    item: Item,
    scale: int,
    target_type: Optional[str] = None,
    config: Optional[RulesConfig] = None,
    notifier: Optional[Notifier] = None,
) -> Optional[AreaEffectRequest]:
    """
    Builds the template request for the area of an item.

    Args:
        item (Item): The item placing the area.
        scale (int): Multiplier of the standard size of the area.
        target_type (Optional[str]): Override of the item target type.
        config (Optional[RulesConfig]): The ruleset configuration.
        notifier (Optional[Notifier]): Where placement failures are reported.

    Returns:
        Optional[AreaEffectRequest]: The request, or None if the target type has no template.

    """
    config = config or get_rules_config()
    if target_type is None and isinstance(item, ActivatedItem):
        target_type = item.target.type
    shape = config.area_target_types.get(target_type or "")
    distance = config.area_scaling_standard_sizes.get(target_type or "")
    if shape is None or distance is None:
        if notifier is not None:
            notifier.error(f"Failed placing template for {item.name}; {target_type}")
        return None

    request = AreaEffectRequest(
        item_id=item.id,
        item_name=item.name,
        target_type=target_type,
        shape=shape,
        scale=scale,
        distance=distance * scale,
    )
    if shape == TemplateShape.CONE:
        request.angle = config.default_template_angle
    elif shape == TemplateShape.RAY:
        request.width = config.default_ray_width
    return request
