"""
Actions module for the rules core.

Everything that happens when an item is used: capability classification,
resource consumption, damage scaling, save DCs, roll composition, recharge
checks, area templates and the workflow tying them together.
"""

from .area import area_scale, build_area_request
from .classifier import (
    ItemCapabilities,
    classify,
    has_attack,
    has_damage,
    has_effects,
    has_placeable_area,
    has_save,
    has_target,
    is_area_scaling,
    is_concoction,
    is_healing,
    is_maneuver,
    is_spell,
    main_resource,
    resolve_ability_modifier,
    uses_charges,
    uses_recharge,
)
from .consumption import (
    ConsumptionPlan,
    ConsumptionResult,
    chain_plans,
    consume_resource,
    get_consumption_targets,
    plan_consumption,
    plan_power_cost,
)
from .interfaces import (
    AlwaysUseChoices,
    AreaEffectRequest,
    InMemoryEntityStore,
    LoggingNotifier,
    NullAreaPlacer,
    UsageChoice,
    WorkflowContext,
)
from .labels import ItemLabels, build_item_labels
from .recharge import RechargeResult, roll_recharge
from .rolls import (
    ComposedRoll,
    compose_attack_roll,
    compose_damage_roll,
    compose_formula_roll,
    compose_tool_check,
    get_roll_data,
    resolve_max_uses,
)
from .saves import resolve_save_dc
from .scaling import ScalingParams, scale_damage_formula, scale_item_damage
from .workflow import (
    AbilityUseWorkflow,
    UsageReport,
    WorkflowOptions,
    WorkflowState,
    run_ability_use_workflow,
)

__all__ = [
    "AbilityUseWorkflow",
    "AlwaysUseChoices",
    "AreaEffectRequest",
    "ComposedRoll",
    "ConsumptionPlan",
    "ConsumptionResult",
    "InMemoryEntityStore",
    "ItemCapabilities",
    "ItemLabels",
    "LoggingNotifier",
    "NullAreaPlacer",
    "RechargeResult",
    "ScalingParams",
    "UsageChoice",
    "UsageReport",
    "WorkflowContext",
    "WorkflowOptions",
    "WorkflowState",
    "area_scale",
    "build_area_request",
    "build_item_labels",
    "chain_plans",
    "classify",
    "compose_attack_roll",
    "compose_damage_roll",
    "compose_formula_roll",
    "compose_tool_check",
    "consume_resource",
    "get_consumption_targets",
    "get_roll_data",
    "has_attack",
    "has_damage",
    "has_effects",
    "has_placeable_area",
    "has_save",
    "has_target",
    "is_area_scaling",
    "is_concoction",
    "is_healing",
    "is_maneuver",
    "is_spell",
    "main_resource",
    "plan_consumption",
    "plan_power_cost",
    "resolve_ability_modifier",
    "resolve_max_uses",
    "resolve_save_dc",
    "roll_recharge",
    "run_ability_use_workflow",
    "scale_damage_formula",
    "scale_item_damage",
    "uses_charges",
    "uses_recharge",
]
