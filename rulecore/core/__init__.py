"""
Core system module for the rules core.

Contains the fundamental components shared by every other module: rule
constants, configuration, the dice formula evaluator, errors and logging.
"""

from .config import RulesConfig, get_rules_config, load_rules_config
from .constants import (
    ActionType,
    Availability,
    ConsumableType,
    ConsumeKind,
    ConsumePhase,
    ItemType,
    PowerType,
    ResourcePoolKey,
    SaveScaling,
    ScalingMode,
    TemplateShape,
    UsePeriod,
    WeaponType,
)
from .dice_parser import DiceEvaluator, DieTerm, RollBreakdown, TermResult
from .error_handling import (
    ConfigurationError,
    ConsumeTargetNotFound,
    FormulaError,
    InsufficientResource,
    MissingConsumeTarget,
    RechargeNotConfigured,
    ResourceError,
    RollNotAvailable,
    RulesError,
)

__all__ = [
    "ActionType",
    "Availability",
    "ConfigurationError",
    "ConsumableType",
    "ConsumeKind",
    "ConsumePhase",
    "ConsumeTargetNotFound",
    "DiceEvaluator",
    "DieTerm",
    "FormulaError",
    "InsufficientResource",
    "ItemType",
    "MissingConsumeTarget",
    "PowerType",
    "RechargeNotConfigured",
    "ResourceError",
    "ResourcePoolKey",
    "RollBreakdown",
    "RollNotAvailable",
    "RulesConfig",
    "RulesError",
    "SaveScaling",
    "ScalingMode",
    "TemplateShape",
    "TermResult",
    "UsePeriod",
    "WeaponType",
    "get_rules_config",
    "load_rules_config",
]
