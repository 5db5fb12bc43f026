"""
Rules configuration for the rules core.

Holds the tunables of the ruleset: area target types and their standard
sizes, which resource pool each power type draws from, weapon categories and
the numeric constants used by scaling, recharge and save difficulty. The
defaults can be overridden from a JSON file.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field, ValidationError

from rulecore.core.constants import (
    PowerType,
    ResourcePoolKey,
    TemplateShape,
    WeaponType,
)
from rulecore.core.error_handling import configuration_error


class RulesConfig(BaseModel):
    """The tunable parameters of the ruleset."""

    area_target_types: dict[str, TemplateShape] = Field(
        default_factory=lambda: {
            "cone": TemplateShape.CONE,
            "cube": TemplateShape.RECT,
            "cylinder": TemplateShape.CIRCLE,
            "largeCylinder": TemplateShape.CIRCLE,
            "line": TemplateShape.RAY,
            "sphere": TemplateShape.CIRCLE,
            "largeSphere": TemplateShape.CIRCLE,
            "square": TemplateShape.RECT,
            "wall": TemplateShape.RAY,
        },
        description="Target types that can be placed as an area template.",
    )
    area_scaling_standard_sizes: dict[str, int] = Field(
        default_factory=lambda: {
            "cone": 15,
            "cube": 5,
            "cylinder": 5,
            "largeCylinder": 10,
            "line": 30,
            "sphere": 5,
            "largeSphere": 10,
            "square": 5,
            "wall": 10,
        },
        description="Distance (in feet) of one scaling step of each area.",
    )
    default_template_angle: int = Field(
        default=53,
        description="Opening angle of cone templates.",
    )
    default_ray_width: int = Field(
        default=5,
        description="Width of ray templates.",
    )
    main_resource_by_power_type: dict[PowerType, ResourcePoolKey] = Field(
        default_factory=lambda: {
            PowerType.SPELL: ResourcePoolKey.MANA,
            PowerType.MANEUVER: ResourcePoolKey.STAMINA,
            PowerType.CONCOCTION: ResourcePoolKey.CATALYSTS,
        },
        description="The resource pool each power type draws from.",
    )
    default_tool_ability: str = Field(
        default="int",
        description="Ability used by tools that do not declare one.",
    )
    melee_weapon_types: set[WeaponType] = Field(
        default_factory=lambda: {WeaponType.SIMPLE_MELEE, WeaponType.MARTIAL_MELEE},
    )
    ranged_weapon_types: set[WeaponType] = Field(
        default_factory=lambda: {WeaponType.SIMPLE_RANGED, WeaponType.MARTIAL_RANGED},
    )
    tier_size: int = Field(
        default=8,
        description="Levels per tier of cantrip scaling.",
        ge=1,
    )
    recharge_die: str = Field(
        default="1d6",
        description="The die rolled by recharge checks.",
    )
    base_save_dc: int = Field(
        default=8,
        description="Base value of derived save difficulties.",
    )
    save_names: dict[str, str] = Field(
        default_factory=lambda: {
            "str": "Strength",
            "dex": "Dexterity",
            "con": "Constitution",
            "int": "Intelligence",
            "wis": "Wisdom",
            "cha": "Charisma",
        },
    )
    damage_type_names: dict[str, str] = Field(
        default_factory=lambda: {
            "acid": "Acid",
            "bludgeoning": "Bludgeoning",
            "cold": "Cold",
            "fire": "Fire",
            "force": "Force",
            "lightning": "Lightning",
            "necrotic": "Necrotic",
            "piercing": "Piercing",
            "poison": "Poison",
            "psychic": "Psychic",
            "radiant": "Radiant",
            "slashing": "Slashing",
            "thunder": "Thunder",
            "healing": "Healing",
            "temphp": "Temporary HP",
        },
    )


_DEFAULT_CONFIG = RulesConfig()


def get_rules_config() -> RulesConfig:
    """
    Returns the default rules configuration.

    Returns:
        RulesConfig: The shared default configuration.

    """
    return _DEFAULT_CONFIG


def _load_json_file(path: Path, description: str) -> dict[str, Any]:
    """
    Loads a JSON object from disk.

    Args:
        path (Path): The file to read.
        description (str): What the file holds, for error messages.

    Returns:
        dict[str, Any]: The decoded object, empty if the file does not exist.

    """
    if not path.exists():
        log_warning(
            f"No {description} file found, using defaults",
            {"path": str(path)},
        )
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise configuration_error(
                f"Invalid JSON in {description} file: {e}",
                {"path": str(path)},
            ) from e
    if not isinstance(data, dict):
        raise configuration_error(
            f"The {description} file must contain a JSON object",
            {"path": str(path), "type": type(data).__name__},
        )
    return data


def load_rules_config(path: Path) -> RulesConfig:
    """
    Loads a rules configuration, overriding the defaults with a JSON file.

    Args:
        path (Path): The JSON file holding the overrides.

    Returns:
        RulesConfig: The merged configuration.

    """
    overrides = _load_json_file(path, "rules configuration")
    try:
        return RulesConfig(**overrides)
    except ValidationError as e:
        raise configuration_error(
            f"Invalid rules configuration: {e}",
            {"path": str(path)},
        ) from e
