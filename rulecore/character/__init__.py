"""
Character module for the rules core.

Provides the actor model that owns items and resource pools.
"""

from rulecore.character.character import (
    Character,
    CharacterAttributes,
    ResourcePool,
    ResourcePools,
)
from rulecore.character.character_serialization import (
    character_from_dict,
    load_character,
)

__all__ = [
    "Character",
    "CharacterAttributes",
    "ResourcePool",
    "ResourcePools",
    "character_from_dict",
    "load_character",
]
