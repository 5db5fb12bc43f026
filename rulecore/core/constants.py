"""
Constants and enumerations for the rules core.

Defines the enumerations for item kinds, action types, save scaling sources,
scaling modes, resource consumption kinds and the other rule vocabulary used
throughout the package.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class ItemType(NiceEnum):
    """Defines the kind of an item."""

    WEAPON = "weapon"
    SUPERPOWER = "superpower"
    FEATURE = "feature"
    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"
    TOOL = "tool"
    LOOT = "loot"


class PowerType(NiceEnum):
    """Defines the flavour of a superpower."""

    SPELL = "spell"
    MANEUVER = "maneuver"
    CONCOCTION = "concoction"


class ActionType(NiceEnum):
    """Defines how an item is put to use."""

    MELEE_WEAPON_ATTACK = "mwak"
    RANGED_WEAPON_ATTACK = "rwak"
    MELEE_SPELL_ATTACK = "msak"
    RANGED_SPELL_ATTACK = "rsak"
    HEAL = "heal"
    SAVE = "save"
    UTILITY = "util"
    OTHER = "other"
    NONE = "none"

    @property
    def is_attack(self) -> bool:
        """Returns True if this action type implies an attack roll."""
        return self in (
            ActionType.MELEE_WEAPON_ATTACK,
            ActionType.RANGED_WEAPON_ATTACK,
            ActionType.MELEE_SPELL_ATTACK,
            ActionType.RANGED_SPELL_ATTACK,
        )


class WeaponType(NiceEnum):
    """Defines the weapon categories."""

    SIMPLE_MELEE = "simpleM"
    MARTIAL_MELEE = "martialM"
    SIMPLE_RANGED = "simpleR"
    MARTIAL_RANGED = "martialR"
    NATURAL = "natural"
    IMPROVISED = "improv"
    SIEGE = "siege"


class ConsumableType(NiceEnum):
    """Defines the consumable categories."""

    AMMO = "ammo"
    POTION = "potion"
    POISON = "poison"
    FOOD = "food"
    SCROLL = "scroll"
    WAND = "wand"
    ROD = "rod"
    TRINKET = "trinket"


class SaveScaling(NiceEnum):
    """Defines where the difficulty of a saving throw comes from."""

    FLAT = "flat_dc"
    SPELL = "spell_dc"
    MANEUVER = "maneuver_dc"
    ALCHEMICAL = "alchemical_dc"


class ScalingMode(NiceEnum):
    """Defines how the damage of a superpower grows."""

    NONE = "none"
    TIERED = "tiered"
    AUGMENT = "augment"
    ENHANCE = "enhance"

    @classmethod
    def _missing_(cls, value: object) -> "ScalingMode | None":
        # Older content names tiered scaling after cantrips.
        if value == "cantrip":
            return cls.TIERED
        return None


class ConsumeKind(NiceEnum):
    """Defines which external resource an item consumes when used."""

    AMMO = "ammo"
    ATTRIBUTE = "attribute"
    MATERIAL = "material"
    CHARGES = "charges"


class ConsumePhase(NiceEnum):
    """Defines the moment at which resource consumption is attempted."""

    ATTACK = "attack"
    CARD = "card"


class UsePeriod(NiceEnum):
    """Defines the refresh period of limited uses."""

    SHORT_REST = "sr"
    LONG_REST = "lr"
    DAY = "day"
    CHARGES = "charges"


class Availability(NiceEnum):
    """Defines how a superpower is available to its owner."""

    AT_WILL = "atwill"
    KNOWN = "known"
    SPELLBOOK = "spellbook"


class ResourcePoolKey(NiceEnum):
    """Defines the three resource pools owned by a character."""

    MANA = "mana"
    STAMINA = "stamina"
    CATALYSTS = "catalysts"


class TemplateShape(NiceEnum):
    """Defines the shapes an area effect template can take."""

    CIRCLE = "circle"
    CONE = "cone"
    RECT = "rect"
    RAY = "ray"


ABILITY_KEYS: tuple[str, ...] = ("str", "dex", "con", "int", "wis", "cha")
