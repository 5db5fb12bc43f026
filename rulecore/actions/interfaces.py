"""
Interfaces to the collaborators of the rules core.

The rules core never renders, prompts, persists or places templates itself:
it talks to a formula evaluator, an entity store, a choice collector, an
area placer and a notifier. In-memory defaults make every workflow runnable
without a host application.
"""

from typing import Any, Optional, Protocol

from catchery import log_debug, log_warning
from pydantic import BaseModel, Field

from rulecore.character import Character
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.core.constants import TemplateShape
from rulecore.core.dice_parser import DiceEvaluator, RollBreakdown
from rulecore.core.logging import logger
from rulecore.core.utils import get_property, set_property
from rulecore.items import Item


class UsageChoice(BaseModel):
    """The player's configuration of an item usage."""

    consume: bool = Field(default=True, description="Spend a use, charge or recharge.")
    place_area: bool = Field(default=False, description="Place the area template.")
    target_type: Optional[str] = Field(
        default=None,
        description="Override of the target type, e.g. a line instead of a cone.",
    )


class AreaEffectRequest(BaseModel):
    """A request to place an area effect template."""

    item_id: str
    item_name: str
    target_type: str = Field(description="The target type key, e.g. 'cone'.")
    shape: TemplateShape
    scale: int = Field(description="Multiplier of the standard size.", ge=0)
    distance: int = Field(description="Size of the template in feet.")
    angle: Optional[int] = Field(default=None, description="Opening angle of cones.")
    width: Optional[int] = Field(default=None, description="Width of rays.")


class FormulaEvaluator(Protocol):

    def evaluate(
        self, formula: str, data: Optional[dict[str, Any]] = None
    ) -> RollBreakdown:
        """Evaluate a dice formula against a roll-data context.

        Args:
            formula (str): The formula to evaluate.
            data (Optional[dict[str, Any]]): Values for '@path' references.

        Returns:
            RollBreakdown: The total and the per-die breakdown.
        """
        ...


class EntityStore(Protocol):

    async def apply_mutation(self, entity: Any, path: str, value: Any) -> bool:
        """Persist a new value for a field of an item or character.

        Each call is atomic; there is no transaction across calls.

        Returns:
            bool: True if the mutation was applied.
        """
        ...

    def read_field(self, entity: Any, path: str) -> Any:
        """Read a field of an item or character, None when missing."""
        ...

    async def delete_item(self, actor: Character, item: Item) -> bool:
        """Remove an item from its owner."""
        ...


class ChoiceCollector(Protocol):

    async def collect_usage_choice(self, item: Item) -> Optional[UsageChoice]:
        """Ask the player how to use the item.

        Returns:
            Optional[UsageChoice]: The choice, or None if the player cancelled.
        """
        ...


class AreaPlacer(Protocol):

    def place_area_effect(self, request: AreaEffectRequest) -> None:
        """Start placing an area template. The caller does not wait for it."""
        ...


class Notifier(Protocol):

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


# ==============================================================================
# IN-MEMORY DEFAULTS
# ==============================================================================


class InMemoryEntityStore:
    """Applies mutations directly to the in-memory models."""

    def __init__(self) -> None:
        self.mutations: list[tuple[Any, str, Any]] = []

    async def apply_mutation(self, entity: Any, path: str, value: Any) -> bool:
        applied = set_property(entity, path, value)
        if applied:
            self.mutations.append((entity, path, value))
            log_debug(
                f"Updated {path} to {value}",
                {"entity": getattr(entity, "name", "?"), "path": path},
            )
        else:
            log_warning(
                f"Cannot update unreachable field '{path}'",
                {"entity": getattr(entity, "name", "?"), "path": path},
            )
        return applied

    def read_field(self, entity: Any, path: str) -> Any:
        return get_property(entity, path)

    async def delete_item(self, actor: Character, item: Item) -> bool:
        return actor.remove_item(item.id)


class AlwaysUseChoices:
    """Answers every usage prompt with a fixed choice."""

    def __init__(self, choice: Optional[UsageChoice] = None) -> None:
        self.choice = choice if choice is not None else UsageChoice()
        self.asked: list[str] = []

    async def collect_usage_choice(self, item: Item) -> Optional[UsageChoice]:
        self.asked.append(item.id)
        return self.choice


class NullAreaPlacer:
    """Records area requests without drawing anything."""

    def __init__(self) -> None:
        self.requests: list[AreaEffectRequest] = []

    def place_area_effect(self, request: AreaEffectRequest) -> None:
        self.requests.append(request)


class LoggingNotifier:
    """Routes user-facing notifications to the log."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))
        logger.info(message)

    def warn(self, message: str) -> None:
        self.messages.append(("warning", message))
        log_warning(message, {"channel": "notification"})

    def error(self, message: str) -> None:
        self.messages.append(("error", message))
        log_warning(message, {"channel": "notification", "level": "error"})


class WorkflowContext:
    """
    The explicit dependencies of an item usage.

    Attributes:
        evaluator (FormulaEvaluator): Evaluates dice formulas.
        store (EntityStore): Persists item and character mutations.
        choices (ChoiceCollector): Collects the player's usage choice.
        placer (AreaPlacer): Places area templates.
        notifier (Notifier): Shows warnings and errors to the user.
        config (RulesConfig): The ruleset tunables.

    """

    def __init__(
        self,
        evaluator: Optional[FormulaEvaluator] = None,
        store: Optional[EntityStore] = None,
        choices: Optional[ChoiceCollector] = None,
        placer: Optional[AreaPlacer] = None,
        notifier: Optional[Notifier] = None,
        config: Optional[RulesConfig] = None,
    ) -> None:
        self.evaluator: FormulaEvaluator = evaluator or DiceEvaluator()
        self.store: EntityStore = store or InMemoryEntityStore()
        self.choices: ChoiceCollector = choices or AlwaysUseChoices()
        self.placer: AreaPlacer = placer or NullAreaPlacer()
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.config: RulesConfig = config or get_rules_config()
