# cli_prompt.py
from typing import Optional

from prompt_toolkit import ANSI, PromptSession
from prompt_toolkit.completion import WordCompleter
from rich.console import Console
from rich.table import Table

from rulecore.actions.classifier import (
    has_placeable_area,
    uses_charges,
    uses_recharge,
)
from rulecore.actions.interfaces import UsageChoice
from rulecore.core.config import RulesConfig, get_rules_config
from rulecore.items import ActivatedItem, Consumable, Item, Superpower

console = Console()

YES = ("y", "yes")
NO = ("n", "no")
CANCEL = ("c", "cancel")


def table_to_str(table: Table) -> str:
    """Render a Rich Table → str with ANSI escape sequences."""
    with console.capture() as cap:
        console.print(table)
    return cap.get()


class PromptChoiceCollector:
    """
    Asks the player how to use an item.

    - Shows a Rich table describing the usage cost.
    - Asks whether to spend the cost and whether to place the area.
    - Typing 'cancel' at any question cancels the usage.
    """

    def __init__(
        self,
        session: Optional[PromptSession] = None,
        config: Optional[RulesConfig] = None,
    ) -> None:
        # one session keeps history
        self.session = session or PromptSession(erase_when_done=True)
        self.config = config or get_rules_config()

    def _create_usage_table(self, item: Item) -> Table:
        table = Table(title=f"{item.name}: Usage Configuration")
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        if isinstance(item, Superpower):
            table.add_row("Cost", f"{item.effective_cost} ({item.power_type.value})")
        if isinstance(item, ActivatedItem):
            if item.recharge.value:
                charged = "charged" if item.recharge.charged else "not charged"
                table.add_row("Recharge", f"{item.recharge.value}+ ({charged})")
            if item.uses.per is not None:
                table.add_row("Uses", f"{item.uses.value}/{item.uses.max}")
            if item.target.type:
                table.add_row("Target", item.target.type)
        if isinstance(item, Consumable):
            table.add_row("Quantity", str(item.quantity))
        return table

    async def _ask(self, message: str, choices: list[str]) -> Optional[bool]:
        completer = WordCompleter(choices, ignore_case=True)
        while True:
            answer = (
                await self.session.prompt_async(ANSI(message), completer=completer)
            ).strip().lower()
            if answer in YES:
                return True
            if answer in NO:
                return False
            if answer in CANCEL:
                return None

    async def _ask_target_type(self, item: ActivatedItem) -> Optional[str]:
        types = list(self.config.area_target_types)
        completer = WordCompleter(types, ignore_case=True)
        answer = (
            await self.session.prompt_async(
                ANSI(f"Area shape [{item.target.type}] > "), completer=completer
            )
        ).strip()
        return answer if answer in self.config.area_target_types else None

    async def collect_usage_choice(self, item: Item) -> Optional[UsageChoice]:
        choice = UsageChoice(consume=True, place_area=False)
        prompt = "\n" + table_to_str(self._create_usage_table(item))

        has_cost = (
            isinstance(item, (Superpower, Consumable))
            or uses_recharge(item)
            or uses_charges(item)
        )
        if has_cost:
            consume = await self._ask(
                prompt + "\nConsume? (yes/no/cancel) > ", ["yes", "no", "cancel"]
            )
            if consume is None:
                return None
            choice.consume = consume
            prompt = ""

        if isinstance(item, ActivatedItem) and has_placeable_area(item, self.config):
            place = await self._ask(
                prompt + "\nPlace the area? (yes/no/cancel) > ", ["yes", "no", "cancel"]
            )
            if place is None:
                return None
            choice.place_area = place
            if place:
                choice.target_type = await self._ask_target_type(item)
        return choice
