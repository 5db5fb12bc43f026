"""
Module for printing items, characters and usage reports in a formatted way.
"""

from rich.padding import Padding

from rulecore.actions.labels import build_item_labels
from rulecore.actions.workflow import RollOutcome, UsageReport, WorkflowState
from rulecore.character import Character
from rulecore.core.constants import ResourcePoolKey
from rulecore.core.utils import cprint, crule
from rulecore.items import Item


def roll_to_string(outcome: RollOutcome) -> str:
    """
    Converts an evaluated roll to a formatted string.

    Args:
        outcome (RollOutcome): The roll to format.

    Returns:
        str: The flavor, the formula and the total with colors.

    """
    sheet = f"{outcome.flavor}: [blue]{outcome.formula}[/] = [bold]{outcome.total}[/]"
    if outcome.breakdown.is_critical():
        sheet += " [bold green]critical![/]"
    elif outcome.breakdown.is_fumble():
        sheet += " [bold red]fumble![/]"
    return sheet


def print_item_sheet(item: Item, actor: Character | None = None, padding: int = 2) -> None:
    """
    Prints the details of an item in a formatted way.

    Args:
        item (Item): The item to display.
        actor (Character | None): The owner, for derived values such as save DCs.
        padding (int): Left padding for the output. Defaults to 2.

    """
    labels = build_item_labels(item, actor)
    sheet = f"[blue]{item.name}[/] ({item.kind.display_name.lower()})"
    for label in (
        labels.cost,
        labels.recharge,
        labels.save,
        labels.uses,
        labels.armor,
        labels.target,
    ):
        if label:
            sheet += f", {label}"
    cprint(Padding(sheet, (0, padding)))
    if labels.damage:
        cprint(
            Padding(
                f"Deals [red]{labels.damage}[/] ({labels.damage_types})",
                (0, padding + 2),
            )
        )
    if item.description:
        cprint(Padding(f'[italic]"{item.description}"[/]', (0, padding + 2)))


def print_character_sheet(character: Character, padding: int = 2) -> None:
    """Prints a character, its resource pools and its items."""
    crule(f"[bold]{character.name}[/] (level {character.level})")
    abilities = ", ".join(
        f"{key.upper()} {value:+d}" for key, value in character.abilities.items()
    )
    cprint(Padding(abilities, (0, padding)))
    pools = ", ".join(
        f"{key.display_name}: {pool.value}/{pool.limit}"
        for key in ResourcePoolKey
        if (pool := character.resources.get(key)).limit
    )
    if pools:
        cprint(Padding(pools, (0, padding)))
    for item in character.items:
        print_item_sheet(item, character, padding)


def print_usage_report(report: UsageReport, padding: int = 2) -> None:
    """
    Prints the result of an item usage, like a chat card.

    Args:
        report (UsageReport): The report to display.
        padding (int): Left padding for the output. Defaults to 2.

    """
    actor = f"{report.actor_name} uses " if report.actor_name else ""
    crule(f"{actor}[bold]{report.item_name}[/]")

    if report.state == WorkflowState.ABORTED:
        cprint(Padding(f"[yellow]{report.aborted_reason}[/]", (0, padding)))
        return

    if report.labels and report.labels.cost:
        cprint(Padding(f"Cost: {report.labels.cost}", (0, padding)))
    if report.attack:
        cprint(Padding(roll_to_string(report.attack), (0, padding)))
    if report.damage:
        cprint(Padding(roll_to_string(report.damage), (0, padding)))
    if report.save_dc is not None and report.labels:
        cprint(Padding(f"Save: [magenta]{report.labels.save}[/]", (0, padding)))
    if report.area_request:
        request = report.area_request
        cprint(
            Padding(
                f"Area: {request.distance} ft {request.shape.display_name.lower()}",
                (0, padding),
            )
        )
    for line in report.consumed:
        cprint(Padding(f"Consumed {line}", (0, padding)))
    for note in report.notes:
        cprint(Padding(f"[yellow]{note}[/]", (0, padding)))
    if report.item_destroyed:
        cprint(Padding(f"[red]{report.item_name} was used up[/]", (0, padding)))
