"""
Main entry point for the rules core demo.

Loads a character from a JSON file, prints its sheet, then uses each of its
items in turn: attacks and damage are rolled, resources are spent and the
result of every usage is printed like a chat card.

Usage:
    rulecore-demo [character.json] [--interactive] [--verbose]

With --interactive the usage choices (spend the cost, place the area) are
asked at the prompt; otherwise every item is used with the defaults.
With --verbose the workflow transitions and resource mutations are logged.
"""

import asyncio
import logging
import sys
from pathlib import Path

from rulecore.actions import (
    AlwaysUseChoices,
    UsageChoice,
    WorkflowContext,
    run_ability_use_workflow,
)
from rulecore.actions.interfaces import ChoiceCollector
from rulecore.character import Character, load_character
from rulecore.core.config import load_rules_config
from rulecore.core.logging import setup_logging
from rulecore.core.utils import cprint, crule
from rulecore.ui.cli_prompt import PromptChoiceCollector
from rulecore.ui.sheets import print_character_sheet, print_usage_report

# Get the path to the data folder.
data_dir = Path(__file__).parent.parent / "data"


async def use_every_item(character: Character, context: WorkflowContext) -> None:
    for item in list(character.items):
        if not character.has_item(item.id):
            continue
        report = await run_ability_use_workflow(item, character, context=context)
        print_usage_report(report)


def main() -> None:
    args = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    flags = {arg for arg in sys.argv[1:] if arg.startswith("--")}
    interactive = "--interactive" in flags
    setup_logging(logging.DEBUG if "--verbose" in flags else logging.INFO)

    crule("Rules Core", style="bold green")

    character_file = Path(args[0]) if args else data_dir / "example_character.json"
    character = load_character(character_file)
    if character is None:
        cprint(f"Cannot load a character from {character_file}", style="bold red")
        sys.exit(1)
    print_character_sheet(character)

    choices: ChoiceCollector
    if interactive:
        choices = PromptChoiceCollector()
    else:
        choices = AlwaysUseChoices(UsageChoice(consume=True, place_area=True))
    context = WorkflowContext(
        choices=choices,
        config=load_rules_config(data_dir / "rules.json"),
    )

    crule("Using items", style="bold green")
    asyncio.run(use_every_item(character, context))

    crule("After use", style="bold green")
    print_character_sheet(character)


if __name__ == "__main__":
    main()
