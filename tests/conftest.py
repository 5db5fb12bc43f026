"""
Shared fixtures: the example character and a dice evaluator whose dice
results are scripted.
"""

from pathlib import Path

import pytest

from rulecore.actions.interfaces import InMemoryEntityStore
from rulecore.character import Character, load_character
from rulecore.core.dice_parser import DiceEvaluator

DATA_DIR = Path(__file__).parent.parent / "data"


class ScriptedRandom:
    """A random generator returning a fixed sequence of die results."""

    def __init__(self, results: list[int]) -> None:
        self.results = list(results)

    def randint(self, a: int, b: int) -> int:
        assert self.results, "No scripted die result left"
        value = self.results.pop(0)
        assert a <= value <= b, f"Scripted result {value} outside {a}-{b}"
        return value


@pytest.fixture
def scripted_evaluator():
    """Builds a DiceEvaluator rolling the given results in order."""

    def factory(*results: int) -> DiceEvaluator:
        return DiceEvaluator(rng=ScriptedRandom(list(results)))

    return factory


@pytest.fixture
def ayla() -> Character:
    """A fresh copy of the example character."""
    character = load_character(DATA_DIR / "example_character.json")
    assert character is not None
    return character


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()
