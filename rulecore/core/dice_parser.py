"""
Dice parser module for the rules core.

Provides a safe dice formula evaluator supporting '@path' variable
substitution from a roll-data context, dice terms with keep/min/max
modifiers and integer arithmetic, plus the textual helpers used to rescale
and merge dice terms.
"""

import random
import re
from typing import Any, Optional

from catchery import log_warning
from pydantic import BaseModel, Field

from rulecore.core.error_handling import FormulaError
from rulecore.core.utils import get_property

DIE_TERM_PATTERN = re.compile(
    r"(?<![\w@.])(\d*)d(\d+)((?:kh|kl|min|max)\d*)*(?![\w.])",
    re.IGNORECASE,
)
DIE_MODIFIER_PATTERN = re.compile(r"(kh|kl|min|max)(\d*)", re.IGNORECASE)
VARIABLE_PATTERN = re.compile(r"@([A-Za-z_]\w*(?:\.\w+)*)")
NUMBER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")
SIMPLE_MATH = re.compile(r"^[\d\s\+\-\*\/\(\)]+$")

MAX_DICE = 100
MAX_FACES = 1000


class DieTerm(BaseModel):
    """A single dice term, such as '3d6' or '2d20kh'."""

    number: int = Field(description="Number of dice rolled.", ge=0)
    faces: int = Field(description="Number of faces of each die.", ge=1)
    modifiers: str = Field(default="", description="Modifier suffix, e.g. 'kh1'.")

    @property
    def formula(self) -> str:
        return f"{self.number}d{self.faces}{self.modifiers}"

    def same_kind(self, other: "DieTerm") -> bool:
        """
        Checks whether two terms roll the same die with the same modifiers.

        Args:
            other (DieTerm): The other term.

        Returns:
            bool: True if the two terms can be merged by adding their counts.

        """
        return (
            self.faces == other.faces
            and self.modifiers.lower() == other.modifiers.lower()
        )


class TermResult(BaseModel):
    """The outcome of rolling one dice term."""

    formula: str = Field(description="The dice term that was rolled.")
    faces: int = Field(description="Number of faces of each die.")
    results: list[int] = Field(
        default_factory=list,
        description="Every die rolled, in order.",
    )
    kept: list[int] = Field(
        default_factory=list,
        description="The dice counted towards the total.",
    )
    total: int = Field(default=0, description="Sum of the kept dice.")


class RollBreakdown(BaseModel):
    """Class to hold roll breakdown information."""

    value: int = Field(
        description="Total roll result",
    )
    formula: str = Field(
        default="",
        description="The formula after variable substitution.",
    )
    description: str = Field(
        default="",
        description="Description of the roll",
    )
    rolls: list[int] = Field(
        description="Totals of the individual dice terms",
        default_factory=list,
    )
    terms: list[TermResult] = Field(
        default_factory=list,
        description="Per-term breakdown of the dice rolled.",
    )

    def get_roll(self) -> int:
        """
        Returns the total roll value.

        Returns:
            int: The total roll value.

        """
        return self.value

    def is_critical(self) -> bool:
        """
        Determines if the roll is a critical hit (natural 20).
        """
        first = self.terms[0] if self.terms else None
        return bool(first and first.faces == 20 and 20 in first.kept)

    def is_fumble(self) -> bool:
        """
        Determines if the roll is a fumble (natural 1).
        """
        first = self.terms[0] if self.terms else None
        return bool(first and first.faces == 20 and first.kept and max(first.kept) == 1)


# ---- Variable Substitution ----
def substitute_variables(expr: str, data: Optional[dict[str, Any]] = None) -> str:
    """
    Substitutes '@path' references in the expression with their values.

    Numeric values are inserted as they are, formula values are wrapped in
    parentheses and missing values become zero.

    Args:
        expr (str): The expression to substitute variables in.
        data (Optional[dict[str, Any]]): The roll data to read values from.

    Returns:
        str: The expression with variables substituted.

    """
    if not expr:
        return ""

    def replace(match: re.Match[str]) -> str:
        path = match.group(1)
        value = get_property(data or {}, path)
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(int(value))
        if isinstance(value, str) and value.strip():
            value = substitute_variables(value, data)
            if NUMBER_PATTERN.match(value):
                return value.strip()
            return f"({value})"
        log_warning(
            f"Missing roll data for '@{path}', using 0",
            {"expression": expr, "path": path},
        )
        return "0"

    return VARIABLE_PATTERN.sub(replace, expr)


# ---- Dice Parsing ----
def extract_dice_terms(expr: str) -> list[str]:
    """
    Extracts all dice terms like '1d8', '2d6kh1' or 'd4' from an expression.

    Args:
        expr (str): The expression to extract dice terms from.

    Returns:
        list[str]: List of dice terms found in the expression.

    """
    if not expr:
        return []
    return [match.group(0) for match in DIE_TERM_PATTERN.finditer(expr)]


def parse_die_term(term: str) -> Optional[DieTerm]:
    """
    Parses a single dice term.

    Args:
        term (str): The term to parse, e.g. '2d6'.

    Returns:
        Optional[DieTerm]: The parsed term, or None if the text is not exactly one dice term.

    """
    match = DIE_TERM_PATTERN.fullmatch(term.strip())
    if not match:
        return None
    return _die_from_match(match)


def _die_from_match(match: re.Match[str]) -> DieTerm:
    number_str, faces_str = match.group(1), match.group(2)
    modifiers = match.group(0)[len(number_str) + 1 + len(faces_str):]
    return DieTerm(
        number=int(number_str) if number_str else 1,
        faces=int(faces_str),
        modifiers=modifiers,
    )


def leading_die_term(formula: str) -> Optional[tuple[DieTerm, str]]:
    """
    Splits the leading dice term off a formula.

    Args:
        formula (str): The formula to inspect, e.g. '3d6+2'.

    Returns:
        Optional[tuple[DieTerm, str]]:
            The leading dice term and the remaining text, or None when the
            formula does not start with a dice term.

    """
    text = formula.strip()
    match = DIE_TERM_PATTERN.match(text)
    if not match:
        return None
    return _die_from_match(match), text[match.end():]


def alter_formula(formula: str, multiply: float = 1, add: int = 0) -> str:
    """
    Rescales the number of dice of every dice term in a formula.

    Numeric terms are left untouched, so '1d6+2' altered by 2 becomes '2d6+2'.

    Args:
        formula (str): The formula to rescale.
        multiply (float): Factor applied to each dice count.
        add (int): Number of dice added to each term after multiplying.

    Returns:
        str: The rescaled formula.

    """

    def replace(match: re.Match[str]) -> str:
        die = _die_from_match(match)
        die.number = int(round(die.number * multiply)) + add
        return die.formula

    return DIE_TERM_PATTERN.sub(replace, formula)


class DiceEvaluator:
    """Safe evaluator for dice formulas without arbitrary code execution.

    Dice are rolled through the given random generator, so a scripted or
    seeded generator makes every roll reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def roll_term(self, die: DieTerm) -> TermResult:
        """
        Rolls a single dice term, applying its modifiers.

        Args:
            die (DieTerm): The term to roll.

        Returns:
            TermResult: The individual and kept results.

        """
        if die.number > MAX_DICE:
            raise FormulaError(
                f"Too many dice: {die.number} (limit: {MAX_DICE})",
                {"term": die.formula},
            )
        if die.faces > MAX_FACES:
            raise FormulaError(
                f"Too many sides: {die.faces} (limit: {MAX_FACES})",
                {"term": die.formula},
            )
        results = [self.rng.randint(1, die.faces) for _ in range(die.number)]
        kept = list(results)
        for name, amount_str in DIE_MODIFIER_PATTERN.findall(die.modifiers):
            name = name.lower()
            amount = int(amount_str) if amount_str else 1
            if name == "kh":
                kept = sorted(kept, reverse=True)[:amount]
            elif name == "kl":
                kept = sorted(kept)[:amount]
            elif name == "min":
                kept = [max(result, amount) for result in kept]
            elif name == "max":
                kept = [min(result, amount) for result in kept]
        return TermResult(
            formula=die.formula,
            faces=die.faces,
            results=results,
            kept=kept,
            total=sum(kept),
        )

    def evaluate(
        self,
        formula: str,
        data: Optional[dict[str, Any]] = None,
    ) -> RollBreakdown:
        """
        Rolls a formula with variable substitution and provides a breakdown.

        Args:
            formula (str): The dice formula to roll.
            data (Optional[dict[str, Any]]): The roll data for '@path' references.

        Returns:
            RollBreakdown: The total, the substituted formula and every dice term rolled.

        Raises:
            FormulaError: If the formula cannot be evaluated.

        """
        if not formula or not formula.strip():
            return RollBreakdown(value=0)
        substituted = substitute_variables(formula.strip(), data)
        terms: list[TermResult] = []

        def roll(match: re.Match[str]) -> str:
            result = self.roll_term(_die_from_match(match))
            terms.append(result)
            return str(result.total)

        processed = DIE_TERM_PATTERN.sub(roll, substituted)
        if not SIMPLE_MATH.match(processed):
            raise FormulaError(
                f"Unsafe or invalid expression: {formula}",
                {"formula": formula, "processed": processed},
            )
        try:
            value = int(eval(processed, {"__builtins__": None}, {}))
        except (SyntaxError, ZeroDivisionError, TypeError) as e:
            raise FormulaError(
                f"Failed to evaluate '{processed}': {e}",
                {"formula": formula, "processed": processed},
            ) from e
        return RollBreakdown(
            value=value,
            formula=substituted,
            description=f"{substituted} → {processed}",
            rolls=[term.total for term in terms],
            terms=terms,
        )


def roll_and_describe(
    expr: str,
    data: Optional[dict[str, Any]] = None,
) -> RollBreakdown:
    """
    Rolls a dice expression with the default evaluator.

    Args:
        expr (str): The dice expression to roll.
        data (Optional[dict[str, Any]]): The roll data for substitution.

    Returns:
        RollBreakdown: The breakdown of the roll.

    """
    return DiceEvaluator().evaluate(expr, data)
