"""
Utilities module for the rules core.

Provides console printing with rich formatting and the dotted-path helpers
used to read and write fields on items and characters.
"""

from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.rule import Rule

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)

_MISSING = object()


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def _get_child(node: Any, key: str) -> Any:
    if isinstance(node, dict):
        return node.get(key, _MISSING)
    if isinstance(node, BaseModel):
        return getattr(node, key, _MISSING)
    return _MISSING


def get_property(root: Any, path: str) -> Any:
    """
    Reads a value through a dotted path of dicts and models.

    Args:
        root (Any): The object to start from.
        path (str): A dotted path, e.g. 'attributes.hp.value'.

    Returns:
        Any: The value found, or None when any segment is missing.

    """
    node = root
    for key in path.split("."):
        node = _get_child(node, key)
        if node is _MISSING:
            return None
    return node


def set_property(root: Any, path: str, value: Any) -> bool:
    """
    Writes a value through a dotted path of dicts and models.

    Args:
        root (Any): The object to start from.
        path (str): A dotted path, e.g. 'uses.value'.
        value (Any): The value to store.

    Returns:
        bool: True if the value was stored, False if the path is unreachable.

    """
    *parents, leaf = path.split(".")
    node = root
    for key in parents:
        node = _get_child(node, key)
        if node is _MISSING or node is None:
            return False
    if isinstance(node, dict):
        node[leaf] = value
        return True
    if isinstance(node, BaseModel) and hasattr(node, leaf):
        setattr(node, leaf, value)
        return True
    return False


def filter_join(parts: list[Any], separator: str) -> str:
    """
    Joins the non-empty parts of a list.

    Args:
        parts (list[Any]): The parts to join; falsy parts are dropped.
        separator (str): The separator placed between the parts.

    Returns:
        str: The joined string.

    """
    return separator.join(str(part) for part in parts if part)
