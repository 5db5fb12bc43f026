"""
Loading characters from JSON files.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning

from rulecore.character.character import Character
from rulecore.core.error_handling import configuration_error


def character_from_dict(data: dict[str, Any]) -> Character:
    """
    Builds a character, with its items, from a dictionary.

    Args:
        data (dict[str, Any]): The dictionary representation of the character.

    Returns:
        Character: The character.

    Raises:
        ConfigurationError: If the character or one of its items is malformed.

    """
    try:
        return Character.model_validate(data)
    except ValueError as e:
        raise configuration_error(
            f"Invalid character data for '{data.get('name', '?')}': {e}",
            {"id": data.get("id"), "context": "character_loading"},
        ) from e


def load_character(file_path: Path) -> Character | None:
    """
    Loads a character from a JSON file.

    Args:
        file_path (Path): The path to the JSON file containing character data.

    Returns:
        Character | None: The character, or None if the file cannot be read.

    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        log_warning(
            f"Failed to load character from {file_path}: {e}",
            {
                "file_path": str(file_path),
                "error": str(e),
                "context": "character_file_loading",
            },
        )
        return None
    if not isinstance(data, dict):
        log_warning(
            f"Character data in {file_path} is not an object.",
            {"file_path": str(file_path), "context": "character_file_loading"},
        )
        return None
    return character_from_dict(data)
