"""
Logging configuration module for the rules core.

Every diagnostic goes through the standard logging tree, rendered by rich.
Workflow state transitions and resource mutations are logged at debug
level, so the demo shows them only when run with --verbose.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

QUIET_LOGGERS: tuple[str, ...] = ("asyncio",)


def setup_logging(level: int = logging.INFO, width: int = 120) -> None:
    """
    Sets up logging with rich colored output.

    Args:
        level (int): The logging level to set. Defaults to logging.INFO.
        width (int): Width of the log console. Defaults to 120.

    """
    rich_handler = RichHandler(
        console=Console(width=width, force_terminal=True, force_jupyter=False),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(
        logging.Formatter("%(name)s - %(message)s", datefmt="[%X]")
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )
    # The event loop reports every slow callback at debug level.
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """
    Gets a logger below the package logger.

    Args:
        name (str): The name of the logger, e.g. 'rulecore.actions'.

    Returns:
        logging.Logger: The logger instance.

    """
    return logging.getLogger(name)


logger = get_logger("rulecore")
