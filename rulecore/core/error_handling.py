"""
Error taxonomy for the rules core.

Configuration problems (malformed item data) are fatal and must never be
swallowed. Resource problems are recoverable: the caller reports them as a
warning and the usage aborts cleanly.
"""

from typing import Any, Optional

from catchery import log_critical


class RulesError(Exception):
    """Base class for every error raised by the rules core."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


class ConfigurationError(RulesError):
    """Malformed item data or a capability query on the wrong item kind."""


class RollNotAvailable(RulesError):
    """The requested roll is not supported by the item."""


class FormulaError(RulesError):
    """A dice formula could not be parsed or evaluated."""


class ResourceError(RulesError):
    """Base class for the recoverable resource consumption failures."""


class MissingConsumeTarget(ResourceError):
    """The item declares a consumption kind but no target."""


class ConsumeTargetNotFound(ResourceError):
    """The consumption target cannot be resolved on the actor."""


class InsufficientResource(ResourceError):
    """The consumption target does not hold enough to pay the amount."""


class RechargeNotConfigured(RulesError):
    """A recharge roll was requested on an item without a threshold."""


def configuration_error(
    message: str, context: Optional[dict[str, Any]] = None
) -> ConfigurationError:
    """
    Logs and builds a configuration error, ready to be raised.

    Args:
        message (str): The error message.
        context (Optional[dict[str, Any]]): Additional context for logging.

    Returns:
        ConfigurationError: The error to raise.

    """
    log_critical(message, context or {})
    return ConfigurationError(message, context)
