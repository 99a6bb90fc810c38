"""Shared exception policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias


class ConfigurationError(ValueError):
    """Invalid component configuration detected at construction time."""


class MalformedEntryError(ValueError):
    """Timing record that cannot be interpreted by strict parsing."""


# Explicitly bounded set tolerated around external listener callbacks.
RecoverableListenerErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_LISTENER_ERRORS: RecoverableListenerErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    KeyError,
    IndexError,
)


def require_positive(name: str, value: float) -> float:
    """Return ``value`` or raise ``ConfigurationError`` if it is not > 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
        raise ConfigurationError(f"{name} must be > 0, got {value!r}")
    return value


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.WARNING,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)
