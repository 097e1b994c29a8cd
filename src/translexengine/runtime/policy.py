"""Error reporting policies for runtime translation conditions.

The same engine must degrade gracefully in production and fail loudly
under test. Instead of scattering a debug flag through the translator,
the behavior is a strategy object:

    PermissivePolicy - forward the condition to the logger, keep going
    StrictPolicy     - forward the condition to the logger, then raise it

Warnings that are always recoverable (an undefined plural form) go through
``notify()`` and are never raised by either policy.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from translexengine.constants import LOG_PREFIX
from translexengine.diagnostics import TranslatorError

__all__ = [
    "ErrorPolicy",
    "PERMISSIVE",
    "PermissivePolicy",
    "STRICT",
    "StrictPolicy",
    "WarningLogger",
    "notify",
    "policy_for",
]

logger = logging.getLogger(__name__)


class WarningLogger(Protocol):
    """Anything accepting warning-level text, e.g. ``logging.Logger``."""

    def warning(self, msg: str, /) -> Any:
        """Record a warning."""


class ErrorPolicy(Protocol):
    """Strategy deciding whether a translation condition is raised."""

    @property
    def raises(self) -> bool:
        """True if report() raises the condition."""

    def report(self, error: TranslatorError, sink: WarningLogger | None) -> None:
        """Report a condition; may raise it."""


def notify(error: TranslatorError, sink: WarningLogger | None) -> None:
    """Forward a condition to the injected logger without raising.

    Args:
        error: Condition to report
        sink: External logger collaborator; None drops the warning
    """
    logger.debug("%s: %s", type(error).__name__, error)
    if sink is not None:
        sink.warning(f"{LOG_PREFIX}{error}")


@dataclass(frozen=True, slots=True)
class PermissivePolicy:
    """Log and recover. The production default."""

    @property
    def raises(self) -> bool:
        """Permissive policy never raises."""
        return False

    def report(self, error: TranslatorError, sink: WarningLogger | None) -> None:
        """Forward error to sink and return."""
        notify(error, sink)


@dataclass(frozen=True, slots=True)
class StrictPolicy:
    """Log and raise. Surfaces problems immediately in development and tests."""

    @property
    def raises(self) -> bool:
        """Strict policy always raises."""
        return True

    def report(self, error: TranslatorError, sink: WarningLogger | None) -> None:
        """Forward error to sink, then raise it.

        Raises:
            TranslatorError: Always (the reported error)
        """
        notify(error, sink)
        raise error


PERMISSIVE = PermissivePolicy()
STRICT = StrictPolicy()


def policy_for(debug: bool) -> ErrorPolicy:
    """Get the policy matching a debug flag."""
    return STRICT if debug else PERMISSIVE
