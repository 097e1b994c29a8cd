"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Dictionary construction errors (missing or unusable storage)
        2000-2999: Translation errors (runtime, governed by the error policy)
        3000-3999: Plural rule syntax errors
        4000-4999: Formatting errors (locale-aware number formatting)
    """

    # Dictionary construction errors (1000-1999)
    SOURCE_DIRECTORY_NOT_FOUND = 1001
    SOURCE_FILE_NOT_FOUND = 1002
    CACHE_DIRECTORY_NOT_WRITABLE = 1003

    # Translation errors (2000-2999)
    NON_STRING_MESSAGE = 2001
    MISSING_COUNT_FOR_PLURAL = 2002
    UNDEFINED_PLURAL_FORM = 2003
    ARGUMENT_FORMATTING_FAILED = 2004

    # Plural rule syntax errors (3000-3999)
    PLURAL_UNEXPECTED_EOF = 3001
    PLURAL_UNEXPECTED_TOKEN = 3002
    PLURAL_UNKNOWN_IDENTIFIER = 3003

    # Formatting errors (4000-4999)
    NUMBER_FORMATTING_FAILED = 4001
    INVALID_DECIMAL_PLACES = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic as a compact multi-line report.

        Example output:
            error[SOURCE_FILE_NOT_FOUND]: Translation file locales/xx.yaml not found
              = help: Create the file or choose an installed locale

        Returns:
            Formatted error message
        """
        # Control characters from user-supplied keys must not forge log lines
        message = self.message.replace("\r", "\\r").replace("\n", "\\n")
        text = f"{self.severity}[{self.code.name}]: {message}"
        if self.hint:
            text += f"\n  = help: {self.hint}"
        return text
