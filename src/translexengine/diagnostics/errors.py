"""Translator exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Construction-time errors (DictionaryError subclasses) always propagate.
Runtime translation errors are routed through an ErrorPolicy: raised in
debug mode, logged and recovered from otherwise.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ArgumentFormattingError",
    "CacheDirectoryNotWritableError",
    "DictionaryError",
    "FormattingError",
    "MissingCountForPluralError",
    "NonStringMessageError",
    "PluralExpressionError",
    "SourceDirectoryNotFoundError",
    "SourceFileNotFoundError",
    "TranslationError",
    "TranslatorError",
    "UndefinedPluralFormError",
]


class TranslatorError(Exception):
    """Base exception for all translexengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TranslatorError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class DictionaryError(TranslatorError):
    """Dictionary storage is missing or unusable.

    Raised while constructing a dictionary or its factory. Never recovered
    from: a missing locale install is a configuration error.
    """


class SourceDirectoryNotFoundError(DictionaryError):
    """Translation source directory does not exist."""


class SourceFileNotFoundError(DictionaryError):
    """Translation source file for the requested locale does not exist."""


class CacheDirectoryNotWritableError(DictionaryError):
    """Cache directory cannot be created or written to."""


class TranslationError(TranslatorError):
    """Runtime condition detected while translating a message.

    Whether it is raised or only logged depends on the translator's
    error policy.
    """


class NonStringMessageError(TranslationError):
    """translate() received a value that cannot be used as a message key."""


class MissingCountForPluralError(TranslationError):
    """A message with plural forms was translated without a count."""


class UndefinedPluralFormError(TranslationError):
    """The plural form chosen by the locale rule has no variant.

    Always recoverable by falling back to the last defined variant, so this
    condition is only ever logged.
    """


class ArgumentFormattingError(TranslationError):
    """Positional arguments do not fit the translation's placeholders."""


class PluralExpressionError(TranslatorError):
    """Plural rule expression is outside the supported grammar."""


class FormattingError(TranslatorError):
    """Raised when locale-aware number formatting fails.

    The error carries a fallback_value that callers can use in the output
    when the formatting fails.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
