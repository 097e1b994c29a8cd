"""Diagnostic system for translator errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ArgumentFormattingError,
    CacheDirectoryNotWritableError,
    DictionaryError,
    FormattingError,
    MissingCountForPluralError,
    NonStringMessageError,
    PluralExpressionError,
    SourceDirectoryNotFoundError,
    SourceFileNotFoundError,
    TranslationError,
    TranslatorError,
    UndefinedPluralFormError,
)
from .templates import ErrorTemplate

__all__ = [
    "ArgumentFormattingError",
    "CacheDirectoryNotWritableError",
    "Diagnostic",
    "DiagnosticCode",
    "DictionaryError",
    "ErrorTemplate",
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
