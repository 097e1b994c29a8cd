"""Tests for diagnostic codes, templates and the exception hierarchy.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from translexengine.diagnostics import (
    ArgumentFormattingError,
    CacheDirectoryNotWritableError,
    Diagnostic,
    DiagnosticCode,
    DictionaryError,
    ErrorTemplate,
    FormattingError,
    MissingCountForPluralError,
    NonStringMessageError,
    SourceDirectoryNotFoundError,
    SourceFileNotFoundError,
    TranslationError,
    TranslatorError,
    UndefinedPluralFormError,
)


class TestDiagnostic:
    """Structured diagnostics."""

    def test_str_is_message(self) -> None:
        diagnostic = ErrorTemplate.source_file_not_found("locales/xx.yaml")
        assert str(diagnostic) == "Translation file locales/xx.yaml not found."

    def test_format_error_with_hint(self) -> None:
        diagnostic = ErrorTemplate.source_file_not_found("locales/xx.yaml")
        assert diagnostic.format_error() == (
            "error[SOURCE_FILE_NOT_FOUND]: Translation file locales/xx.yaml not found.\n"
            "  = help: Create the file or switch to an installed locale"
        )

    def test_format_error_escapes_newlines(self) -> None:
        diagnostic = Diagnostic(DiagnosticCode.NON_STRING_MESSAGE, "a\nb")
        assert diagnostic.format_error() == "error[NON_STRING_MESSAGE]: a\\nb"

    def test_undefined_plural_form_is_warning(self) -> None:
        diagnostic = ErrorTemplate.undefined_plural_form("cat", 2, "ru_RU")

        assert diagnostic.severity == "warning"
        assert "cat" in diagnostic.message
        assert "ru_RU" in diagnostic.message

    def test_long_values_are_truncated(self) -> None:
        diagnostic = ErrorTemplate.non_string_message(["x" * 200])
        assert "..." in diagnostic.message
        assert len(diagnostic.message) < 150


class TestErrors:
    """Exception hierarchy."""

    def test_diagnostic_is_attached(self) -> None:
        error = MissingCountForPluralError(ErrorTemplate.missing_count_for_plural("cat"))

        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.MISSING_COUNT_FOR_PLURAL
        assert str(error) == error.diagnostic.message

    def test_plain_message(self) -> None:
        error = TranslatorError("plain")
        assert error.diagnostic is None
        assert str(error) == "plain"

    @pytest.mark.parametrize(
        ("error_type", "parent"),
        [
            (SourceDirectoryNotFoundError, DictionaryError),
            (SourceFileNotFoundError, DictionaryError),
            (CacheDirectoryNotWritableError, DictionaryError),
            (NonStringMessageError, TranslationError),
            (MissingCountForPluralError, TranslationError),
            (UndefinedPluralFormError, TranslationError),
            (ArgumentFormattingError, TranslationError),
            (FormattingError, TranslatorError),
        ],
    )
    def test_hierarchy(self, error_type: type[Exception], parent: type[Exception]) -> None:
        assert issubclass(error_type, parent)
        assert issubclass(error_type, TranslatorError)

    def test_formatting_error_carries_fallback(self) -> None:
        error = FormattingError("bad", fallback_value="5")
        assert error.fallback_value == "5"
