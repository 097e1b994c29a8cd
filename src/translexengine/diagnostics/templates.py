"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


def _describe(value: object) -> str:
    """Short, bounded representation of an arbitrary value."""
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return text


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def source_directory_not_found(directory: str) -> Diagnostic:
        """Translation source directory is missing."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_DIRECTORY_NOT_FOUND,
            message=f"Translation directory {directory} not found.",
            hint="Check the configured source directory",
        )

    @staticmethod
    def source_file_not_found(filename: str) -> Diagnostic:
        """Translation source file for a locale is missing."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_FILE_NOT_FOUND,
            message=f"Translation file {filename} not found.",
            hint="Create the file or switch to an installed locale",
        )

    @staticmethod
    def cache_directory_not_writable(directory: str) -> Diagnostic:
        """Cache directory could not be created or is read-only."""
        return Diagnostic(
            code=DiagnosticCode.CACHE_DIRECTORY_NOT_WRITABLE,
            message=f"Cache directory {directory} is not writable.",
            hint="Grant write permission or configure another cache directory",
        )

    @staticmethod
    def non_string_message(message: object) -> Diagnostic:
        """translate() received a value that cannot become a message key.

        Args:
            message: The offending value

        Returns:
            Diagnostic for NON_STRING_MESSAGE
        """
        return Diagnostic(
            code=DiagnosticCode.NON_STRING_MESSAGE,
            message=f"Message must be string, but {_describe(message)} given.",
            hint="Pass a string message key or an object defining __str__",
        )

    @staticmethod
    def missing_count_for_plural(message: str) -> Diagnostic:
        """A plural entry was selected without a count."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_COUNT_FOR_PLURAL,
            message=f"Message '{message}' has plural forms but no count was given.",
            hint="Pass the count as the second argument of translate()",
        )

    @staticmethod
    def undefined_plural_form(message: str, form: int | str, locale: str) -> Diagnostic:
        """The rule-selected plural form has no variant.

        Args:
            message: Message key
            form: Plural form index (or zero form key) that was requested
            locale: Current locale

        Returns:
            Diagnostic for UNDEFINED_PLURAL_FORM (warning severity)
        """
        return Diagnostic(
            code=DiagnosticCode.UNDEFINED_PLURAL_FORM,
            message=(
                f"Plural form {form!r} of message '{message}' is not defined "
                f"for locale {locale}; using the last defined form."
            ),
            hint="Add the missing plural variant to the translation file",
            severity="warning",
        )

    @staticmethod
    def argument_formatting_failed(message: str, error: Exception) -> Diagnostic:
        """printf-style substitution raised."""
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_FORMATTING_FAILED,
            message=f"Cannot apply arguments to message '{message}': {error}",
            hint="Check that placeholders match the number and type of arguments",
        )

    @staticmethod
    def plural_unexpected_eof(source: str) -> Diagnostic:
        """Plural expression ended early."""
        return Diagnostic(
            code=DiagnosticCode.PLURAL_UNEXPECTED_EOF,
            message=f"Unexpected end of plural expression {source!r}",
        )

    @staticmethod
    def plural_unexpected_token(source: str, position: int, found: str) -> Diagnostic:
        """Plural expression contains a token the grammar does not accept."""
        return Diagnostic(
            code=DiagnosticCode.PLURAL_UNEXPECTED_TOKEN,
            message=(
                f"Unexpected token {found!r} at position {position} "
                f"in plural expression {source!r}"
            ),
        )

    @staticmethod
    def plural_unknown_identifier(source: str, name: str) -> Diagnostic:
        """Plural expression references a variable other than n."""
        return Diagnostic(
            code=DiagnosticCode.PLURAL_UNKNOWN_IDENTIFIER,
            message=f"Unknown identifier {name!r} in plural expression {source!r}",
            hint="Plural expressions may only reference the variable 'n'",
        )

    @staticmethod
    def number_formatting_failed(value: object, error: Exception) -> Diagnostic:
        """Locale-aware number formatting raised."""
        return Diagnostic(
            code=DiagnosticCode.NUMBER_FORMATTING_FAILED,
            message=f"Number formatting failed for {_describe(value)}: {error}",
        )

    @staticmethod
    def invalid_decimal_places(decimal_places: int) -> Diagnostic:
        """Numeric message requested a negative number of fraction digits."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_DECIMAL_PLACES,
            message=f"Decimal places must be >= 0, got {decimal_places}.",
            hint="Pass a non-negative count when translating a number",
        )
