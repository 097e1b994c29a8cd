"""Translator - Main API for message translation.

Looks a message key up in the dictionary of the current locale, selects a
plural variant for a count, and applies printf-style positional arguments.

Error handling is dual-mode:
    - Production (default): conditions are forwarded to the injected logger
      and translate() returns a best-effort string.
    - Debug: the same conditions raise TranslationError subclasses.

Construction-time dictionary errors (missing directories or locale files)
always propagate, in both modes.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Self, TypeAlias

from translexengine.constants import DEFAULT_LOCALE, PRESERVED_PLACEHOLDERS, ZERO_FORM
from translexengine.diagnostics import (
    ArgumentFormattingError,
    ErrorTemplate,
    FormattingError,
    MissingCountForPluralError,
    NonStringMessageError,
    UndefinedPluralFormError,
)
from translexengine.locale_utils import normalize_locale
from translexengine.localization import Dictionary, DictionaryFactory
from translexengine.localization.types import FormKey, LocaleCode, MessageKey
from translexengine.runtime.locale_context import BabelNumberFormatter, NumberFormatter
from translexengine.runtime.plural_rules import PluralRuleEvaluator
from translexengine.runtime.policy import ErrorPolicy, WarningLogger, notify, policy_for

__all__ = ["LoadedDictionary", "Translator"]

logger = logging.getLogger(__name__)

Number: TypeAlias = int | float | Decimal


@dataclass(frozen=True, slots=True)
class LoadedDictionary:
    """Dictionary bound to the locale it was created for."""

    locale: LocaleCode
    dictionary: Dictionary


def _as_number(message: object) -> Number | None:
    """Return message as a number if it is numeric, else None.

    Numbers (except bool) qualify, as do strings holding a finite decimal
    literal such as "5", "-1.5" or "2e3".
    """
    if isinstance(message, bool):
        return None
    if isinstance(message, int | float | Decimal):
        return message
    if isinstance(message, str) and "_" not in message:
        try:
            value = Decimal(message)
        except InvalidOperation:
            return None
        return value if value.is_finite() else None
    return None


def _is_coercible(message: object) -> bool:
    """Check whether message defines its own string conversion.

    Bools and byte strings are excluded: their str() is a repr, not a key.
    """
    if isinstance(message, bool | bytes | bytearray):
        return False
    return type(message).__str__ is not object.__str__


class Translator:
    """Translate message keys for one current locale.

    The active dictionary is held in a two-state slot: empty, or loaded for
    a specific locale. Changing the locale empties the slot; the next
    translate() call asks the factory for a fresh dictionary.

    Thread Safety:
        Not thread-safe. Use one Translator per thread (they may share a
        PluralRuleEvaluator, which is thread-safe).

    Examples:
        >>> factory = FileDictionaryFactory("translations", "temp/cache")
        >>> translator = Translator(factory, locale="cs_CZ")
        >>> translator.translate("Save")
        'Uložit'
        >>> translator.translate("%d files", 3, 3)
        '3 soubory'
        >>> translator.translate("untranslated.key")
        'untranslated.key'
        >>> translator.set_locale("en_US").translate("1234.5", 2)
        '1,234.50'
    """

    __slots__ = (
        "_factory",
        "_loaded",
        "_locale",
        "_logger",
        "_number_formatter",
        "_plural_rules",
        "_policy",
        "_strict",
        "_use_special_zero_form",
    )

    def __init__(
        self,
        dictionary_factory: DictionaryFactory,
        *,
        locale: LocaleCode = DEFAULT_LOCALE,
        plural_rules: PluralRuleEvaluator | None = None,
        number_formatter: NumberFormatter | None = None,
        logger: WarningLogger | None = None,
        debug: bool = False,
        strict: bool = False,
        use_special_zero_form: bool = False,
    ) -> None:
        """Initialize translator.

        Args:
            dictionary_factory: Creates the dictionary of a locale on demand
            locale: Initial locale (default: "en_US")
            plural_rules: Plural form evaluator (default: a new PluralRuleEvaluator)
            number_formatter: Formatter for numeric messages (default: Babel)
            logger: Receives warnings, prefixed with "Translator: " (optional)
            debug: Raise translation errors instead of recovering
            strict: Raise MissingCountForPluralError when a plural message has no count
            use_special_zero_form: Prefer the "zero" variant when count is 0

        Raises:
            ValueError: If locale is empty
        """
        self._factory = dictionary_factory
        self._locale = self._validate_locale(locale)
        self._loaded: LoadedDictionary | None = None
        self._plural_rules = plural_rules if plural_rules is not None else PluralRuleEvaluator()
        self._number_formatter: NumberFormatter = (
            number_formatter if number_formatter is not None else BabelNumberFormatter()
        )
        self._logger = logger
        self._policy: ErrorPolicy = policy_for(debug)
        self._strict = strict
        self._use_special_zero_form = use_special_zero_form

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> LocaleCode:
        if not isinstance(locale, str) or not locale:
            msg = f"Locale must be a non-empty string, got {locale!r}"
            raise ValueError(msg)
        return normalize_locale(locale)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def locale(self) -> LocaleCode:
        """Current locale."""
        return self._locale

    @property
    def debug_mode(self) -> bool:
        """True if translation errors are raised."""
        return self._policy.raises

    @property
    def strict(self) -> bool:
        """True if a missing count for a plural message is an error."""
        return self._strict

    @property
    def use_special_zero_form(self) -> bool:
        """True if count 0 selects the "zero" variant when one is defined."""
        return self._use_special_zero_form

    @property
    def plural_rules(self) -> PluralRuleEvaluator:
        """Plural form evaluator."""
        return self._plural_rules

    @property
    def dictionary_loaded(self) -> bool:
        """True if a dictionary for the current locale has been created."""
        return self._loaded is not None

    @property
    def dictionary(self) -> Dictionary:
        """Dictionary of the current locale (created on first access)."""
        return self._ensure_dictionary()

    def set_locale(self, locale: LocaleCode) -> Self:
        """Switch the current locale.

        The previous dictionary is dropped when the locale actually changes.

        Raises:
            ValueError: If locale is empty
        """
        normalized = self._validate_locale(locale)
        if normalized != self._locale:
            self._locale = normalized
            self._loaded = None
            logger.debug("Locale switched to %s", normalized)
        return self

    def set_debug_mode(self, debug: bool) -> Self:
        """Raise translation errors (True) or log and recover (False)."""
        self._policy = policy_for(debug)
        return self

    def set_strict(self, strict: bool) -> Self:
        """Treat a missing count for a plural message as an error."""
        self._strict = strict
        return self

    def set_use_special_zero_form(self, enabled: bool) -> Self:
        """Prefer the "zero" plural variant when count is exactly 0."""
        self._use_special_zero_form = enabled
        return self

    def set_logger(self, logger: WarningLogger | None) -> Self:
        """Set the collaborator receiving warnings (None drops them)."""
        self._logger = logger
        return self

    def _ensure_dictionary(self) -> Dictionary:
        loaded = self._loaded
        if loaded is None or loaded.locale != self._locale:
            loaded = LoadedDictionary(self._locale, self._factory.create(self._locale))
            self._loaded = loaded
            logger.debug("Created dictionary for locale %s", self._locale)
        return loaded.dictionary

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, message: object, count: int | None = None, *args: object) -> str:
        """Translate message.

        Args:
            message: Message key. Numbers and numeric strings are formatted
                for the locale instead of looked up.
            count: Selects the plural variant; for numeric messages, the
                number of decimal places (default: 0)
            *args: Positional printf-style arguments applied to the result

        Returns:
            Translated string. Untranslated keys are returned unchanged;
            empty or missing input yields "".

        Raises:
            TranslationError: In debug mode, for any translation condition;
                MissingCountForPluralError also in strict mode
            DictionaryError: If the current locale has no dictionary
        """
        if message is None or (isinstance(message, str) and not message):
            return ""

        number = _as_number(message)
        if number is not None:
            return self._format_number(number, count)

        if not isinstance(message, str):
            if not _is_coercible(message):
                self._policy.report(
                    NonStringMessageError(ErrorTemplate.non_string_message(message)), self._logger
                )
                return ""
            message = str(message)
            if not message:
                return ""

        result = self._lookup(message, count)

        if args:
            result = self._apply_arguments(message, result, args)
        return result

    def _format_number(self, number: Number, count: int | None) -> str:
        try:
            return self._number_formatter.format_number(
                self._locale, number, count if count is not None else 0
            )
        except FormattingError as e:
            self._policy.report(e, self._logger)
            return e.fallback_value

    def _lookup(self, message: MessageKey, count: int | None) -> str:
        dictionary = self._ensure_dictionary()
        if not dictionary.has(message):
            return message

        entry = dictionary.get(message)
        if isinstance(entry, str):
            return entry or message
        return self._select_plural(message, entry, count) or message

    def _select_plural(
        self, message: MessageKey, forms: Mapping[FormKey, str], count: int | None
    ) -> str:
        if count is None:
            error = MissingCountForPluralError(ErrorTemplate.missing_count_for_plural(message))
            if self._strict:
                notify(error, self._logger)
                raise error
            self._policy.report(error, self._logger)
            return self._fallback_form(forms)

        if self._use_special_zero_form and count == 0 and ZERO_FORM in forms:
            return forms[ZERO_FORM]

        form = self._plural_rules.evaluate(self._locale, count)
        if form in forms:
            return forms[form]

        notify(
            UndefinedPluralFormError(
                ErrorTemplate.undefined_plural_form(message, form, self._locale)
            ),
            self._logger,
        )
        return self._fallback_form(forms)

    @staticmethod
    def _fallback_form(forms: Mapping[FormKey, str]) -> str:
        """Last defined indexed variant; the zero form only if nothing else exists."""
        fallback: str | None = None
        for key, variant in forms.items():
            if key != ZERO_FORM:
                fallback = variant
        if fallback is None:
            fallback = forms.get(ZERO_FORM, "")
        return fallback

    def _apply_arguments(self, message: MessageKey, result: str, args: tuple[object, ...]) -> str:
        template = result
        for placeholder in PRESERVED_PLACEHOLDERS:
            template = template.replace(placeholder, "%" + placeholder)
        try:
            return template % args
        except (TypeError, ValueError, KeyError) as e:
            self._policy.report(
                ArgumentFormattingError(ErrorTemplate.argument_formatting_failed(message, e)),
                self._logger,
            )
            return result

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Translator(locale={self._locale!r}, "
            f"debug={self.debug_mode}, "
            f"strict={self._strict}, "
            f"loaded={self.dictionary_loaded})"
        )
