"""Locale context for thread-safe, locale-aware number formatting.

Provides number formatting without global state mutation. Uses Babel for
CLDR-compliant separators and digit grouping.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - NumberFormatter: Protocol the Translator depends on
    - BabelNumberFormatter: Default NumberFormatter built on LocaleContext

Design Principles:
    - Explicit over implicit (locale always visible)
    - Immutable by default (frozen dataclass)
    - Thread-safe (no shared mutable state outside the locked cache)
    - No dependency on Python's locale module (avoids global state)

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, Protocol

from babel import Locale, UnknownLocaleError
from babel import numbers as babel_numbers

from translexengine.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from translexengine.diagnostics import ErrorTemplate, FormattingError
from translexengine.locale_utils import get_babel_locale, normalize_locale

__all__ = ["BabelNumberFormatter", "LocaleContext", "NumberFormatter"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() factory to construct instances with proper validation.

    Cache Management:
        LocaleContext uses an internal LRU cache for instance reuse:
        - LocaleContext.clear_cache(): Clear all cached instances
        - LocaleContext.cache_size(): Get current cache size

    Examples:
        >>> ctx = LocaleContext.create('en_US')
        >>> ctx.format_number(1234.5, minimum_fraction_digits=2, maximum_fraction_digits=2)
        '1,234.50'

        >>> ctx = LocaleContext.create('de_DE')
        >>> ctx.format_number(1234.5, minimum_fraction_digits=1, maximum_fraction_digits=1)
        '1.234,5'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('xx_XX')
        >>> ctx.is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Cache operations are
        protected by RLock.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        For unknown or invalid locales, logs a warning and falls back to en_US.
        This method always succeeds.

        Args:
            locale_code: Locale identifier (e.g., 'en_US', 'cs-CZ')

        Returns:
            LocaleContext instance. For unknown/invalid locales, uses en_US
            rules while preserving the original locale_code for debugging.
        """
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = get_babel_locale(cache_key)
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale_code, e)
            babel_locale = get_babel_locale(DEFAULT_LOCALE)
            used_fallback = True
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to en_US", locale_code, e
            )
            babel_locale = get_babel_locale(DEFAULT_LOCALE)
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]

            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)

            cls._cache[cache_key] = ctx
            return ctx

    @property
    def babel_locale(self) -> Locale:
        """Get pre-validated Babel Locale object for this context."""
        return self._babel_locale

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
    ) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format (int, float, or Decimal)
            minimum_fraction_digits: Minimum decimal places (default: 0)
            maximum_fraction_digits: Maximum decimal places (default: 3)
            use_grouping: Use thousands separator (default: True)

        Returns:
            Formatted number string according to locale rules

        Raises:
            FormattingError: If Babel rejects the value or pattern
        """
        try:
            # '#,##0' = integer with grouping
            # '#,##0.00' = exactly 2 decimal places with grouping
            # '0.0##' = 1-3 decimal places, no grouping
            integer_part = "#,##0" if use_grouping else "0"

            if maximum_fraction_digits == 0:
                format_pattern = integer_part
            elif minimum_fraction_digits == maximum_fraction_digits:
                format_pattern = f"{integer_part}.{'0' * minimum_fraction_digits}"
            else:
                required = "0" * minimum_fraction_digits
                optional = "#" * (maximum_fraction_digits - minimum_fraction_digits)
                format_pattern = f"{integer_part}.{required}{optional}"

            return str(
                babel_numbers.format_decimal(
                    value,
                    format=format_pattern,
                    locale=self.babel_locale,
                )
            )

        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.number_formatting_failed(value, e), fallback_value=str(value)
            ) from e


class NumberFormatter(Protocol):
    """Protocol for locale-aware number formatting used by Translator."""

    def format_number(self, locale: str, value: int | float | Decimal, decimal_places: int) -> str:
        """Format value with exactly decimal_places fraction digits."""


class BabelNumberFormatter:
    """NumberFormatter backed by LocaleContext (Babel CLDR data).

    Example:
        >>> BabelNumberFormatter().format_number("en_US", 5, 2)
        '5.00'
    """

    __slots__ = ()

    def format_number(self, locale: str, value: int | float | Decimal, decimal_places: int) -> str:
        """Format value with exactly decimal_places fraction digits.

        Raises:
            FormattingError: If decimal_places is negative or Babel rejects the value
        """
        if decimal_places < 0:
            raise FormattingError(
                ErrorTemplate.invalid_decimal_places(decimal_places), fallback_value=str(value)
            )
        return LocaleContext.create(locale).format_number(
            value,
            minimum_fraction_digits=decimal_places,
            maximum_fraction_digits=decimal_places,
        )
