"""Plural form selection for the supported locales.

Maps each locale to a gettext-style plural rule (``nplurals`` plus an
expression over ``n``) and evaluates the rule for a count. Rules are
compiled once into an AST by ``translexengine.syntax`` and evaluated by a
closed interpreter, never by ``eval``.

Locales missing from the table use the default english-compatible rule
``n != 1`` (two forms).

Results are memoized per (locale, count). The memo is unbounded because
the number of distinct counts observed by a process is small; it is an
optimization only and can be cleared at any time.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from translexengine.constants import DEFAULT_NPLURALS
from translexengine.localization.types import LocaleCode
from translexengine.syntax import PluralExpression, evaluate, parse_plural_expression

__all__ = [
    "DEFAULT_RULE",
    "PLURAL_RULES",
    "PluralRule",
    "PluralRuleEvaluator",
    "select_plural_form",
]


@dataclass(frozen=True, slots=True)
class PluralRule:
    """Compiled plural rule.

    Attributes:
        nplurals: Number of plural forms the rule can select
        expression: Rule source, a C expression over ``n``

    Example:
        >>> rule = PluralRule(3, "n==1 ? 0 : (n>=2 && n<=4 ? 1 : 2)")
        >>> [rule(n) for n in (1, 3, 5)]
        [0, 1, 2]
    """

    nplurals: int
    expression: str
    _compiled: PluralExpression = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile the expression.

        Raises:
            ValueError: If nplurals is not positive
            PluralExpressionError: If the expression is outside the grammar
        """
        if self.nplurals < 1:
            msg = f"nplurals must be positive, got {self.nplurals}"
            raise ValueError(msg)
        object.__setattr__(self, "_compiled", parse_plural_expression(self.expression))

    def __call__(self, count: int) -> int:
        """Return the plural form index for count."""
        return evaluate(self._compiled, count)


DEFAULT_RULE = PluralRule(DEFAULT_NPLURALS, "n != 1")

_SLAVIC_EAST = PluralRule(
    3, "n%10==1 && n%100!=11 ? 0 : (n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)"
)
_CZECH = PluralRule(3, "n==1 ? 0 : (n>=2 && n<=4 ? 1 : 2)")
_FRENCH = PluralRule(2, "n > 1 ? 1 : 0")
_SINGLE_FORM = PluralRule(1, "0")

PLURAL_RULES: Mapping[LocaleCode, PluralRule] = MappingProxyType({
    # czech, slovak
    "cs_CZ": _CZECH,
    "sk_SK": _CZECH,
    # croatian, russian, ukrainian
    "cr_CR": _SLAVIC_EAST,
    "ru_RU": _SLAVIC_EAST,
    "uk_UA": _SLAVIC_EAST,
    # french, turkish, uzbek
    "fr_FR": _FRENCH,
    "tr_TR": _FRENCH,
    "uz_UZ": _FRENCH,
    # indonesian, japanese, georgian, korean, lao, malay, burmese, thai,
    # vietnamese, chinese
    "id_ID": _SINGLE_FORM,
    "ja_JP": _SINGLE_FORM,
    "ka_GE": _SINGLE_FORM,
    "ko_KR": _SINGLE_FORM,
    "lo_LA": _SINGLE_FORM,
    "ms_MY": _SINGLE_FORM,
    "my_MM": _SINGLE_FORM,
    "th_TH": _SINGLE_FORM,
    "vi_VN": _SINGLE_FORM,
    "zh_CN": _SINGLE_FORM,
    # icelandic
    "is_IS": PluralRule(2, "n%10!=1 || n%100==11 ? 1 : 0"),
    # lithuanian
    "lt_LT": PluralRule(
        3, "n%10==1 && n%100!=11 ? 0 : (n%10>=2 && (n%100<10 || n%100>=20) ? 1 : 2)"
    ),
    # macedonian
    "mk_MK": PluralRule(2, "n==1 || n%10==1 ? 0 : 1"),
    # maltese
    "mt_MT": PluralRule(
        4, "n==1 ? 0 : (n==0 || (n%100>1 && n%100<11) ? 1 : (n%100>10 && n%100<20 ? 2 : 3))"
    ),
    # polish
    "pl_PL": PluralRule(
        3, "n==1 ? 0 : (n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)"
    ),
    # romanian
    "ro_RO": PluralRule(3, "n==1 ? 0 : (n==0 || (n%100>0 && n%100<20) ? 1 : 2)"),
    # latvian
    "lv_LV": PluralRule(3, "n%10==1 && n%100!=11 ? 0 : (n!=0 ? 1 : 2)"),
    # slovenian
    "sl_SL": PluralRule(4, "n%100==1 ? 0 : (n%100==2 ? 1 : (n%100==3 || n%100==4 ? 2 : 3))"),
})


class PluralRuleEvaluator:
    """Select plural form indexes with a per-(locale, count) memo.

    Thread Safety:
        Rule evaluation is pure. The memo and the counters are guarded by a
        lock, so one evaluator can be shared by translators on several
        threads.

    Example:
        >>> evaluator = PluralRuleEvaluator()
        >>> evaluator.evaluate("cs_CZ", 3)
        1
        >>> evaluator.evaluate("cs_CZ", 3)  # served from the memo
        1
        >>> (evaluator.eval_count, evaluator.cache_hit_count)
        (1, 1)
        >>> evaluator.evaluate("xx_XX", 1)  # unmapped locale: default rule
        0
    """

    __slots__ = ("_cache", "_cache_hits", "_default", "_evaluations", "_lock", "_rules")

    def __init__(
        self,
        rules: Mapping[LocaleCode, PluralRule] | None = None,
        default: PluralRule = DEFAULT_RULE,
    ) -> None:
        """Initialize evaluator.

        Args:
            rules: Locale-indexed rule table (default: PLURAL_RULES)
            default: Rule for locales missing from the table
        """
        self._rules: Mapping[LocaleCode, PluralRule] = PLURAL_RULES if rules is None else rules
        self._default = default
        self._cache: dict[tuple[LocaleCode, int], int] = {}
        self._evaluations = 0
        self._cache_hits = 0
        self._lock = threading.Lock()

    def rule_for(self, locale: LocaleCode) -> PluralRule:
        """Get the rule applied to locale (default rule when unmapped)."""
        return self._rules.get(locale, self._default)

    def plural_count(self, locale: LocaleCode) -> int:
        """Get the number of plural forms (nplurals) of locale."""
        return self.rule_for(locale).nplurals

    def evaluate(self, locale: LocaleCode, count: int) -> int:
        """Return the plural form index for count in locale.

        Args:
            locale: Locale code (e.g., "ru_RU")
            count: Integer count; negative values are accepted

        Returns:
            Form index in ``range(nplurals)`` of the locale's rule

        Raises:
            TypeError: If count is not an int
        """
        if not isinstance(count, int) or isinstance(count, bool):
            msg = f"Plural count must be int, got {type(count).__name__}"
            raise TypeError(msg)

        key = (locale, count)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache_hits += 1
                return cached

        form = self.rule_for(locale)(count)

        with self._lock:
            self._evaluations += 1
            self._cache[key] = form
        return form

    @property
    def eval_count(self) -> int:
        """Number of rule evaluations that missed the memo."""
        return self._evaluations

    @property
    def cache_hit_count(self) -> int:
        """Number of lookups answered from the memo."""
        return self._cache_hits

    @property
    def cache_size(self) -> int:
        """Number of memoized (locale, count) pairs."""
        with self._lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        """Drop memoized results and reset counters."""
        with self._lock:
            self._cache.clear()
            self._evaluations = 0
            self._cache_hits = 0


_shared_evaluator = PluralRuleEvaluator()


def select_plural_form(count: int, locale: LocaleCode) -> int:
    """Select plural form index using the process-wide shared evaluator.

    Args:
        count: Integer count
        locale: Locale code (e.g., "pl_PL", "en_US")

    Returns:
        Plural form index

    Examples:
        >>> select_plural_form(1, "en_US")
        0
        >>> select_plural_form(5, "ru_RU")
        2
        >>> select_plural_form(22, "pl_PL")
        1
        >>> select_plural_form(42, "ja_JP")
        0
    """
    return _shared_evaluator.evaluate(locale, count)
