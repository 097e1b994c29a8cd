"""Translator runtime package.

Provides plural rule evaluation, locale-aware number formatting, error
policies and the Translator API. Depends on the syntax package for plural
expressions and on the localization package for dictionaries.

Python 3.13+.
"""

from .locale_context import BabelNumberFormatter, LocaleContext, NumberFormatter
from .plural_rules import (
    DEFAULT_RULE,
    PLURAL_RULES,
    PluralRule,
    PluralRuleEvaluator,
    select_plural_form,
)
from .policy import (
    PERMISSIVE,
    STRICT,
    ErrorPolicy,
    PermissivePolicy,
    StrictPolicy,
    WarningLogger,
    notify,
    policy_for,
)
from .translator import LoadedDictionary, Translator

__all__ = [
    "DEFAULT_RULE",
    "PERMISSIVE",
    "PLURAL_RULES",
    "STRICT",
    "BabelNumberFormatter",
    "ErrorPolicy",
    "LoadedDictionary",
    "LocaleContext",
    "NumberFormatter",
    "PermissivePolicy",
    "PluralRule",
    "PluralRuleEvaluator",
    "StrictPolicy",
    "Translator",
    "WarningLogger",
    "notify",
    "policy_for",
    "select_plural_form",
]
