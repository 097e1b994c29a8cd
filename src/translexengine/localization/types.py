"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user
code when annotating Translator call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "FormKey",
    "LocaleCode",
    "MessageKey",
    "PluralForms",
    "TranslationEntry",
]

MessageKey: TypeAlias = str
"""Flat dictionary key of a message (e.g., 'Save', 'cart.items')."""

LocaleCode: TypeAlias = str
"""POSIX locale code (e.g., 'en_US', 'cs_CZ')."""

FormKey: TypeAlias = int | str
"""Plural form index, or the reserved zero form key 'zero'."""

PluralForms: TypeAlias = Mapping[FormKey, str]
"""Ordered plural variants of one message, in definition order."""

TranslationEntry: TypeAlias = str | PluralForms
"""Value stored under a message key: a plain translation or plural variants."""
