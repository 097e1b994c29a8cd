"""Dictionary storage package for the Translator.

Provides type aliases, artifact encoding, lazily loaded dictionaries and
the factories that bind a locale to its storage.

Submodules:
    types      - PEP 695 type aliases (MessageKey, LocaleCode, TranslationEntry, ...)
    codec      - YAML source decoding, JSON cache artifacts, atomic writes
    dictionary - Dictionary protocol, FileDictionary, MemoryDictionary
    factory    - DictionaryFactory protocol, FileDictionaryFactory

Python 3.13+. External dependency: PyYAML.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from translexengine.enums import DictionarySource
from translexengine.localization.dictionary import (
    Dictionary,
    FileDictionary,
    LazyDictionary,
    MemoryDictionary,
)
from translexengine.localization.factory import DictionaryFactory, FileDictionaryFactory
from translexengine.localization.types import (
    FormKey,
    LocaleCode,
    MessageKey,
    PluralForms,
    TranslationEntry,
)

__all__ = [
    # Dictionaries
    "Dictionary",
    "LazyDictionary",
    "FileDictionary",
    "MemoryDictionary",
    "DictionarySource",
    # Factories
    "DictionaryFactory",
    "FileDictionaryFactory",
    # Type aliases for user code type annotations
    "FormKey",
    "LocaleCode",
    "MessageKey",
    "PluralForms",
    "TranslationEntry",
]
