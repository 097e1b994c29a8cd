"""TransLexEngine - runtime message translation with CLDR-style plural rules.

Translates message keys against per-locale YAML dictionaries, selects plural
variants with a safe plural-expression interpreter, and formats numbers with
Babel. Dictionaries load lazily and are cached as JSON artifacts written
atomically, so later processes skip YAML parsing.

Public API:
    Translator - Translate message keys for a current locale
    TranslatorConfig - Immutable translator settings
    create_translator - Build a Translator from TranslatorConfig
    FileDictionaryFactory - YAML source + JSON cache dictionaries on disk
    MemoryDictionary - Dictionary over an in-memory mapping
    PluralRuleEvaluator - Plural form selection with memoization
    select_plural_form - Plural form selection via the shared evaluator

Exceptions:
    TranslatorError - Base exception class
    DictionaryError - Missing or unusable dictionary storage
    TranslationError - Runtime translation conditions (raised in debug mode)

Submodules:
    translexengine.syntax - Plural expression tokenizer, parser and evaluator
    translexengine.localization - Dictionaries, factories and artifact codec
    translexengine.runtime - Translator, plural rules, number formatting
    translexengine.diagnostics - Error types, codes and templates
"""

from .config import TranslatorConfig, create_translator
from .diagnostics import DictionaryError, TranslationError, TranslatorError
from .localization import FileDictionaryFactory, MemoryDictionary
from .runtime import PluralRuleEvaluator, Translator, select_plural_form

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("translexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DictionaryError",
    "FileDictionaryFactory",
    "MemoryDictionary",
    "PluralRuleEvaluator",
    "TranslationError",
    "Translator",
    "TranslatorConfig",
    "TranslatorError",
    "__version__",
    "create_translator",
    "select_plural_form",
]
