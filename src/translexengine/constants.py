"""Shared constants for translexengine.

Centralized configuration constants used across the syntax, runtime and
localization packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Locale defaults
- Plural forms
- Artifact layout: file suffixes and cache format version
- Placeholder escaping
- Cache limits

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    # Plural forms
    "ZERO_FORM",
    "DEFAULT_NPLURALS",
    # Artifact layout
    "SOURCE_SUFFIX",
    "CACHE_SUFFIX",
    "CACHE_FORMAT_VERSION",
    "DEFAULT_CACHE_DIR_MODE",
    # Placeholder escaping
    "PRESERVED_PLACEHOLDERS",
    # Logging
    "LOG_PREFIX",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used by a freshly constructed Translator.
DEFAULT_LOCALE: str = "en_US"

# ============================================================================
# PLURAL FORMS
# ============================================================================

# Reserved key of the variant used when count is exactly zero and the
# special zero form is enabled. Never produced by a plural rule.
ZERO_FORM: str = "zero"

# nplurals of the default (english-compatible) rule.
DEFAULT_NPLURALS: int = 2

# ============================================================================
# ARTIFACT LAYOUT
# ============================================================================

SOURCE_SUFFIX: str = ".yaml"
CACHE_SUFFIX: str = ".json"

# Bumped whenever the cache artifact layout changes. Artifacts written with
# another version are regenerated from source.
CACHE_FORMAT_VERSION: int = 1

DEFAULT_CACHE_DIR_MODE: int = 0o775

# ============================================================================
# PLACEHOLDER ESCAPING
# ============================================================================

# Form-label placeholders that must survive printf-style substitution.
# Their percent sign is doubled before arguments are applied.
PRESERVED_PLACEHOLDERS: tuple[str, ...] = ("%label", "%name", "%value")

# ============================================================================
# LOGGING
# ============================================================================

# Prefix of every warning forwarded to an injected logger.
LOG_PREFIX: str = "Translator: "

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128
