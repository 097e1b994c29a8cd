"""Translator configuration and wiring.

``TranslatorConfig`` collects the settings an application normally keeps
in its configuration file; ``create_translator()`` turns them into a ready
Translator backed by a FileDictionaryFactory.

Example:
    >>> config = TranslatorConfig(
    ...     source_dir="app/translations",
    ...     cache_dir="temp/cache/translations",
    ...     default_locale="cs_CZ",
    ... )
    >>> translator = create_translator(config)
    >>> translator.locale
    'cs_CZ'

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from translexengine.constants import DEFAULT_CACHE_DIR_MODE, DEFAULT_LOCALE, SOURCE_SUFFIX
from translexengine.localization import DictionaryFactory, FileDictionaryFactory
from translexengine.runtime import Translator, WarningLogger

__all__ = ["TranslatorConfig", "create_translator"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TranslatorConfig:
    """Immutable translator settings.

    Attributes:
        source_dir: Directory with one ``{locale}.yaml`` per locale
        cache_dir: Directory for generated ``{locale}.json`` artifacts
        default_locale: Locale active right after construction
        source_suffix: Suffix of source artifacts
        cache_dir_mode: Permission bits for a newly created cache_dir
        debug: Raise translation errors instead of recovering
        strict: Raise when a plural message is translated without a count
        use_special_zero_form: Prefer the "zero" variant for count 0
    """

    source_dir: str | Path
    cache_dir: str | Path
    default_locale: str = DEFAULT_LOCALE
    source_suffix: str = SOURCE_SUFFIX
    cache_dir_mode: int = DEFAULT_CACHE_DIR_MODE
    debug: bool = False
    strict: bool = False
    use_special_zero_form: bool = False

    def __post_init__(self) -> None:
        """Validate settings.

        Raises:
            ValueError: If default_locale is empty or source_suffix has no leading dot
        """
        if not self.default_locale:
            msg = "default_locale cannot be empty"
            raise ValueError(msg)
        if not self.source_suffix.startswith(".") or len(self.source_suffix) < 2:
            msg = f"source_suffix must start with '.', got {self.source_suffix!r}"
            raise ValueError(msg)


def create_translator(
    config: TranslatorConfig,
    *,
    factory: DictionaryFactory | None = None,
    logger: WarningLogger | None = None,
) -> Translator:
    """Build a Translator from config.

    Args:
        config: Translator settings
        factory: Dictionary factory to use instead of a FileDictionaryFactory
            over config.source_dir and config.cache_dir
        logger: Receives translator warnings (optional)

    Raises:
        SourceDirectoryNotFoundError: If config.source_dir does not exist
        CacheDirectoryNotWritableError: If config.cache_dir is unusable
    """
    if factory is None:
        factory = FileDictionaryFactory(
            config.source_dir,
            config.cache_dir,
            cache_dir_mode=config.cache_dir_mode,
            source_suffix=config.source_suffix,
        )
    _log_config(config)
    return Translator(
        factory,
        locale=config.default_locale,
        logger=logger,
        debug=config.debug,
        strict=config.strict,
        use_special_zero_form=config.use_special_zero_form,
    )


def _log_config(config: TranslatorConfig) -> None:
    logger.debug(
        "Creating translator: locale=%s debug=%s strict=%s zero_form=%s",
        config.default_locale,
        config.debug,
        config.strict,
        config.use_special_zero_form,
    )
