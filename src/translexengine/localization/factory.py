"""Dictionary factories: resolve a locale to a Dictionary.

Components:
    DictionaryFactory - Protocol consumed by Translator (structural typing)
    FileDictionaryFactory - Builds FileDictionary instances from a source
        directory and a cache directory

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from translexengine.constants import CACHE_SUFFIX, DEFAULT_CACHE_DIR_MODE, SOURCE_SUFFIX
from translexengine.diagnostics import (
    CacheDirectoryNotWritableError,
    ErrorTemplate,
    SourceDirectoryNotFoundError,
)
from translexengine.localization.dictionary import Dictionary, FileDictionary
from translexengine.localization.types import LocaleCode

__all__ = [
    "DictionaryFactory",
    "FileDictionaryFactory",
]

logger = logging.getLogger(__name__)


class DictionaryFactory(Protocol):
    """Protocol for creating the dictionary of a locale.

    This is a Protocol (structural typing) rather than ABC so any object
    with a matching ``create`` method can be injected into a Translator.

    Example:
        >>> class StaticFactory:
        ...     def create(self, locale: str) -> Dictionary:
        ...         return MemoryDictionary({"Save": "Uložit"})
        >>> translator = Translator(StaticFactory())
    """

    def create(self, locale: LocaleCode) -> Dictionary:
        """Create a new dictionary for locale.

        Raises:
            DictionaryError: If the locale's storage is missing or unusable
        """


class FileDictionaryFactory:
    """Create FileDictionary instances for ``{source_dir}/{locale}.yaml``.

    Cache artifacts are written to ``{cache_dir}/{locale}.json``. Every
    ``create()`` call returns a fresh dictionary; reusing one across calls
    is the Translator's job.

    Security:
        Locale codes containing path separators or ".." are rejected, so a
        locale can never address a file outside the configured directories.

    Example:
        >>> factory = FileDictionaryFactory("app/translations", "temp/cache/translations")
        >>> dictionary = factory.create("cs_CZ")
        # Reads app/translations/cs_CZ.yaml, caches to temp/cache/translations/cs_CZ.json
    """

    __slots__ = ("_cache_dir", "_source_dir", "_source_suffix")

    def __init__(
        self,
        source_dir: str | Path,
        cache_dir: str | Path,
        *,
        cache_dir_mode: int = DEFAULT_CACHE_DIR_MODE,
        source_suffix: str = SOURCE_SUFFIX,
    ) -> None:
        """Initialize factory and validate both directories.

        Args:
            source_dir: Directory holding one source artifact per locale
            cache_dir: Directory for generated cache artifacts (created if missing)
            cache_dir_mode: Permission bits used when creating cache_dir
            source_suffix: File suffix of source artifacts (default: ".yaml")

        Raises:
            SourceDirectoryNotFoundError: If source_dir is not a directory
            CacheDirectoryNotWritableError: If cache_dir cannot be created or written
        """
        self._source_dir = Path(source_dir)
        if not self._source_dir.is_dir():
            raise SourceDirectoryNotFoundError(
                ErrorTemplate.source_directory_not_found(str(self._source_dir))
            )

        self._cache_dir = Path(cache_dir)
        if not self._cache_dir.is_dir():
            try:
                self._cache_dir.mkdir(mode=cache_dir_mode, parents=True, exist_ok=True)
            except OSError as e:
                raise CacheDirectoryNotWritableError(
                    ErrorTemplate.cache_directory_not_writable(str(self._cache_dir))
                ) from e
            logger.debug("Created cache directory %s", self._cache_dir)

        if not os.access(self._cache_dir, os.W_OK | os.X_OK):
            raise CacheDirectoryNotWritableError(
                ErrorTemplate.cache_directory_not_writable(str(self._cache_dir))
            )

        self._source_suffix = source_suffix

    @property
    def source_dir(self) -> Path:
        """Directory holding source artifacts."""
        return self._source_dir

    @property
    def cache_dir(self) -> Path:
        """Directory holding cache artifacts."""
        return self._cache_dir

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Validate locale code for path traversal attacks.

        Raises:
            ValueError: If locale contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def source_path(self, locale: LocaleCode) -> Path:
        """Path of the source artifact of locale."""
        self._validate_locale(locale)
        return self._source_dir / f"{locale}{self._source_suffix}"

    def cache_path(self, locale: LocaleCode) -> Path:
        """Path of the cache artifact of locale."""
        self._validate_locale(locale)
        return self._cache_dir / f"{locale}{CACHE_SUFFIX}"

    def describe_path(self, locale: LocaleCode) -> str:
        """Return human-readable source path for diagnostics."""
        return str(self.source_path(locale))

    def create(self, locale: LocaleCode) -> FileDictionary:
        """Create a new dictionary for locale.

        Raises:
            ValueError: If locale contains unsafe path components
            SourceFileNotFoundError: If the locale has no source artifact
        """
        return FileDictionary(self.source_path(locale), self.cache_path(locale))
