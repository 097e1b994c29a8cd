"""Lazily loaded, immutable message dictionaries.

A dictionary owns the translations of exactly one locale. Nothing is read
until the first ``has()`` or ``get()`` call; the loaded mapping is then
frozen for the lifetime of the object and never reloaded.

Components:
    Dictionary - Protocol consumed by Translator (structural typing)
    LazyDictionary - Base class implementing load-once semantics
    FileDictionary - YAML source artifact + JSON cache artifact on disk
    MemoryDictionary - Mapping supplied by the caller

Python 3.13+.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

from translexengine.diagnostics import ErrorTemplate, SourceFileNotFoundError
from translexengine.enums import DictionarySource
from translexengine.localization.codec import (
    decode_cache,
    decode_source,
    encode_cache,
    normalize_messages,
    write_atomic,
)
from translexengine.localization.types import MessageKey, TranslationEntry

__all__ = [
    "Dictionary",
    "FileDictionary",
    "LazyDictionary",
    "MemoryDictionary",
]

logger = logging.getLogger(__name__)


class Dictionary(Protocol):
    """Protocol for the message store of a single locale.

    Implementations must load lazily: construction is cheap, and the first
    call to either method performs the load.
    """

    def has(self, message: MessageKey) -> bool:
        """Check whether message has a translation."""

    def get(self, message: MessageKey) -> TranslationEntry:
        """Get the translation entry of message.

        Raises:
            KeyError: If message has no translation
        """


class LazyDictionary(ABC):
    """Load-once dictionary base.

    Subclasses implement ``_load()``; this class guarantees it runs at most
    once and that the result is exposed read-only.
    """

    __slots__ = ("_load_source", "_messages")

    def __init__(self) -> None:
        self._messages: Mapping[MessageKey, TranslationEntry] | None = None
        self._load_source: DictionarySource | None = None

    @abstractmethod
    def _load(self) -> tuple[Mapping[MessageKey, TranslationEntry], DictionarySource]:
        """Produce the messages and report where they came from."""

    def _ensure_loaded(self) -> Mapping[MessageKey, TranslationEntry]:
        if self._messages is None:
            messages, source = self._load()
            self._messages = MappingProxyType(dict(messages))
            self._load_source = source
        return self._messages

    @property
    def loaded(self) -> bool:
        """Check if messages have been loaded."""
        return self._messages is not None

    @property
    def load_source(self) -> DictionarySource | None:
        """Where the messages came from, or None before the first access."""
        return self._load_source

    @property
    def messages(self) -> Mapping[MessageKey, TranslationEntry]:
        """Read-only view of all messages (triggers the load)."""
        return self._ensure_loaded()

    def has(self, message: MessageKey) -> bool:
        """Check whether message has a translation."""
        return message in self._ensure_loaded()

    def get(self, message: MessageKey) -> TranslationEntry:
        """Get the translation entry of message.

        Raises:
            KeyError: If message has no translation
        """
        return self._ensure_loaded()[message]

    def keys(self) -> Iterator[MessageKey]:
        """Iterate message keys in source order."""
        return iter(self._ensure_loaded())

    def __contains__(self, message: object) -> bool:
        return message in self._ensure_loaded()

    def __len__(self) -> int:
        return len(self._ensure_loaded())


class FileDictionary(LazyDictionary):
    """Dictionary backed by a YAML source artifact and a JSON cache artifact.

    Load algorithm:
        1. If the cache artifact exists and decodes, use it (no YAML parsing).
        2. Otherwise decode the source artifact. Parse failures and
           non-mapping documents yield an empty dictionary.
        3. Write the cache artifact atomically for the next process.

    A corrupt or stale cache artifact is regenerated from source. Failing to
    write the cache artifact is logged and does not fail the load.

    Example:
        >>> dictionary = FileDictionary("locales/cs_CZ.yaml", "cache/cs_CZ.json")
        >>> dictionary.has("Save")
        True
        >>> dictionary.get("Save")
        'Uložit'
    """

    __slots__ = ("_cache_path", "_source_path")

    def __init__(self, source_path: str | Path, cache_path: str | Path) -> None:
        """Initialize file dictionary.

        Args:
            source_path: YAML source artifact of one locale
            cache_path: Location of the generated cache artifact

        Raises:
            SourceFileNotFoundError: If source_path is not an existing file
        """
        super().__init__()
        self._source_path = Path(source_path)
        self._cache_path = Path(cache_path)

        if not self._source_path.is_file():
            raise SourceFileNotFoundError(
                ErrorTemplate.source_file_not_found(str(self._source_path))
            )

    @property
    def source_path(self) -> Path:
        """Path of the source artifact."""
        return self._source_path

    @property
    def cache_path(self) -> Path:
        """Path of the cache artifact."""
        return self._cache_path

    def _load(self) -> tuple[Mapping[MessageKey, TranslationEntry], DictionarySource]:
        cached = self._read_cache()
        if cached is not None:
            logger.debug("Loaded %d messages from cache %s", len(cached), self._cache_path)
            return cached, DictionarySource.CACHE

        messages = self._read_source()
        self._write_cache(messages)
        logger.debug("Loaded %d messages from source %s", len(messages), self._source_path)
        return messages, DictionarySource.SOURCE

    def _read_cache(self) -> Mapping[MessageKey, TranslationEntry] | None:
        try:
            text = self._cache_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read cache artifact %s: %s", self._cache_path, e)
            return None

        try:
            return decode_cache(text)
        except ValueError as e:
            logger.warning("Discarding invalid cache artifact %s: %s", self._cache_path, e)
            return None

    def _read_source(self) -> Mapping[MessageKey, TranslationEntry]:
        try:
            text = self._source_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise SourceFileNotFoundError(
                ErrorTemplate.source_file_not_found(str(self._source_path))
            ) from None
        except UnicodeDecodeError as e:
            logger.warning("Translation source %s is not UTF-8: %s", self._source_path, e)
            return {}
        return decode_source(text, source_path=str(self._source_path))

    def _write_cache(self, messages: Mapping[MessageKey, TranslationEntry]) -> None:
        try:
            write_atomic(self._cache_path, encode_cache(messages))
        except (OSError, ValueError) as e:
            logger.warning("Cannot write cache artifact %s: %s", self._cache_path, e)
            return
        logger.debug("Wrote cache artifact %s", self._cache_path)


class MemoryDictionary(LazyDictionary):
    """Dictionary over a caller-supplied mapping.

    The mapping uses the source artifact's shapes (strings, lists of
    variants, or form-index mappings) and is normalized on first access.

    Example:
        >>> dictionary = MemoryDictionary({"cat": ["%d cat", "%d cats"]})
        >>> dict(dictionary.get("cat"))
        {0: '%d cat', 1: '%d cats'}
    """

    __slots__ = ("_raw",)

    def __init__(self, messages: Mapping[Any, Any]) -> None:
        super().__init__()
        self._raw = messages

    def _load(self) -> tuple[Mapping[MessageKey, TranslationEntry], DictionarySource]:
        return normalize_messages(self._raw), DictionarySource.MEMORY
