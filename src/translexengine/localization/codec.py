"""Source and cache artifact encoding for file-backed dictionaries.

Source artifacts are human-edited YAML documents mapping message keys to a
translation string, a list of plural variants, or a mapping of plural form
indexes (plus the reserved ``zero`` key) to variants::

    Save: Uložit
    file:
      - "%d soubor"
      - "%d soubory"
      - "%d souborů"
    item:
      zero: "žádná položka"
      0: "%d položka"
      1: "%d položky"
      2: "%d položek"

Cache artifacts are generated JSON documents holding the normalized mapping.
Plural variants are stored as ordered ``[key, text]`` pairs so integer form
indexes and definition order survive the round trip. They are written
atomically (temporary file + ``os.replace``), so concurrent readers never
observe a partially written artifact.

Python 3.13+. External dependency: PyYAML.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, TypeAlias

import yaml

from translexengine.constants import CACHE_FORMAT_VERSION, ZERO_FORM
from translexengine.localization.types import FormKey, MessageKey, TranslationEntry

__all__ = [
    "decode_cache",
    "decode_source",
    "encode_cache",
    "normalize_messages",
    "write_atomic",
]

logger = logging.getLogger(__name__)

Messages: TypeAlias = dict[MessageKey, TranslationEntry]


def _scalar_text(value: object) -> str | None:
    """Coerce a YAML scalar to translation text; None for non-scalars."""
    match value:
        case None:
            return ""
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float():
            return str(value)
        case _:
            return None


def _form_key(key: object) -> FormKey | None:
    """Interpret a plural variant key; None when it is not a valid form key."""
    if key == ZERO_FORM:
        return ZERO_FORM
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if isinstance(key, str) and key.isascii() and key.isdigit():
        return int(key)
    return None


def _normalize_entry(key: MessageKey, value: object) -> TranslationEntry | None:
    """Normalize one decoded value. Returns None if the value is unusable."""
    text = _scalar_text(value)
    if text is not None:
        return text

    forms: dict[FormKey, str] = {}
    if isinstance(value, list):
        items: list[tuple[object, object]] = list(enumerate(value))
    elif isinstance(value, Mapping):
        items = list(value.items())
    else:
        logger.warning("Skipping message '%s': unsupported value type %s", key, type(value).__name__)
        return None

    for raw_key, raw_variant in items:
        form = _form_key(raw_key)
        variant = _scalar_text(raw_variant)
        if form is None or variant is None:
            logger.warning(
                "Skipping message '%s': invalid plural variant %r: %r", key, raw_key, raw_variant
            )
            return None
        forms[form] = variant

    return MappingProxyType(forms)


def normalize_messages(raw: Mapping[Any, Any]) -> Messages:
    """Normalize a decoded mapping into message entries.

    Keys are coerced to strings. Scalars become strings, lists become plural
    mappings indexed from 0, mappings keep their integer (or ``zero``) keys.
    Entries that cannot be represented are skipped with a warning.

    Args:
        raw: Mapping produced by a structured data decoder

    Returns:
        Message key to TranslationEntry mapping, in source order
    """
    messages: Messages = {}
    for raw_key, value in raw.items():
        key = str(raw_key)
        entry = _normalize_entry(key, value)
        if entry is not None:
            messages[key] = entry
    return messages


def decode_source(text: str, *, source_path: str | None = None) -> Messages:
    """Decode a YAML source artifact.

    Decode failures never propagate: a document that fails to parse, or
    whose top level is not a mapping, yields an empty dictionary.

    Args:
        text: YAML document
        source_path: Path used in log messages (optional)

    Returns:
        Normalized messages (possibly empty)
    """
    where = source_path or "<string>"
    try:
        raw = yaml.safe_load(text)
    except (yaml.YAMLError, RecursionError) as e:
        # Deeply nested documents exhaust the composer's recursion
        logger.warning("Failed to decode translation source %s: %s", where, e)
        return {}

    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        logger.warning(
            "Translation source %s is not a mapping (got %s); using empty dictionary",
            where,
            type(raw).__name__,
        )
        return {}
    return normalize_messages(raw)


def encode_cache(messages: Mapping[MessageKey, TranslationEntry]) -> str:
    """Serialize normalized messages to the cache artifact format."""
    payload: dict[str, object] = {}
    for key, entry in messages.items():
        if isinstance(entry, str):
            payload[key] = entry
        else:
            payload[key] = [[form, variant] for form, variant in entry.items()]
    return json.dumps(
        {"version": CACHE_FORMAT_VERSION, "messages": payload},
        ensure_ascii=False,
        separators=(",", ":"),
    )


def decode_cache(text: str) -> Messages:
    """Deserialize a cache artifact.

    Args:
        text: Cache artifact content

    Returns:
        Normalized messages

    Raises:
        ValueError: If the artifact is malformed or has another format version
    """
    document = json.loads(text)
    if not isinstance(document, dict) or document.get("version") != CACHE_FORMAT_VERSION:
        msg = "Cache artifact has an unsupported format version"
        raise ValueError(msg)

    payload = document.get("messages")
    if not isinstance(payload, dict):
        msg = "Cache artifact has no messages object"
        raise ValueError(msg)

    messages: Messages = {}
    for key, value in payload.items():
        if isinstance(value, str):
            messages[key] = value
            continue
        if not isinstance(value, list):
            msg = f"Cache artifact entry '{key}' is malformed"
            raise ValueError(msg)
        forms: dict[FormKey, str] = {}
        for pair in value:
            match pair:
                case [int() as form, str() as variant] if not isinstance(form, bool):
                    forms[form] = variant
                case [str() as form, str() as variant] if form == ZERO_FORM:
                    forms[form] = variant
                case _:
                    msg = f"Cache artifact entry '{key}' is malformed"
                    raise ValueError(msg)
        messages[key] = MappingProxyType(forms)
    return messages


def write_atomic(path: Path, text: str) -> None:
    """Write text to path so readers see either the old or the new file.

    The content goes to a temporary file in the destination directory, is
    flushed to disk, then renamed over the destination.

    Args:
        path: Destination file
        text: Content (UTF-8)

    Raises:
        OSError: If the temporary file cannot be written or renamed
        UnicodeEncodeError: If text holds characters UTF-8 cannot encode
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
