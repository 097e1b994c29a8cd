"""Enumerations for translexengine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class DictionarySource(StrEnum):
    """Where a Dictionary obtained its messages on first load.

    StrEnum provides automatic string conversion: str(DictionarySource.CACHE) == "cache"
    """

    CACHE = "cache"
    """Deserialized from the precompiled cache artifact (fast path)."""

    SOURCE = "source"
    """Decoded from the human-edited source artifact; cache artifact regenerated."""

    MEMORY = "memory"
    """Supplied directly as an in-memory mapping."""


__all__ = [
    "DictionarySource",
]
