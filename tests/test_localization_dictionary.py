"""Tests for lazily loaded dictionaries.

Covers:
- Lazy first load and load-once semantics
- Cache artifact generation, reuse and regeneration
- Survival of source deletion after the first load
- Source -> cache round trip equality (process restart simulation)
- Unwritable cache location and undecodable sources
- MemoryDictionary

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from translexengine.diagnostics import DiagnosticCode, SourceFileNotFoundError
from translexengine.enums import DictionarySource
from translexengine.localization import FileDictionary, MemoryDictionary
from translexengine.localization import codec
from translexengine.localization.codec import encode_cache

SOURCE = """\
Save: Uložit
file:
  - "%d soubor"
  - "%d soubory"
  - "%d souborů"
"""


@pytest.fixture
def source_path(write_source: Callable[[str, str], Path]) -> Path:
    return write_source("cs_CZ", SOURCE)


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cs_CZ.json"


class TestFileDictionaryLoading:
    """Load algorithm."""

    def test_missing_source_rejected_at_construction(self, tmp_path: Path) -> None:
        with pytest.raises(SourceFileNotFoundError) as exc_info:
            FileDictionary(tmp_path / "xx_XX.yaml", tmp_path / "xx_XX.json")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.SOURCE_FILE_NOT_FOUND
        assert "xx_XX.yaml" in str(exc_info.value)

    def test_construction_does_not_load(self, source_path: Path, cache_path: Path) -> None:
        dictionary = FileDictionary(source_path, cache_path)

        assert not dictionary.loaded
        assert dictionary.load_source is None
        assert not cache_path.exists()

    def test_first_load_reads_source_and_writes_cache(
        self, source_path: Path, cache_path: Path
    ) -> None:
        dictionary = FileDictionary(source_path, cache_path)

        assert dictionary.get("Save") == "Uložit"
        assert dictionary.load_source is DictionarySource.SOURCE
        assert cache_path.is_file()

    def test_existing_cache_is_preferred(self, source_path: Path, cache_path: Path) -> None:
        cache_path.write_text(encode_cache({"Save": "Cached"}), encoding="utf-8")
        dictionary = FileDictionary(source_path, cache_path)

        assert dictionary.get("Save") == "Cached"
        assert dictionary.load_source is DictionarySource.CACHE

    def test_cache_hit_skips_yaml(self, source_path: Path, cache_path: Path) -> None:
        FileDictionary(source_path, cache_path).has("Save")

        with patch("translexengine.localization.dictionary.decode_source") as decode:
            assert FileDictionary(source_path, cache_path).has("Save")

        decode.assert_not_called()

    def test_has_and_get(self, source_path: Path, cache_path: Path) -> None:
        dictionary = FileDictionary(source_path, cache_path)

        assert dictionary.has("file")
        assert not dictionary.has("missing")
        assert "Save" in dictionary
        assert len(dictionary) == 2
        assert list(dictionary.keys()) == ["Save", "file"]
        with pytest.raises(KeyError):
            dictionary.get("missing")

    def test_messages_are_read_only(self, source_path: Path, cache_path: Path) -> None:
        messages = FileDictionary(source_path, cache_path).messages
        with pytest.raises(TypeError):
            messages["Save"] = "x"  # type: ignore[index]


class TestFileDictionaryIdempotence:
    """Load once, never reload."""

    def test_survives_source_and_cache_deletion(
        self, source_path: Path, cache_path: Path
    ) -> None:
        dictionary = FileDictionary(source_path, cache_path)
        first = dictionary.get("file")

        source_path.unlink()
        cache_path.unlink()

        assert dictionary.get("file") == first
        assert dictionary.has("Save")

    def test_second_instance_loads_from_cache_after_source_deleted(
        self, source_path: Path, cache_path: Path
    ) -> None:
        FileDictionary(source_path, cache_path).has("Save")
        dictionary = FileDictionary(source_path, cache_path)
        source_path.unlink()

        assert dictionary.get("Save") == "Uložit"
        assert dictionary.load_source is DictionarySource.CACHE

    def test_source_read_once(self, source_path: Path, cache_path: Path) -> None:
        dictionary = FileDictionary(source_path, cache_path)

        with patch(
            "translexengine.localization.dictionary.decode_source",
            wraps=codec.decode_source,
        ) as decode:
            for _ in range(3):
                dictionary.get("Save")
                dictionary.has("file")

        assert decode.call_count == 1


class TestFileDictionaryRoundTrip:
    """Source load and cache load agree."""

    def test_round_trip_equality(self, source_path: Path, cache_path: Path) -> None:
        from_source = FileDictionary(source_path, cache_path)
        source_messages = {k: _plain(v) for k, v in from_source.messages.items()}

        from_cache = FileDictionary(source_path, cache_path)
        cache_messages = {k: _plain(v) for k, v in from_cache.messages.items()}

        assert from_cache.load_source is DictionarySource.CACHE
        assert cache_messages == source_messages
        assert list(cache_messages) == list(source_messages)

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=50)
    @given(
        messages=st.dictionaries(
            st.text(min_size=1, max_size=12),
            st.one_of(
                st.text(max_size=20),
                st.lists(st.text(max_size=20), min_size=1, max_size=4),
            ),
            max_size=8,
        )
    )
    def test_round_trip_property(self, tmp_path: Path, messages: dict[str, object]) -> None:
        """Property: cache artifact reproduces the in-memory mapping."""
        source = tmp_path / "rt.yaml"
        cache = tmp_path / "rt.json"
        cache.unlink(missing_ok=True)
        source.write_text("placeholder: x\n", encoding="utf-8")

        expected = dict(MemoryDictionary(messages).messages)
        with patch(
            "translexengine.localization.dictionary.decode_source", return_value=expected
        ):
            first = dict(FileDictionary(source, cache).messages)
        second = dict(FileDictionary(source, cache).messages)

        assert {k: _plain(v) for k, v in second.items()} == {
            k: _plain(v) for k, v in first.items()
        }


class TestFileDictionaryRecovery:
    """Degraded storage never fails the load."""

    def test_corrupt_cache_is_regenerated(
        self, source_path: Path, cache_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        cache_path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            dictionary = FileDictionary(source_path, cache_path)
            assert dictionary.get("Save") == "Uložit"

        assert dictionary.load_source is DictionarySource.SOURCE
        assert "invalid cache artifact" in caplog.text
        regenerated = FileDictionary(source_path, cache_path)
        regenerated.has("Save")
        assert regenerated.load_source is DictionarySource.CACHE

    def test_stale_cache_version_is_regenerated(
        self, source_path: Path, cache_path: Path
    ) -> None:
        cache_path.write_text('{"version": 0, "messages": {"Save": "old"}}', encoding="utf-8")
        assert FileDictionary(source_path, cache_path).get("Save") == "Uložit"

    def test_unwritable_cache_location_still_loads(
        self, source_path: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        cache_path = tmp_path / "missing-dir" / "cs_CZ.json"

        with caplog.at_level(logging.WARNING):
            dictionary = FileDictionary(source_path, cache_path)
            assert dictionary.get("Save") == "Uložit"

        assert "Cannot write cache artifact" in caplog.text
        assert not cache_path.exists()

    def test_invalid_source_yields_empty_dictionary(
        self, write_source: Callable[[str, str], Path], cache_path: Path
    ) -> None:
        dictionary = FileDictionary(write_source("cs_CZ", "a: [b"), cache_path)

        assert not dictionary.has("a")
        assert len(dictionary) == 0

    def test_deeply_nested_source_yields_empty_dictionary(
        self, write_source: Callable[[str, str], Path], cache_path: Path
    ) -> None:
        text = "Save: ok\nk: " + "[" * 5000 + "]" * 5000 + "\n"
        dictionary = FileDictionary(write_source("cs_CZ", text), cache_path)

        assert not dictionary.has("Save")
        assert len(dictionary) == 0

    def test_unencodable_source_text_skips_cache_write(
        self,
        write_source: Callable[[str, str], Path],
        cache_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        source = write_source("cs_CZ", 'bad: "\\ud800"\nSave: Uložit\n')

        with caplog.at_level(logging.WARNING):
            dictionary = FileDictionary(source, cache_path)
            assert dictionary.get("Save") == "Uložit"

        assert dictionary.loaded
        assert "Cannot write cache artifact" in caplog.text
        assert sorted(p.name for p in cache_path.parent.iterdir()) == ["translations"]

        with patch("translexengine.localization.dictionary.write_atomic") as write:
            assert dictionary.has("bad")
        write.assert_not_called()

    def test_non_utf8_source_yields_empty_dictionary(
        self, tmp_path: Path, cache_path: Path
    ) -> None:
        source = tmp_path / "cs_CZ.yaml"
        source.write_bytes(b"Save: \xff\xfe\n")

        assert len(FileDictionary(source, cache_path)) == 0

    def test_source_deleted_before_first_load(
        self, source_path: Path, cache_path: Path
    ) -> None:
        dictionary = FileDictionary(source_path, cache_path)
        source_path.unlink()

        with pytest.raises(SourceFileNotFoundError):
            dictionary.has("Save")


class TestMemoryDictionary:
    """In-memory dictionaries."""

    def test_normalizes_lists(self) -> None:
        dictionary = MemoryDictionary({"cat": ["%d cat", "%d cats"]})
        assert dict(dictionary.get("cat")) == {0: "%d cat", 1: "%d cats"}  # type: ignore[arg-type]
        assert dictionary.load_source is DictionarySource.MEMORY

    def test_is_lazy(self) -> None:
        dictionary = MemoryDictionary({"a": "b"})
        assert not dictionary.loaded
        assert dictionary.has("a")
        assert dictionary.loaded

    def test_later_mutation_of_input_after_load_is_ignored(self) -> None:
        raw = {"a": "b"}
        dictionary = MemoryDictionary(raw)
        dictionary.has("a")
        raw["a"] = "changed"

        assert dictionary.get("a") == "b"


def _plain(entry: object) -> object:
    return entry if isinstance(entry, str) else list(dict(entry).items())  # type: ignore[call-overload]
