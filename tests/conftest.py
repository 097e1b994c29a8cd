"""Pytest configuration for the translexengine test suite.

Hypothesis profiles:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback, derandomized)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Shared fixtures build translation directories on ``tmp_path`` and collect
translator warnings.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from tests.helpers.collaborators import RecordingLogger
from translexengine.localization import FileDictionaryFactory
from translexengine.runtime import LocaleContext, PluralRuleEvaluator, Translator

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect the Hypothesis profile for the execution context."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FIXTURES
# =============================================================================


EN_US_SOURCE = """\
Save: Save
cat:
  - "%d cat"
  - "%d cats"
missing_plural:
  - "%d thing"
empty: ""
item:
  zero: "no items"
  0: "%d item"
  1: "%d items"
only_zero:
  zero: "nothing"
greeting: "Hello %s, you have %d messages"
label: "%label: %s"
"""

FR_FR_SOURCE = """\
Save: Enregistrer
cat:
  - "%d chat"
  - "%d chats"
"""

CS_CZ_SOURCE = """\
Save: Uložit
file:
  - "%d soubor"
  - "%d soubory"
  - "%d souborů"
"""


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``{locale}.yaml`` into the source directory."""
    source_dir = tmp_path / "translations"
    source_dir.mkdir(exist_ok=True)

    def _write(locale: str, text: str) -> Path:
        path = source_dir / f"{locale}.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def source_dir(tmp_path: Path, write_source: Callable[[str, str], Path]) -> Path:
    """Source directory holding en_US, fr_FR and cs_CZ translations."""
    write_source("en_US", EN_US_SOURCE)
    write_source("fr_FR", FR_FR_SOURCE)
    write_source("cs_CZ", CS_CZ_SOURCE)
    return tmp_path / "translations"


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Cache directory (not created up front)."""
    return tmp_path / "cache" / "translations"


@pytest.fixture
def factory(source_dir: Path, cache_dir: Path) -> FileDictionaryFactory:
    return FileDictionaryFactory(source_dir, cache_dir)


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def translator(factory: FileDictionaryFactory, recorder: RecordingLogger) -> Translator:
    """en_US translator over the shared fixture files, warnings recorded."""
    return Translator(factory, locale="en_US", logger=recorder)


@pytest.fixture
def evaluator() -> PluralRuleEvaluator:
    return PluralRuleEvaluator()


@pytest.fixture(autouse=True)
def _clear_locale_context_cache() -> None:
    """Isolate LocaleContext cache between tests."""
    LocaleContext.clear_cache()
