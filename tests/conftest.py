# topmark:header:start
#
#   project      : LicenseMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the LicenseMark test suite.

Sets up TRACE logging for the whole run and provides small builders shared by
the test packages.

Notes:
    Build configs with `licensemark.config.MutableConfig`, then `freeze()`
    them. A frozen `Config` is never mutated; build a new draft instead.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from licensemark.config import MutableConfig
from licensemark.config import logging as lm_logging
from licensemark.constants import LOG_LEVEL_ENV_VAR
from licensemark.headers.buffer import TextBuffer
from licensemark.headers.document import HeaderDocument
from licensemark.languages.registry import build_language_registry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from licensemark.config import Config
    from licensemark.languages.base import Language
    from licensemark.languages.registry import LanguageRegistry

F = TypeVar("F", bound=Callable[..., object])


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""

    def _decorator(func: F) -> F:
        return cast("F", pytest.hookimpl(*args, **kwargs)(func))

    return _decorator


@pytest.fixture(autouse=True)
def silence_licensemark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests."""
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    lm_logging.setup_logging(level=lm_logging.TRACE_LEVEL)


_REGISTRY: LanguageRegistry | None = None


def registry() -> LanguageRegistry:
    """Return the built-in language table (built once per run)."""
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = build_language_registry()
    return _REGISTRY


def language(name: str) -> Language:
    """Return the built-in language called ``name``."""
    found: Language | None = registry().get(name)
    assert found is not None, name
    return found


def make_document(
    text: str,
    lang: str,
    header: Sequence[str] | None,
    *,
    keywords: Sequence[str] | None = None,
) -> HeaderDocument:
    """Return a `HeaderDocument` over an in-memory buffer holding ``text``."""
    return HeaderDocument(TextBuffer(text), language(lang), header, keywords=keywords)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and CLI-style overrides."""
    draft: MutableConfig = MutableConfig.from_defaults()
    if overrides:
        draft = draft.apply_cli_args(overrides)
    return draft.freeze()
