# topmark:header:start
#
#   project      : LicenseMark
#   file         : test_registry.py
#   file_relpath : tests/languages/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for comment grammars and the language table."""

from __future__ import annotations

from typing import Any

import pytest

from licensemark.core.errors import CommentSyntaxError
from licensemark.languages.base import CommentSyntax, make_language, normalize_extension
from licensemark.languages.builtins import LANGUAGES
from licensemark.languages.registry import (
    LanguageRegistry,
    build_language_registry,
    language_from_mapping,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("cs", ".cs"), (".cs", ".cs"), ("  Designer.cs ", ".Designer.cs")],
)
def test_normalize_extension(raw: str, expected: str) -> None:
    assert normalize_extension(raw) == expected


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"block_start": "/*"},
        {"line_comment": "//", "block_end": "*/"},
        {"line_comment": "//", "region_start": "#region"},
        {"line_comment": "//", "skip_expression": "(unclosed"},
    ],
)
def test_invalid_comment_syntax(kwargs: dict[str, str]) -> None:
    with pytest.raises(CommentSyntaxError):
        CommentSyntax(**kwargs)


def test_empty_strings_mean_not_configured() -> None:
    syntax = CommentSyntax(line_comment="#", block_start="", block_end="")
    assert not syntax.has_blocks
    assert not syntax.has_regions
    assert syntax.skip_pattern is None


def test_language_requires_extensions() -> None:
    with pytest.raises(CommentSyntaxError):
        make_language("empty", ["  "], line_comment="#")


def test_builtin_names_are_unique() -> None:
    names = [lang.name for lang in LANGUAGES]
    assert len(names) == len(set(names))


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("Program.cs", "csharp"),
        ("PROGRAM.CS", "csharp"),
        ("main.h", "c"),
        ("app.tsx", "javascript"),
        ("Web.config", "xml"),
        ("page.cshtml", "html"),
        ("schema.sql", "sql"),
        ("build.sh", "shell"),
        ("setup.py", "python"),
    ],
)
def test_builtin_lookup(file_name: str, expected: str) -> None:
    found = build_language_registry().lookup(file_name)
    assert found is not None
    assert found.name == expected


def test_lookup_unknown_extension() -> None:
    assert build_language_registry().lookup("README") is None
    assert build_language_registry().lookup("notes.txt") is None


def test_longest_extension_wins_across_languages() -> None:
    registry = LanguageRegistry(
        [
            make_language("short", [".cs"], line_comment="//"),
            make_language("long", [".designer.cs"], line_comment="'"),
        ]
    )
    found = registry.lookup("Form1.Designer.cs")
    assert found is not None
    assert found.name == "long"


def test_registration_order_breaks_ties() -> None:
    registry = LanguageRegistry(
        [
            make_language("first", [".x"], line_comment="//"),
            make_language("second", [".x"], line_comment="#"),
        ]
    )
    found = registry.lookup("a.x")
    assert found is not None
    assert found.name == "first"


def test_config_entry_overrides_builtin_in_place() -> None:
    entry: dict[str, Any] = {
        "name": "python",
        "extensions": [".py", ".pyx"],
        "line_comment": "#",
        "description": "Python and Cython",
    }
    registry = build_language_registry([entry])
    names = [lang.name for lang in registry]
    assert names == [lang.name for lang in LANGUAGES]
    python = registry.get("python")
    assert python is not None
    assert python.extensions == (".py", ".pyx")
    assert python.syntax.skip_pattern is None


def test_config_entry_appends_new_language() -> None:
    entry: dict[str, Any] = {
        "name": "nim",
        "extensions": "nim nims",
        "line_comment": "#",
        "block_start": "#[",
        "block_end": "]#",
    }
    registry = build_language_registry([entry], include_builtins=False)
    assert len(registry) == 1
    assert "nim" in registry
    found = registry.lookup("build.nims")
    assert found is not None
    assert found.syntax.block_end == "]#"


@pytest.mark.parametrize(
    "entry",
    [
        {"extensions": [".x"], "line_comment": "#"},
        {"name": "x", "extensions": 3, "line_comment": "#"},
        {"name": "x", "extensions": [".x"], "line_comment": 5},
        {"name": "x", "extensions": [".x"]},
    ],
)
def test_invalid_config_entries(entry: dict[str, Any]) -> None:
    with pytest.raises(CommentSyntaxError):
        language_from_mapping(entry)
