# topmark:header:start
#
#   project      : LicenseMark
#   file         : test_strip.py
#   file_relpath : tests/cli/test_strip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `strip` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.cli.conftest import (
    CS_HEADER,
    assert_SUCCESS,
    assert_WOULD_CHANGE,
    make_project,
    read,
    run_cli_in,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.cli


def test_strip_dry_run(tmp_path: Path) -> None:
    make_project(tmp_path, {"a.cs": CS_HEADER + "\nclass A {}\n"})
    result = run_cli_in(tmp_path, ["strip", "a.cs"])
    assert_WOULD_CHANGE(result)
    assert "a.cs: remove needed" in result.output
    assert read(tmp_path / "a.cs") == CS_HEADER + "\nclass A {}\n"


def test_strip_apply_needs_no_definition_file(tmp_path: Path) -> None:
    make_project(
        tmp_path,
        {
            "a.cs": CS_HEADER + "\nclass A {}\n",
            "lib/b.py": "#!/usr/bin/env python\n# License: MIT\nprint('b')\n",
            "lib/c.cs": "class C {}\n",
        },
    )
    result = run_cli_in(tmp_path, ["strip", "--apply", "."])
    assert_SUCCESS(result)
    assert "2 header removed" in result.output
    assert read(tmp_path / "a.cs") == "class A {}\n"
    assert read(tmp_path / "lib" / "b.py") == "#!/usr/bin/env python\nprint('b')\n"
    assert read(tmp_path / "lib" / "c.cs") == "class C {}\n"

    assert_SUCCESS(run_cli_in(tmp_path, ["strip", "."]))


def test_strip_keeps_comment_without_keyword(tmp_path: Path) -> None:
    make_project(tmp_path, {"a.cs": "// TODO: refactor\nclass A {}\n"})
    assert_SUCCESS(run_cli_in(tmp_path, ["strip", "--apply", "a.cs"]))
    assert read(tmp_path / "a.cs") == "// TODO: refactor\nclass A {}\n"


def test_strip_without_keywords_removes_any_comment(tmp_path: Path) -> None:
    make_project(tmp_path, {"a.cs": "// TODO: refactor\nclass A {}\n"})
    assert_SUCCESS(run_cli_in(tmp_path, ["strip", "--apply", "--no-keywords", "a.cs"]))
    assert read(tmp_path / "a.cs") == "class A {}\n"


def test_strip_diff(tmp_path: Path) -> None:
    make_project(tmp_path, {"a.cs": CS_HEADER + "class A {}\n"})
    result = run_cli_in(tmp_path, ["strip", "--diff", "a.cs"])
    assert_WOULD_CHANGE(result)
    assert "-// Copyright (c) Acme" in result.output
