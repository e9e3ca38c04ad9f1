# topmark:header:start
#
#   project      : LicenseMark
#   file         : test_languages.py
#   file_relpath : tests/cli/test_languages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `languages` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from licensemark.cli.exit_codes import ExitCode
from tests.cli.conftest import assert_SUCCESS, make_project, run_cli_in

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.cli


def test_lists_builtin_languages(tmp_path: Path) -> None:
    make_project(tmp_path, {})
    result = run_cli_in(tmp_path, ["languages"])
    assert_SUCCESS(result)
    lines = result.output.splitlines()
    csharp = next(line for line in lines if line.startswith("csharp"))
    assert ".cs" in csharp
    assert "#region / #endregion" in csharp
    assert any(line.startswith("vb") for line in lines)


def test_verbose_shows_skip_expression(tmp_path: Path) -> None:
    make_project(tmp_path, {})
    result = run_cli_in(tmp_path, ["-v", "languages"])
    assert_SUCCESS(result)
    assert "skip: #!.*" in result.output


def test_configured_language_is_listed(tmp_path: Path) -> None:
    make_project(tmp_path, {})
    (tmp_path / "licensemark.toml").write_text(
        'root = true\n[[languages]]\nname = "nim"\nextensions = [".nim"]\nline_comment = "#"\n',
        encoding="utf-8",
    )
    result = run_cli_in(tmp_path, ["languages"])
    assert_SUCCESS(result)
    assert any(line.startswith("nim") and ".nim" in line for line in result.output.splitlines())

    ignored = run_cli_in(tmp_path, ["languages", "--no-config"])
    assert not any(line.startswith("nim ") for line in ignored.output.splitlines())


def test_invalid_configured_language(tmp_path: Path) -> None:
    make_project(tmp_path, {})
    (tmp_path / "licensemark.toml").write_text(
        'root = true\n[[languages]]\nname = "x"\nextensions = [".x"]\nblock_start = "/*"\n',
        encoding="utf-8",
    )
    result = run_cli_in(tmp_path, ["languages"])
    assert result.exit_code == ExitCode.CONFIG_ERROR
