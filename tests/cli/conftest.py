# topmark:header:start
#
#   project      : LicenseMark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running LicenseMark in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so relative paths, the default project root
(the current directory) and config discovery all resolve against the test
directory.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from licensemark.cli.exit_codes import ExitCode
from licensemark.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path

CS_DEFINITION: str = "extensions: .cs\n// Copyright (c) Acme\n// Licensed under MIT\n"
CS_HEADER: str = "// Copyright (c) Acme\n// Licensed under MIT\n"


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["check", "--apply", "."]``.
        input_text (str | bytes | IO[Any] | None): Standard input (answers to prompts).

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def make_project(tmp_path: Path, files: dict[str, str]) -> Path:
    """Write ``files`` (relative path -> text) below ``tmp_path``.

    A ``licensemark.toml`` with ``root = true`` is added so config discovery
    never leaves the test directory.
    """
    (tmp_path / "licensemark.toml").write_text("root = true\n", encoding="utf-8")
    for rel, text in files.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="")
    return tmp_path


def read(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    """Assert that the command exited with WOULD_CHANGE (code 2)."""
    # WOULD_CHANGE is a normal outcome; do not assert on exception.
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
