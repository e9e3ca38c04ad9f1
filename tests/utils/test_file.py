# topmark:header:start
#
#   project      : LicenseMark
#   file         : test_file.py
#   file_relpath : tests/utils/test_file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path helpers: relative display paths and common roots."""

from __future__ import annotations

from pathlib import Path

from licensemark.utils.file import common_root, compute_relpath


def test_compute_relpath_below_root(tmp_path: Path) -> None:
    assert compute_relpath(tmp_path / "a" / "b.cs", tmp_path) == Path("a/b.cs")


def test_compute_relpath_outside_root(tmp_path: Path) -> None:
    (tmp_path / "x").mkdir()
    rel = compute_relpath(tmp_path / "y.cs", tmp_path / "x")
    assert rel == Path("../y.cs")


def test_common_root(tmp_path: Path) -> None:
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    file_a = tmp_path / "a" / "one.cs"
    file_a.write_text("", encoding="utf-8")
    assert common_root([file_a]) == (tmp_path / "a").resolve()
    assert common_root([file_a, tmp_path / "b"]) == tmp_path.resolve()


def test_common_root_defaults_to_cwd() -> None:
    assert common_root([]) == Path.cwd().resolve()
