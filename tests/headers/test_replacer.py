# topmark:header:start
#
#   project      : LicenseMark
#   file         : test_replacer.py
#   file_relpath : tests/headers/test_replacer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `LicenseHeaderReplacer`: result codes, batches and directory walks."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from licensemark.headers.buffer import FileBuffer
from licensemark.headers.definitions import HeaderDefinitionSet, parse_definition_text
from licensemark.headers.replacer import BatchContext, LicenseHeaderReplacer
from licensemark.headers.status import HeaderAction, ReplaceResult
from tests.conftest import make_config, registry

if TYPE_CHECKING:
    from pathlib import Path

    from licensemark.config import Config

CS_DEFS: str = "extensions: .cs\n// Copyright (c) Acme\nextensions: designer.cs\n"


def make_replacer(root: Path, config: Config | None = None, **kwargs: object) -> LicenseHeaderReplacer:
    return LicenseHeaderReplacer(registry(), config or make_config(), root=root, **kwargs)  # type: ignore[arg-type]


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")
    return path


def read(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


# ---- try_create_document ---------------------------------------------------------------------


def test_result_for_directory_and_missing_file(tmp_path: Path) -> None:
    replacer = make_replacer(tmp_path)
    defs = parse_definition_text(CS_DEFS)
    assert replacer.try_create_document(tmp_path, defs) == (ReplaceResult.NOT_A_PHYSICAL_FILE, None)
    assert replacer.try_create_document(tmp_path / "nope.cs", defs)[0] == (
        ReplaceResult.NOT_A_PHYSICAL_FILE
    )


def test_definition_file_is_never_processed(tmp_path: Path) -> None:
    path = write(tmp_path / "Acme.licenseheader", CS_DEFS)
    result, doc = make_replacer(tmp_path).try_create_document(path, parse_definition_text(CS_DEFS))
    assert result == ReplaceResult.IS_HEADER_DEFINITION_FILE_ITSELF
    assert doc is None


def test_binary_file_has_no_text_representation(tmp_path: Path) -> None:
    path = tmp_path / "blob.cs"
    path.write_bytes(b"\x00\x01")
    result, _ = make_replacer(tmp_path).try_create_document(path, parse_definition_text(CS_DEFS))
    assert result == ReplaceResult.NO_TEXT_REPRESENTATION


def test_unknown_language(tmp_path: Path) -> None:
    path = write(tmp_path / "notes.txt", "hello\n")
    result, _ = make_replacer(tmp_path).try_create_document(path, parse_definition_text(CS_DEFS))
    assert result == ReplaceResult.LANGUAGE_NOT_RECOGNIZED


def test_known_language_without_template(tmp_path: Path) -> None:
    path = write(tmp_path / "app.js", "code();\n")
    result, _ = make_replacer(tmp_path).try_create_document(path, parse_definition_text(CS_DEFS))
    assert result == ReplaceResult.LANGUAGE_NOT_RECOGNIZED


def test_blank_template_disables_headers(tmp_path: Path) -> None:
    path = write(tmp_path / "Form1.Designer.cs", "partial class Form1 {}\n")
    result, _ = make_replacer(tmp_path).try_create_document(path, parse_definition_text(CS_DEFS))
    assert result == ReplaceResult.NO_APPLICABLE_HEADER_TEMPLATE


def test_empty_definition_set(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "class A {}\n")
    result, _ = make_replacer(tmp_path).try_create_document(path, HeaderDefinitionSet())
    assert result == ReplaceResult.NO_APPLICABLE_HEADER_TEMPLATE


def test_document_created(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "class A {}\n")
    result, doc = make_replacer(tmp_path).try_create_document(path, parse_definition_text(CS_DEFS))
    assert result is None
    assert doc is not None
    assert doc.language.name == "csharp"
    assert doc.header == "// Copyright (c) Acme"
    assert doc.keywords == ("license", "copyright", "(c)")


def test_remove_only_document(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "class A {}\n")
    _, doc = make_replacer(tmp_path).try_create_document(path, None)
    assert doc is not None
    assert doc.is_remove_only


# ---- single files ----------------------------------------------------------------------------


def test_dry_run_reports_without_writing(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "class A {}\n")
    batch = BatchContext(apply=False)
    outcome = make_replacer(tmp_path).remove_or_replace_header(
        path, parse_definition_text(CS_DEFS), batch
    )
    assert outcome.result == ReplaceResult.HEADER_APPLIED
    assert outcome.action == HeaderAction.INSERT
    assert outcome.would_change
    assert not outcome.written
    assert outcome.original == "class A {}\n"
    assert outcome.updated == "// Copyright (c) Acme\nclass A {}\n"
    assert read(path) == "class A {}\n"
    assert batch.changed == [outcome]


def test_apply_writes_and_is_idempotent(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "// Copyright 1999 Old\r\nclass A {}\r\n")
    replacer = make_replacer(tmp_path)
    defs = parse_definition_text(CS_DEFS)

    first = replacer.remove_or_replace_header(path, defs, BatchContext(apply=True))
    assert first.result == ReplaceResult.HEADER_APPLIED
    assert first.action == HeaderAction.REPLACE
    assert first.written
    assert read(path) == "// Copyright (c) Acme\r\nclass A {}\r\n"

    second = replacer.remove_or_replace_header(path, defs, BatchContext(apply=True))
    assert second.result == ReplaceResult.NO_OPERATION_NEEDED
    assert not second.written


def test_remove_only_mode(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "// Copyright (c) Acme\n\nclass A {}\n")
    outcome = make_replacer(tmp_path).remove_or_replace_header(path, None, BatchContext(apply=True))
    assert outcome.result == ReplaceResult.HEADER_REMOVED
    assert read(path) == "class A {}\n"


def test_project_name_and_clock_tokens(tmp_path: Path) -> None:
    root = tmp_path / "acme-tools"
    path = write(root / "a.cs", "class A {}\n")
    defs = parse_definition_text("extensions: .cs\n// (c) %CurrentYear% %Project%\n")
    replacer = make_replacer(root, clock=lambda: datetime(2030, 1, 2))
    replacer.remove_or_replace_header(path, defs, BatchContext(apply=True))
    assert read(path) == "// (c) 2030 acme-tools\nclass A {}\n"

    named = make_replacer(root, make_config(project_name="Acme"))
    assert named.project_name == "Acme"


def test_invalid_header_decision_asked_once_per_extension(tmp_path: Path) -> None:
    first = write(tmp_path / "a.cs", "/* unterminated\nclass A {}\n")
    second = write(tmp_path / "b.cs", "/* unterminated\nclass B {}\n")
    asked: list[str] = []

    def decline(extension: str) -> bool:
        asked.append(extension)
        return False

    batch = BatchContext(apply=True, decide_invalid=decline)
    replacer = make_replacer(tmp_path)
    defs = parse_definition_text(CS_DEFS)
    for path in (first, second):
        outcome = replacer.remove_or_replace_header(path, defs, batch)
        assert outcome.skipped_invalid
        assert outcome.result == ReplaceResult.NO_OPERATION_NEEDED
    assert asked == [".cs"]
    assert read(first) == "/* unterminated\nclass A {}\n"


def test_invalid_header_replaced_when_accepted(tmp_path: Path) -> None:
    path = write(tmp_path / "a.cs", "/* unterminated\n")
    batch = BatchContext(apply=True, decide_invalid=lambda _ext: True)
    outcome = make_replacer(tmp_path).remove_or_replace_header(
        path, parse_definition_text(CS_DEFS), batch
    )
    assert outcome.result == ReplaceResult.HEADER_APPLIED
    assert read(path) == "// Copyright (c) Acme\n\n/* unterminated\n"


def test_region_around_usings_is_not_an_invalid_header(tmp_path: Path) -> None:
    text = "#region Using directives\nusing System;\n#endregion\nclass A {}\n"
    path = write(tmp_path / "a.cs", text)
    asked: list[str] = []

    def decline(extension: str) -> bool:
        asked.append(extension)
        return False

    batch = BatchContext(apply=True, decide_invalid=decline)
    outcome = make_replacer(tmp_path).remove_or_replace_header(
        path, parse_definition_text(CS_DEFS), batch
    )
    assert not outcome.skipped_invalid
    assert asked == []
    assert outcome.result == ReplaceResult.HEADER_APPLIED
    assert read(path) == "// Copyright (c) Acme\n\n" + text


def test_process_file_records_write_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = write(tmp_path / "a.cs", "class A {}\n")

    def fail(_self: FileBuffer) -> None:
        raise PermissionError("read-only")

    monkeypatch.setattr(FileBuffer, "save", fail)
    batch = BatchContext(apply=True)
    outcome = make_replacer(tmp_path).process_file(path, parse_definition_text(CS_DEFS), batch)
    assert outcome.error is not None
    assert "read-only" in outcome.error
    assert batch.errors == [outcome]


# ---- directory trees -------------------------------------------------------------------------


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write(tmp_path / "root.licenseheader", "extensions: .cs\n// Copyright (c) Root\n")
    write(tmp_path / "a.cs", "class A {}\n")
    write(tmp_path / "notes.txt", "notes\n")
    write(tmp_path / "sub" / "sub.licenseheader", "extensions: .cs\n// Copyright (c) Sub\n")
    write(tmp_path / "sub" / "b.cs", "// Copyright old\nclass B {}\n")
    write(tmp_path / ".hidden" / "c.cs", "class C {}\n")
    write(tmp_path / "generated" / "d.cs", "class D {}\n")
    return tmp_path


def test_recursive_walk_uses_nearest_definitions(project: Path) -> None:
    replacer = make_replacer(project, make_config(exclude_patterns=["generated/"]))
    batch = BatchContext(apply=True)
    found = replacer.remove_or_replace_header_recursive(project, None, batch)

    assert found == 2
    assert read(project / "a.cs") == "// Copyright (c) Root\nclass A {}\n"
    assert read(project / "sub" / "b.cs") == "// Copyright (c) Sub\nclass B {}\n"
    assert read(project / ".hidden" / "c.cs") == "class C {}\n"
    assert read(project / "generated" / "d.cs") == "class D {}\n"

    results = {o.path.name: o.result for o in batch.outcomes}
    assert results["notes.txt"] == ReplaceResult.LANGUAGE_NOT_RECOGNIZED
    assert results["root.licenseheader"] == ReplaceResult.IS_HEADER_DEFINITION_FILE_ITSELF
    assert "c.cs" not in results
    assert "d.cs" not in results
    assert len(batch.changed) == 2


def test_recursive_walk_without_definition_search(project: Path) -> None:
    defs = parse_definition_text("extensions: .cs\n// Copyright (c) Given\n")
    batch = BatchContext(apply=False)
    found = make_replacer(project).remove_or_replace_header_recursive(
        project, defs, batch, search_for_definitions=False
    )
    assert found == 0
    updated = {o.path.name: o.updated for o in batch.changed}
    assert updated["b.cs"] == "// Copyright (c) Given\nclass B {}\n"
    assert updated["d.cs"] == "// Copyright (c) Given\nclass D {}\n"


def test_recursive_walk_stops_when_cancelled(project: Path) -> None:
    batch = BatchContext(apply=True)
    batch.cancelled = lambda: len(batch.outcomes) >= 1
    make_replacer(project).remove_or_replace_header_recursive(project, None, batch)
    assert [o.path.name for o in batch.outcomes] == ["a.cs"]
    assert read(project / "sub" / "b.cs") == "// Copyright old\nclass B {}\n"


def test_unreadable_definition_file_keeps_inherited_set(tmp_path: Path) -> None:
    write(tmp_path / "broken.licenseheader", "extensions: .cs\n// header\n")
    inherited = parse_definition_text(CS_DEFS)
    replacer = make_replacer(tmp_path, make_config(definition_encoding="no-such-codec"))
    defs, own = replacer.load_scope_definitions(tmp_path, inherited)
    assert defs is inherited
    assert not own


def test_exclusion_matches_relative_paths(project: Path) -> None:
    replacer = make_replacer(project, make_config(exclude_patterns=["*.txt", "sub/b.cs"]))
    assert replacer.is_excluded(project / "notes.txt")
    assert replacer.is_excluded(project / "sub" / "b.cs")
    assert not replacer.is_excluded(project / "a.cs")
    assert not make_replacer(project).is_excluded(project / "notes.txt")
