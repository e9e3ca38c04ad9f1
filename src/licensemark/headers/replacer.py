# topmark:header:start
#
#   project      : LicenseMark
#   file         : replacer.py
#   file_relpath : src/licensemark/headers/replacer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Apply header definitions to files and directory trees.

[`LicenseHeaderReplacer`][licensemark.headers.replacer.LicenseHeaderReplacer]
turns files on disk into [`HeaderDocument`][licensemark.headers.document.HeaderDocument]
objects and runs the replacement engine on them, one file at a time.

Per-batch state (answers to "replace this invalid header anyway?", the
cancellation check, dry-run vs. apply, collected outcomes) lives in a
[`BatchContext`][licensemark.headers.replacer.BatchContext] passed through every
call; the replacer itself holds no mutable state between files.

Passing ``headers=None`` selects remove-only mode: recognized headers are
stripped and nothing is inserted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.core.errors import DefinitionFileError, HeaderMutationError
from licensemark.headers.buffer import FileBuffer
from licensemark.headers.definitions import (
    HeaderDefinitionSet,
    find_definition_file,
    is_definition_file,
    load_definition_file,
)
from licensemark.headers.document import HeaderDocument
from licensemark.headers.status import HeaderAction, ReplaceResult
from licensemark.headers.template import ExpansionContext

if TYPE_CHECKING:
    from datetime import datetime

    from licensemark.config.model import Config
    from licensemark.headers.definitions import HeaderTemplate
    from licensemark.headers.document import HeaderPlan
    from licensemark.languages.base import Language
    from licensemark.languages.registry import LanguageRegistry

logger: LicensemarkLogger = get_logger(__name__)

# Definition set used when no scope has a definition file: nothing applies.
EMPTY_DEFINITIONS: HeaderDefinitionSet = HeaderDefinitionSet()


@dataclass
class FileOutcome:
    """What happened to one file.

    Attributes:
        path (Path): The file.
        result (ReplaceResult): Result code.
        action (HeaderAction): Action the engine took (or would take in a dry run).
        original (str | None): Text before the change, for files that were read.
        updated (str | None): Text after the change, for changed files.
        written (bool): Whether the change was written to disk.
        skipped_invalid (bool): The header failed validation and the batch
            decided not to replace it.
        error (str | None): Message of a per-file failure.
    """

    path: Path
    result: ReplaceResult
    action: HeaderAction = HeaderAction.NONE
    original: str | None = None
    updated: str | None = None
    written: bool = False
    skipped_invalid: bool = False
    error: str | None = None

    @property
    def would_change(self) -> bool:
        """True when the file was (or would be) modified."""
        return self.result.is_change


def _never(_extension: str) -> bool:
    return False


def _not_cancelled() -> bool:
    return False


@dataclass
class BatchContext:
    """State shared by the files of one batch run.

    Attributes:
        apply (bool): Write changes to disk; False is a dry run.
        decide_invalid (Callable[[str], bool]): Asked once per file extension
            whether documents whose header fails validation should be changed
            anyway.
        cancelled (Callable[[], bool]): Checked between files; True stops the batch.
        invalid_answers (dict[str, bool]): Answers of ``decide_invalid`` by extension.
        outcomes (list[FileOutcome]): Outcomes recorded so far, in processing order.
    """

    apply: bool = False
    decide_invalid: Callable[[str], bool] = _never
    cancelled: Callable[[], bool] = _not_cancelled
    invalid_answers: dict[str, bool] = field(default_factory=lambda: {})
    outcomes: list[FileOutcome] = field(default_factory=lambda: [])

    def replace_invalid(self, extension: str) -> bool:
        """Return (and remember) whether invalid headers of ``extension`` are replaced."""
        key: str = extension.lower()
        if key not in self.invalid_answers:
            self.invalid_answers[key] = bool(self.decide_invalid(extension))
            logger.debug("Invalid header answer for %s: %s", extension, self.invalid_answers[key])
        return self.invalid_answers[key]

    def record(self, outcome: FileOutcome) -> FileOutcome:
        """Append ``outcome`` and return it."""
        self.outcomes.append(outcome)
        return outcome

    @property
    def changed(self) -> list[FileOutcome]:
        """Outcomes of files that were (or would be) modified."""
        return [o for o in self.outcomes if o.would_change]

    @property
    def errors(self) -> list[FileOutcome]:
        """Outcomes carrying an error."""
        return [o for o in self.outcomes if o.error is not None]


class LicenseHeaderReplacer:
    """Run the header engine over files.

    Args:
        languages (LanguageRegistry): The language table.
        config (Config): Runtime configuration (keywords, encoding, exclusions).
        root (Path | None): Project root: bounds definition lookup, anchors
            exclude patterns and names ``%Project%`` by default.
        clock (Callable[[], datetime] | None): Time source for ``%Current*%`` tokens.
    """

    def __init__(
        self,
        languages: LanguageRegistry,
        config: Config,
        *,
        root: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.languages: LanguageRegistry = languages
        self.config: Config = config
        self.root: Path | None = root.resolve() if root is not None else None
        self.clock: Callable[[], datetime] | None = clock
        self._exclude: PathSpec | None = (
            PathSpec.from_lines(GitWildMatchPattern, list(config.exclude_patterns))
            if config.exclude_patterns
            else None
        )

    # ---- helpers -------------------------------------------------------------------------------

    @property
    def project_name(self) -> str | None:
        """Configured project name, else the name of the project root directory."""
        if self.config.project_name:
            return self.config.project_name
        if self.root is not None:
            return self.root.name or None
        return None

    def is_excluded(self, path: Path) -> bool:
        """True when ``path`` matches one of the configured exclude patterns."""
        if self._exclude is None:
            return False
        resolved: Path = path.resolve()
        try:
            rel: str = resolved.relative_to(self.root).as_posix() if self.root else path.as_posix()
        except ValueError:
            rel = resolved.as_posix()
        if path.is_dir():
            rel += "/"
        return self._exclude.match_file(rel)

    def _context(self, path: Path) -> ExpansionContext:
        if self.clock is not None:
            return ExpansionContext(path=path, project_name=self.project_name, clock=self.clock)
        return ExpansionContext(path=path, project_name=self.project_name)

    # ---- single document -----------------------------------------------------------------------

    def try_create_document(
        self,
        path: Path,
        headers: HeaderDefinitionSet | None = None,
    ) -> tuple[ReplaceResult | None, HeaderDocument | None]:
        """Open ``path`` as a header document.

        Args:
            path (Path): The file.
            headers (HeaderDefinitionSet | None): Templates by extension, or None
                for remove-only mode.

        Returns:
            tuple[ReplaceResult | None, HeaderDocument | None]: ``(None, document)``
            when the document was created, else ``(reason, None)``.
        """
        if not path.is_file():
            return ReplaceResult.NOT_A_PHYSICAL_FILE, None

        # Never put headers into header definitions
        if is_definition_file(path):
            return ReplaceResult.IS_HEADER_DEFINITION_FILE_ITSELF, None

        try:
            buffer: FileBuffer | None = FileBuffer.load(path)
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return ReplaceResult.NO_TEXT_REPRESENTATION, None
        if buffer is None:
            return ReplaceResult.NO_TEXT_REPRESENTATION, None

        language: Language | None = self.languages.lookup(path.name)
        if language is None:
            return ReplaceResult.LANGUAGE_NOT_RECOGNIZED, None

        header_lines: HeaderTemplate | None = None
        if headers is not None:
            if len(headers) == 0:
                return ReplaceResult.NO_APPLICABLE_HEADER_TEMPLATE, None
            template: HeaderTemplate | None = headers.lookup(path.name)
            if template is None:
                return ReplaceResult.LANGUAGE_NOT_RECOGNIZED, None
            if all(not line.strip() for line in template):
                return ReplaceResult.NO_APPLICABLE_HEADER_TEMPLATE, None
            header_lines = template

        document = HeaderDocument(
            buffer,
            language,
            header_lines,
            keywords=self.config.effective_keywords,
            context=self._context(path),
        )
        return None, document

    def remove_or_replace_header(
        self,
        path: Path,
        headers: HeaderDefinitionSet | None,
        batch: BatchContext,
    ) -> FileOutcome:
        """Remove or replace the header of one file.

        Args:
            path (Path): The file.
            headers (HeaderDefinitionSet | None): Templates, or None for remove-only mode.
            batch (BatchContext): Batch state; the outcome is recorded there.

        Returns:
            FileOutcome: What happened to the file.

        Raises:
            HeaderMutationError: If the header edit could not be applied.
            OSError: If the file cannot be written.
        """
        result, document = self.try_create_document(path, headers)
        if document is None:
            assert result is not None
            logger.debug("%s: %s", path, result.value)
            return batch.record(FileOutcome(path=path, result=result))

        buffer = document.buffer
        assert isinstance(buffer, FileBuffer)
        original: str = buffer.text

        if not document.validate_header():
            extension: str = (headers.match_extension(path.name) if headers else None) or (
                path.suffix or path.name
            )
            if not batch.replace_invalid(extension):
                logger.info("%s: header is not valid for its language; skipped", path)
                return batch.record(
                    FileOutcome(
                        path=path,
                        result=ReplaceResult.NO_OPERATION_NEEDED,
                        original=original,
                        skipped_invalid=True,
                    )
                )

        plan: HeaderPlan = document.plan()
        if not plan.changes:
            return batch.record(
                FileOutcome(path=path, result=ReplaceResult.NO_OPERATION_NEEDED, original=original)
            )

        document.apply(plan)
        written: bool = False
        if batch.apply and buffer.modified:
            buffer.save()
            written = True

        result = (
            ReplaceResult.HEADER_REMOVED
            if plan.action == HeaderAction.REMOVE
            else ReplaceResult.HEADER_APPLIED
        )
        logger.info("%s: %s", path, result.value)
        return batch.record(
            FileOutcome(
                path=path,
                result=result,
                action=plan.action,
                original=original,
                updated=buffer.text,
                written=written,
            )
        )

    def process_file(
        self,
        path: Path,
        headers: HeaderDefinitionSet | None,
        batch: BatchContext,
    ) -> FileOutcome:
        """Like `remove_or_replace_header`, but record a failure as an error outcome."""
        try:
            return self.remove_or_replace_header(path, headers, batch)
        except (HeaderMutationError, OSError) as exc:
            logger.error("%s: %s", path, exc)
            return batch.record(
                FileOutcome(path=path, result=ReplaceResult.NO_OPERATION_NEEDED, error=str(exc))
            )

    # ---- directory trees -----------------------------------------------------------------------

    def load_scope_definitions(
        self,
        directory: Path,
        inherited: HeaderDefinitionSet | None,
    ) -> tuple[HeaderDefinitionSet | None, bool]:
        """Return the definition set for ``directory`` and whether it has its own file.

        A definition file in ``directory`` replaces ``inherited`` entirely. A
        file that fails to load is logged and ``inherited`` is kept.
        """
        found: Path | None = find_definition_file(directory)
        if found is None:
            return inherited, False
        try:
            return load_definition_file(found, self.config.definition_encoding), True
        except DefinitionFileError as exc:
            logger.error("Ignoring definition file: %s", exc)
            return inherited, False

    def remove_or_replace_header_recursive(
        self,
        directory: Path,
        headers: HeaderDefinitionSet | None,
        batch: BatchContext,
        search_for_definitions: bool = True,
    ) -> int:
        """Process every file below ``directory``, depth first in sorted order.

        Hidden entries (leading dot) and excluded paths are skipped. Each
        directory's own definition file, when ``search_for_definitions`` is set,
        replaces the inherited set for its subtree. Cancellation is checked
        before each file.

        Args:
            directory (Path): Root of the walk.
            headers (HeaderDefinitionSet | None): Inherited templates, or None for
                remove-only mode.
            batch (BatchContext): Batch state.
            search_for_definitions (bool): Look for definition files while walking.

        Returns:
            int: Number of definition files found and used.
        """
        found: int = 0
        scope_headers: HeaderDefinitionSet | None = headers
        if search_for_definitions:
            scope_headers, own = self.load_scope_definitions(directory, headers)
            found += int(own)

        try:
            entries: list[Path] = sorted(directory.iterdir())
        except OSError as exc:
            logger.error("Cannot list %s: %s", directory, exc)
            return found

        for entry in entries:
            if batch.cancelled():
                logger.info("Batch cancelled; stopping in %s", directory)
                break
            if entry.name.startswith("."):
                logger.trace("Skipping hidden %s", entry)
                continue
            if self.is_excluded(entry):
                logger.debug("Excluded: %s", entry)
                continue
            if entry.is_dir():
                found += self.remove_or_replace_header_recursive(
                    entry, scope_headers, batch, search_for_definitions
                )
            else:
                self.process_file(entry, scope_headers, batch)
        return found
