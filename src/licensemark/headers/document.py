# topmark:header:start
#
#   project      : LicenseMark
#   file         : document.py
#   file_relpath : src/licensemark/headers/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-document header replacement.

[`HeaderDocument`][licensemark.headers.document.HeaderDocument] decides how a
document must change so that it starts with exactly the desired header, and
applies that change to a [`DocumentBuffer`][licensemark.headers.buffer.DocumentBuffer].

Steps:
    1. **Skip prefix**: if the language has a skip expression and it matches at
       offset 0 (case-insensitive), the matched text plus the line break right
       after it is left in place above the header.
    2. **Existing header**: the leading comment run of the remaining text. With
       required keywords configured, the header ends after the last
       blank-line-separated block of that run containing one of them; comment
       blocks below it belong to the body. A run without any such block counts
       as no header at all, unless it starts with the desired header.
    3. **Desired header**: the expanded template using the document's newline,
       or None in remove-only mode.
    4. **Decision**: replace when the existing header differs from the text
       that would be inserted, do nothing when they are equal, remove the
       existing header in remove-only mode.
    5. **Spacing**: the inserted text is the header plus a newline, plus one
       blank line when the header does not already end with one and the text
       that follows starts with a comment. That blank line keeps the following
       comment in a block of its own, which step 2 leaves out of the header
       when it has no required keyword.
    6. **Prefix**: a line break is added between the skip prefix and the
       header when the prefix does not end with one.

All edits for one document are planned against a snapshot of its text and
applied together. If the buffer rejects an edit, the snapshot is restored and
[`HeaderMutationError`][licensemark.core.errors.HeaderMutationError] is raised.

Known edge case: with required keywords enabled, a leading comment that has
none of them is not recognized, so a new header is inserted above it and the
old comment stays below (a second header).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.core.errors import BufferOffsetError, HeaderMutationError
from licensemark.headers.buffer import normalize_newlines
from licensemark.headers.parser import CommentParser
from licensemark.headers.status import HeaderAction
from licensemark.headers.template import DEFAULT_RESOLVERS, expand

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from licensemark.headers.buffer import DocumentBuffer
    from licensemark.headers.parser import HeaderSpan
    from licensemark.headers.template import ExpansionContext, TokenResolver
    from licensemark.languages.base import Language

logger: LicensemarkLogger = get_logger(__name__)


@dataclass(frozen=True)
class HeaderPlan:
    """Edits computed for one document.

    Offsets are relative to the start of the document.

    Attributes:
        action (HeaderAction): What the plan does.
        snapshot (str): Document text the plan was computed from.
        prefix (str): Skip prefix kept at the top of the document.
        delete_start (int): Start of the range to delete.
        delete_end (int): End of the range to delete (equal to start: nothing to delete).
        insert_text (str): Text inserted at ``delete_start`` after the deletion.
    """

    action: HeaderAction
    snapshot: str
    prefix: str
    delete_start: int
    delete_end: int
    insert_text: str

    @property
    def changes(self) -> bool:
        """True when applying the plan modifies the document."""
        return self.action != HeaderAction.NONE

    @property
    def result_text(self) -> str:
        """Document text after the plan is applied."""
        return self.snapshot[: self.delete_start] + self.insert_text + self.snapshot[self.delete_end :]


class HeaderDocument:
    """Header replacement engine for one document.

    Args:
        buffer (DocumentBuffer): The document.
        language (Language): Language of the document.
        header_lines (Sequence[str] | None): Raw template lines, or None to only
            remove headers.
        keywords (Iterable[str] | None): Required keywords; a recognized header
            must contain one of them (case-insensitive). None or empty disables
            the filter.
        context (ExpansionContext | None): Metadata for template tokens.
        resolvers (Iterable[TokenResolver]): Token resolvers, in order.
    """

    def __init__(
        self,
        buffer: DocumentBuffer,
        language: Language,
        header_lines: Sequence[str] | None,
        *,
        keywords: Iterable[str] | None = None,
        context: ExpansionContext | None = None,
        resolvers: Iterable[TokenResolver] = DEFAULT_RESOLVERS,
    ) -> None:
        self.buffer: DocumentBuffer = buffer
        self.language: Language = language
        self.parser: CommentParser = CommentParser(language.syntax)
        self.keywords: tuple[str, ...] = tuple(
            k.strip().lower() for k in (keywords or ()) if k.strip()
        )
        self.newline: str = buffer.newline
        self.header: str | None = None
        if header_lines is not None:
            expanded: str = expand(header_lines, resolvers, context, self.newline)
            self.header = normalize_newlines(expanded, self.newline)

    @property
    def is_remove_only(self) -> bool:
        """True when the document was created without a template."""
        return self.header is None

    # ---- reading -------------------------------------------------------------------------------

    def text(self) -> str:
        """Return the current document text."""
        return self.buffer.read_range(self.buffer.start_offset(), self.buffer.end_offset())

    def skip_prefix(self, text: str | None = None) -> str:
        """Return the leading text that must stay above the header.

        The match of the skip expression at offset 0, extended by the line
        break that directly follows it. Empty when there is no skip expression
        or it does not match.
        """
        if text is None:
            text = self.text()
        pattern = self.language.syntax.skip_pattern
        if pattern is None:
            return ""
        m = pattern.match(text)
        if m is None or m.end() == 0:
            return ""
        end: int = m.end()
        if text.startswith("\r\n", end):
            end += 2
        elif text.startswith(("\n", "\r"), end):
            end += 1
        logger.trace("Skip prefix of %d chars", end)
        return text[:end]

    def _has_keyword(self, header: str) -> bool:
        if not self.keywords:
            return True
        lowered: str = header.lower()
        return any(k in lowered for k in self.keywords)

    def _starts_with_desired(self, body: str) -> bool:
        if not self.header or not body.startswith(self.header):
            return False
        return body[len(self.header) : len(self.header) + 1] in ("", "\n", "\r")

    def existing_header(self, body: str | None = None) -> str:
        """Return the recognized header of ``body`` (the text after the skip prefix).

        Without required keywords this is the whole leading comment run. With
        keywords, the run is cut after its last blank-line-separated block that
        contains one of them, keeping the blank lines that follow that block.
        A body that already starts with the desired header keeps at least the
        blocks that header covers.

        Returns:
            str: The recognized header; ``""`` when required keywords are
            configured and no block of the run contains one.
        """
        if body is None:
            full: str = self.text()
            body = full[len(self.skip_prefix(full)) :]
        if not self.keywords:
            return self.parser.parse(body)

        blocks: list[HeaderSpan] = self.parser.find_blocks(body)
        end: int = 0
        for block in blocks:
            if self._has_keyword(block.text):
                end = block.end
        if self.header is not None and self._starts_with_desired(body):
            covering: list[int] = [b.end for b in blocks if b.end >= len(self.header)]
            if covering:
                end = max(end, covering[0])
        if blocks and end == 0:
            logger.debug("Leading comment has no required keyword; not treated as header")
        elif blocks and end < blocks[-1].end:
            logger.debug("Comment block(s) below the header have no required keyword; kept")
        return body[:end]

    def _ends_with_blank_line(self, header: str) -> bool:
        lines: list[str] = header.split(self.newline)
        return len(lines) > 1 and not lines[-1].strip()

    def insertion_text(self, following: str) -> str:
        """Return the text inserted for the desired header when ``following`` comes after it.

        Raises:
            ValueError: In remove-only mode.
        """
        if self.header is None:
            raise ValueError("no header to insert in remove-only mode")
        text: str = self.header + self.newline
        if not self._ends_with_blank_line(self.header) and self.parser.starts_with_comment(following):
            text += self.newline
        return text

    # ---- validation ----------------------------------------------------------------------------

    def validate_header(self) -> bool:
        """Advisory check of the desired header and the existing leading comment run.

        Returns:
            bool: False if the desired header is not a balanced header made only
            of comment constructs of the language, or if the existing leading
            comment run stops at a block comment that is never closed. A region
            opened before code (and so cut from the header) is not a header
            defect. The document is never modified.
        """
        if self.header is not None and not self.parser.is_valid_header(self.header):
            logger.debug("Desired header is not a valid %s header", self.language.name)
            return False
        full: str = self.text()
        body: str = full[len(self.skip_prefix(full)) :]
        if self.parser.has_unterminated_block(body):
            logger.debug("Existing leading comment has an unterminated block comment")
            return False
        return True

    # ---- planning and mutation -----------------------------------------------------------------

    def plan(self) -> HeaderPlan:
        """Compute the edits needed for this document without applying them."""
        snapshot: str = self.text()
        prefix: str = self.skip_prefix(snapshot)
        body: str = snapshot[len(prefix) :]
        existing: str = self.existing_header(body)
        start: int = len(prefix)

        if self.header is None:
            action = HeaderAction.REMOVE if existing else HeaderAction.NONE
            insert: str = ""
        else:
            rest: str = body[len(existing) :]
            insert = self.insertion_text(rest)
            if existing == insert:
                action = HeaderAction.NONE
            else:
                action = HeaderAction.REPLACE if existing else HeaderAction.INSERT
                if prefix and not prefix.endswith(("\n", "\r")):
                    insert = self.newline + insert

        if action == HeaderAction.NONE:
            return HeaderPlan(action, snapshot, prefix, start, start, "")
        return HeaderPlan(action, snapshot, prefix, start, start + len(existing), insert)

    def apply(self, plan: HeaderPlan) -> None:
        """Apply ``plan`` to the buffer as one unit.

        Raises:
            HeaderMutationError: If the document changed since the plan was made,
                or the buffer rejected an edit (the document is restored first).
        """
        if not plan.changes:
            return
        base: int = self.buffer.start_offset()
        current: str = self.text()
        if current != plan.snapshot:
            raise HeaderMutationError("document changed since its header plan was computed")
        try:
            if plan.delete_end > plan.delete_start:
                self.buffer.delete_range(base + plan.delete_start, base + plan.delete_end)
            if plan.insert_text:
                self.buffer.insert_at(base + plan.delete_start, plan.insert_text)
        except BufferOffsetError as exc:
            restored: bool = self._restore(plan.snapshot)
            detail: str = "" if restored else " (document could not be restored)"
            raise HeaderMutationError(f"header {plan.action.value} failed: {exc}{detail}") from exc

    def _restore(self, snapshot: str) -> bool:
        try:
            self.buffer.delete_range(self.buffer.start_offset(), self.buffer.end_offset())
            self.buffer.insert_at(self.buffer.start_offset(), snapshot)
        except BufferOffsetError:
            logger.exception("Could not restore document after a failed header edit")
            return False
        return True

    def replace_header_if_necessary(self) -> HeaderAction:
        """Make the document start with the desired header (or no header in remove-only mode).

        Returns:
            HeaderAction: The action taken; ``HeaderAction.NONE`` when the
            document already had the desired header.

        Raises:
            HeaderMutationError: If the edit could not be applied.
        """
        plan: HeaderPlan = self.plan()
        logger.debug("Header plan for %s document: %s", self.language.name, plan.action.value)
        self.apply(plan)
        return plan.action
