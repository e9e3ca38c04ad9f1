# topmark:header:start
#
#   project      : LicenseMark
#   file         : parser.py
#   file_relpath : src/licensemark/headers/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment-aware extraction of the leading header span.

[`CommentParser`][licensemark.headers.parser.CommentParser] scans a text from
offset 0 and returns the longest prefix made only of comment constructs,
region markers and blank lines, for one
[`CommentSyntax`][licensemark.languages.base.CommentSyntax].

Scan rules:
    * Whitespace is skipped; line breaks (and therefore blank lines) are part
      of the header.
    * At a non-whitespace position the longest matching marker wins:
      region end, region start, block start or line comment.
    * A line comment, a region start and a region end consume the rest of
      their line, including its line break.
    * A block start consumes through the nearest block end. Markers inside a
      block are inert.
    * A region end without an open region terminates the header, as does any
      other content.

Balance:
    An unterminated block, or a region still open when the scan stops, makes
    the text unbalanced. The returned header never contains such a construct:
    it is cut back to the position before the unterminated block, or before
    the outermost unclosed region start.

Blocks:
    Blank lines outside any open region split a header span into blocks; see
    [`find_blocks`][licensemark.headers.parser.CommentParser.find_blocks].
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from licensemark.config.logging import LicensemarkLogger, get_logger

if TYPE_CHECKING:
    from licensemark.languages.base import CommentSyntax

logger: LicensemarkLogger = get_logger(__name__)


class _Token(Enum):
    LINE = "line"
    BLOCK = "block"
    REGION_START = "region_start"
    REGION_END = "region_end"


@dataclass(frozen=True)
class HeaderSpan:
    """Leading header span of a text.

    Attributes:
        text (str): The header text (a prefix of the scanned text).
        start (int): Offset of the first character; 0 for a whole header span.
        end (int): First offset not part of the header.
    """

    text: str
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        """True when no header was recognized."""
        return self.end == self.start


@dataclass(frozen=True)
class _ScanResult:
    end: int
    balanced: bool
    exhausted: bool
    unterminated_block: bool
    # Offsets of the lines starting a new blank-line-separated block
    breaks: tuple[int, ...]


def _end_of_line(text: str, pos: int) -> int:
    """Return the offset just past the line break ending the line at ``pos`` (or ``len(text)``)."""
    n: int = len(text)
    while pos < n:
        ch: str = text[pos]
        if ch == "\n":
            return pos + 1
        if ch == "\r":
            return pos + 2 if text.startswith("\r\n", pos) else pos + 1
        pos += 1
    return n


class CommentParser:
    """Extract and check the leading comment run of texts in one language.

    Args:
        syntax (CommentSyntax): The comment grammar to recognize.
    """

    def __init__(self, syntax: CommentSyntax) -> None:
        self.syntax: CommentSyntax = syntax
        markers: list[tuple[str, _Token]] = []
        if syntax.region_end is not None:
            markers.append((syntax.region_end, _Token.REGION_END))
        if syntax.region_start is not None:
            markers.append((syntax.region_start, _Token.REGION_START))
        if syntax.block_start is not None:
            markers.append((syntax.block_start, _Token.BLOCK))
        if syntax.line_comment is not None:
            markers.append((syntax.line_comment, _Token.LINE))
        # Longest marker first; the stable sort keeps the order above for equal lengths.
        markers.sort(key=lambda m: -len(m[0]))
        self._markers: tuple[tuple[str, _Token], ...] = tuple(markers)

    def _match(self, text: str, pos: int) -> tuple[str, _Token] | None:
        for marker, token in self._markers:
            if text.startswith(marker, pos):
                return marker, token
        return None

    def _scan(self, text: str) -> _ScanResult:
        pos: int = 0
        n: int = len(text)
        end: int = 0
        # Committed header end recorded when each still-open region started
        open_regions: list[int] = []
        balanced: bool = True
        exhausted: bool = False
        unterminated_block: bool = False
        breaks: list[int] = []
        line_start: int = 0
        line_has_content: bool = False
        after_blank: bool = False

        while True:
            if pos >= n:
                exhausted = True
                break
            ch: str = text[pos]
            if ch in "\r\n":
                if not line_has_content:
                    after_blank = True
                pos = _end_of_line(text, pos)
                end = pos
                line_start = pos
                line_has_content = False
                continue
            if ch.isspace():
                pos += 1
                continue

            hit: tuple[str, _Token] | None = self._match(text, pos)
            if hit is None:
                break
            marker, token = hit
            if after_blank and not line_has_content and not open_regions:
                breaks.append(line_start)
            after_blank = False
            line_has_content = True

            if token is _Token.LINE:
                pos = _end_of_line(text, pos + len(marker))
                end = pos
            elif token is _Token.BLOCK:
                block_end: str = self.syntax.block_end or ""
                close: int = text.find(block_end, pos + len(marker))
                if close < 0:
                    logger.trace("Unterminated block comment at offset %d", pos)
                    balanced = False
                    unterminated_block = True
                    break
                pos = close + len(block_end)
                end = pos
                continue
            elif token is _Token.REGION_START:
                open_regions.append(end)
                pos = _end_of_line(text, pos + len(marker))
                end = pos
            else:
                if not open_regions:
                    logger.trace("Region end without open region at offset %d", pos)
                    break
                open_regions.pop()
                pos = _end_of_line(text, pos + len(marker))
                end = pos
            # Line comments and region markers consume their line break
            line_start = pos
            line_has_content = False

        if exhausted and not open_regions:
            end = n
        if open_regions:
            logger.trace("%d unclosed region(s) in header", len(open_regions))
            balanced = False
            end = open_regions[0]
        return _ScanResult(
            end=end,
            balanced=balanced,
            exhausted=exhausted,
            unterminated_block=unterminated_block,
            breaks=tuple(b for b in breaks if b < end),
        )

    def find_span(self, text: str) -> HeaderSpan:
        """Return the leading header span of ``text``.

        Args:
            text (str): Text to scan (with any skip prefix already removed).

        Returns:
            HeaderSpan: The span; empty when ``text`` does not start with a
            comment, a region marker or a blank line.
        """
        result: _ScanResult = self._scan(text)
        return HeaderSpan(text=text[: result.end], start=0, end=result.end)

    def find_blocks(self, text: str) -> list[HeaderSpan]:
        """Split the leading header span of ``text`` at its blank lines.

        A new block starts at each construct that follows one or more blank
        lines outside any open region. Each block keeps the blank lines that
        follow it, so the blocks cover the header span without gaps.

        Returns:
            list[HeaderSpan]: The blocks in document order; empty when there is
            no header.
        """
        result: _ScanResult = self._scan(text)
        if result.end == 0:
            return []
        bounds: list[int] = [0, *result.breaks, result.end]
        return [HeaderSpan(text=text[s:e], start=s, end=e) for s, e in zip(bounds, bounds[1:])]

    def parse(self, text: str) -> str:
        """Return the header text of ``text`` (see [`find_span`][licensemark.headers.parser.CommentParser.find_span])."""
        return self.find_span(text).text

    def starts_with_comment(self, text: str) -> bool:
        """True when ``text`` starts, after spaces and tabs, with one of the comment markers."""
        return self._match(text.lstrip(" \t"), 0) is not None

    def is_balanced(self, text: str) -> bool:
        """Return False if the leading comment run of ``text`` has an unterminated block or an unclosed region."""
        return self._scan(text).balanced

    def has_unterminated_block(self, text: str) -> bool:
        """True when the leading comment run of ``text`` stops at a block comment that is never closed."""
        return self._scan(text).unterminated_block

    def is_valid_header(self, text: str) -> bool:
        """Return True if ``text`` is balanced and consists entirely of header constructs.

        Used to check a rendered header before it is written.
        """
        result: _ScanResult = self._scan(text)
        return result.balanced and result.end == len(text)
