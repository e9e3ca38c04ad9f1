# topmark:header:start
#
#   project      : LicenseMark
#   file         : buffer.py
#   file_relpath : src/licensemark/headers/buffer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document buffer protocol and its in-memory adapter.

The replacement engine only talks to documents through
[`DocumentBuffer`][licensemark.headers.buffer.DocumentBuffer]: read a range,
insert at an offset, delete a range. Offsets are character offsets into the
current text. [`TextBuffer`][licensemark.headers.buffer.TextBuffer] implements
the protocol over a Python string and is what the file host uses.

The dominant newline of a document is detected once, when the buffer is
created, from a histogram of ``\\r\\n``, ``\\n`` and ``\\r`` occurrences. Ties
prefer CRLF, then LF; a document without line breaks defaults to LF.
"""

from __future__ import annotations

import codecs
import re
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.core.errors import BufferOffsetError

if TYPE_CHECKING:
    from pathlib import Path

logger: LicensemarkLogger = get_logger(__name__)

DEFAULT_NEWLINE: Final[str] = "\n"

# Order matters: it is the tie-break order for the dominant newline.
_NEWLINES: Final[tuple[str, ...]] = ("\r\n", "\n", "\r")
_NEWLINE_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\n|\r")


def newline_histogram(text: str) -> dict[str, int]:
    """Count line breaks in ``text`` by kind (``\\r\\n`` counts once, not as CR + LF)."""
    hist: dict[str, int] = dict.fromkeys(_NEWLINES, 0)
    for m in _NEWLINE_RE.finditer(text):
        hist[m.group(0)] += 1
    return hist


def detect_newline(text: str) -> str:
    """Return the dominant line ending of ``text``.

    Args:
        text (str): Document text.

    Returns:
        str: ``"\\r\\n"``, ``"\\n"`` or ``"\\r"``; ``"\\n"`` when ``text`` has no line break.
    """
    hist: dict[str, int] = newline_histogram(text)
    best: str = DEFAULT_NEWLINE
    best_count: int = 0
    for nl in _NEWLINES:
        if hist[nl] > best_count:
            best, best_count = nl, hist[nl]
    return best


def normalize_newlines(text: str, newline: str) -> str:
    """Rewrite every line break in ``text`` as ``newline``."""
    return _NEWLINE_RE.sub(lambda _m: newline, text)


@runtime_checkable
class DocumentBuffer(Protocol):
    """Minimal editing surface required by the replacement engine."""

    @property
    def newline(self) -> str:
        """Dominant line ending of the document."""
        ...

    def start_offset(self) -> int:
        """Offset of the first character (normally 0)."""
        ...

    def end_offset(self) -> int:
        """Offset just past the last character."""
        ...

    def read_range(self, start: int, end: int) -> str:
        """Return the text between ``start`` (inclusive) and ``end`` (exclusive)."""
        ...

    def insert_at(self, offset: int, text: str) -> None:
        """Insert ``text`` at ``offset``."""
        ...

    def delete_range(self, start: int, end: int) -> None:
        """Delete the text between ``start`` and ``end``."""
        ...


class TextBuffer:
    """In-memory `DocumentBuffer` over a string.

    Args:
        text (str): Initial document text.
        newline (str | None): Dominant line ending; detected from ``text`` when None.
    """

    def __init__(self, text: str = "", newline: str | None = None) -> None:
        self._text: str = text
        self._newline: str = newline if newline is not None else detect_newline(text)
        logger.trace("TextBuffer: %d chars, newline=%r", len(text), self._newline)

    @property
    def text(self) -> str:
        """Current document text."""
        return self._text

    @property
    def newline(self) -> str:
        """Dominant line ending, as detected at construction."""
        return self._newline

    def start_offset(self) -> int:
        return 0

    def end_offset(self) -> int:
        return len(self._text)

    def _check(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise BufferOffsetError(
                f"invalid range [{start}, {end}) for buffer of length {len(self._text)}"
            )

    def read_range(self, start: int, end: int) -> str:
        self._check(start, end)
        return self._text[start:end]

    def insert_at(self, offset: int, text: str) -> None:
        self._check(offset, offset)
        self._text = self._text[:offset] + text + self._text[offset:]

    def delete_range(self, start: int, end: int) -> None:
        self._check(start, end)
        self._text = self._text[:start] + self._text[end:]

    def __repr__(self) -> str:
        return f"TextBuffer(len={len(self._text)}, newline={self._newline!r})"


class FileBuffer(TextBuffer):
    """`TextBuffer` loaded from a UTF-8 file on disk.

    A leading UTF-8 BOM is removed from the text and written back by `save`.
    Line endings are kept exactly as found.

    Args:
        path (Path): The file.
        text (str): Decoded content without BOM.
        bom (bool): Whether the file started with a UTF-8 BOM.
    """

    def __init__(self, path: Path, text: str, *, bom: bool = False) -> None:
        super().__init__(text)
        self.path: Path = path
        self.bom: bool = bom
        self.original: str = text

    @classmethod
    def load(cls, path: Path) -> FileBuffer | None:
        """Read ``path`` as UTF-8 text.

        Returns:
            FileBuffer | None: The buffer, or None when the file looks binary
            (contains a NUL byte) or is not valid UTF-8.

        Raises:
            OSError: If the file cannot be read.
        """
        data: bytes = path.read_bytes()
        if b"\x00" in data:
            logger.debug("%s: NUL byte found, treating as binary", path)
            return None
        bom: bool = data.startswith(codecs.BOM_UTF8)
        if bom:
            data = data[len(codecs.BOM_UTF8) :]
        try:
            text: str = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.debug("%s: not UTF-8 (%s)", path, exc)
            return None
        return cls(path, text, bom=bom)

    @property
    def modified(self) -> bool:
        """True when the text differs from what was loaded."""
        return self.text != self.original

    def save(self) -> None:
        """Write the current text back to the file (BOM restored)."""
        data: bytes = self.text.encode("utf-8")
        if self.bom:
            data = codecs.BOM_UTF8 + data
        self.path.write_bytes(data)
        logger.debug("Wrote %s (%d bytes)", self.path, len(data))
