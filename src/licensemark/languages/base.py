# topmark:header:start
#
#   project      : LicenseMark
#   file         : base.py
#   file_relpath : src/licensemark/languages/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment grammar and language definitions.

`CommentSyntax` describes how comments look in one language: a line comment
prefix, a block comment delimiter pair, a region delimiter pair, and an
optional *skip expression* matching leading content that must stay above the
header (a shebang, an XML declaration, ...). `Language` binds that grammar to a
list of file extensions.

Both types are frozen and validated at construction, so a malformed table
fails before any file is touched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.core.errors import CommentSyntaxError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: LicensemarkLogger = get_logger(__name__)


def normalize_extension(ext: str) -> str:
    """Return ``ext`` stripped of surrounding whitespace and with a leading dot.

    Args:
        ext (str): Extension as written by the user (``"cs"``, ``".cs"``, ``" .Designer.cs"``).

    Returns:
        str: The normalized extension (``".cs"``). Case is preserved; matching is
        case-insensitive.
    """
    ext = ext.strip()
    if not ext.startswith("."):
        ext = "." + ext
    return ext


@dataclass(frozen=True)
class CommentSyntax:
    """Comment grammar for one language.

    Attributes:
        line_comment (str | None): Prefix of a single-line comment (``//``, ``#``).
        block_start (str | None): Opening delimiter of a block comment (``/*``).
        block_end (str | None): Closing delimiter of a block comment (``*/``).
        region_start (str | None): Opening region marker (``#region``).
        region_end (str | None): Closing region marker (``#endregion``).
        skip_expression (str | None): Regular expression matched case-insensitively
            at offset 0; the matched text is kept above the header.

    Raises:
        CommentSyntaxError: If neither a line comment nor a block start is
            configured, if a delimiter pair is incomplete, or if the skip
            expression does not compile.
    """

    line_comment: str | None = None
    block_start: str | None = None
    block_end: str | None = None
    region_start: str | None = None
    region_end: str | None = None
    skip_expression: str | None = None

    _skip_pattern: re.Pattern[str] | None = field(
        init=False, repr=False, compare=False, default=None
    )

    def __post_init__(self) -> None:
        # Treat empty strings as "not configured"
        for name in (
            "line_comment",
            "block_start",
            "block_end",
            "region_start",
            "region_end",
            "skip_expression",
        ):
            if getattr(self, name) == "":
                object.__setattr__(self, name, None)

        if self.line_comment is None and self.block_start is None:
            raise CommentSyntaxError("either line_comment or block_start must be set")
        if (self.block_start is None) != (self.block_end is None):
            raise CommentSyntaxError("block_start and block_end must be set together")
        if (self.region_start is None) != (self.region_end is None):
            raise CommentSyntaxError("region_start and region_end must be set together")

        if self.skip_expression is not None:
            try:
                pattern = re.compile(self.skip_expression, re.IGNORECASE)
            except re.error as exc:
                raise CommentSyntaxError(
                    f"invalid skip_expression {self.skip_expression!r}: {exc}"
                ) from exc
            object.__setattr__(self, "_skip_pattern", pattern)

    @property
    def skip_pattern(self) -> re.Pattern[str] | None:
        """Compiled, case-insensitive skip expression (or None)."""
        return self._skip_pattern

    @property
    def has_blocks(self) -> bool:
        """True when the grammar has a block comment delimiter pair."""
        return self.block_start is not None

    @property
    def has_regions(self) -> bool:
        """True when the grammar has a region delimiter pair."""
        return self.region_start is not None


@dataclass(frozen=True)
class Language:
    """A named comment grammar bound to file extensions.

    Attributes:
        name (str): Identifier of the language (``"csharp"``).
        extensions (tuple[str, ...]): File name suffixes, normalized with a leading dot.
        syntax (CommentSyntax): The comment grammar.
        description (str): Human-readable description.
    """

    name: str
    extensions: tuple[str, ...]
    syntax: CommentSyntax
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise CommentSyntaxError("language name must not be empty")
        exts: tuple[str, ...] = tuple(normalize_extension(e) for e in self.extensions if e.strip())
        if not exts:
            raise CommentSyntaxError(f"language {self.name!r} has no extensions")
        object.__setattr__(self, "extensions", exts)

    def match_length(self, file_name: str) -> int:
        """Return the length of the longest extension that is a suffix of ``file_name``.

        Matching is case-insensitive. Returns 0 when no extension matches.
        """
        lowered: str = file_name.lower()
        best: int = 0
        for ext in self.extensions:
            if len(ext) > best and lowered.endswith(ext.lower()):
                best = len(ext)
        return best

    def matches(self, file_name: str) -> bool:
        """True when one of the extensions is a case-insensitive suffix of ``file_name``."""
        return self.match_length(file_name) > 0


def make_language(
    name: str,
    extensions: Iterable[str],
    *,
    description: str = "",
    line_comment: str | None = None,
    block_start: str | None = None,
    block_end: str | None = None,
    region_start: str | None = None,
    region_end: str | None = None,
    skip_expression: str | None = None,
) -> Language:
    """Build a `Language` from flat keyword arguments (as found in config tables)."""
    syntax = CommentSyntax(
        line_comment=line_comment,
        block_start=block_start,
        block_end=block_end,
        region_start=region_start,
        region_end=region_end,
        skip_expression=skip_expression,
    )
    logger.trace("Built comment syntax for %s: %r", name, syntax)
    return Language(
        name=name,
        extensions=tuple(extensions),
        syntax=syntax,
        description=description,
    )
