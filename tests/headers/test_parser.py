# topmark:header:start
#
#   project      : LicenseMark
#   file         : test_parser.py
#   file_relpath : tests/headers/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the leading comment run extraction (`CommentParser`)."""

from __future__ import annotations

import pytest

from licensemark.headers.parser import CommentParser
from tests.conftest import language


def csharp() -> CommentParser:
    return CommentParser(language("csharp").syntax)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("// a\n// b\ncode();\n", "// a\n// b\n"),
        ("/* x */\n// y\n\nint a;", "/* x */\n// y\n\n"),
        ("\n\n// a\nx", "\n\n// a\n"),
        ("// a\r\n// b\r\ncode", "// a\r\n// b\r\n"),
        ("   // indented\n\tx", "   // indented\n"),
        ("code();", ""),
        ("", ""),
        ("/* a */ int x;", "/* a */"),
        ("// only comment", "// only comment"),
    ],
)
def test_parse_leading_comment_run(text: str, expected: str) -> None:
    """Line comments, block comments and blank lines form the header; code ends it."""
    assert csharp().parse(text) == expected


def test_markers_inside_block_are_inert() -> None:
    text = "/* // #region */\nx"
    assert csharp().parse(text) == "/* // #region */\n"
    assert csharp().is_balanced(text)


def test_region_wraps_header() -> None:
    text = "#region License\n// text\n#endregion\nclass A {}"
    parser = csharp()
    assert parser.parse(text) == "#region License\n// text\n#endregion\n"
    assert parser.is_balanced(text)


def test_unclosed_region_cuts_header_back() -> None:
    """The header stops before the outermost unclosed region start."""
    text = "// a\n#region X\n// b\ncode"
    parser = csharp()
    assert parser.parse(text) == "// a\n"
    assert not parser.is_balanced(text)


def test_region_end_without_start_terminates() -> None:
    assert csharp().parse("#endregion\n// a") == ""


def test_unterminated_block_is_unbalanced() -> None:
    parser = csharp()
    assert not parser.is_balanced("/* abc")
    assert parser.parse("/* abc") == ""
    assert parser.is_balanced("/* abc */")
    assert parser.parse("/* abc */") == "/* abc */"


def test_longest_marker_wins_for_vb_regions() -> None:
    parser = CommentParser(language("vb").syntax)
    text = "' a\n#Region R\n' b\n#End Region\nx"
    assert parser.parse(text) == "' a\n#Region R\n' b\n#End Region\n"


def test_find_span_offsets() -> None:
    span = csharp().find_span("// a\nx")
    assert (span.start, span.end) == (0, 5)
    assert span.text == "// a\n"
    assert not span.is_empty
    assert csharp().find_span("x").is_empty


def test_starts_with_comment() -> None:
    parser = csharp()
    assert parser.starts_with_comment("  // x")
    assert parser.starts_with_comment("/* x */")
    assert not parser.starts_with_comment("code")
    assert not parser.starts_with_comment("\n// x")


def test_is_valid_header() -> None:
    parser = csharp()
    assert parser.is_valid_header("// a\n// b")
    assert parser.is_valid_header("/* a\n * b\n */")
    assert not parser.is_valid_header("// a\ncode")
    assert not parser.is_valid_header("/* a")


def test_block_only_language() -> None:
    parser = CommentParser(language("css").syntax)
    assert parser.parse("/* a */\n// not a comment in css\n") == "/* a */\n"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("// a\n// b\n\n// c\ncode", ["// a\n// b\n\n", "// c\n"]),
        ("/* a */\n\n\n/* b */\nx", ["/* a */\n\n\n", "/* b */\n"]),
        ("\n\n// a\nx", ["\n\n", "// a\n"]),
        ("/* a\n\n b */\nx", ["/* a\n\n b */\n"]),
        ("#region R\n// a\n\n// b\n#endregion\nx", ["#region R\n// a\n\n// b\n#endregion\n"]),
        ("// a\n\n#region X\nusing System;", ["// a\n\n"]),
        ("code", []),
    ],
)
def test_find_blocks(text: str, expected: list[str]) -> None:
    """Blank lines outside blocks and regions split the header span."""
    assert [b.text for b in csharp().find_blocks(text)] == expected


def test_blocks_cover_the_header_span() -> None:
    text = "// a\n\n// b\n\n\n/* c */\nx"
    blocks = csharp().find_blocks(text)
    assert blocks[0].start == 0
    assert all(prev.end == nxt.start for prev, nxt in zip(blocks, blocks[1:]))
    assert blocks[-1].end == csharp().find_span(text).end


def test_region_around_code_is_not_an_unterminated_block() -> None:
    parser = csharp()
    assert parser.has_unterminated_block("// a\n/* abc")
    text = "#region Using directives\nusing System;\n#endregion\nclass A {}"
    assert not parser.is_balanced(text)
    assert not parser.has_unterminated_block(text)
