# topmark:header:start
#
#   project      : LicenseMark
#   file         : __init__.py
#   file_relpath : src/licensemark/headers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""License header engine.

Modules:
    * `licensemark.headers.parser`: leading comment run of a text.
    * `licensemark.headers.template`: ``%Token%`` expansion.
    * `licensemark.headers.definitions`: ``*.licenseheader`` files and scope lookup.
    * `licensemark.headers.buffer`: document buffer protocol and adapters.
    * `licensemark.headers.document`: the per-document replacement engine.
    * `licensemark.headers.replacer`: files and directory trees.
"""

from __future__ import annotations

from licensemark.headers.buffer import DocumentBuffer, FileBuffer, TextBuffer
from licensemark.headers.definitions import HeaderDefinitionSet, parse_definition_text
from licensemark.headers.document import HeaderDocument, HeaderPlan
from licensemark.headers.parser import CommentParser, HeaderSpan
from licensemark.headers.replacer import BatchContext, FileOutcome, LicenseHeaderReplacer
from licensemark.headers.status import HeaderAction, InvalidHeaderPolicy, ReplaceResult
from licensemark.headers.template import ExpansionContext, expand

__all__ = [
    "BatchContext",
    "CommentParser",
    "DocumentBuffer",
    "ExpansionContext",
    "FileBuffer",
    "FileOutcome",
    "HeaderAction",
    "HeaderDefinitionSet",
    "HeaderDocument",
    "HeaderPlan",
    "HeaderSpan",
    "InvalidHeaderPolicy",
    "LicenseHeaderReplacer",
    "ReplaceResult",
    "TextBuffer",
    "expand",
    "parse_definition_text",
]
