# topmark:header:start
#
#   project      : LicenseMark
#   file         : __init__.py
#   file_relpath : src/licensemark/languages/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment grammars and the language table.

A [`Language`][licensemark.languages.base.Language] binds file extensions to a
[`CommentSyntax`][licensemark.languages.base.CommentSyntax]; the
[`LanguageRegistry`][licensemark.languages.registry.LanguageRegistry] resolves a
file name to its language.
"""

from __future__ import annotations

from licensemark.languages.base import CommentSyntax, Language, normalize_extension
from licensemark.languages.registry import LanguageRegistry, build_language_registry

__all__ = [
    "CommentSyntax",
    "Language",
    "LanguageRegistry",
    "build_language_registry",
    "normalize_extension",
]
