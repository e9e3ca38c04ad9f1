# topmark:header:start
#
#   project      : LicenseMark
#   file         : __init__.py
#   file_relpath : src/licensemark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark package.

LicenseMark inserts, replaces and removes license headers at the top of source
files. Headers are defined per file extension in ``*.licenseheader`` definition
files and rendered with the comment syntax of each file's language. The package
exposes a CLI and a small typed API for automation.
"""

from __future__ import annotations
