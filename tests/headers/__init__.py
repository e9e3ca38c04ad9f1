# topmark:header:start
#
#   project      : LicenseMark
#   file         : __init__.py
#   file_relpath : tests/headers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end
