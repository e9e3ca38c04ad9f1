# topmark:header:start
#
#   project      : LicenseMark
#   file         : __main__.py
#   file_relpath : src/licensemark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running LicenseMark via ``python -m licensemark``.

It delegates directly to :func:`licensemark.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how LicenseMark is launched.

Examples:
    Run LicenseMark using the module interface::

        python -m licensemark check .
"""

from __future__ import annotations

from licensemark.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
