# topmark:header:start
#
#   project      : LicenseMark
#   file         : constants.py
#   file_relpath : src/licensemark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    LICENSEMARK_VERSION: str = get_version("licensemark")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    LICENSEMARK_VERSION = "0.0.0"

# Header definition files: reserved extension and the keyword introducing an extension list
DEFINITION_FILE_EXTENSION: str = ".licenseheader"
DEFINITION_KEYWORD: str = "extensions:"

# Default set of keywords a leading comment must contain to count as a license header
DEFAULT_REQUIRED_KEYWORDS: tuple[str, ...] = ("license", "copyright", "(c)")

# Project configuration files
CONFIG_FILE_NAME: str = "licensemark.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "licensemark"

LOG_LEVEL_ENV_VAR: str = "LICENSEMARK_LOG_LEVEL"

VALUE_NOT_SET: str = "<not set>"
