# topmark:header:start
#
#   project      : LicenseMark
#   file         : file.py
#   file_relpath : src/licensemark/utils/file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path helpers for the LicenseMark CLI."""

import os
from pathlib import Path

from licensemark.config.logging import get_logger

logger = get_logger(__name__)


def compute_relpath(file_path: Path, root_path: Path | None) -> Path:
    """Compute the relative path from root_path to file_path.

    Args:
        file_path (Path): The file path to compute the relative path for.
        root_path (Path | None): The root path to compute the relative path from
            (the current directory when None).

    Returns:
        Path: The relative path from root_path to file_path.
    """
    resolved_path = file_path.resolve()
    resolved_root = (root_path or Path.cwd()).resolve()

    try:
        return resolved_path.relative_to(resolved_root)
    except ValueError:
        # Not below the root
        return Path(os.path.relpath(resolved_path, start=resolved_root))


def common_root(paths: list[Path]) -> Path:
    """Return the deepest directory containing all ``paths`` (the CWD when empty).

    A single directory argument is its own root; a single file's root is its parent.
    """
    if not paths:
        return Path.cwd().resolve()
    dirs: list[str] = [
        str(p.resolve() if p.resolve().is_dir() else p.resolve().parent) for p in paths
    ]
    root = Path(os.path.commonpath(dirs))
    logger.debug("Common root of %d path(s): %s", len(paths), root)
    return root
