# topmark:header:start
#
#   project      : LicenseMark
#   file         : dump_config.py
#   file_relpath : src/licensemark/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark ``dump-config`` command.

Prints the effective configuration as TOML after applying the built-in
defaults, the discovered and explicit config files, and the keyword options.
The output is wrapped between ``# === BEGIN ===`` and ``# === END ===``
markers, and the body is itself a valid ``licensemark.toml``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from licensemark.cli.cmd_common import (
    build_config,
    get_console,
    get_effective_verbosity,
    keyword_overrides,
)
from licensemark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_keyword_options,
)
from licensemark.config.io import to_toml
from licensemark.config.logging import LicensemarkLogger, get_logger

if TYPE_CHECKING:
    from licensemark.cli.console import ConsoleLike
    from licensemark.config.model import Config

logger: LicensemarkLogger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Print the merged LicenseMark configuration as TOML.",
    epilog="Output is wrapped between '# === BEGIN ===' and '# === END ===' markers.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@common_keyword_options
def dump_config_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    keywords: tuple[str, ...],
    no_keywords: bool,
) -> None:
    """Dump the merged configuration of the current directory.

    With ``-v``, the merged config files are listed as TOML comments first.

    Raises:
        LicensemarkConfigError: If a config file is malformed.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)

    config: Config = build_config(
        paths=[Path.cwd()],
        no_config=no_config,
        config_paths=list(config_paths),
        overrides=keyword_overrides(no_keywords, keywords),
    )
    logger.trace("Dumping config: %s", config)

    if get_effective_verbosity(ctx) > 0:
        for source in config.config_files:
            console.print(f"# merged: {source}")
    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict()).rstrip("\n"))
    console.print("# === END ===")
