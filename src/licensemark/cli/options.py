# topmark:header:start
#
#   project      : LicenseMark
#   file         : options.py
#   file_relpath : src/licensemark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options and their resolution logic.

Commands stay thin by stacking the decorators defined here:
    * `common_verbose_options` / `common_color_options` on the group;
    * `common_config_options`, `common_run_options` and
      `common_keyword_options` on the header commands.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click
from click.core import ParameterSource

from licensemark.cli.cli_types import EnumChoiceParam
from licensemark.cli.errors import LicensemarkUsageError
from licensemark.config.logging import get_logger
from licensemark.headers.status import InvalidHeaderPolicy

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

#: Click context settings shared by all commands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v`` and ``-q`` counts.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        LicensemarkUsageError: If both flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise LicensemarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -quiet_count
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Show more output (every file visited with -v).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Show less output (summary only with -q, nothing with -qq).",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Precedence: ``--color`` (always/never), then ``FORCE_COLOR`` and
    ``NO_COLOR``, then whether stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError, OSError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color {auto,always,never}`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def trap_underscored_option(ctx: click.Context, param: click.Option, _value: object) -> None:
    """Raise a helpful error for underscored long options (e.g., ``--no_config``)."""
    name = getattr(param, "name", None)
    src = ctx.get_parameter_source(name) if name else None
    if src is not ParameterSource.COMMANDLINE:
        return
    bad = param.opts[0] if param.opts else "--?"
    raise click.UsageError(f"Unknown option: {bad}. Did you mean {bad.replace('_', '-')}?")


def underscored_trap_option(*names: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Register hidden underscored spellings of options that raise a helpful error.

    The hidden option gets its own destination name so parameter source
    tracking does not overlap with the real option.
    """
    if not names:
        raise ValueError("underscored_trap_option requires at least one option name")
    dest = f"_trap_{names[0].lstrip('-').replace('-', '_')}"
    return click.option(
        *names,
        dest,
        hidden=True,
        expose_value=False,
        is_eager=True,
        multiple=True,
        callback=trap_underscored_option,
    )


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``--config FILE`` (repeatable)."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore discovered config files (pyproject.toml, licensemark.toml).",
    )(f)
    f = underscored_trap_option("--no_config")(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_run_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the options shared by ``check`` and ``strip``.

    ``--apply``, ``--diff``, ``--root DIR``, ``--exclude PATTERN`` and
    ``--on-invalid POLICY``.
    """
    f = click.option(
        "--apply",
        "apply_changes",
        is_flag=True,
        help="Write changes to files (dry run by default).",
    )(f)
    f = click.option("--diff", is_flag=True, help="Show unified diffs of the changes.")(f)
    f = click.option(
        "--root",
        "root",
        type=click.Path(exists=True, file_okay=False, dir_okay=True),
        default=None,
        help="Project root: upper bound for definition lookup (default: current directory).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        metavar="PATTERN",
        help="Skip paths matching this gitignore-style pattern (repeatable).",
    )(f)
    f = click.option(
        "--on-invalid",
        "on_invalid",
        type=EnumChoiceParam(InvalidHeaderPolicy),
        default=None,
        help="What to do when a header is not valid for its language (default: skip).",
    )(f)
    f = underscored_trap_option("--on_invalid")(f)
    return f


def common_keyword_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--keyword K`` (repeatable) and ``--no-keywords``."""
    f = click.option(
        "--keyword",
        "-k",
        "keywords",
        multiple=True,
        help="Required keyword of an existing header (repeatable; replaces configured list).",
    )(f)
    f = click.option(
        "--no-keywords",
        "no_keywords",
        is_flag=True,
        help="Treat any leading comment as the header.",
    )(f)
    f = underscored_trap_option("--no_keywords")(f)
    return f
