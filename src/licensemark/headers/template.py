# topmark:header:start
#
#   project      : LicenseMark
#   file         : template.py
#   file_relpath : src/licensemark/headers/template.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Header template expansion.

A header template is an ordered tuple of raw lines. Expansion joins the lines
with the document's newline, then walks the registered
[`TokenResolver`][licensemark.headers.template.TokenResolver] objects in order;
each resolver that can produce a value for the current
[`ExpansionContext`][licensemark.headers.template.ExpansionContext] replaces
every literal occurrence of its token. Tokens nobody can resolve stay in the
text verbatim.

Built-in tokens, in registration order:

| Token              | Value                                           |
|--------------------|-------------------------------------------------|
| ``%FullFileName%`` | absolute path of the file                       |
| ``%FileName%``     | base name of the file                           |
| ``%CreationYear%`` | year the file was created (needs existing file) |
| ``%CreationMonth%``| month (1-12) the file was created               |
| ``%CreationDay%``  | day of month the file was created               |
| ``%CreationTime%`` | creation time as ``HH:MM``                      |
| ``%CurrentYear%``  | current year                                    |
| ``%CurrentMonth%`` | current month (1-12)                            |
| ``%CurrentDay%``   | current day of month                            |
| ``%CurrentTime%``  | current time as ``HH:MM``                       |
| ``%UserName%``     | login name of the current user                  |
| ``%Project%``      | project name                                    |
"""

from __future__ import annotations

import getpass
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Final

from licensemark.config.logging import LicensemarkLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

logger: LicensemarkLogger = get_logger(__name__)

TIME_FORMAT: Final[str] = "%H:%M"


def _login_name() -> str | None:
    try:
        return getpass.getuser() or None
    except (KeyError, OSError):
        # No passwd entry and no LOGNAME/USER variables
        return None


@dataclass
class ExpansionContext:
    """Metadata available to token resolvers for one document.

    Attributes:
        path (Path | None): The document's path, if it has one.
        project_name (str | None): Name of the project the document belongs to.
        user_name (str | None): Login name; detected lazily when not given.
        clock (Callable[[], datetime]): Source of the current time.
    """

    path: Path | None = None
    project_name: str | None = None
    user_name: str | None = None
    clock: Callable[[], datetime] = datetime.now
    _creation: datetime | None = field(default=None, init=False, repr=False)
    _now: datetime | None = field(default=None, init=False, repr=False)

    @property
    def now(self) -> datetime:
        """Current time, sampled once per context so all tokens agree."""
        if self._now is None:
            self._now = self.clock()
        return self._now

    @property
    def creation_time(self) -> datetime | None:
        """Creation time of ``path``, or None if it is not an existing file.

        Uses the birth time where the platform records one, the inode change
        time otherwise.
        """
        if self._creation is None and self.path is not None and self.path.is_file():
            st = self.path.stat()
            ts: float = getattr(st, "st_birthtime", st.st_ctime)
            self._creation = datetime.fromtimestamp(ts)
        return self._creation

    def login_name(self) -> str | None:
        """Return ``user_name`` or the detected login name."""
        if self.user_name is None:
            self.user_name = _login_name()
        return self.user_name


@dataclass(frozen=True)
class TokenResolver:
    """Resolves one template token.

    Attributes:
        token (str): Literal token text, e.g. ``%FileName%``.
        can_resolve (Callable[[ExpansionContext], bool]): Whether a value is
            available for the context.
        resolve (Callable[[ExpansionContext], str]): Produce the value.
    """

    token: str
    can_resolve: Callable[[ExpansionContext], bool]
    resolve: Callable[[ExpansionContext], str]


def _has_path(ctx: ExpansionContext) -> bool:
    return ctx.path is not None


def _has_creation(ctx: ExpansionContext) -> bool:
    return ctx.creation_time is not None


def _created(ctx: ExpansionContext) -> datetime:
    created: datetime | None = ctx.creation_time
    assert created is not None
    return created


def _always(_ctx: ExpansionContext) -> bool:
    return True


DEFAULT_RESOLVERS: Final[tuple[TokenResolver, ...]] = (
    TokenResolver("%FullFileName%", _has_path, lambda c: str(c.path.resolve()) if c.path else ""),
    TokenResolver("%FileName%", _has_path, lambda c: c.path.name if c.path else ""),
    TokenResolver("%CreationYear%", _has_creation, lambda c: str(_created(c).year)),
    TokenResolver("%CreationMonth%", _has_creation, lambda c: str(_created(c).month)),
    TokenResolver("%CreationDay%", _has_creation, lambda c: str(_created(c).day)),
    TokenResolver("%CreationTime%", _has_creation, lambda c: _created(c).strftime(TIME_FORMAT)),
    TokenResolver("%CurrentYear%", _always, lambda c: str(c.now.year)),
    TokenResolver("%CurrentMonth%", _always, lambda c: str(c.now.month)),
    TokenResolver("%CurrentDay%", _always, lambda c: str(c.now.day)),
    TokenResolver("%CurrentTime%", _always, lambda c: c.now.strftime(TIME_FORMAT)),
    TokenResolver("%UserName%", lambda c: c.login_name() is not None, lambda c: c.login_name() or ""),
    TokenResolver("%Project%", lambda c: bool(c.project_name), lambda c: c.project_name or ""),
)


def expand(
    template_lines: Sequence[str],
    resolvers: Iterable[TokenResolver] = DEFAULT_RESOLVERS,
    context: ExpansionContext | None = None,
    newline: str = "\n",
) -> str:
    """Expand a header template into header text.

    Args:
        template_lines (Sequence[str]): Raw template lines, without line breaks.
        resolvers (Iterable[TokenResolver]): Resolvers, applied in order.
        context (ExpansionContext | None): Document metadata; an empty context if None.
        newline (str): Line ending used to join the lines.

    Returns:
        str: The expanded header. Tokens without a usable resolver are kept verbatim.
    """
    ctx: ExpansionContext = context if context is not None else ExpansionContext()
    text: str = newline.join(template_lines)
    for resolver in resolvers:
        if resolver.token not in text:
            continue
        if resolver.can_resolve(ctx):
            text = text.replace(resolver.token, resolver.resolve(ctx))
        else:
            logger.debug("Token %s left unresolved for %s", resolver.token, ctx.path)
    return text
