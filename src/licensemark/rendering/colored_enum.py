# topmark:header:start
#
#   project      : LicenseMark
#   file         : colored_enum.py
#   file_relpath : src/licensemark/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-aware enum base used for result codes and file outcomes.

`ColoredStrEnum` members are plain strings (their ``.value``) that also carry a
colorizer, typically a yachalk style:

    ```python
    from yachalk import chalk

    class Outcome(ColoredStrEnum):
        CHANGED = ("changed", chalk.yellow)
        OK = ("ok", chalk.green)

    Outcome.CHANGED.color("a.cs")   # yellow "a.cs"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display.

    Compatible with `yachalk.ChalkBuilder.__call__`.
    """

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return the decorated, ``sep``-joined rendering of ``args``."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose *value* is a string and that carries an associated colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Construct a colored enum member.

        Args:
            text (str): The textual value for the enum member (stored in `_value_`).
            color (Colorizer): A callable used to colorize text for display.

        Returns:
            ColoredStrEnum: The newly constructed enum member.
        """
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the textual value of the enum member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with this member."""
        return self._color
