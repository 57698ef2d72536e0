"""Terminal styling helpers and typed string fragments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_ANSI_CODES = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "purple": 35,
    "cyan": 36,
    "white": 37,
}


def paint(text: str, color: str | None) -> str:
    """Wrap ``text`` in the ANSI escape for ``color``.

    ``None`` or ``"plain"`` leaves the text untouched.
    """
    if color is None or color == "plain":
        return text
    try:
        code = _ANSI_CODES[color]
    except KeyError:
        raise ValueError(f"unknown color: {color}") from None
    return f"\x1b[{code}m{text}\x1b[0m"


class StrKind(Enum):
    """The role a fragment of output text plays."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    KEY = "key"
    ESCAPED = "escaped"

    @property
    def color(self) -> str:
        return _KIND_COLORS[self]


_KIND_COLORS = {
    StrKind.NULL: "cyan",
    StrKind.BOOL: "yellow",
    StrKind.NUMBER: "magenta",
    StrKind.STRING: "green",
    StrKind.KEY: "blue",
    StrKind.ESCAPED: "red",
}


@dataclass(frozen=True)
class TypedStr:
    """A piece of text tagged with its kind, rendered plain or colored."""

    kind: StrKind
    content: str | None = None

    def __post_init__(self) -> None:
        if self.content is None and self.kind is not StrKind.NULL:
            raise ValueError(f"{self.kind.name} fragment needs content")

    def to_plain(self) -> str:
        if self.content is None:
            return "null"
        return self.content

    def colored(self) -> str:
        return paint(self.to_plain(), self.kind.color)

    def render(self, color: bool) -> str:
        return self.colored() if color else self.to_plain()