"""Pretty-print JSON values with optional per-component colors."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .styles import paint


class Color(Enum):
    """Colors available for the JSON components."""

    BLACK = "black"
    BLUE = "blue"
    CYAN = "cyan"
    GREEN = "green"
    MAGENTA = "magenta"
    PURPLE = "purple"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"
    PLAIN = "plain"


_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _format_float(value: float) -> str:
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "-0" if text == "-0" else "0"
    return text


def _escape_for(char: str) -> str | None:
    if char in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[char]
    if ord(char) < 0x20:
        return f"\\u{ord(char):04x}"
    return None


class _Writer:
    """Streams one value, keeping the same layout state as a formatter would."""

    def __init__(self, colors: Colorizer) -> None:
        self.colors = colors
        self.parts: list[str] = []
        self.indent_level = 0
        self.array_empty = True
        self.current_is_key = False

    def _paint(self, text: str, color: Color) -> str:
        return paint(text, color.value)

    def _indent(self) -> str:
        return " " * (self.indent_level * 2)

    def _string_color(self) -> Color:
        return self.colors.key if self.current_is_key else self.colors.string

    def write(self, value: Any) -> None:
        if value is None:
            self.parts.append(self._paint("null", self.colors.null))
        elif isinstance(value, bool):
            self.parts.append(self._paint("true" if value else "false", self.colors.boolean))
        elif isinstance(value, int):
            self.parts.append(self._paint(str(value), self.colors.number))
        elif isinstance(value, float):
            if math.isfinite(value):
                self.parts.append(self._paint(_format_float(value), self.colors.number))
            else:
                self.parts.append(self._paint("null", self.colors.null))
        elif isinstance(value, str):
            self.write_string(value)
        elif isinstance(value, (list, tuple)):
            self.write_array(value)
        elif isinstance(value, dict):
            self.write_object(value)
        else:
            raise TypeError(f"value of type {type(value).__name__} is not JSON")

    def write_string(self, value: str) -> None:
        color = self._string_color()
        self.parts.append(self._paint('"', color))
        start = 0
        for index, char in enumerate(value):
            escaped = _escape_for(char)
            if escaped is None:
                continue
            if start < index:
                self.parts.append(self._paint(value[start:index], color))
            self.parts.append(self._paint(escaped, self.colors.escape_sequence))
            start = index + 1
        if start != len(value):
            self.parts.append(self._paint(value[start:], color))
        self.parts.append(self._paint('"', color))

    def write_array(self, items: Any) -> None:
        self.array_empty = True
        self.indent_level += 1
        self.parts.append("[")
        for position, item in enumerate(items):
            self.array_empty = False
            if position:
                self.parts.append(",")
            self.parts.append("\n" + self._indent())
            self.write(item)
        self.indent_level -= 1
        if self.array_empty:
            self.parts.append("]")
        else:
            self.parts.append("\n" + self._indent() + "]")

    def write_object(self, mapping: dict) -> None:
        for key in mapping:
            if not isinstance(key, str):
                raise TypeError(f"object key must be a string, got {type(key).__name__}")
        self.indent_level += 1
        self.parts.append("{")
        for position, key in enumerate(sorted(mapping)):
            if position:
                self.parts.append(",")
            self.current_is_key = True
            self.parts.append("\n" + self._indent())
            self.write_string(key)
            self.current_is_key = False
            self.parts.append(": ")
            self.write(mapping[key])
        self.indent_level -= 1
        self.parts.append("\n" + self._indent() + "}")


@dataclass(frozen=True)
class Colorizer:
    """A set of colors for the JSON components; renders pretty-printed JSON."""

    null: Color = Color.PLAIN
    boolean: Color = Color.PLAIN
    number: Color = Color.PLAIN
    string: Color = Color.PLAIN
    key: Color = Color.PLAIN
    escape_sequence: Color = Color.PLAIN

    @classmethod
    def arbitrary(cls) -> Colorizer:
        """A predefined palette for callers that just want color."""
        return cls(
            null=Color.CYAN,
            boolean=Color.YELLOW,
            number=Color.MAGENTA,
            string=Color.GREEN,
            key=Color.BLUE,
            escape_sequence=Color.RED,
        )

    def colorize_json_str(self, s: str) -> str:
        """Parse ``s`` as JSON and render it; raises ValueError on bad JSON."""
        return self.colorize_json_value(json.loads(s))

    def colorize_json_value(self, value: Any) -> str:
        writer = _Writer(self)
        writer.write(value)
        return "".join(writer.parts)