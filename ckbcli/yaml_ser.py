"""Render Python values as block-style YAML, optionally colored."""

from __future__ import annotations

import dataclasses
import io
import math
import re
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol

from .styles import StrKind, TypedStr

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\x08": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\x0c": "\\f",
    "\r": "\\r",
}
_ESCAPES.update(
    {chr(code): f"\\u{code:04x}" for code in (*range(0x20), 0x7F) if chr(code) not in _ESCAPES}
)

_QUOTE_START = frozenset("&*?|-<>=!%@")
_QUOTE_ANYWHERE = frozenset(
    ":{}[],#`\"'\\\t\n\r"
    + "".join(chr(c) for c in range(0x00, 0x07))
    + "".join(chr(c) for c in range(0x0E, 0x1B))
    + "".join(chr(c) for c in range(0x1C, 0x20))
)
_RESERVED_WORDS = frozenset(
    {
        "yes", "Yes", "YES", "no", "No", "NO",
        "True", "TRUE", "true", "False", "FALSE", "false",
        "on", "On", "ON", "off", "Off", "OFF",
        "null", "Null", "NULL", "~",
    }
)
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?i:inf|infinity|nan)|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


class SerError(Exception):
    """Raised when a value cannot be represented as YAML."""


class _Writer(Protocol):
    def write(self, text: str, /) -> Any: ...


class _Real(str):
    """A real number kept in its textual form; emitted unquoted."""

    __slots__ = ()


def _format_real(value: float) -> str:
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    if math.isnan(value):
        return ".nan"
    if value == 0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    length = len(digits)
    kk = length + exponent
    if length <= kk <= 21:
        text = digits + "0" * (kk - length) + ".0"
    elif 0 < kk <= 21:
        text = digits[:kk] + "." + digits[kk:]
    elif -6 < kk <= 0:
        text = "0." + "0" * (-kk) + digits
    elif length == 1:
        text = f"{digits}e{kk - 1}"
    else:
        text = f"{digits[0]}.{digits[1:]}e{kk - 1}"
    return ("-" if sign else "") + text


def _freeze_key(node: Any) -> Any:
    if isinstance(node, (list, tuple)):
        return tuple(_freeze_key(item) for item in node)
    if isinstance(node, dict):
        raise SerError("bad hashmap key")
    return node


def to_yaml(value: Any) -> Any:
    """Convert ``value`` into the YAML node tree the emitter understands.

    Nodes are ``None``, ``bool``, ``int`` (64-bit signed range), ``str``,
    real numbers (a ``str`` subclass holding their text), lists and dicts.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if _I64_MIN <= value <= _I64_MAX:
            return int(value)
        return _Real(str(value))
    if isinstance(value, float):
        return _Real(_format_real(value))
    if isinstance(value, str):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return list(bytes(value))
    if isinstance(value, Mapping):
        return {_freeze_key(to_yaml(key)): to_yaml(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_yaml(item) for item in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_yaml(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    raise SerError(f"cannot serialize value of type {type(value).__name__}")


def need_quotes(string: str) -> bool:
    """Whether ``string`` must be double-quoted to stay a YAML string."""
    return (
        string == ""
        or string.startswith(" ")
        or string.endswith(" ")
        or string[0] in _QUOTE_START
        or any(char in _QUOTE_ANYWHERE for char in string)
        or string in _RESERVED_WORDS
        or string.startswith(".")
        or _INT_RE.fullmatch(string) is not None
        or _FLOAT_RE.fullmatch(string) is not None
    )


def escape_str(value: str, color: bool) -> str:
    """Double-quote ``value``, escaping quotes, backslashes and control characters."""
    parts = ['"']
    start = 0
    for index, char in enumerate(value):
        escaped = _ESCAPES.get(char)
        if escaped is None:
            continue
        if start < index:
            parts.append(TypedStr(StrKind.STRING, value[start:index]).render(color))
        parts.append(TypedStr(StrKind.ESCAPED, escaped).render(color))
        start = index + 1
    if start != len(value):
        parts.append(TypedStr(StrKind.STRING, value[start:]).render(color))
    parts.append('"')
    return "".join(parts)


class YamlEmitter:
    """Writes a YAML node tree in block style to a text writer."""

    def __init__(self, writer: _Writer, color: bool, *, compact: bool = True) -> None:
        self._writer = writer
        self.color = color
        self.compact = compact
        self.best_indent = 2
        self._is_key = False
        self._level = -1

    def dump(self, doc: Any) -> None:
        """Emit ``doc`` (a node from :func:`to_yaml`)."""
        self._level = -1
        self._emit_node(doc)

    def _write(self, text: str) -> None:
        self._writer.write(text)

    def _write_indent(self) -> None:
        if self._level > 0:
            self._write(" " * (self._level * self.best_indent))

    def _emit_node(self, node: Any) -> None:
        if isinstance(node, (list, tuple)):
            self._emit_array(node)
        elif isinstance(node, dict):
            self._emit_hash(node)
        elif isinstance(node, _Real):
            self._write(TypedStr(StrKind.NUMBER, str(node)).render(self.color))
        elif isinstance(node, str):
            if need_quotes(node):
                self._write(escape_str(node, self.color))
            else:
                kind = StrKind.KEY if self._is_key else StrKind.STRING
                self._write(TypedStr(kind, node).render(self.color))
        elif isinstance(node, bool):
            text = "true" if node else "false"
            self._write(TypedStr(StrKind.BOOL, text).render(self.color))
        elif isinstance(node, int):
            self._write(TypedStr(StrKind.NUMBER, str(node)).render(self.color))
        elif node is None:
            self._write(TypedStr(StrKind.NULL, "~").render(self.color))
        else:
            raise SerError(f"not a YAML node: {type(node).__name__}")

    def _emit_array(self, items: Any) -> None:
        if not items:
            self._write("[]")
            return
        self._level += 1
        for position, item in enumerate(items):
            if position:
                self._write("\n")
                self._write_indent()
            self._write("-")
            self._emit_val(True, item)
        self._level -= 1

    def _emit_hash(self, mapping: dict) -> None:
        if not mapping:
            self._write("{}")
            return
        self._level += 1
        for position, (key, value) in enumerate(mapping.items()):
            if position:
                self._write("\n")
                self._write_indent()
            if isinstance(key, (list, tuple, dict)):
                self._write("?")
                self._emit_val(True, key)
                self._write("\n")
                self._write_indent()
                self._write(":")
                self._emit_val(True, value)
            else:
                self._is_key = True
                self._emit_node(key)
                self._is_key = False
                self._write(":")
                self._emit_val(False, value)
        self._level -= 1

    def _emit_val(self, inline: bool, value: Any) -> None:
        if isinstance(value, (list, tuple, dict)):
            if (inline and self.compact) or not value:
                self._write(" ")
            else:
                self._write("\n")
                self._level += 1
                self._write_indent()
                self._level -= 1
        else:
            self._write(" ")
        self._emit_node(value)


def to_writer(writer: _Writer, value: Any, color: bool) -> None:
    """Serialize ``value`` as YAML onto ``writer``."""
    YamlEmitter(writer, color).dump(to_yaml(value))


def to_string(value: Any, color: bool = False) -> str:
    """Serialize ``value`` as a YAML string."""
    buffer = io.StringIO()
    to_writer(buffer, value, color)
    return buffer.getvalue()