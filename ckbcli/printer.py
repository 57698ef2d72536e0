"""Output formats, terminal detection and rendering of values for display."""

from __future__ import annotations

import dataclasses
import json
import os
import sys
from collections.abc import Mapping
from enum import Enum
from typing import Any

from . import yaml_ser
from .json_color import Colorizer


def is_a_tty(stderr: bool = False) -> bool:
    """Whether stdout (or stderr) is attached to a terminal."""
    stream = sys.stderr if stderr else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty is not None and isatty())


def is_term_dumb() -> bool:
    """Whether the TERM environment variable says the terminal is dumb."""
    return os.environ.get("TERM") == "dumb"


class OutputFormat(Enum):
    """How values are printed."""

    YAML = "yaml"
    JSON = "json"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, format: str) -> OutputFormat:
        """Look up a format by name; raises ValueError for unknown names."""
        for member in cls:
            if member.value == format:
                return member
        raise ValueError(f"Invalid output format: {format}")


class ColorWhen(Enum):
    """When colored output is used."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def default(cls) -> ColorWhen:
        """AUTO on a capable terminal, NEVER otherwise."""
        if is_a_tty(False) and not is_term_dumb():
            return cls.AUTO
        return cls.NEVER

    @classmethod
    def from_color(cls, color: bool) -> ColorWhen:
        """ALWAYS when color is requested and the terminal supports it."""
        if is_a_tty(False) and not is_term_dumb() and color:
            return cls.ALWAYS
        return cls.NEVER

    def color(self) -> bool:
        return self is not ColorWhen.NEVER


def _to_json(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _to_json(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, (bytes, bytearray, memoryview)):
        return list(bytes(value))
    if isinstance(value, Mapping):
        return {key: _to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json(item) for item in value]
    return value


def render(value: Any, format: OutputFormat, color: bool) -> str:
    """Render ``value`` as YAML or pretty JSON, optionally colored.

    Objects with their own ``render(format, color)`` method render themselves.
    """
    custom = getattr(value, "render", None)
    if callable(custom) and not isinstance(value, (str, bytes, Mapping, list, tuple)):
        return custom(format, color)
    if format is OutputFormat.YAML:
        return yaml_ser.to_string(value, color)
    data = _to_json(value)
    if color:
        return Colorizer.arbitrary().colorize_json_value(data)
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)