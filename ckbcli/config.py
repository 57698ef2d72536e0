"""Global settings of the interactive shell and its variables."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .printer import OutputFormat, render
from .styles import paint

DEFAULT_JSONRPC_URL = "http://127.0.0.1:8114"

_INDEX_RE = re.compile(r"\+?[0-9]+")
_MISSING = object()


def _lookup(node: Any, part: str) -> Any:
    if isinstance(node, list) and _INDEX_RE.fullmatch(part):
        index = int(part)
        if index < len(node):
            return node[index]
    if isinstance(node, dict) and part in node:
        return node[part]
    return _MISSING


@dataclass(frozen=True)
class KV:
    """Either the value found for a key, or the list of all keys."""

    keys: tuple[str, ...] | None = None
    value: Any = None
    found: bool = False

    def values(self) -> Iterator[Any]:
        """Yield the found value, if there is one."""
        if self.keys is None and self.found:
            yield self.value

    def render(self, format: OutputFormat, color: bool) -> str:
        if self.keys is not None:
            return "\n".join(f"{index}) {key}" for index, key in enumerate(self.keys))
        if self.found:
            return render(self.value, format, color)
        return "None"


class GlobalConfig:
    """Settings shared by all commands, plus user-defined variables."""

    def __init__(self, url: str | None = None, index_state: Any = None) -> None:
        self._url = url
        self.color = True
        self.debug = False
        self.output_format = OutputFormat.YAML
        self.path = Path.cwd()
        self.completion_style = True
        self.edit_style = True
        self.env_variable: dict[str, Any] = {}
        self.index_state = index_state

    @property
    def url(self) -> str:
        return self._url if self._url is not None else DEFAULT_JSONRPC_URL

    def set_url(self, value: str) -> None:
        """Set the RPC URL, adding ``http://`` when no scheme is given."""
        if value.startswith("http://") or value.startswith("https://"):
            self._url = value
        else:
            self._url = "http://" + value

    def set(self, key: str, value: Any) -> GlobalConfig:
        self.env_variable[key] = value
        return self

    def get(self, key: str | None) -> KV:
        """Look up a dotted path such as ``a.b.0``, or list keys when ``key`` is None."""
        if key is None:
            return KV(keys=tuple(self.env_variable))
        name, *rest = key.split(".")
        node = self.env_variable.get(name, _MISSING)
        for part in rest:
            if node is _MISSING:
                break
            node = _lookup(node, part)
        if node is _MISSING:
            return KV()
        return KV(value=node, found=True)

    def add_env_vars(self, vars: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> None:
        self.env_variable.update(vars)

    def replace_cmd(self, pattern: str | re.Pattern[str], line: str) -> str:
        """Replace each match's ``key`` group with the variable's string or number value."""
        regex = re.compile(pattern)

        def substitute(match: re.Match[str]) -> str:
            key = match.groupdict().get("key")
            if key is None:
                return ""
            for value in self.get(key).values():
                if isinstance(value, str):
                    return value
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    return str(value)
                return ""
            return ""

        return regex.sub(substitute, line)

    def switch_color(self) -> None:
        self.color = not self.color

    def switch_debug(self) -> None:
        self.debug = not self.debug

    def switch_completion_style(self) -> None:
        self.completion_style = not self.completion_style

    def switch_edit_style(self) -> None:
        self.edit_style = not self.edit_style

    def describe(self, version: str) -> str:
        """The settings as aligned ``[ name ]: value`` lines."""
        values = [
            ("ckb-cli version", version),
            ("url", self.url),
            ("pwd", str(self.path)),
            ("color", str(self.color).lower()),
            ("debug", str(self.debug).lower()),
            ("output format", str(self.output_format)),
            ("completion style", "List" if self.completion_style else "Circular"),
            ("edit style", "Emacs" if self.edit_style else "Vi"),
            ("index db state", str(self.index_state)),
        ]
        width = max(len(name) for name, _ in values)
        return "\n".join(
            f"[ {name:>{width}} ]: {paint(value, 'yellow') if self.color else value}"
            for name, value in values
        )

    def print(self, version: str) -> None:
        print(self.describe(version))