"""Tab completion of commands and options for an argparse command tree."""

from __future__ import annotations

import argparse
import shlex
from collections.abc import Iterable
from typing import NamedTuple

from .styles import paint

DEFAULT_BREAK_CHARS = frozenset(" \t\n\"\\'`@$><=;|&{(\0")
ESCAPE_CHAR = "\\"

_MULTIPLE_ACTIONS = (
    argparse._AppendAction,
    argparse._AppendConstAction,
    argparse._CountAction,
    argparse._ExtendAction,
)


class Candidate(NamedTuple):
    """A completion: what is shown and what is inserted."""

    display: str
    replacement: str


def string_include(x: str, y: str) -> bool:
    """Whether the characters of ``y`` appear in ``x`` in order."""
    remaining = iter(x)
    return all(char in remaining for char in y)


def _subparsers(parser: argparse.ArgumentParser) -> dict[str, argparse.ArgumentParser]:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices
    return {}


def _is_multiple(action: argparse.Action) -> bool:
    if isinstance(action, _MULTIPLE_ACTIONS):
        return True
    nargs = action.nargs
    return nargs in ("*", "+", argparse.REMAINDER) or (isinstance(nargs, int) and nargs > 1)


def _switch_candidates(action: argparse.Action, used: set[str]) -> list[Candidate]:
    short = next(
        (s for s in action.option_strings if s.startswith("-") and not s.startswith("--")),
        None,
    )
    long = next((s for s in action.option_strings if s.startswith("--")), None)
    names = [name for name in (short, long) if name is not None]
    if not _is_multiple(action) and any(name in used for name in names):
        return []
    return [
        Candidate(f"{name}(*)" if action.required else name, name) for name in names
    ]


def get_completions(
    parser: argparse.ArgumentParser, args: Iterable[str]
) -> list[Candidate]:
    """Subcommands (with aliases), then flags, then options of ``parser``.

    Options already present in ``args`` are left out unless they may repeat.
    """
    used = set(args)
    candidates: list[Candidate] = []
    seen: dict[int, bool] = {}
    for name, sub in _subparsers(parser).items():
        seen.setdefault(id(sub), True)
        candidates.append(Candidate(name, name))
    optionals = [action for action in parser._actions if action.option_strings]
    for action in optionals:
        if action.nargs == 0:
            candidates.extend(_switch_candidates(action, used))
    for action in optionals:
        if action.nargs != 0:
            candidates.extend(_switch_candidates(action, used))
    return candidates


def find_subcommand(
    parser: argparse.ArgumentParser, names: Iterable[str]
) -> argparse.ArgumentParser | None:
    """Walk down the command tree along ``names``.

    Returns the deepest matched command, or None when unmatched words
    remain for a command that still has subcommands.
    """
    names = list(names)
    rest: list[str] = []
    subcommands = _subparsers(parser)
    if names:
        name, rest = names[0], names[1:]
        inner = subcommands.get(name)
        if inner is not None:
            return find_subcommand(inner, rest) if rest else inner
    if not rest or not subcommands:
        return parser
    return None


def _extract_word(line: str, pos: int) -> tuple[int, str]:
    line = line[:pos]
    if not line:
        return 0, line
    start: int | None = None
    for index in range(len(line) - 1, -1, -1):
        char = line[index]
        if start is not None:
            if char == ESCAPE_CHAR:
                start = None
                continue
            break
        if char in DEFAULT_BREAK_CHARS:
            start = index + 1
    if start is None:
        return 0, line
    return start, line[start:]


class CkbCompleter:
    """Completes and highlights command lines for an argparse command tree."""

    def __init__(self, parser: argparse.ArgumentParser) -> None:
        self.parser = parser

    def complete(self, line: str, pos: int) -> tuple[int, list[Candidate]]:
        """Return where the current word starts and the matching candidates."""
        start, word = _extract_word(line, pos)
        args = shlex.split(line[:pos])
        current = find_subcommand(self.parser, args)
        candidates = get_completions(current, args) if current is not None else []
        word_lower = word.lower()
        if not word_lower:
            return start, candidates
        fuzzy = [c for c in candidates if string_include(c.replacement.lower(), word_lower)]
        if any(word_lower in c.replacement.lower() for c in fuzzy):
            return start, [c for c in candidates if word_lower in c.replacement.lower()]
        return start, fuzzy

    def highlight_hint(self, hint: str) -> str:
        return "\x1b[1m" + hint + "\x1b[m"

    def highlight_candidate(self, candidate: str) -> str:
        """Required options in red, subcommands in green, other options plain."""

        def color_line(param: str) -> str:
            if "*" in param:
                return paint(param, "red")
            if not param.startswith("--"):
                return paint(param, "green")
            return param

        return "\n".join(color_line(param) for param in candidate.split("\n"))

    def hint(self, line: str, pos: int) -> str | None:
        """No inline hints are offered; the cursor position must lie within the line."""
        if not 0 <= pos <= len(line):
            raise ValueError(f"cursor position {pos} outside line of length {len(line)}")
        return None