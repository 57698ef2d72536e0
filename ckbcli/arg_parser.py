"""Parsers that turn command-line strings into typed values."""

from __future__ import annotations

import argparse
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar
from urllib.parse import SplitResult, urlsplit

T = TypeVar("T")

ONE_CKB = 100_000_000
_U64_MAX = 2**64 - 1

# secp256k1 curve parameters
_P = 2**256 - 2**32 - 977
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")


class ArgParseError(ValueError):
    """Raised when an argument string cannot be parsed."""


class ArgParser(ABC, Generic[T]):
    """Parses one kind of argument value from its string form."""

    @abstractmethod
    def parse(self, input: str) -> T:
        """Parse ``input``; raises ArgParseError when it is invalid."""

    def validate(self, input: str) -> None:
        """Check that ``input`` parses; raises ArgParseError otherwise."""
        self.parse(input)

    def from_matches(self, namespace: argparse.Namespace, name: str) -> T:
        """Parse the required argument ``name`` from parsed command-line options."""
        return self.from_matches_opt(namespace, name, True)

    def from_matches_opt(
        self, namespace: argparse.Namespace, name: str, required: bool = False
    ) -> T | None:
        """Parse the argument ``name`` if present; None when absent and optional."""
        value = getattr(namespace, _dest(name), None)
        if value is None:
            if required:
                raise ArgParseError(f"<{name}> is required")
            return None
        return self.parse(value)

    def from_matches_vec(self, namespace: argparse.Namespace, name: str) -> list[T]:
        """Parse every value given for ``name``; empty when absent."""
        value = getattr(namespace, _dest(name), None)
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [self.parse(item) for item in value]


def _dest(name: str) -> str:
    return name.replace("-", "_")


class NullParser(ArgParser[str]):
    """Accepts any string unchanged."""

    def parse(self, input: str) -> str:
        return input


class EitherParser(ArgParser[Any]):
    """Tries the first parser, then the second."""

    def __init__(self, a: ArgParser[Any], b: ArgParser[Any]) -> None:
        self.a = a
        self.b = b

    def parse(self, input: str) -> Any:
        try:
            return self.a.parse(input)
        except ArgParseError:
            return self.b.parse(input)


class FromStrParser(ArgParser[T]):
    """Parses with any converter callable that raises ValueError on bad input."""

    def __init__(self, convert: Callable[[str], T]) -> None:
        self.convert = convert

    def parse(self, input: str) -> T:
        try:
            return self.convert(input)
        except (ValueError, TypeError) as err:
            raise ArgParseError(str(err)) from err


class IntParser(ArgParser[int]):
    """Parses a decimal integer of a fixed bit width, optionally signed."""

    def __init__(self, bits: int = 64, signed: bool = False) -> None:
        self.bits = bits
        self.signed = signed
        if signed:
            self.min = -(2 ** (bits - 1))
            self.max = 2 ** (bits - 1) - 1
        else:
            self.min = 0
            self.max = 2**bits - 1

    def parse(self, input: str) -> int:
        if not input:
            raise ArgParseError("cannot parse integer from empty string")
        negative = False
        digits = input
        if input[0] in "+-":
            negative = input[0] == "-"
            digits = input[1:]
            if negative and not self.signed:
                raise ArgParseError("invalid digit found in string")
        if not digits or any(char not in _DEC_DIGITS for char in digits):
            raise ArgParseError("invalid digit found in string")
        value = -int(digits) if negative else int(digits)
        if value > self.max:
            raise ArgParseError("number too large to fit in target type")
        if value < self.min:
            raise ArgParseError("number too small to fit in target type")
        return value


class UrlParser(ArgParser[SplitResult]):
    """Parses an absolute URL."""

    def parse(self, input: str) -> SplitResult:
        try:
            url = urlsplit(input)
            url.port
        except ValueError as err:
            raise ArgParseError(str(err)) from err
        if not url.scheme:
            raise ArgParseError("relative URL without a base")
        return url


class HexParser(ArgParser[bytes]):
    """Parses a hex string, with or without a ``0x`` prefix."""

    def parse(self, input: str) -> bytes:
        if input.startswith(("0x", "0X")):
            input = input[2:]
        if len(input) % 2 != 0:
            raise ArgParseError(f"Invalid hex string lenth: {len(input)}")
        bad = next((char for char in input if char not in _HEX_DIGITS), None)
        if bad is not None:
            raise ArgParseError(f"parse hex string failed: invalid character {bad!r}")
        return bytes.fromhex(input)


class FixedHashParser(ArgParser[bytes]):
    """Parses a hex hash of exactly ``size`` bytes (32 for H256, 20 for H160)."""

    def __init__(self, size: int = 32) -> None:
        self.size = size

    def parse(self, input: str) -> bytes:
        data = HexParser().parse(input)
        if len(data) != self.size:
            raise ArgParseError(
                f"invalid hash length: expected {self.size} bytes, got {len(data)}"
            )
        return data


class PathParser(ArgParser[Path]):
    """Parses a filesystem path, optionally requiring that it exists."""

    def __init__(self, should_exist: bool = False) -> None:
        self.should_exist = should_exist

    def parse(self, input: str) -> Path:
        path = Path(input)
        if self.should_exist and not path.exists():
            raise ArgParseError(f"path <{input}> not exists")
        return path


class FilePathParser(ArgParser[Path]):
    """Parses a path that, if it exists, must be a regular file."""

    def __init__(self, should_exist: bool = False) -> None:
        self.path_parser = PathParser(should_exist)

    def parse(self, input: str) -> Path:
        path = self.path_parser.parse(input)
        if path.exists() and not path.is_file():
            raise ArgParseError(f"path <{input}> is not file")
        return path


class DirPathParser(ArgParser[Path]):
    """Parses a path that, if it exists, must be a directory."""

    def __init__(self, should_exist: bool = False) -> None:
        self.path_parser = PathParser(should_exist)

    def parse(self, input: str) -> Path:
        path = self.path_parser.parse(input)
        if path.exists() and not path.is_dir():
            raise ArgParseError(f"path <{input}> is not directory")
        return path


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        raise ArgParseError("stream did not contain valid UTF-8") from err
    except OSError as err:
        raise ArgParseError(str(err)) from err


class PrivkeyPathParser(ArgParser[bytes]):
    """Reads a secp256k1 secret key (hex, first word) from a file."""

    def parse(self, input: str) -> bytes:
        path = FilePathParser(True).parse(input)
        words = _read_text(path).split()
        if not words:
            raise ArgParseError("File is empty")
        data = FixedHashParser(32).parse(words[0])
        scalar = int.from_bytes(data, "big")
        if not 0 < scalar < _N:
            raise ArgParseError(
                "Invalid secp256k1 secret key format, error: "
                "malformed or out-of-range secret key"
            )
        return data


def _is_valid_pubkey(data: bytes) -> bool:
    if len(data) == 33 and data[0] in (2, 3):
        x = int.from_bytes(data[1:], "big")
        if x >= _P:
            return False
        rhs = (pow(x, 3, _P) + 7) % _P
        y = pow(rhs, (_P + 1) // 4, _P)
        return y * y % _P == rhs
    if len(data) == 65 and data[0] in (4, 6, 7):
        x = int.from_bytes(data[1:33], "big")
        y = int.from_bytes(data[33:], "big")
        if x >= _P or y >= _P:
            return False
        if data[0] != 4 and (y & 1) != (data[0] & 1):
            return False
        return (y * y - pow(x, 3, _P) - 7) % _P == 0
    return False


class PubkeyHexParser(ArgParser[bytes]):
    """Parses a hex-encoded secp256k1 public key and checks it lies on the curve."""

    def parse(self, input: str) -> bytes:
        data = HexParser().parse(input)
        if not _is_valid_pubkey(data):
            raise ArgParseError(
                "Invalid secp256k1 public key format, error: malformed public key"
            )
        return data


class CapacityParser(ArgParser[int]):
    """Parses a CKB amount such as ``123.335`` into shannons."""

    def parse(self, input: str) -> int:
        parts = input.strip().split(".")
        capacity = ONE_CKB * IntParser(64).parse(parts[0])
        if len(parts) > 1:
            shannon_str = parts[1].strip()
            if len(shannon_str) > 8:
                raise ArgParseError(f"decimal part too long: {len(shannon_str)}")
            shannon = IntParser(32).parse(shannon_str)
            capacity += shannon * 10 ** (8 - len(shannon_str))
        if capacity > _U64_MAX:
            raise ArgParseError("number too large to fit in target type")
        return capacity


@dataclass(frozen=True)
class OutPoint:
    """A reference to a transaction output."""

    tx_hash: bytes
    index: int


class OutPointParser(ArgParser[OutPoint]):
    """Parses ``{tx-hash}-{index}``."""

    def parse(self, input: str) -> OutPoint:
        parts = input.split("-")
        if len(parts) != 2:
            raise ArgParseError(
                f"Invalid OutPoint: {input}, format: {{tx-hash}}-{{index}}"
            )
        tx_hash = FixedHashParser(32).parse(parts[0])
        index = IntParser(32).parse(parts[1])
        return OutPoint(tx_hash, index)


_DURATION_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 3600 * 24}


class DurationParser(ArgParser[timedelta]):
    """Parses durations such as ``30s``, ``5m``, ``2h`` or ``1d``."""

    def parse(self, input: str) -> timedelta:
        if not input:
            raise ArgParseError("Missing input")
        lowered = input.lower()
        value = IntParser(64).parse(lowered[:-1])
        multiplier = _DURATION_UNITS.get(lowered[-1])
        if multiplier is None:
            raise ArgParseError(
                "Please give an unit, {s: second, m: minute, h: hour, d: day}"
            )
        return timedelta(seconds=value * multiplier)