"""Definitions of the command-line options shared by several commands."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from .arg_parser import (
    ArgParseError,
    ArgParser,
    CapacityParser,
    FilePathParser,
    FixedHashParser,
    HexParser,
    IntParser,
    PrivkeyPathParser,
    PubkeyHexParser,
)


@dataclass(frozen=True)
class ArgSpec:
    """One command-line option: its name, help text and value validation."""

    name: str
    long: str
    help: str
    takes_value: bool = True
    parser: ArgParser | None = None
    default: str | None = None
    short: str | None = None

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    def _check(self, value: str) -> str:
        if self.parser is not None:
            try:
                self.parser.validate(value)
            except ArgParseError as err:
                raise argparse.ArgumentTypeError(str(err)) from err
        return value

    def add_to(self, parser: argparse.ArgumentParser) -> argparse.Action:
        """Register this option on ``parser``; values are validated but kept as strings."""
        flags = [f"-{self.short}"] if self.short else []
        flags.append(f"--{self.long}")
        if not self.takes_value:
            return parser.add_argument(
                *flags, dest=self.dest, action="store_true", help=self.help
            )
        return parser.add_argument(
            *flags,
            dest=self.dest,
            type=self._check,
            default=self.default,
            help=self.help,
        )


def privkey_path() -> ArgSpec:
    return ArgSpec(
        "privkey-path",
        "privkey-path",
        "Private key file path (only read first line)",
        parser=PrivkeyPathParser(),
    )


def pubkey() -> ArgSpec:
    return ArgSpec(
        "pubkey",
        "pubkey",
        "Public key (hex string, compressed format)",
        parser=PubkeyHexParser(),
    )


def lock_hash() -> ArgSpec:
    return ArgSpec("lock-hash", "lock-hash", "Lock hash", parser=FixedHashParser(32))


def lock_arg() -> ArgSpec:
    return ArgSpec(
        "lock-arg",
        "lock-arg",
        "Lock argument (account identifier, blake2b(pubkey)[0..20])",
        parser=FixedHashParser(20),
    )


def from_account() -> ArgSpec:
    return ArgSpec(
        "from-account",
        "from-account",
        "The account's lock-arg (transfer from this account)",
        parser=FixedHashParser(20),
    )


def to_data() -> ArgSpec:
    return ArgSpec(
        "to-data",
        "to-data",
        "Hex data store in target cell (optional)",
        parser=HexParser(),
    )


def to_data_path() -> ArgSpec:
    return ArgSpec(
        "to-data-path",
        "to-data-path",
        "Data binary file path store in target cell (optional)",
        parser=FilePathParser(True),
    )


def capacity() -> ArgSpec:
    return ArgSpec(
        "capacity",
        "capacity",
        "The capacity (unit: CKB, format: 123.335)",
        parser=CapacityParser(),
    )


def tx_fee() -> ArgSpec:
    return ArgSpec(
        "tx-fee",
        "tx-fee",
        "The transaction fee capacity (unit: CKB, format: 0.335)",
        parser=CapacityParser(),
    )


def with_password() -> ArgSpec:
    return ArgSpec(
        "with-password",
        "with-password",
        "Input password to unlock keystore account just for current transfer transaction",
        takes_value=False,
    )


def type_hash() -> ArgSpec:
    return ArgSpec("type-hash", "type-hash", "The type script hash", parser=FixedHashParser(32))


def code_hash() -> ArgSpec:
    return ArgSpec(
        "code-hash",
        "code-hash",
        "The type script's code hash",
        parser=FixedHashParser(32),
    )


def live_cells_limit() -> ArgSpec:
    return ArgSpec(
        "limit",
        "limit",
        "Get live cells <= limit",
        parser=IntParser(64),
        default="15",
    )


def from_block_number() -> ArgSpec:
    return ArgSpec("from", "from", "From block number", parser=IntParser(64))


def to_block_number() -> ArgSpec:
    return ArgSpec("to", "to", "To block number", parser=IntParser(64))


def top_n() -> ArgSpec:
    return ArgSpec(
        "number",
        "number",
        "Get top n capacity addresses",
        parser=IntParser(32),
        default="10",
        short="n",
    )