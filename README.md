# ckbcli

Building blocks for a command-line client of a CKB node. It has no
dependencies outside the standard library and needs Python 3.10 or later.

## What is in it

- **`ckbcli.arg_parser`**: parsers that turn option strings into values.
  `HexParser` (with or without `0x`), `FixedHashParser(size)` (32 bytes by
  default, 20 for a lock argument), `PathParser`, `FilePathParser`,
  `DirPathParser`, `PrivkeyPathParser` (reads the first word of a file as a
  32-byte secp256k1 secret key and checks its range), `PubkeyHexParser`
  (checks that a compressed or uncompressed key lies on the curve),
  `CapacityParser` (`123.335` CKB to shannons), `OutPointParser`
  (`{tx-hash}-{index}` to an `OutPoint`), `DurationParser` (`30s`, `5m`,
  `2h`, `1d` to a `timedelta`), `IntParser(bits, signed)`, `UrlParser`,
  `FromStrParser(convert)`, `NullParser` and `EitherParser(a, b)`.
  Every parser has `parse` and `validate`, and reads values from an
  `argparse.Namespace` with `from_matches`, `from_matches_opt` and
  `from_matches_vec`. Bad input raises `ArgParseError`, a `ValueError`.
- **`ckbcli.arg`**: ready-made `ArgSpec` options such as `privkey_path()`,
  `pubkey()`, `lock_hash()`, `lock_arg()`, `from_account()`, `to_data()`,
  `to_data_path()`, `capacity()`, `tx_fee()`, `with_password()`,
  `type_hash()`, `code_hash()`, `live_cells_limit()` (default `15`),
  `from_block_number()`, `to_block_number()` and `top_n()` (`-n`, default
  `10`). `ArgSpec.add_to(parser)` registers the option on an
  `argparse.ArgumentParser`; values are validated and kept as strings.
- **`ckbcli.printer`**: `OutputFormat` (`YAML`, `JSON`, looked up by name with
  `OutputFormat.parse`), `ColorWhen`, `is_a_tty`, `is_term_dumb` and
  `render(value, format, color)`.
- **`ckbcli.yaml_ser`**: block-style YAML output (`to_string`, `to_writer`,
  `YamlEmitter`), with `need_quotes` and `escape_str`.
- **`ckbcli.json_color`**: `Colorizer` pretty-prints JSON with keys sorted,
  colouring each kind of component; `Colorizer.arbitrary()` gives a ready
  palette.
- **`ckbcli.config`**: `GlobalConfig` keeps the node URL (default
  `http://127.0.0.1:8114`), display switches and user variables, looks
  variables up by dotted path and substitutes them into command lines;
  `describe` lists the settings as aligned lines.
- **`ckbcli.completer`**: `CkbCompleter` proposes sub-commands and options of
  an `argparse` parser for the word under the cursor, with `string_include`,
  `get_completions` and `find_subcommand` as the pieces it is built from.
- **`ckbcli.styles`**: `paint` for ANSI colours and `TypedStr` fragments.

## Examples

Parse a capacity given in CKB into shannons:

```python
from ckbcli.arg_parser import CapacityParser

CapacityParser().parse("12345.234")   # 1234523400000
```

Amounts with more than eight decimal places, negative amounts and text that is
not a number raise `ArgParseError`.

Add shared options to a parser and read them back:

```python
import argparse
from ckbcli import arg
from ckbcli.arg_parser import CapacityParser, IntParser

parser = argparse.ArgumentParser()
arg.capacity().add_to(parser)
arg.top_n().add_to(parser)
ns = parser.parse_args(["--capacity", "1.5"])
CapacityParser().from_matches(ns, "capacity")   # 150000000
IntParser(32).from_matches(ns, "number")        # 10
```

Render a value as YAML or JSON:

```python
from ckbcli.printer import OutputFormat, render

data = {"name": "alice", "capacity": 100, "tags": ["a", "b"]}
print(render(data, OutputFormat.YAML, False))
print(render(data, OutputFormat.JSON, False))
```

Strings that YAML would otherwise read as numbers, booleans or null are
quoted, so the output reads back as the same value.

Colour a JSON document for the terminal:

```python
from ckbcli.json_color import Colorizer

print(Colorizer.arbitrary().colorize_json_str('{"ok": true, "n": 3}'))
```

Keep settings and substitute variables into a command line:

```python
import re
from ckbcli.config import GlobalConfig

config = GlobalConfig()
config.set_url("127.0.0.1:8114")          # stored as http://127.0.0.1:8114
config.set("account", {"lock_arg": "0x00"})
config.replace_cmd(re.compile(r"\$\{(?P<key>[^}]+)\}"), "show ${account.lock_arg}")
# 'show 0x00'
```

## What it does not do

This package is a library of parts. It has no command to run and no
interactive shell, it does not talk to a node over RPC, and it has no wallet,
keystore or index database. It does not parse or encode CKB addresses, and it
does not read extended private keys. `GlobalConfig` holds an index state only
as a value it prints.

## Running the tests

Install the `test` extra and run pytest from the project directory.