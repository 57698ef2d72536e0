import argparse

import pytest

from ckbcli import arg
from ckbcli.arg_parser import CapacityParser, IntParser, PrivkeyPathParser

HASH = "ac71d52d9c1c693a4136513d7c62b0a6441b14ced02518650fe673dfcb6c016c"
LOCK_ARG = "e22f7f385830a75e50ab7fc5fd4c35b134f1e84b"
GENERATOR = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def build(*specs):
    parser = argparse.ArgumentParser(prog="test", exit_on_error=False)
    for spec in specs:
        spec.add_to(parser)
    return parser


def test_all_specs_register_together():
    parser = argparse.ArgumentParser(prog="test", exit_on_error=False)
    specs = [
        arg.privkey_path(),
        arg.pubkey(),
        arg.lock_hash(),
        arg.lock_arg(),
        arg.from_account(),
        arg.to_data(),
        arg.to_data_path(),
        arg.capacity(),
        arg.tx_fee(),
        arg.with_password(),
        arg.type_hash(),
        arg.code_hash(),
        arg.live_cells_limit(),
        arg.from_block_number(),
        arg.to_block_number(),
        arg.top_n(),
    ]
    for spec in specs:
        spec.add_to(parser)
    namespace = parser.parse_args([])
    assert namespace.with_password is False
    assert namespace.capacity is None
    assert getattr(namespace, "from") is None


def test_defaults():
    namespace = build(arg.live_cells_limit(), arg.top_n()).parse_args([])
    assert namespace.limit == "15"
    assert namespace.number == "10"
    assert IntParser().from_matches(namespace, "limit") == 15


def test_short_option():
    namespace = build(arg.top_n()).parse_args(["-n", "3"])
    assert namespace.number == "3"


def test_capacity_round_trip():
    namespace = build(arg.capacity(), arg.tx_fee()).parse_args(
        ["--capacity", "12345.234", "--tx-fee", "0.335"]
    )
    assert CapacityParser().from_matches(namespace, "capacity") == CapacityParser().parse(
        "12345.234"
    )
    assert namespace.tx_fee == "0.335"


@pytest.mark.parametrize(
    "factory, value",
    [
        (arg.capacity, "abc"),
        (arg.lock_hash, HASH[2:]),
        (arg.lock_arg, HASH),
        (arg.from_account, "zz"),
        (arg.to_data, "0x3a665"),
        (arg.pubkey, "05" + GENERATOR[2:]),
        (arg.from_block_number, "-1"),
        (arg.code_hash, "xyz"),
    ],
)
def test_invalid_values_rejected(factory, value):
    spec = factory()
    with pytest.raises(argparse.ArgumentError):
        build(spec).parse_args([f"--{spec.long}", value])


def test_valid_hashes_kept_as_given():
    namespace = build(arg.lock_hash(), arg.lock_arg(), arg.type_hash()).parse_args(
        ["--lock-hash", HASH, "--lock-arg", LOCK_ARG, "--type-hash", "0x" + HASH]
    )
    assert namespace.lock_hash == HASH
    assert namespace.lock_arg == LOCK_ARG
    assert namespace.type_hash == "0x" + HASH


def test_with_password_flag():
    parser = build(arg.with_password())
    assert parser.parse_args(["--with-password"]).with_password is True
    assert parser.parse_args([]).with_password is False


def test_to_data_path(tmp_path):
    data_file = tmp_path / "data.bin"
    data_file.write_bytes(b"\x01")
    parser = build(arg.to_data_path())
    assert parser.parse_args(["--to-data-path", str(data_file)]).to_data_path == str(data_file)
    with pytest.raises(argparse.ArgumentError):
        parser.parse_args(["--to-data-path", str(tmp_path / "missing")])
    with pytest.raises(argparse.ArgumentError):
        parser.parse_args(["--to-data-path", str(tmp_path)])


def test_privkey_path(tmp_path):
    key = "01" * 32
    key_file = tmp_path / "key"
    key_file.write_text(key + "\n")
    namespace = build(arg.privkey_path()).parse_args(["--privkey-path", str(key_file)])
    assert PrivkeyPathParser().from_matches(namespace, "privkey-path") == bytes.fromhex(key)


def test_block_numbers():
    namespace = build(arg.from_block_number(), arg.to_block_number()).parse_args(
        ["--from", "7", "--to", "9"]
    )
    assert IntParser().from_matches(namespace, "from") == 7
    assert IntParser().from_matches(namespace, "to") == 9


def test_spec_dest_matches_name():
    specs = [
        arg.privkey_path(),
        arg.pubkey(),
        arg.lock_hash(),
        arg.lock_arg(),
        arg.from_account(),
        arg.to_data(),
        arg.to_data_path(),
        arg.capacity(),
        arg.tx_fee(),
        arg.with_password(),
        arg.type_hash(),
        arg.code_hash(),
        arg.live_cells_limit(),
        arg.from_block_number(),
        arg.to_block_number(),
        arg.top_n(),
    ]
    for spec in specs:
        assert spec.dest == spec.name.replace("-", "_")
        assert spec.takes_value == (spec.parser is not None)
    assert [spec.name for spec in specs if not spec.takes_value] == ["with-password"]