import re

from ckbcli.config import DEFAULT_JSONRPC_URL, GlobalConfig
from ckbcli.printer import OutputFormat, render


PATTERN = re.compile(r"\$\{(?P<key>[^}]+)\}")


def make_config():
    config = GlobalConfig()
    config.set("a", {"b": [10, {"c": "x"}]})
    config.set("m", {"0": "zero"})
    return config


def test_default_url():
    assert GlobalConfig().url == "http://127.0.0.1:8114"
    assert GlobalConfig().url == DEFAULT_JSONRPC_URL
    assert GlobalConfig(url="http://example.com").url == "http://example.com"


def test_set_url_adds_scheme():
    config = GlobalConfig()
    config.set_url("127.0.0.1:9000")
    assert config.url == "http://127.0.0.1:9000"
    config.set_url("https://example.com")
    assert config.url == "https://example.com"


def test_set_returns_self_and_get_nested():
    config = GlobalConfig()
    assert config.set("a", {"b": [10, {"c": "x"}]}) is config
    assert list(config.get("a.b.1.c").values()) == ["x"]
    assert list(config.get("a.b.0").values()) == [10]


def test_get_missing_path():
    config = make_config()
    missing = config.get("a.b.5")
    assert missing.found is False
    assert list(missing.values()) == []
    assert missing.render(OutputFormat.YAML, False) == "None"
    assert config.get("zzz.y").found is False


def test_get_numeric_key_falls_back_to_object():
    config = make_config()
    assert list(config.get("m.0").values()) == ["zero"]


def test_get_null_value_is_found():
    config = GlobalConfig()
    config.set("nothing", None)
    kv = config.get("nothing")
    assert kv.found is True
    assert list(kv.values()) == [None]


def test_get_keys():
    config = make_config()
    kv = config.get(None)
    assert kv.keys == ("a", "m")
    assert list(kv.values()) == []
    lines = kv.render(OutputFormat.YAML, False).splitlines()
    assert lines[0] == "0) a"
    assert len(lines) == 2


def test_found_value_renders_like_printer():
    config = make_config()
    kv = config.get("a")
    expected = render({"b": [10, {"c": "x"}]}, OutputFormat.JSON, False)
    assert kv.render(OutputFormat.JSON, False) == expected


def test_add_env_vars():
    config = GlobalConfig()
    config.add_env_vars({"x": 1})
    config.add_env_vars([("y", "two")])
    assert list(config.get("x").values()) == [1]
    assert list(config.get("y").values()) == ["two"]


def test_replace_cmd():
    config = GlobalConfig()
    config.set("name", "alice").set("n", 5).set("obj", {"k": 1})
    result = config.replace_cmd(PATTERN, "hi ${name} ${n} ${missing}${obj}")
    assert result == "hi alice 5 "


def test_replace_cmd_without_key_group():
    config = GlobalConfig()
    config.set("name", "alice")
    assert config.replace_cmd(r"\$name", "say $name!") == "say !"


def test_switches_toggle():
    config = GlobalConfig()
    for attr, switch in [
        ("color", config.switch_color),
        ("debug", config.switch_debug),
        ("completion_style", config.switch_completion_style),
        ("edit_style", config.switch_edit_style),
    ]:
        before = getattr(config, attr)
        switch()
        assert getattr(config, attr) is (not before)
        switch()
        assert getattr(config, attr) is before


def test_describe_plain_alignment():
    config = GlobalConfig(index_state="ready")
    config.color = False
    text = config.describe("1.0.0")
    lines = text.splitlines()
    assert len(lines) == 9
    assert "\x1b[" not in text
    assert len({line.index("]: ") for line in lines}) == 1
    assert lines[1].endswith(DEFAULT_JSONRPC_URL)
    assert lines[0].endswith("1.0.0")
    assert lines[-1].endswith("ready")


def test_describe_colored_contains_escape():
    config = GlobalConfig()
    assert "\x1b[33m" in config.describe("1.0.0")


def test_print_writes_description(capsys):
    config = GlobalConfig()
    config.color = False
    config.print("1.0.0")
    assert capsys.readouterr().out == config.describe("1.0.0") + "\n"