import io
import json
import sys

import pytest

from ckbcli import printer, yaml_ser
from ckbcli.json_color import Colorizer
from ckbcli.printer import (
    ColorWhen,
    OutputFormat,
    is_a_tty,
    is_term_dumb,
    render,
)


class _FakeTTY(io.StringIO):
    def isatty(self):
        return True


SAMPLE = {"name": "alice", "items": [1, 2, {"deep": True}], "none": None}


def test_output_format_parse_and_str():
    assert OutputFormat.parse("yaml") is OutputFormat.YAML
    assert OutputFormat.parse("json") is OutputFormat.JSON
    assert str(OutputFormat.JSON) == "json"
    assert OutputFormat.parse(str(OutputFormat.YAML)) is OutputFormat.YAML


def test_output_format_parse_rejects_unknown():
    with pytest.raises(ValueError, match="Invalid output format: xml"):
        OutputFormat.parse("xml")


def test_color_when_color():
    assert ColorWhen.NEVER.color() is False
    assert ColorWhen.AUTO.color() is True
    assert ColorWhen.ALWAYS.color() is True


def test_is_term_dumb(monkeypatch):
    monkeypatch.setenv("TERM", "dumb")
    assert is_term_dumb() is True
    monkeypatch.setenv("TERM", "xterm")
    assert is_term_dumb() is False
    monkeypatch.delenv("TERM")
    assert is_term_dumb() is False


def test_is_a_tty_follows_stream(monkeypatch):
    monkeypatch.setattr(sys, "stdout", _FakeTTY())
    monkeypatch.setattr(sys, "stderr", io.StringIO())
    assert is_a_tty(False) is True
    assert is_a_tty(True) is False


def test_color_when_on_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdout", _FakeTTY())
    monkeypatch.setenv("TERM", "xterm")
    assert ColorWhen.default() is ColorWhen.AUTO
    assert ColorWhen.from_color(True) is ColorWhen.ALWAYS
    assert ColorWhen.from_color(False) is ColorWhen.NEVER


def test_color_when_dumb_or_not_tty(monkeypatch):
    monkeypatch.setattr(sys, "stdout", _FakeTTY())
    monkeypatch.setenv("TERM", "dumb")
    assert ColorWhen.default() is ColorWhen.NEVER
    assert ColorWhen.from_color(True) is ColorWhen.NEVER
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    monkeypatch.setenv("TERM", "xterm")
    assert ColorWhen.default() is ColorWhen.NEVER


def test_render_json_plain_round_trips():
    text = render(SAMPLE, OutputFormat.JSON, False)
    assert json.loads(text) == SAMPLE
    assert text == Colorizer().colorize_json_value(SAMPLE)


def test_render_json_colored_uses_palette():
    text = render(SAMPLE, OutputFormat.JSON, True)
    assert text == Colorizer.arbitrary().colorize_json_value(SAMPLE)


def test_render_yaml_matches_serializer():
    assert render(SAMPLE, OutputFormat.YAML, False) == yaml_ser.to_string(SAMPLE, False)
    assert render(SAMPLE, OutputFormat.YAML, True) == yaml_ser.to_string(SAMPLE, True)


class _Custom:
    def render(self, format, color):
        return f"{format}:{color}"


def test_render_delegates_to_printable():
    text = printer.render(_Custom(), OutputFormat.JSON, True)
    assert text == "json:True"
    assert printer.render(_Custom(), OutputFormat.YAML, False) == "yaml:False"