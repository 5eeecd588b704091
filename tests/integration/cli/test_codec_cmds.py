"""Integration tests for the inline and codec commands"""

import json

import pytest
from typer.testing import CliRunner

from wikimark.cli.cli import app


@pytest.fixture(name="runner")
def runner_fixture():
    return CliRunner()


def test_blocks_cmd_prints_json_tree(runner):
    result = runner.invoke(app, ["blocks", "*hi* {anchor:top}"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [
        {"kind": "bold", "children": [{"kind": "text", "content": "hi"}]},
        {"kind": "text", "content": " "},
        {"kind": "anchor", "name": "top"},
    ]


def test_html_cmd(runner):
    result = runner.invoke(app, ["html", "_é_", "--escape-mode", "ascii"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "<i>&#xe9;</i>"


@pytest.mark.parametrize("args,expected", [
    (["escape", "<é>"], "&lt;é&gt;"),
    (["escape", "<é>", "--escape-mode", "ascii"], "&lt;&#xe9;&gt;"),
    (["unescape", "&lt;&#xe9;&gt;"], "<é>"),
    (["url", "a b/é"], "a%20b/%C3%A9"),
    (["slug", "Hello World"], "hello-world"),
    (["slug", "--check", "hello-world"], "valid"),
])
def test_codec_cmds(runner, args, expected):
    result = runner.invoke(app, args)
    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected


def test_unescape_cmd_malformed(runner):
    result = runner.invoke(app, ["unescape", "&#xZZ;"])
    assert result.exit_code == 1
    assert "Error: Malformed numeric escape" in result.output


def test_slug_check_invalid(runner):
    result = runner.invoke(app, ["slug", "--check", "Hello World"])
    assert result.exit_code == 1
    assert "Not a valid identifier" in result.output


def test_invalid_env_setting_fails(runner, monkeypatch):
    monkeypatch.setenv("WIKIMARK_ESCAPE_MODE", "loose")
    result = runner.invoke(app, ["escape", "x"])
    assert result.exit_code == 1
    assert "Invalid settings" in result.output
