"""Tests for the option registry and click integration."""

import click
import pytest
from click.testing import CliRunner

from curlargs import (
    OPTIONS,
    ClickOptionSource,
    OptionKind,
    build_client,
    build_request,
    curl_options,
)


def make_command(captured: dict):
    """Create a click command that captures the option source."""

    @click.command()
    @curl_options
    @click.argument("args", nargs=-1)
    def command(args, **_):
        captured["source"] = ClickOptionSource(click.get_current_context())
        captured["args"] = args

    return command


@pytest.mark.parametrize(
    "name,kind",
    [
        ("request", OptionKind.STRING),
        ("url", OptionKind.STRING),
        ("get", OptionKind.BOOL),
        ("head", OptionKind.BOOL),
        ("data", OptionKind.STRING),
        ("data-binary", OptionKind.STRING),
        ("data-raw", OptionKind.STRING),
        ("data-urlencode", OptionKind.STRING),
        ("form", OptionKind.STRING_MAP),
        ("json", OptionKind.STRING),
        ("compressed", OptionKind.BOOL),
        ("range", OptionKind.STRING),
        ("user-agent", OptionKind.STRING),
        ("user", OptionKind.STRING),
        ("oauth2-bearer", OptionKind.STRING),
        ("referer", OptionKind.STRING),
        ("header", OptionKind.STRING_LIST),
        ("cookie", OptionKind.STRING_LIST),
        ("insecure", OptionKind.BOOL),
        ("connect-timeout", OptionKind.FLOAT),
        ("proxy", OptionKind.STRING),
        ("max-time", OptionKind.FLOAT),
        ("location", OptionKind.BOOL),
        ("max-redirs", OptionKind.INT),
    ],
)
def test_registry_kinds(name, kind):
    """Test every recognized option is registered with its type."""
    specs = {spec.name: spec for spec in OPTIONS}
    assert specs[name].kind is kind


def test_registry_names_are_unique():
    """Test no option or short flag is registered twice."""
    names = [spec.name for spec in OPTIONS]
    shorts = [spec.short for spec in OPTIONS if spec.short]
    assert len(names) == len(set(names))
    assert len(shorts) == len(set(shorts))


def test_curl_options_registers_params():
    """Test the decorator adds one click parameter per option."""
    command = make_command({})
    param_names = {param.name for param in command.params}

    for spec in OPTIONS:
        assert spec.param_name in param_names


def test_click_source_reads_values():
    """Test values given on the command line are present and typed."""
    captured = {}
    result = CliRunner().invoke(
        make_command(captured),
        [
            "-X", "post",
            "-H", "X-One: 1",
            "-H", "X-Two: 2",
            "-b", "a=1",
            "-F", "field=hello",
            "-F", "other=x=y",
            "--max-time", "1.5",
            "--max-redirs", "3",
            "-L",
            "http://x.com",
        ],
    )

    assert result.exit_code == 0, result.output
    source = captured["source"]
    assert source.get_string("request") == ("post", True)
    assert source.get_string_list("header") == (["X-One: 1", "X-Two: 2"], True)
    assert source.get_string_list("cookie") == (["a=1"], True)
    assert source.get_string_map("form") == ({"field": "hello", "other": "x=y"}, True)
    assert source.get_float("max-time") == (1.5, True)
    assert source.get_int("max-redirs") == (3, True)
    assert source.get_bool("location") == (True, True)
    assert captured["args"] == ("http://x.com",)


def test_click_source_defaults_are_absent():
    """Test options left at their defaults read as unset."""
    captured = {}
    result = CliRunner().invoke(make_command(captured), [])

    assert result.exit_code == 0, result.output
    source = captured["source"]
    assert source.get_string("request") == ("", False)
    assert source.get_bool("get") == (False, False)
    assert source.get_string_list("header") == ([], False)
    assert source.get_string_map("form") == ({}, False)
    assert source.get_float("max-time") == (0.0, False)
    assert source.lookup("not-an-option") == (None, False)


def test_click_source_feeds_builders():
    """Test a click source drives both builders."""
    captured = {}
    result = CliRunner().invoke(
        make_command(captured),
        ["-G", "-d", "q=1", "-u", "alice:secret", "-k", "http://x.com"],
    )

    assert result.exit_code == 0, result.output
    request = build_request(captured["source"], captured["args"])
    config = build_client(captured["source"])

    assert request.method == "GET"
    assert request.url == "http://x.com?q=1"
    assert request.get_header("Authorization") == ["Basic YWxpY2U6c2VjcmV0"]
    assert config.verify is False


def test_malformed_form_is_rejected():
    """Test a form field without '=' is a usage error."""
    result = CliRunner().invoke(make_command({}), ["-F", "novalue"])

    assert result.exit_code == 2
    assert "expected key=value" in result.output
