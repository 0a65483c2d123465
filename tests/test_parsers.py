from datetime import timedelta

import pytest

from chatgpt_cli.helpers.parsers import (
    format_duration,
    mask_api_key,
    parse_duration,
    parse_duration_or_default,
    parse_float,
    parse_float_or_default,
    parse_int,
    parse_int_or_default,
    truncate,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", 7),
        (None, 7),
        ("notanumber", 7),
        ("42", 42),
        ("-5", -5),
        ("0", 0),
        ("4.2", 7),
        (" 42 ", 7),
        ("1_000", 7),
        ("\u0661\u0662", 7),
    ],
)
def test_parse_int_or_default(raw, expected):
    assert parse_int_or_default(raw, 7) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", 0.7),
        ("abc", 0.7),
        ("1.5", 1.5),
        ("-0.25", -0.25),
        ("2", 2.0),
        ("1e2", 100.0),
        (" 1.5", 0.7),
        ("1_0.5", 0.7),
    ],
)
def test_parse_float_or_default(raw, expected):
    assert parse_float_or_default(raw, 0.7) == expected


def test_parse_duration_or_default_falls_back():
    default = timedelta(seconds=60)
    assert parse_duration_or_default("", default) == default
    assert parse_duration_or_default("soon", default) == default
    assert parse_duration_or_default("90", default) == default


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("90s", timedelta(seconds=90)),
        ("2m", timedelta(minutes=2)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5s", timedelta(seconds=1.5)),
        ("500ms", timedelta(milliseconds=500)),
        ("0", timedelta(0)),
        ("-3s", timedelta(seconds=-3)),
    ],
)
def test_parse_duration_valid(raw, expected):
    assert parse_duration(raw) == expected
    assert parse_duration_or_default(raw, timedelta(seconds=1)) == expected


@pytest.mark.parametrize("raw", ["", "s", "10", "10x", "1m30", "-", "1 m", " 90s", "90s "])
def test_parse_duration_invalid(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(seconds=60), "1m0s"),
        (timedelta(seconds=90), "1m30s"),
        (timedelta(seconds=30), "30s"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(milliseconds=500), "500ms"),
        (timedelta(seconds=1.5), "1.5s"),
        (timedelta(0), "0s"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


def test_truncate():
    assert truncate("hello", 10) == "hello"
    assert truncate("this is a very long string", 10) == "this is..."
    assert truncate("exactly10!", 10) == "exactly10!"


def test_truncate_keeps_multibyte_characters_whole():
    text = "héllo wörld, ça va très bien"
    result = truncate(text, 10)
    assert result == "héllo w..."
    assert len(result) == 10


def test_mask_api_key():
    assert mask_api_key("") == "(not set)"
    assert mask_api_key("short") == "***"
    assert mask_api_key("12345678") == "***"
    assert mask_api_key("sk-abcdefghijklmnop") == "sk-a...mnop"


def test_parse_int_strict():
    assert parse_int("-12") == -12
    assert parse_int("+7") == 7
    for raw in ["", " 1", "1 ", "1_000", "1.0", "0x10"]:
        with pytest.raises(ValueError):
            parse_int(raw)


def test_parse_float_strict():
    assert parse_float("0.7") == 0.7
    assert parse_float(".5") == 0.5
    assert parse_float("-1.5e3") == -1500.0
    assert parse_float("Inf") == float("inf")
    for raw in ["", " 0.7", "0.7 ", "1_000.0", "1e", "abc"]:
        with pytest.raises(ValueError):
            parse_float(raw)
