"""
Helpers for turning raw configuration strings into typed values.
The *_or_default parsers never raise: bad input falls back to the default.
"""

from datetime import timedelta
from typing import Optional
import re


_DURATION_UNITS = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}

_DURATION_PART = re.compile(r'([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)')

_INT_PATTERN = re.compile(r"[+-]?[0-9]+\Z")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?|inf|infinity|nan)\Z",
    re.IGNORECASE,
)


def parse_duration(raw: str) -> timedelta:
    """
    Parse a duration string such as "90s", "2m", "1h30m" or "1.5s".

    A bare "0" is accepted. Every other number needs a unit.

    Args:
        raw: Duration text

    Returns:
        The parsed timedelta

    Raises:
        ValueError: If the text is not a valid duration
    """
    text = raw
    if not text:
        raise ValueError("invalid duration: empty string")

    sign = 1
    if text[0] in "+-":
        if text[0] == "-":
            sign = -1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    microseconds = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration: {raw!r}")
        microseconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0:
        raise ValueError(f"invalid duration: {raw!r}")

    return timedelta(microseconds=sign * microseconds)


def parse_int(raw: str) -> int:
    """
    Parse a base-10 integer with an optional sign.

    Surrounding whitespace, underscores and non-ASCII digits are rejected.

    Raises:
        ValueError: If the text is not an integer
    """
    if not _INT_PATTERN.match(raw):
        raise ValueError(f"invalid integer: {raw!r}")
    return int(raw)


def parse_float(raw: str) -> float:
    """
    Parse a decimal float such as "0.7", "-1.5e3", ".5", "inf" or "nan".

    Surrounding whitespace, underscores and non-ASCII digits are rejected.

    Raises:
        ValueError: If the text is not a float
    """
    if not _FLOAT_PATTERN.match(raw):
        raise ValueError(f"invalid float: {raw!r}")
    return float(raw)


def parse_int_or_default(raw: Optional[str], default: int) -> int:
    """Parse an integer, returning default for empty or non-numeric input."""
    if not raw:
        return default
    try:
        return parse_int(raw)
    except ValueError:
        return default


def parse_float_or_default(raw: Optional[str], default: float) -> float:
    """Parse a float, returning default for empty or non-numeric input."""
    if not raw:
        return default
    try:
        return parse_float(raw)
    except ValueError:
        return default


def parse_duration_or_default(raw: Optional[str], default: timedelta) -> timedelta:
    """Parse a duration string, returning default for empty or invalid input."""
    if not raw:
        return default
    try:
        return parse_duration(raw)
    except ValueError:
        return default


def format_duration(value: timedelta) -> str:
    """
    Render a timedelta in the same notation parse_duration accepts.

    Examples: 60s -> "1m0s", 90s -> "1m30s", 0.5s -> "500ms", 0 -> "0s".
    """
    total_us = round(value.total_seconds() * 1_000_000)
    if total_us == 0:
        return "0s"

    sign = "-" if total_us < 0 else ""
    total_us = abs(total_us)

    if total_us < 1000:
        return f"{sign}{total_us}µs"
    if total_us < 1_000_000:
        return f"{sign}{_trim_number(total_us / 1000)}ms"

    hours, rest = divmod(total_us, 3600 * 1_000_000)
    minutes, rest = divmod(rest, 60 * 1_000_000)
    seconds = _trim_number(rest / 1_000_000)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim_number(number: float) -> str:
    text = f"{number:.6f}".rstrip("0").rstrip(".")
    return text or "0"


def truncate(text: str, max_len: int) -> str:
    """
    Shorten text to max_len characters, ending with "..." when cut.

    Works on characters rather than bytes, so multi-byte text is never
    split in the middle of a code point.
    """
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def mask_api_key(api_key: str) -> str:
    """Hide all but the first and last four characters of an API key."""
    if not api_key:
        return "(not set)"
    if len(api_key) > 8:
        return api_key[:4] + "..." + api_key[-4:]
    return "***"
