"""String helpers: printf-style formatting, scanf-style parsing, trimming and paths."""

from __future__ import annotations

import re
from itertools import islice
from typing import Iterator

DEFAULT_TRIM_VALUE = " \t\n\r\f\v"

_SPEC = re.compile(
    r"%(?P<flags>[-+ #0]*)(?P<width>\*|\d+)?(?:\.(?P<prec>\*|\d*))?"
    r"(?P<length>hh|h|ll|l|L|q|j|z|t)?(?P<conv>[diouxXeEfFgGcs%])"
)

_WS = "[ \\t\\n\\r\\f\\v]*"
_FLOAT = re.compile(
    _WS + r"([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT = re.compile(_WS + r"([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_UINT = re.compile(_WS + r"([+-]?)([0-9]+)")

_UINT_MODULUS = 1 << 64
_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def _python_spec(match: re.Match) -> str:
    prec = match.group("prec")
    return "%{}{}{}{}".format(
        match.group("flags"),
        match.group("width") or "",
        "" if prec is None else "." + prec,
        match.group("conv"),
    )


def format_string(fmt: str, *args) -> str:
    """Format ``fmt`` printf-style; C length modifiers such as ``ll`` are accepted."""
    try:
        return _SPEC.sub(_python_spec, fmt) % args
    except (TypeError, ValueError) as exc:
        raise ValueError(f"error during formatting of {fmt!r}") from exc


def _require_input(text: str) -> None:
    if not text:
        raise ValueError("cannot parse an empty string")
    if not text.strip(DEFAULT_TRIM_VALUE):
        raise ValueError("no value before end of input")


def _scan_floats(text: str) -> Iterator[float]:
    position = 0
    while (match := _FLOAT.match(text, position)) is not None:
        yield float(match.group(1))
        position = match.end()


def parse_vector(text: str, size: int) -> tuple[float, ...]:
    """Read ``size`` whitespace-separated numbers; missing ones are 0.0.

    Raises ``ValueError`` for empty or blank input.
    """
    if size < 1:
        raise ValueError("vector size must be at least 1")
    _require_input(text)
    values = list(islice(_scan_floats(text), size))
    return tuple(values + [0.0] * (size - len(values)))


def parse_float(text: str) -> float:
    """Read a leading number; 0.0 when none is found."""
    _require_input(text)
    return next(_scan_floats(text), 0.0)


def parse_int(text: str) -> int:
    """Read a leading integer, detecting hex (0x) and octal (0) prefixes; 0 when none."""
    _require_input(text)
    match = _INT.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits, 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def parse_uint(text: str) -> int:
    """Read a leading decimal integer; negative values wrap to 64 bits."""
    _require_input(text)
    match = _UINT.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    value = int(digits)
    return (-value) % _UINT_MODULUS if sign == "-" else value


def parse_bool(text: str) -> bool:
    """True for "1" or any casing of "true", False for anything else non-empty."""
    if not text:
        raise ValueError("cannot parse an empty string")
    return text == "1" or text.translate(_ASCII_LOWER) == "true"


def rtrim(text: str, chars: str = DEFAULT_TRIM_VALUE) -> str:
    return text.rstrip(chars)


def ltrim(text: str, chars: str = DEFAULT_TRIM_VALUE) -> str:
    return text.lstrip(chars)


def trim(text: str, chars: str = DEFAULT_TRIM_VALUE) -> str:
    return text.strip(chars)


def mid_string(text: str, separator: str) -> tuple[str, str]:
    """Split at the first ``separator``.

    A separator at the very start yields two empty strings; without a
    separator the whole text is the first part.
    """
    position = text.find(separator)
    if position == 0:
        return "", ""
    if position < 0:
        return text, ""
    return text[:position], text[position + 1:]


def split_string(text: str, delimiter: str) -> list[str]:
    """Split on ``delimiter``, dropping empty pieces."""
    return [piece for piece in text.split(delimiter) if piece]


def string_iequals(a: str, b: str) -> bool:
    """Compare ignoring ASCII letter case."""
    return a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)


def _last_separator(path: str) -> int:
    return max(path.rfind("/"), path.rfind("\\"))


def get_full_directory_from_path(path: str) -> str:
    """Directory part including its trailing separator; "" if there is none."""
    position = _last_separator(path)
    return path[:position + 1] if position >= 0 else ""


def get_filename_from_path(path: str) -> str:
    """File name after the last separator; "" if there is no separator."""
    position = _last_separator(path)
    return path[position + 1:] if position >= 0 else ""


def get_strip_filename_from_path(path: str) -> str:
    """File name with its last extension removed; "" if it has no extension."""
    name = path[_last_separator(path) + 1:]
    stem, dot, _ = name.rpartition(".")
    return stem if dot else ""