"""Functions that turn command-line text into typed values."""

from __future__ import annotations

import math
import re
import struct


class InvalidArgumentError(ValueError):
    """Raised when text cannot be read as the requested type."""


class OutOfRangeError(ValueError):
    """Raised when text names a value outside the range of the requested type."""


_INT32_RANGE = (-(2**31), 2**31 - 1)
_UINT32_RANGE = (0, 2**32 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)
_UINT64_RANGE = (0, 2**64 - 1)

_INTEGER = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))\s*")
_DECIMAL_REAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX_REAL = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
)
_SPECIAL_REAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)


def _to_bool(text: str, true_words: frozenset, false_words: frozenset, kind: str) -> bool:
    word = text.lower()
    if word in true_words:
        return True
    if word in false_words:
        return False
    raise InvalidArgumentError(f"Cannot parse {text!r} as a {kind} boolean")


def string_to_bool(text: str) -> bool:
    """Read yes/no, true/false, t/f or 1/0, in any letter case."""
    return _to_bool(
        text,
        frozenset({"yes", "true", "t", "1"}),
        frozenset({"no", "false", "f", "0"}),
        "yes/no, true/false, t/f or 1/0",
    )


def yes_no_to_bool(text: str) -> bool:
    """Read yes or no, in any letter case."""
    return _to_bool(text, frozenset({"yes"}), frozenset({"no"}), "yes/no")


def true_false_to_bool(text: str) -> bool:
    """Read true or false, in any letter case."""
    return _to_bool(text, frozenset({"true"}), frozenset({"false"}), "true/false")


def tf_to_bool(text: str) -> bool:
    """Read t or f, in any letter case."""
    return _to_bool(text, frozenset({"t"}), frozenset({"f"}), "t/f")


def one_zero_to_bool(text: str) -> bool:
    """Read 1 or 0."""
    return _to_bool(text, frozenset({"1"}), frozenset({"0"}), "1/0")


def _parse_integer(text: str, bounds: tuple[int, int], kind: str) -> int:
    match = _INTEGER.fullmatch(text)
    if match is None:
        raise InvalidArgumentError(f"Cannot parse {text!r} as {kind}")
    sign, hex_digits, dec_digits = match.groups()
    value = int(hex_digits, 16) if hex_digits is not None else int(dec_digits)
    if sign == "-":
        value = -value
    low, high = bounds
    if not low <= value <= high:
        raise OutOfRangeError(f"Value {text!r} is out of range for {kind}")
    return value


def parse_int32(text: str) -> int:
    """Read a signed 32-bit integer, decimal or 0x-prefixed hexadecimal."""
    return _parse_integer(text, _INT32_RANGE, "int32")


def parse_uint32(text: str) -> int:
    """Read an unsigned 32-bit integer, decimal or 0x-prefixed hexadecimal."""
    return _parse_integer(text, _UINT32_RANGE, "uint32")


def parse_int64(text: str) -> int:
    """Read a signed 64-bit integer, decimal or 0x-prefixed hexadecimal."""
    return _parse_integer(text, _INT64_RANGE, "int64")


def parse_uint64(text: str) -> int:
    """Read an unsigned 64-bit integer, decimal or 0x-prefixed hexadecimal."""
    return _parse_integer(text, _UINT64_RANGE, "uint64")


def _parse_real(text: str, kind: str) -> float:
    literal = text.strip()
    if _SPECIAL_REAL.fullmatch(literal):
        return float(literal)

    body = literal.lstrip("+-")
    if _DECIMAL_REAL.fullmatch(literal):
        value = float(literal)
        mantissa = re.split("[eE]", body)[0]
    elif _HEX_REAL.fullmatch(literal):
        try:
            value = float.fromhex(literal)
        except OverflowError:
            raise OutOfRangeError(f"Value {text!r} is out of range for {kind}") from None
        mantissa = re.split("[pP]", body[2:])[0]
    else:
        raise InvalidArgumentError(f"Cannot parse {text!r} as {kind}")

    if math.isinf(value):
        raise OutOfRangeError(f"Value {text!r} is out of range for {kind}")
    if value == 0.0 and any(ch not in "0." for ch in mantissa):
        raise OutOfRangeError(f"Value {text!r} is too small for {kind}")
    return value


def parse_float(text: str) -> float:
    """Read a single-precision real number; the result is rounded to that precision."""
    value = _parse_real(text, "float")
    if math.isinf(value) or math.isnan(value):
        return value
    try:
        narrowed = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        raise OutOfRangeError(f"Value {text!r} is out of range for float") from None
    if narrowed == 0.0 and value != 0.0:
        raise OutOfRangeError(f"Value {text!r} is too small for float")
    return narrowed


def parse_double(text: str) -> float:
    """Read a double-precision real number."""
    return _parse_real(text, "double")


def parse_long_double(text: str) -> float:
    """Read an extended-precision real number, held as a Python float."""
    return _parse_real(text, "long double")


def parse_string_delimited(text: str) -> str:
    """Read a string wrapped in double quotes and return what is inside them."""
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        raise InvalidArgumentError(f"String {text!r} is not enclosed in double quotes")
    return text[1:-1]


def parse_string(text: str | bytes) -> str:
    """Return the argument as a str, decoding UTF-8 bytes when given bytes."""
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidArgumentError(f"Cannot decode {text!r} as UTF-8 text") from exc
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Cannot read {text!r} as a string")
    return str(text)