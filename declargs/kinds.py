"""
declargs kinds: the semantic types a field may declare, and how text becomes them.

Kinds
- bool, int, float, str: the builtins, with strict literal grammars (no stray
  whitespace or digit separators; booleans accept 1/t/T/TRUE/true/True and their
  false counterparts).
- int8 … int64, uint, uint8 … uint64: sized integers (NewType over int) whose
  values are range-checked against their bit width. uint is 64 bits wide.
- float, float32, float64: decimal, exponent, inf/nan and hexadecimal (with a
  p exponent) literals; literals too large for the kind are rejected rather than
  read as infinity. float32 values are rounded to single precision.
- datetime.timedelta: parsed from a duration literal such as "300ms", "1.5h" or
  "2h45m" (units: ns, us/µs, ms, s, m, h). The literal is summed exactly in
  nanoseconds and must fit a signed 64-bit count; timedelta only resolves
  microseconds, so the result is rounded to the nearest one (half to even):
  "1ns" gives timedelta(0), "1500ns" gives 2 microseconds.

Anything else is unsupported: convert() raises TypeError for it.

Quick examples
    >>> convert(int8, "-12")
    -12
    >>> convert(timedelta, "1m30s")
    datetime.timedelta(seconds=90)
    >>> describe(int | None)
    'int'
"""
import math
import re
import struct
import types
import typing
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_EVEN
from typing import NewType

int8 = NewType("int8", int)
int16 = NewType("int16", int)
int32 = NewType("int32", int)
int64 = NewType("int64", int)

uint = NewType("uint", int)
uint8 = NewType("uint8", int)
uint16 = NewType("uint16", int)
uint32 = NewType("uint32", int)
uint64 = NewType("uint64", int)

float32 = NewType("float32", float)
float64 = NewType("float64", float)

_TRUTHS = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSITIES = frozenset(("0", "f", "F", "FALSE", "false", "False"))

# nanoseconds per duration unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}
_SEGMENT = r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)"


def unwrap(kind, /):
    """
    Strip an optional wrapper from a kind.

    Returns (inner, True) for T | None / Optional[T], and (kind, False) for anything else.
    Unions of more than one concrete member are not optional wrappers.
    """
    if typing.get_origin(kind) in (typing.Union, types.UnionType):
        members = typing.get_args(kind)
        if len(members) == 2 and type(None) in members:
            inner, = (member for member in members if member is not type(None))
            return inner, True
    return kind, False


def describe(kind, /):
    """
    Human-readable kind label used in help tables: optional wrapper removed,
    module prefix dropped, lowercased (timedelta is shown as "duration").
    """
    kind, _ = unwrap(kind)
    if kind is timedelta:
        return "duration"
    name = getattr(kind, "__name__", None) or str(kind)
    return name.rpartition(".")[2].lower()


def _parse_bool(text):
    if text in _TRUTHS:
        return True
    if text in _FALSITIES:
        return False
    raise ValueError("invalid boolean literal %r" % text)


def _signed(bits):
    def parse(text):
        if not re.fullmatch(r"[+-]?\d+", text):
            raise ValueError("invalid integer literal %r" % text)
        value = int(text, 10)
        if bits and not -(1 << bits - 1) <= value < 1 << bits - 1:
            raise ValueError("integer %r out of range for %d bits" % (text, bits))
        return value
    return parse


def _unsigned(bits):
    def parse(text):
        if not re.fullmatch(r"\d+", text):
            raise ValueError("invalid unsigned integer literal %r" % text)
        value = int(text, 10)
        if value >= 1 << bits:
            raise ValueError("unsigned integer %r out of range for %d bits" % (text, bits))
        return value
    return parse


def _parse_float(text):
    if not text or text != text.strip() or "_" in text:
        raise ValueError("invalid float literal %r" % text)
    if re.fullmatch(r"[+-]?0[xX].*", text):
        # hexadecimal mantissas need a binary exponent
        if not re.fullmatch(r"[+-]?0[xX][0-9a-fA-F.]+[pP][+-]?\d+", text):
            raise ValueError("invalid hexadecimal float literal %r" % text)
        try:
            value = float.fromhex(text)
        except OverflowError:
            raise ValueError("float %r out of range" % text) from None
    else:
        value = float(text)
    if math.isinf(value) and not re.fullmatch(r"[+-]?(inf|infinity)", text, re.IGNORECASE):
        raise ValueError("float %r out of range" % text)
    return value


def _parse_float32(text):
    value = _parse_float(text)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        raise ValueError("float %r out of range for 32 bits" % text) from None


def _parse_duration(text):
    """
    Parse a duration literal: "0", or an optional sign followed by one or more
    <number><unit> segments ("1h30m", "-1.5s", ".5us").
    """
    if re.fullmatch(r"[-+]?0", text):
        return timedelta(0)
    if not (match := re.fullmatch(r"([-+]?)((?:%s)+)" % _SEGMENT, text)):
        raise ValueError("invalid duration literal %r" % text)

    nanoseconds = Decimal(0)
    for number, unit in re.findall(_SEGMENT, match[2]):
        nanoseconds += Decimal(number) * _UNITS[unit]
    if match[1] == "-":
        nanoseconds = -nanoseconds
    if not -(1 << 63) <= nanoseconds <= (1 << 63) - 1:
        raise ValueError("duration %r out of range" % text)
    return timedelta(microseconds=int((nanoseconds / 1000).to_integral_value(ROUND_HALF_EVEN)))


_CONVERTERS = {
    bool: _parse_bool,
    str: str,
    int: _signed(0),
    int8: _signed(8),
    int16: _signed(16),
    int32: _signed(32),
    int64: _signed(64),
    uint: _unsigned(64),
    uint8: _unsigned(8),
    uint16: _unsigned(16),
    uint32: _unsigned(32),
    uint64: _unsigned(64),
    float: _parse_float,
    float32: _parse_float32,
    float64: _parse_float,
    timedelta: _parse_duration,
}

# starting value of a positional field before it is assigned
_ZEROS = {
    bool: False,
    str: "",
    float: 0.0,
    float32: 0.0,
    float64: 0.0,
    timedelta: timedelta(0),
} | dict.fromkeys((int, int8, int16, int32, int64, uint, uint8, uint16, uint32, uint64), 0)


def convert(kind, text, /):
    """
    Convert a command-line token into a value of the given kind.

    Raises
    - TypeError: the kind is not supported.
    - ValueError: the text is not a valid literal for the kind.
    """
    kind, _ = unwrap(kind)
    try:
        converter = _CONVERTERS[kind]
    except (KeyError, TypeError):  # TypeError: unhashable annotation objects
        raise TypeError("unsupported kind %s" % describe(kind)) from None
    return converter(text)


def zero(kind, /):
    """
    Zero value of a kind; None for optional wrappers and unsupported kinds.
    """
    kind, optional = unwrap(kind)
    if optional:
        return None
    try:
        return _ZEROS.get(kind)
    except TypeError:
        return None


__all__ = (
    # Sized kinds
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",

    # Functions
    "unwrap",
    "describe",
    "convert",
    "zero",
)
