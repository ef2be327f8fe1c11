"""
Cell values and type inference.

A field of the input becomes exactly one CellValue: an arbitrary precision
Integer, a Float, or a String. Floats remember whether single precision is
enough to reproduce the literal (narrow) or double precision is needed (wide).
Integers are converted from and to decimal text without the interpreter's
digit limit.
"""
import enum
import logging
import math
import re
from fractions import Fraction

import numpy as np

from .errors import CellParseError
from .settings import ForceType

logger = logging.getLogger(__name__)


class CellType(enum.Enum):
    STRING = "str"
    INTEGER = "int"
    FLOAT = "float"


# Optional sign, then decimal digits or a lowercase 0x / 0o / 0b radix prefix.
# No separators: "10_0" must stay a string.
_INTEGER_RE = re.compile(
    r"^(?P<sign>[+-]?)(?:0x(?P<hex>[0-9a-fA-F]+)|0o(?P<oct>[0-7]+)|0b(?P<bin>[01]+)|(?P<dec>[0-9]+))$")
_RADIX = (("hex", 16), ("oct", 8), ("bin", 2), ("dec", 10))

_FLOAT_RE = re.compile(
    r"^[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf|infinity|nan)$", re.IGNORECASE)

# Segments of a float literal checked when the value collapsed to zero
_FLOAT_SEGMENTS_RE = re.compile(r"[.eE]")

# Decimal conversions work in chunks below the interpreter's int/str digit limit
_CHUNK_DIGITS = 1000


def decimal_to_int(digits):
    """Convert a string of decimal digits of any length to an int."""
    value = 0
    for i in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[i:i + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_decimal(value):
    """Decimal text of an int of any size."""
    if value < 0:
        return "-" + int_to_decimal(-value)
    base = 10 ** _CHUNK_DIGITS
    chunks = []
    while value >= base:
        value, low = divmod(value, base)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


def parse_integer(text):
    """Parse an integer literal; return None when ``text`` is not one."""
    m = _INTEGER_RE.match(text)
    if not m:
        return None
    for group, base in _RADIX:
        digits = m.group(group)
        if digits is not None:
            # Power of two radixes have no digit limit
            value = decimal_to_int(digits) if base == 10 else int(digits, base)
            return -value if m.group("sign") == "-" else value
    return None


def parse_float(text):
    """Parse a float literal as a double; return None when ``text`` is not one."""
    if not _FLOAT_RE.match(text):
        return None
    return float(text)


def format_float(value, narrow=False):
    """Render a float the shortest way that still identifies it at its precision.

    Never uses an exponent; integral values have no decimal point
    (``1.0`` -> ``"1"``); non finite values render as ``inf``, ``-inf``, ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    with np.errstate(over="ignore"):
        scalar = np.float32(value) if narrow else np.float64(value)
    if np.isinf(scalar):
        return "inf" if scalar > 0 else "-inf"
    return np.format_float_positional(scalar, unique=True, trim="-")


def _has_nonzero_segment(text):
    for segment in _FLOAT_SEGMENTS_RE.split(text):
        value = parse_float(segment)
        if value is not None and value != 0.0:
            return True
    return False


def _is_even(narrow):
    return int(narrow.view(np.uint32)) & 1 == 0


def parse_narrow(text, wide):
    """Parse the float literal ``text`` at single precision, rounding only once.

    Rounding ``wide`` to float32 rounds twice and can land one step off when
    the double sits on a float32 halfway point, so the nearest neighbor is
    picked against the exact decimal value instead (ties to even).

    :param text: A literal accepted by ``parse_float``.
    :param wide: The literal parsed at double precision.
    :return: ``np.float32`` value.
    """
    with np.errstate(over="ignore"):
        narrow = np.float32(wide)
    if not math.isfinite(wide) or not np.isfinite(narrow) or narrow == 0:
        return narrow
    exact = Fraction(text)
    neighbors = (np.nextafter(narrow, np.float32(-np.inf)), narrow,
                 np.nextafter(narrow, np.float32(np.inf)))
    candidates = [c for c in neighbors if np.isfinite(c)]
    return min(candidates, key=lambda c: (abs(Fraction(float(c)) - exact), not _is_even(c)))


def is_narrow(text, wide):
    """Decide whether single precision reproduces the float literal ``text``.

    :param text: The literal the value was parsed from.
    :param wide: The literal parsed at double precision.
    :return: True for the narrow (single precision) representation.
    """
    if format_float(parse_narrow(text, wide), narrow=True) != format_float(wide):
        return False
    if math.isinf(wide):
        # Infinities mostly come from huge literals such as 1e400
        return False
    if math.isnan(wide):
        return True
    if wide == 0.0:
        # "1e-400" underflows to zero at both precisions but was not written as zero
        return not _has_nonzero_segment(text)
    return True


class CellValue:
    """Typed, immutable value of one table cell.

    Use the module functions ``auto_from`` / ``force_as_*`` to build one.
    """

    __slots__ = ("_type", "_value", "_narrow")

    def __init__(self, cell_type, value, narrow=False):
        object.__setattr__(self, "_type", CellType(cell_type))
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_narrow", bool(narrow) if cell_type is CellType.FLOAT else False)

    def __setattr__(self, name, value):
        raise AttributeError("CellValue is immutable")

    @classmethod
    def string(cls, text):
        return cls(CellType.STRING, str(text))

    @classmethod
    def integer(cls, value):
        return cls(CellType.INTEGER, int(value))

    @classmethod
    def floating(cls, value, narrow=False):
        return cls(CellType.FLOAT, float(value), narrow)

    @property
    def type(self):
        return self._type

    @property
    def value(self):
        return self._value

    @property
    def narrow(self):
        return self._narrow

    @property
    def is_numeric(self):
        return self._type is not CellType.STRING

    def __str__(self):
        if self._type is CellType.FLOAT:
            # A narrow value is only chosen when both precisions print the same
            return format_float(self._value)
        if self._type is CellType.INTEGER:
            return int_to_decimal(self._value)
        return self._value

    def __repr__(self):
        return f"{self}<{self._type.value}>"

    def __eq__(self, other):
        if not isinstance(other, CellValue):
            return NotImplemented
        if self._type is not other._type:
            return False
        if self._type is CellType.FLOAT and math.isnan(self._value):
            return math.isnan(other._value) and self._narrow == other._narrow
        return self._value == other._value and self._narrow == other._narrow

    def __hash__(self):
        if self._type is CellType.FLOAT and math.isnan(self._value):
            return hash((self._type, "nan", self._narrow))
        return hash((self._type, self._value, self._narrow))


def auto_from(text):
    """Infer the type of ``text``: Integer first, then Float, else String."""
    integer = parse_integer(text)
    if integer is not None:
        return CellValue.integer(integer)
    wide = parse_float(text)
    if wide is None:
        return CellValue.string(text)
    return CellValue.floating(wide, narrow=is_narrow(text, wide))


def force_as_string(text):
    return CellValue.string(text)


def try_as_int(text):
    """Strict integer conversion.

    Raises:
        CellParseError: If ``text`` is not an integer literal
    """
    integer = parse_integer(text)
    if integer is None:
        raise CellParseError(text, "integer",
                             reason="only an optional sign and decimal digits, or a 0x/0o/0b prefix, are allowed.")
    return CellValue.integer(integer)


def try_as_float(text):
    """Strict float conversion.

    Raises:
        CellParseError: If ``text`` is not a float literal
    """
    wide = parse_float(text)
    if wide is None:
        raise CellParseError(text, "float",
                             reason="it is not a decimal, scientific, inf or NaN literal.")
    return CellValue.floating(wide, narrow=is_narrow(text, wide))


def force_as_int(text):
    """Integer if possible, otherwise whatever ``auto_from`` infers."""
    try:
        return try_as_int(text)
    except CellParseError:
        logger.debug("'%s' is not an integer, falling back to inference", text)
        return auto_from(text)


def force_as_float(text):
    """Float if possible, otherwise whatever ``auto_from`` infers."""
    try:
        return try_as_float(text)
    except CellParseError:
        logger.debug("'%s' is not a float, falling back to inference", text)
        return auto_from(text)


_FORCED = {
    ForceType.STRING: force_as_string,
    ForceType.INTEGER: force_as_int,
    ForceType.FLOAT: force_as_float,
}


def convert(text, force_type=None):
    """Build the CellValue of ``text``, honoring an optional ForceType."""
    if force_type is None:
        return auto_from(text)
    return _FORCED[force_type](text)
