import math

import numpy as np
import pytest

from str2table.cell import (CellType, CellValue, auto_from, convert, force_as_float, force_as_int,
                            force_as_string, format_float, parse_integer, parse_narrow,
                            try_as_float, try_as_int)
from str2table.errors import CellParseError
from str2table.settings import ForceType


@pytest.mark.parametrize("text, value", [
    ("123", 123),
    ("-42", -42),
    ("+5", 5),
    ("0x1F", 31),
    ("0o17", 15),
    ("-0b101", -5),
    ("123456789012345678901234567890", 123456789012345678901234567890),
])
def test_integers(text, value):
    cell = auto_from(text)
    assert cell.type is CellType.INTEGER
    assert cell.value == value


@pytest.mark.parametrize("text, rendered, narrow", [
    ("123.456", "123.456", True),
    ("123.45678901234567890123456789", "123.45678901234568", False),
    ("1.00", "1", True),
    ("1.", "1", True),
    (".5", "0.5", True),
    ("0.00", "0", True),
    ("1e-400", "0", False),
    ("-1e-400", "-0", False),
    ("0.2e-10", "0.00000000002", True),
    ("inf", "inf", False),
    ("-Infinity", "-inf", False),
    ("1e400", "inf", False),
    ("NAN", "NaN", True),
    ("-NaN", "NaN", True),
])
def test_floats(text, rendered, narrow):
    cell = auto_from(text)
    assert cell.type is CellType.FLOAT
    assert str(cell) == rendered
    assert cell.narrow is narrow


@pytest.mark.parametrize("text", ["10_0", "1_000.5", "abc", "0X1F", "1e", "--1", ""])
def test_strings(text):
    cell = auto_from(text)
    assert cell.type is CellType.STRING
    assert cell.value == text


def test_repr_shows_type():
    assert repr(auto_from("12")) == "12<int>"
    assert repr(auto_from("1.5")) == "1.5<float>"
    assert repr(auto_from("a")) == "a<str>"


def test_cell_value_is_immutable():
    cell = auto_from("1")
    with pytest.raises(AttributeError):
        cell.value = 2


def test_nan_equality():
    assert auto_from("nan") == auto_from("NaN")
    assert hash(auto_from("nan")) == hash(auto_from("NaN"))
    assert math.isnan(auto_from("nan").value)


def test_strict_int_failure():
    with pytest.raises(CellParseError) as info:
        try_as_int("abc")
    assert info.value.target == "integer"
    assert "abc" in info.value.message()


def test_strict_float_failure():
    with pytest.raises(CellParseError):
        try_as_float("1_0.0")


def test_strict_success():
    assert try_as_int("7") == CellValue.integer(7)
    assert try_as_float("7").type is CellType.FLOAT


def test_advisory_falls_back_to_inference():
    assert force_as_int("abc") == CellValue.string("abc")
    assert force_as_int("1.5").type is CellType.FLOAT
    assert force_as_float("x").type is CellType.STRING


def test_force_float_on_integer_text():
    cell = force_as_float("3")
    assert cell.type is CellType.FLOAT
    assert str(cell) == "3"


def test_force_string():
    assert force_as_string("12") == CellValue.string("12")
    assert convert("12", ForceType.STRING).type is CellType.STRING
    assert convert("12", ForceType.FLOAT).type is CellType.FLOAT
    assert convert("12").type is CellType.INTEGER


def test_format_float_never_uses_exponent():
    assert format_float(1e20) == "100000000000000000000"
    assert format_float(1.5e-7) == "0.00000015"


def test_long_decimal_integer():
    cell = auto_from("1" * 5000)
    assert cell.type is CellType.INTEGER
    assert cell.value == (10 ** 5000 - 1) // 9
    assert str(cell) == "1" * 5000


def test_long_negative_integer():
    cell = auto_from("-" + "9" * 4500)
    assert cell.value == -(10 ** 4500 - 1)
    assert str(cell) == "-" + "9" * 4500
    assert str(auto_from("1" + "0" * 3000)) == "1" + "0" * 3000


def test_long_hex_integer():
    cell = auto_from("0x" + "f" * 4000)
    assert cell.type is CellType.INTEGER
    assert cell.value == 16 ** 4000 - 1
    rendered = str(cell)
    assert len(rendered) == 4817
    assert rendered.endswith("5")
    assert parse_integer(rendered) == cell.value
    assert repr(cell).endswith("<int>")


def test_narrow_parse_rounds_once():
    # Just above the halfway point between 1 and the next float32
    text = "1.00000005960464477539062500000001"
    wide = float(text)
    assert np.float32(wide) == np.float32(1.0)
    assert parse_narrow(text, wide) == np.float32(1 + 2 ** -23)


def test_narrow_parse_ties_to_even():
    text = "1.000000059604644775390625"
    assert parse_narrow(text, float(text)) == np.float32(1.0)
