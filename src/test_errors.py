import pytest

from str2table.errors import (ArgError, ArgErrorKind, ConflictsError, ErrorLevel, KeywordMissing,
                              RangeError, RangeErrorKind, Str2TableError)


def test_levels_are_ordered():
    assert ErrorLevel.WARNING < ErrorLevel.ERROR < ErrorLevel.FATAL
    assert ErrorLevel.from_name("Fatal") is ErrorLevel.FATAL
    with pytest.raises(ValueError):
        ErrorLevel.from_name("loud")


def test_message_order():
    error = Str2TableError("Something broke.", attempt="Retried once.", hint="Do it again.",
                           reason="The disk is full.")
    message = error.message()
    assert message.startswith("[Error] Something broke.")
    assert (message.index("Retried once.") < message.index("Do it again.")
            < message.index("The disk is full."))


def test_message_below_threshold_is_empty():
    warning = ArgError(ArgErrorKind.NO_IMPLEMENTATION)
    assert warning.level is ErrorLevel.WARNING
    assert warning.message(ErrorLevel.ERROR) == ""
    assert warning.message(ErrorLevel.WARNING).startswith("[Warning]")


def test_fatal_is_always_shown():
    error = Str2TableError("Gone.", level=ErrorLevel.FATAL)
    assert error.message(ErrorLevel.FATAL) == "[Fatal] Gone."


def test_arg_error_defaults():
    error = ArgError(ArgErrorKind.WRONG_FORMAT, reason="is odd.", error_arg="x", whole_arg="1l,x")
    assert error.level is ErrorLevel.ERROR
    assert error.hint == "Please check the format of this argument."
    assert error.reason == 'Error happens in "1l,x", where "x" is odd.'


def test_format_error_is_an_arg_error():
    error = ArgError(ArgErrorKind.FORMAT_ERROR, reason="has a bad suffix.")
    assert error.description == "This file format is unsupported."
    assert isinstance(error, ValueError)


def test_conflicts_reason_names_both_sides():
    error = ConflictsError(whole_arg="1rc,1gc", conflicts=["column 1: Red", "column 1: Green"])
    assert "column 1: Red" in error.reason
    assert "column 1: Green" in error.reason


def test_keyword_missing_reason():
    error = KeywordMissing("color", error_arg="1l", whole_arg="1l,2rc")
    assert error.description == "color is missing or wrong."
    assert '"1l"' in error.reason


def test_range_error_reason():
    error = RangeError(RangeErrorKind.LEFT_SIDE, error_value="a-2l", whole_value="a-2l")
    assert error.reason == ('Error happens in "a-2l", where the left side of the range is '
                            'missing or not a number.')
    assert str(error).startswith("[Error] The number or range is invalid.")
