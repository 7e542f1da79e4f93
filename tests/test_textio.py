import math

import pytest

from mcrand.errors import ParseError
from mcrand.textio import TextReader, format_real, format_tuple, parse


def test_delimiters():
    reader = TextReader("[name (1 2)]")
    reader.delim("[").delim("name").delim(" ").delim("(")
    assert reader.unsigned() == 1
    reader.delim(" ")
    assert reader.unsigned() == 2
    reader.delim(")").delim("]")
    assert reader
    assert reader.at_end()


def test_failure_is_sticky():
    reader = TextReader("(1 2)")
    reader.delim("[")
    assert reader.failed
    assert not reader

    # Subsequent operations do nothing
    assert reader.unsigned() is None
    assert reader.real() is None
    assert reader.name() is None
    assert not reader.peek("(")
    reader.delim("(")
    assert reader.pos == 0


def test_leading_whitespace():
    reader = TextReader("  \n\t[x]")
    reader.ignore_spaces().delim("[")
    assert reader.name() == "x"


def test_numbers_skip_whitespace():
    reader = TextReader("(  12)")
    reader.delim("(")
    assert reader.unsigned() == 12


@pytest.mark.parametrize(
    ("text", "value"),
    [("0", 0), ("-12", -12), ("+7", 7), ("18446744073709551615", 2**64 - 1)],
)
def test_integer(text, value):
    assert TextReader(text).integer() == value


def test_unsigned_rejects_sign():
    reader = TextReader("-1")
    assert reader.unsigned() is None
    assert reader.failed


@pytest.mark.parametrize(
    ("text", "value"),
    [("0.5", 0.5), ("-1e-3", -1e-3), ("2", 2.0), (".25", 0.25), ("1.", 1.0), ("inf", math.inf), ("-inf", -math.inf)],
)
def test_real(text, value):
    assert TextReader(text).real() == value


def test_real_nan():
    assert math.isnan(TextReader("nan").real())


def test_number():
    reader = TextReader("3 3.0")
    first = reader.number()
    reader.delim(" ")
    second = reader.number()
    assert first == 3 and isinstance(first, int)
    assert second == 3.0 and isinstance(second, float)


@pytest.mark.parametrize("value", [0.1, 1 / 3, -2.5e-300, 1e308, 5e-324, 0.0, math.inf, -math.inf])
def test_format_real_roundtrip(value):
    assert float(TextReader(format_real(value)).real()) == value


def test_format_real_nan():
    assert format_real(float("nan")) == "nan"


def test_format_tuple():
    assert format_tuple(["1", "2", "3"]) == "(1 2 3)"


def test_parse():
    def read_pair(reader):
        reader.delim("(")
        a = reader.unsigned()
        reader.delim(" ")
        b = reader.unsigned()
        reader.delim(")")
        return a, b

    assert parse(" (1 2)  \n", read_pair, "a pair") == (1, 2)

    with pytest.raises(ParseError):
        parse("(1 2) 3", read_pair, "a pair")
    with pytest.raises(ParseError):
        parse("(1,2)", read_pair, "a pair")

    # ParseError is a ValueError
    with pytest.raises(ValueError):
        parse("", read_pair, "a pair")
