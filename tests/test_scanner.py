import pytest

from calc_tool.diagnostics import Err, ErrorKind, Ok
from calc_tool.scanner import scan
from calc_tool.tokens import TokenType


def types(result):
    return [t.type for t in result.value]


def test_operators_and_parens_with_offsets():
    result = scan("(1+2)*3/4-5")
    assert isinstance(result, Ok)
    assert types(result) == [
        TokenType.LEFT_PAREN, TokenType.LITERAL, TokenType.ADD, TokenType.LITERAL,
        TokenType.RIGHT_PAREN, TokenType.MUL, TokenType.LITERAL, TokenType.DIV,
        TokenType.LITERAL, TokenType.SUB, TokenType.LITERAL,
    ]
    assert [t.offset for t in result.value] == list(range(11))


def test_literal_values_and_offsets():
    result = scan("  12.5 +\t3")
    tokens = result.value
    assert [(t.type, t.offset, t.text) for t in tokens] == [
        (TokenType.LITERAL, 2, "12.5"),
        (TokenType.ADD, 7, "+"),
        (TokenType.LITERAL, 9, "3"),
    ]
    assert tokens[0].value == 12.5
    assert tokens[2].value == 3.0


def test_trailing_dot_is_part_of_literal():
    result = scan("3.")
    assert [(t.text, t.value) for t in result.value] == [("3.", 3.0)]


@pytest.mark.parametrize("source", ["", "   ", "\t\n\r\f\v "])
def test_blank_input_scans_to_nothing(source):
    result = scan(source)
    assert isinstance(result, Ok)
    assert result.value == []


@pytest.mark.parametrize("source, offset", [
    ("3a", 1),
    (".234", 0),
    ("1 + x", 4),
    ("2 ^ 3", 2),
    ("1\u00a0+ 1", 1),  # no-break space is not scanner whitespace
    ("\u0663", 0),      # arabic-indic digit is not an ASCII digit
])
def test_invalid_character(source, offset):
    result = scan(source)
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.INVALID_CHARACTER
    assert result.offset == offset


def test_second_decimal_point_ends_literal_then_fails():
    result = scan("23.23.3")
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.INVALID_CHARACTER
    assert result.offset == 5


def test_first_error_wins():
    result = scan("1 a b")
    assert result.offset == 2


def test_huge_literal_becomes_inf():
    result = scan("9" * 400)
    assert result.value[0].value == float("inf")


def test_non_string_is_a_programming_error():
    with pytest.raises(TypeError):
        scan(b"1+2")
