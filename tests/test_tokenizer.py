import pytest

from RadicalCalculator import ExpressionParser as P
from RadicalCalculator import error as E


def texts(tokens):
    return [token.text for token in tokens]


def test_mixed_expression_token_stream():
    tokens = P.tokenize("2 * (x + 3) - sqrt(y)")

    assert len(tokens) == 12
    assert texts(tokens) == ["2", "*", "(", "x", "+", "3", ")", "-", "sqrt", "(", "y", ")"]
    assert tokens[3].kind == P.TokenType.VARIABLE
    assert tokens[8].kind == P.TokenType.FUNCTION


def test_positions_point_at_source_offsets():
    tokens = P.tokenize("12 +  x")
    assert [token.position for token in tokens] == [0, 3, 6]


def test_decimal_numbers():
    assert texts(P.tokenize("3.14 + .5")) == ["3.14", "+", ".5"]


def test_second_decimal_point_starts_a_new_number():
    assert texts(P.tokenize("1.2.3")) == ["1.2", ".3"]


def test_leading_minus_is_unary():
    tokens = P.tokenize("-5")
    assert tokens[0].text == P.UNARY_MINUS


@pytest.mark.parametrize("problem, index", [
    ("2 * -3", 2),
    ("(-3)", 1),
    ("2 ^ -1", 2),
])
def test_minus_after_operator_or_open_paren_is_unary(problem, index):
    assert P.tokenize(problem)[index].text == P.UNARY_MINUS


def test_minus_after_operand_is_binary():
    assert texts(P.tokenize("x-1")) == ["x", "-", "1"]
    assert texts(P.tokenize("(1)-1"))[3] == "-"


def test_identifiers_allow_digits_and_underscores():
    tokens = P.tokenize("rate_2 + sqrt2")
    assert texts(tokens) == ["rate_2", "+", "sqrt2"]
    # only the exact function names are functions
    assert tokens[2].kind == P.TokenType.VARIABLE


def test_whitespace_only_gives_no_tokens():
    assert P.tokenize("   \t ") == []


def test_unknown_character_raises_lex_error():
    with pytest.raises(E.LexError) as excinfo:
        P.tokenize("2 # 3")

    assert excinfo.value.code == "3030"
    assert excinfo.value.character == "#"
    assert excinfo.value.position == 2
    assert "'#'" in excinfo.value.message


def test_superscript_digit_is_not_a_number():
    with pytest.raises(E.LexError):
        P.tokenize("2²")
