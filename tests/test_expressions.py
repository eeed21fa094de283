"""
Test cases for the expression parser and its canonical text form.
"""

import pytest
from wordspace.vector import (
    Literal,
    NamedTerm,
    BinaryOp,
    Negate,
    ExpressionSyntaxError,
    parse,
    describe,
    terms
)


def test_parse_single_word():
    """Test that a bare word is a named term."""
    assert parse("king") == NamedTerm("king")
    assert parse("  king  ") == NamedTerm("king")


def test_parse_is_left_associative():
    """Test that a chain of + and - groups from the left."""
    expected = BinaryOp(
        "+",
        BinaryOp("-", NamedTerm("king"), NamedTerm("man")),
        NamedTerm("woman")
    )

    assert parse('"king" - "man" + "woman"') == expected
    assert parse("king - man + woman") == expected
    assert parse("king-man+woman") == expected


def test_parse_parentheses():
    """Test that parentheses group sub-expressions."""
    assert parse("a - (b - c)") == BinaryOp(
        "-", NamedTerm("a"), BinaryOp("-", NamedTerm("b"), NamedTerm("c"))
    )


def test_parse_unary_minus():
    """Test unary negation, including nested and inside sums."""
    assert parse("-a") == Negate(NamedTerm("a"))
    assert parse("- -a") == Negate(Negate(NamedTerm("a")))
    assert parse("a + -b") == BinaryOp("+", NamedTerm("a"), Negate(NamedTerm("b")))
    assert parse("-(a - b)") == Negate(BinaryOp("-", NamedTerm("a"), NamedTerm("b")))


def test_parse_quoted_words():
    """Test that quoting allows operator characters inside a word."""
    assert parse('"well-known"') == NamedTerm("well-known")
    assert parse("'new york' + city") == BinaryOp("+", NamedTerm("new york"), NamedTerm("city"))
    assert parse(r'"say \"hi\""') == NamedTerm('say "hi"')


def test_parse_is_case_sensitive():
    """Test that words keep their case."""
    assert parse("Paris") == NamedTerm("Paris")
    assert parse("Paris") != parse("paris")


def test_parse_vector_literal():
    """Test bracketed numeric vectors."""
    assert parse("[1, 0.5]") == Literal((1.0, 0.5))
    assert parse("[1 -2e-1]") == Literal((1.0, -0.2))
    assert parse("[1, 0] + good") == BinaryOp("+", Literal((1.0, 0.0)), NamedTerm("good"))


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "a +",
    "(a",
    "a )",
    "a b",
    '"abc',
    '""',
    "[1, x]",
    "[]",
    "[1, 2",
    "a, b",
    "+a",
])
def test_parse_errors(text):
    """Test that malformed expressions raise ExpressionSyntaxError."""
    with pytest.raises(ExpressionSyntaxError):
        parse(text)


def test_syntax_error_is_value_error():
    """Test that syntax errors are catchable as ValueError and carry a position."""
    with pytest.raises(ValueError) as excinfo:
        parse("a b")

    assert excinfo.value.position == 2


def test_binary_op_rejects_other_operators():
    """Test that only addition and subtraction are supported."""
    with pytest.raises(ValueError):
        BinaryOp("*", NamedTerm("a"), NamedTerm("b"))


def test_describe():
    """Test the canonical text used to label query results."""
    assert describe(parse("good - bad")) == '"good" - "bad"'
    assert describe(parse("a - (b - c)")) == '"a" - ("b" - "c")'
    assert describe(parse("-(a + b)")) == '-("a" + "b")'
    assert describe(Literal((1.0, 0.5))) == "[1.0, 0.5]"


def test_describe_literal_keeps_full_precision():
    """Test that literal values survive describe and parse unchanged."""
    expr = Literal((0.123456789, 1.0, -1e-300, 1.0000000000000002))

    assert parse(describe(expr)) == expr
    assert describe(Literal((1.0000001,))) != describe(Literal((1.0000002,)))


@pytest.mark.parametrize("text", [
    "king - man + woman",
    "a - (b - c)",
    "-(a + b) - -c",
    '"well-known" + "say \\"hi\\""',
    "[1, -0.5] - x",
])
def test_describe_parses_back(text):
    """Test that the canonical text parses to the same tree."""
    expr = parse(text)
    assert parse(describe(expr)) == expr


def test_terms():
    """Test listing the words named in an expression."""
    assert terms(parse("a - b + a")) == ["a", "b"]
    assert terms(parse("-(x + [1, 2])")) == ["x"]
    assert terms(Literal((1.0,))) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
