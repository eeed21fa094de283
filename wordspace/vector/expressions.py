"""
Vector expressions: a small tree of literals, named terms, sums and
differences, plus the recursive-descent parser for the textual form.

Grammar:
    expr    := unary (("+" | "-") unary)*
    unary   := "-" unary | primary
    primary := WORD | QUOTED | "(" expr ")" | "[" number ("," number)* "]"
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple, Union

from .errors import ExpressionSyntaxError


@dataclass(frozen=True)
class Literal:
    """A raw numeric vector."""
    values: Tuple[float, ...]

    @classmethod
    def of(cls, values) -> "Literal":
        return cls(tuple(float(v) for v in values))


@dataclass(frozen=True)
class NamedTerm:
    """A word, resolved against a store at evaluation time."""
    word: str


@dataclass(frozen=True)
class BinaryOp:
    """Component-wise sum or difference of two sub-expressions."""
    op: str
    left: "Expression"
    right: "Expression"

    def __post_init__(self):
        if self.op not in ("+", "-"):
            raise ValueError(f"Unsupported operator: {self.op!r}")


@dataclass(frozen=True)
class Negate:
    """Sign flip of a sub-expression."""
    operand: "Expression"


Expression = Union[Literal, NamedTerm, BinaryOp, Negate]

EXPRESSION_TYPES = (Literal, NamedTerm, BinaryOp, Negate)

# Characters that end a bare word
_DELIMITERS = set("+-()[],\"'")


class _Token(NamedTuple):
    kind: str
    value: object
    position: int


def _read_quoted(text: str, start: int) -> Tuple[str, int]:
    quote = text[start]
    chars = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            chars.append(text[i + 1])
            i += 2
            continue
        if ch == quote:
            if not chars:
                raise ExpressionSyntaxError("Empty quoted term", start)
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    raise ExpressionSyntaxError("Unterminated quoted term", start)


def _read_literal(text: str, start: int) -> Tuple[Tuple[float, ...], int]:
    end = text.find("]", start)
    if end == -1:
        raise ExpressionSyntaxError("Unterminated vector literal", start)
    parts = text[start + 1:end].replace(",", " ").split()
    if not parts:
        raise ExpressionSyntaxError("Empty vector literal", start)
    try:
        values = tuple(float(part) for part in parts)
    except ValueError:
        raise ExpressionSyntaxError(f"Invalid number in vector literal: {text[start:end + 1]}", start) from None
    return values, end + 1


def tokenize(text: str) -> List[_Token]:
    """Split expression text into tokens."""
    tokens = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
        elif ch in "+-":
            tokens.append(_Token("op", ch, i))
            i += 1
        elif ch == "(":
            tokens.append(_Token("lparen", ch, i))
            i += 1
        elif ch == ")":
            tokens.append(_Token("rparen", ch, i))
            i += 1
        elif ch in "\"'":
            word, end = _read_quoted(text, i)
            tokens.append(_Token("word", word, i))
            i = end
        elif ch == "[":
            values, end = _read_literal(text, i)
            tokens.append(_Token("literal", values, i))
            i = end
        elif ch in "],":
            raise ExpressionSyntaxError(f"Unexpected {ch!r}", i)
        else:
            start = i
            while i < len(text) and not text[i].isspace() and text[i] not in _DELIMITERS:
                i += 1
            tokens.append(_Token("word", text[start:i], start))
    return tokens


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def advance(self) -> _Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def parse(self) -> Expression:
        if not self.tokens:
            raise ExpressionSyntaxError("Empty expression")
        expr = self.expr()
        token = self.peek()
        if token is not None:
            raise ExpressionSyntaxError(f"Unexpected {token.value!r}", token.position)
        return expr

    def expr(self) -> Expression:
        node = self.unary()
        while True:
            token = self.peek()
            if token is None or token.kind != "op":
                return node
            self.advance()
            node = BinaryOp(token.value, node, self.unary())

    def unary(self) -> Expression:
        token = self.peek()
        if token is not None and token.kind == "op" and token.value == "-":
            self.advance()
            return Negate(self.unary())
        return self.primary()

    def primary(self) -> Expression:
        token = self.peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression", len(self.text))
        self.advance()
        if token.kind == "word":
            return NamedTerm(token.value)
        if token.kind == "literal":
            return Literal(token.value)
        if token.kind == "lparen":
            node = self.expr()
            closing = self.peek()
            if closing is None or closing.kind != "rparen":
                raise ExpressionSyntaxError("Missing closing parenthesis", token.position)
            self.advance()
            return node
        raise ExpressionSyntaxError(f"Unexpected {token.value!r}", token.position)


def parse(text: str) -> Expression:
    """Parse expression text such as '"king" - "man" + woman' into a tree."""
    return _Parser(text).parse()


def _quote(word: str) -> str:
    return '"' + word.replace("\\", "\\\\").replace('"', '\\"') + '"'


def describe(expr: Expression) -> str:
    """Canonical text for an expression; parsing it gives the same tree."""
    if isinstance(expr, NamedTerm):
        return _quote(expr.word)
    if isinstance(expr, Literal):
        return "[" + ", ".join(repr(float(v)) for v in expr.values) + "]"
    if isinstance(expr, Negate):
        inner = describe(expr.operand)
        if isinstance(expr.operand, BinaryOp):
            inner = f"({inner})"
        return f"-{inner}"
    if isinstance(expr, BinaryOp):
        right = describe(expr.right)
        if isinstance(expr.right, BinaryOp):
            right = f"({right})"
        return f"{describe(expr.left)} {expr.op} {right}"
    raise TypeError(f"Not an expression: {expr!r}")


def terms(expr: Expression) -> List[str]:
    """Words named in an expression, in order of first appearance."""
    found = []

    def walk(node):
        if isinstance(node, NamedTerm):
            if node.word not in found:
                found.append(node.word)
        elif isinstance(node, BinaryOp):
            walk(node.left)
            walk(node.right)
        elif isinstance(node, Negate):
            walk(node.operand)

    walk(expr)
    return found
