"""
Evaluation of vector expressions against a store.
"""

from typing import Sequence, Union
import numpy as np

from .errors import DimensionMismatchError
from .expressions import EXPRESSION_TYPES, BinaryOp, Expression, Literal, NamedTerm, Negate, parse
from .store import VectorStore

Query = Union[Expression, str, Sequence[float], np.ndarray]


def as_expression(query: Query) -> Expression:
    """
    Coerce any accepted query shape into an expression tree.

    Args:
        query: An expression node, expression text (a single word is the
            simplest case), or a 1-D numeric vector

    Returns:
        The expression tree
    """
    if isinstance(query, EXPRESSION_TYPES):
        return query
    if isinstance(query, str):
        return parse(query)
    array = np.asarray(query)
    if array.ndim != 1 or not np.issubdtype(array.dtype, np.number):
        raise TypeError(f"Cannot use {type(query).__name__} as a query; expected expression text or a 1-D numeric vector")
    return Literal.of(array)


def _check_literals(node: Expression, dimension: int) -> None:
    if isinstance(node, Literal):
        if len(node.values) != dimension:
            raise DimensionMismatchError(dimension, len(node.values), context="literal")
    elif isinstance(node, BinaryOp):
        _check_literals(node.left, dimension)
        _check_literals(node.right, dimension)
    elif isinstance(node, Negate):
        _check_literals(node.operand, dimension)


def _evaluate(node: Expression, store: VectorStore) -> np.ndarray:
    if isinstance(node, Literal):
        return np.array(node.values, dtype=np.float64)
    if isinstance(node, NamedTerm):
        return store.vector_of(node.word)
    if isinstance(node, Negate):
        return -_evaluate(node.operand, store)
    if isinstance(node, BinaryOp):
        left = _evaluate(node.left, store)
        right = _evaluate(node.right, store)
        if node.op == "+":
            return left + right
        return left - right
    raise TypeError(f"Not an expression: {node!r}")


def evaluate(expr: Query, store: VectorStore) -> np.ndarray:
    """
    Resolve an expression into a single vector.

    Literal dimensions are checked before any word is looked up.

    Raises:
        UnknownWordError: A named term is not in the store
        DimensionMismatchError: A literal does not have the store's dimension
    """
    expr = as_expression(expr)
    _check_literals(expr, store.dimension())
    return _evaluate(expr, store)
