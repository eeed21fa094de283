"""
Test cases for evaluating vector expressions against a store.
"""

import pytest
import numpy as np
from wordspace.vector import (
    VectorStore,
    Literal,
    NamedTerm,
    BinaryOp,
    Negate,
    UnknownWordError,
    DimensionMismatchError,
    as_expression,
    evaluate,
    parse
)


@pytest.fixture
def store():
    """Three 2-D vectors: good, bad, ok."""
    return VectorStore.from_dict({
        "good": [1.0, 0.0],
        "bad": [-1.0, 0.0],
        "ok": [0.5, 0.5],
    })


@pytest.fixture
def random_store():
    """Fifty random 16-D vectors with a fixed seed."""
    rng = np.random.default_rng(7)
    return VectorStore(rng.normal(size=(50, 16)), [f"w{i}" for i in range(50)])


def test_evaluate_difference(store):
    """Test the good - bad scenario."""
    np.testing.assert_array_equal(evaluate("good - bad", store), [2.0, 0.0])


def test_evaluate_tree(store):
    """Test evaluating an explicit tree with every node type."""
    expr = BinaryOp(
        "+",
        Negate(NamedTerm("bad")),
        Literal((0.0, 1.0))
    )

    np.testing.assert_array_equal(evaluate(expr, store), [1.0, 1.0])


def test_evaluate_single_word_and_literal(store):
    """Test that a lone word or vector evaluates to itself."""
    np.testing.assert_array_equal(evaluate("ok", store), [0.5, 0.5])
    np.testing.assert_array_equal(evaluate([0.25, -1.0], store), [0.25, -1.0])
    np.testing.assert_array_equal(evaluate(np.array([3, 4]), store), [3.0, 4.0])


def test_subtraction_is_antisymmetric(random_store):
    """Test that a - b is the exact negation of b - a."""
    for a, b in [("w0", "w1"), ("w7", "w33"), ("w49", "w2")]:
        forward = evaluate(f"{a} - {b}", random_store)
        backward = evaluate(f"{b} - {a}", random_store)
        assert np.array_equal(forward, -backward)


def test_addition_is_commutative(random_store):
    """Test that a + b equals b + a exactly."""
    for a, b in [("w0", "w1"), ("w7", "w33"), ("w49", "w2")]:
        assert np.array_equal(
            evaluate(f"{a} + {b}", random_store),
            evaluate(f"{b} + {a}", random_store)
        )


def test_negation_matches_reversed_difference(random_store):
    """Test that -(a - b) evaluates to b - a."""
    assert np.array_equal(
        evaluate("-(w3 - w4)", random_store),
        evaluate("w4 - w3", random_store)
    )


def test_evaluate_unknown_word(store):
    """Test that an unknown word anywhere in the tree raises UnknownWordError."""
    with pytest.raises(UnknownWordError):
        evaluate("xyzzy", store)

    with pytest.raises(UnknownWordError):
        evaluate("good - (ok + xyzzy)", store)


def test_evaluate_literal_dimension_mismatch(store):
    """Test that a literal of the wrong dimension is rejected."""
    with pytest.raises(DimensionMismatchError) as excinfo:
        evaluate("[1, 2, 3] + good", store)

    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 3


def test_literal_checked_before_lookup(store):
    """Test that a bad literal is reported even when a word is also unknown."""
    with pytest.raises(DimensionMismatchError):
        evaluate("xyzzy + [1]", store)


def test_evaluate_returns_fresh_array(store):
    """Test that results do not alias store memory."""
    result = evaluate("good", store)
    result[0] = 9.0

    np.testing.assert_array_equal(store.vector_of("good"), [1.0, 0.0])


def test_as_expression():
    """Test coercion of the accepted query shapes."""
    tree = parse("a + b")

    assert as_expression(tree) is tree
    assert as_expression("a + b") == tree
    assert as_expression([1, 0]) == Literal((1.0, 0.0))
    assert as_expression(np.array([0.5, 2.0])) == Literal((0.5, 2.0))

    with pytest.raises(TypeError):
        as_expression({"a": 1})

    with pytest.raises(TypeError):
        as_expression(np.zeros((2, 2)))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
