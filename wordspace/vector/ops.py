"""
Whole-store vector operations: magnitudes, pairwise similarity,
projection onto a direction and rejection of it.
"""

from typing import Union
import numpy as np
import pandas as pd

from .errors import DimensionMismatchError
from .store import VectorStore, unit_rows
from .types import WordMatrix

Rows = Union[VectorStore, WordMatrix]


def _direction(vector, dimension: int) -> np.ndarray:
    direction = np.asarray(vector, dtype=np.float64)
    if direction.ndim != 1 or direction.shape[0] != dimension:
        raise DimensionMismatchError(dimension, direction.shape, context="direction")
    unit, norms = unit_rows(direction[np.newaxis, :])
    if norms[0] == 0:
        raise ValueError("Cannot project onto a zero vector")
    return unit[0]


def magnitudes(store: VectorStore) -> pd.Series:
    """L2 norm of every row, indexed by word."""
    return pd.Series(np.array(store.norms), index=pd.Index(store.words, name="word"), name="magnitude")


def cosine_similarity_matrix(a: Rows, b: Rows) -> pd.DataFrame:
    """
    Pairwise cosine similarities between two sets of rows.

    Rows are a's words, columns are b's words. Zero vectors have
    similarity 0.0 with everything; rows are scaled before the products so
    very large or small magnitudes do not overflow.
    """
    words_a, matrix_a = a.words, a.matrix
    words_b, matrix_b = b.words, b.matrix
    if matrix_a.shape[1] != matrix_b.shape[1]:
        raise DimensionMismatchError(matrix_a.shape[1], matrix_b.shape[1], context="matrix")

    unit_a, _ = unit_rows(matrix_a)
    unit_b, _ = unit_rows(matrix_b)
    similarities = unit_a @ unit_b.T
    return pd.DataFrame(np.clip(similarities, -1.0, 1.0), index=list(words_a), columns=list(words_b))


def project(store: VectorStore, vector) -> WordMatrix:
    """Component of every row along the direction of a vector."""
    unit = _direction(vector, store.dimension())
    scalars = store.matrix @ unit
    return WordMatrix(words=store.words, matrix=np.outer(scalars, unit))


def reject(store: VectorStore, vector) -> VectorStore:
    """
    New store with the component along a vector removed from every row.

    Useful for taking a known axis (e.g. "he" - "she") out of a model
    before ranking.
    """
    projected = project(store, vector)
    return VectorStore(store.matrix - projected.matrix, store.words)
