"""
Centroids and sub-matrices for clusters of words.
"""

from typing import Sequence
import numpy as np

from .store import VectorStore
from .types import WordMatrix


def centroid(store: VectorStore, words: Sequence[str]) -> np.ndarray:
    """Component-wise mean of the vectors for the given words."""
    return store.rows(words, average=True)


def sub_matrix(store: VectorStore, words: Sequence[str]) -> WordMatrix:
    """Vectors for the given words, in the order given."""
    return store.rows(words, average=False)
