"""
Value types handed back by the query engine.
Results are copies and stay valid after the store is gone.
"""

from typing import Tuple
import numpy as np
import pandas as pd
from dataclasses import dataclass


@dataclass(frozen=True)
class SimilarityResult:
    """One row of a similarity ranking."""

    word: str
    """Vocabulary word of the ranked row"""

    similarity: float
    """Cosine similarity to the query, in [-1, 1]"""

    rank: int
    """1-based position in the ranking"""


@dataclass(frozen=True, eq=False)
class WordMatrix:
    """Sub-matrix of embeddings for an ordered selection of words."""

    words: Tuple[str, ...]
    """Selected words, in the order requested"""

    matrix: np.ndarray
    """Array of shape (len(words), dimension)"""

    def __len__(self) -> int:
        return len(self.words)

    def to_frame(self) -> pd.DataFrame:
        """Word-indexed DataFrame, one column per dimension."""
        return pd.DataFrame(self.matrix, index=pd.Index(self.words, name="word"))
