"""
Immutable embedding store with a word -> row index.
"""

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union
import numpy as np

from .errors import DimensionMismatchError, EmptySelectionError, UnknownWordError
from .types import WordMatrix
from util.logging import logger


def unit_rows(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Unit-length rows and row norms of a 2-D array.

    Each row is divided by its largest absolute component before the norm
    is taken, so very large or very small rows neither overflow nor
    underflow. Zero rows stay zero.

    Returns:
        (unit rows, L2 norm of every row)
    """
    scale = np.max(np.abs(matrix), axis=1, initial=0.0)
    scaled = matrix / np.where(scale > 0, scale, 1.0)[:, np.newaxis]
    scaled_norms = np.linalg.norm(scaled, axis=1)
    unit = scaled / np.where(scaled_norms > 0, scaled_norms, 1.0)[:, np.newaxis]
    return unit, scaled_norms * scale


def _as_matrix(matrix) -> np.ndarray:
    try:
        return np.array(matrix, dtype=np.float64)
    except ValueError:
        # Ragged rows are a dimension problem; other bad input is re-raised as is
        lengths = [len(row) if hasattr(row, "__len__") else 1 for row in matrix]
        if len(set(lengths)) > 1:
            raise DimensionMismatchError(lengths[0], sorted(set(lengths)), context="row") from None
        raise


class VectorStore:
    """Read-only matrix of word embeddings, addressable by word.

    The matrix and vocabulary are fixed at construction. Every read returns
    a copy or a read-only view, so a store can be shared between threads
    without locking.
    """

    def __init__(self, matrix, words: Sequence[str]):
        """
        Build a store from a loader's (matrix, names) pair.

        Args:
            matrix: Array-like of shape (size, dimension)
            words: Row names, one per matrix row, in row order
        """
        array = _as_matrix(matrix)
        words = tuple(words)

        if array.ndim == 1 and array.size == 0:
            # An empty list carries no dimension
            array = array.reshape(0, 0)
        if array.ndim != 2:
            raise DimensionMismatchError(2, array.ndim, context="matrix rank")
        if array.shape[0] != len(words):
            raise ValueError(f"Matrix has {array.shape[0]} rows but {len(words)} words were given")

        index: Dict[str, int] = {}
        for i, word in enumerate(words):
            if not isinstance(word, str) or not word:
                raise ValueError(f"Row {i} has an invalid word: {word!r}")
            if word in index:
                raise ValueError(f"Duplicate word in vocabulary: {word!r}")
            index[word] = i

        array.flags.writeable = False
        self._matrix = array
        self._words = words
        self._index = index

        # Unit rows and norms never change, so rankings reuse them
        unit, norms = unit_rows(array)
        unit.flags.writeable = False
        norms.flags.writeable = False
        self._unit = unit
        self._norms = norms

        logger.log_store_operation("create", self.size(), self.dimension())

    @classmethod
    def from_dict(cls, vectors: Mapping[str, Iterable[float]], dimension: Optional[int] = None) -> "VectorStore":
        """
        Build a store from a word -> vector mapping, keeping insertion order.

        Args:
            vectors: Word -> vector mapping
            dimension: Expected vector length; every row is checked against
                it, and it sets the dimension of an empty store
        """
        words = list(vectors.keys())
        if not words:
            return cls(np.zeros((0, dimension or 0)), [])
        rows = [np.asarray(list(v), dtype=np.float64) for v in vectors.values()]
        expected = dimension if dimension is not None else len(rows[0])
        lengths = {len(row) for row in rows}
        if lengths != {expected}:
            raise DimensionMismatchError(expected, sorted(lengths), context="row")
        return cls(np.vstack(rows), words)

    def dimension(self) -> int:
        """Number of components per vector."""
        return self._matrix.shape[1]

    def size(self) -> int:
        """Number of rows in the store."""
        return self._matrix.shape[0]

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, word) -> bool:
        return word in self._index

    def __repr__(self) -> str:
        return f"VectorStore(size={self.size()}, dimension={self.dimension()})"

    @property
    def words(self):
        """Vocabulary in row order."""
        return self._words

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the embedding matrix."""
        return self._matrix

    @property
    def norms(self) -> np.ndarray:
        """Read-only L2 norm of every row."""
        return self._norms

    @property
    def unit_matrix(self) -> np.ndarray:
        """Read-only rows scaled to unit length; zero rows stay zero."""
        return self._unit

    def index_of(self, word: str) -> int:
        """Row index of a word."""
        try:
            return self._index[word]
        except KeyError:
            logger.log_lookup_miss(word, context="index_of")
            raise UnknownWordError(word) from None

    def vector_of(self, word: str) -> np.ndarray:
        """Copy of the vector stored for a word."""
        return self._matrix[self.index_of(word)].copy()

    def rows(self, words: Sequence[str], average: bool = False) -> Union[WordMatrix, np.ndarray]:
        """
        Select vectors for the given words, in the order requested.

        Args:
            words: Words to select; duplicates are allowed
            average: Collapse the selection into its component-wise mean

        Returns:
            WordMatrix when average is False, otherwise a 1-D centroid array
        """
        if isinstance(words, str):
            words = [words]
        words = tuple(words)
        indices = [self.index_of(word) for word in words]

        if average:
            if not indices:
                raise EmptySelectionError("Cannot average an empty selection of words")
            return self._matrix[indices].mean(axis=0)

        selected = self._matrix[indices] if indices else np.zeros((0, self.dimension()))
        return WordMatrix(words=words, matrix=np.array(selected))

    def filter_to(self, words: Iterable[str]) -> "VectorStore":
        """New store restricted to the given words, keeping this store's row order."""
        wanted = set(words)
        keep = [i for i, word in enumerate(self._words) if word in wanted]
        return VectorStore(self._matrix[keep].reshape(len(keep), self.dimension()),
                           [self._words[i] for i in keep])

    def normalized(self) -> "VectorStore":
        """New store with every non-zero row scaled to unit length."""
        return VectorStore(self._unit, self._words)
