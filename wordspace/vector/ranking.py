"""
Exact cosine-similarity ranking over every row of a store.
"""

import math
import time
from typing import Iterable, List, Optional, Union
import numpy as np
import pandas as pd

from .errors import DimensionMismatchError, EmptyStoreError, WordspaceError
from .evaluator import Query, as_expression, evaluate
from .expressions import describe, terms
from .store import VectorStore, unit_rows
from .types import SimilarityResult
from ..core.config import debug_enabled, get_default_n
from util.logging import logger


def similarity_column(label: str) -> str:
    """Name of the similarity column in a table labelled with a query."""
    return f"similarity to {label}"


def rank_column(label: str) -> str:
    """Name of the rank column in a table labelled with a query."""
    return f"rank to {label}"


def _as_vector(query, dimension: int) -> np.ndarray:
    vector = np.asarray(query, dtype=np.float64)
    if vector.ndim != 1 or vector.shape[0] != dimension:
        raise DimensionMismatchError(dimension, vector.shape, context="query")
    return vector


def cosine_similarities(query, store: VectorStore) -> np.ndarray:
    """
    Cosine similarity between a query vector and every row of the store.

    Only an exactly-zero query or row has similarity 0.0 with everything;
    magnitude otherwise does not matter. Values are clipped to [-1, 1] to
    absorb rounding.
    """
    vector = _as_vector(query, store.dimension())
    unit_query, _ = unit_rows(vector[np.newaxis, :])
    return np.clip(store.unit_matrix @ unit_query[0], -1.0, 1.0)


def _check_n(n) -> None:
    if n == math.inf:
        return
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise ValueError(f"n must be a non-negative integer or math.inf, got {n!r}")


def rank(query, store: VectorStore, n: Union[int, float] = math.inf,
         exclude: Optional[Iterable[str]] = None) -> List[SimilarityResult]:
    """
    Rank every row of the store by cosine similarity to a query vector.

    Args:
        query: 1-D vector of the store's dimension
        store: Store to scan
        n: Number of rows to keep after sorting; math.inf keeps all
        exclude: Words removed from the candidates before ranking;
            words missing from the store are ignored

    Returns:
        Results ordered by similarity descending, ties by row index ascending
    """
    if store.size() == 0:
        raise EmptyStoreError("Cannot rank against a store with no rows")
    _check_n(n)

    similarities = cosine_similarities(query, store)
    candidates = np.arange(store.size())
    if exclude:
        if isinstance(exclude, str):
            exclude = [exclude]
        excluded = [store.index_of(word) for word in set(exclude) if word in store]
        keep = np.ones(store.size(), dtype=bool)
        keep[excluded] = False
        candidates = candidates[keep]
        similarities = similarities[keep]

    # lexsort: last key is primary
    order = np.lexsort((candidates, -similarities))
    if n != math.inf:
        order = order[:n]

    words = store.words
    return [
        SimilarityResult(word=words[candidates[i]], similarity=float(similarities[i]), rank=position)
        for position, i in enumerate(order, start=1)
    ]


def rank_table(query, store: VectorStore, n: Union[int, float] = math.inf,
               exclude: Optional[Iterable[str]] = None, label: Optional[str] = None) -> pd.DataFrame:
    """
    Ranking as a DataFrame with columns word, similarity, rank.

    With a label, the similarity and rank columns are named after it so
    tables from different queries can be merged on word.
    """
    results = rank(query, store, n=n, exclude=exclude)
    table = pd.DataFrame({
        "word": pd.Series([r.word for r in results], dtype=object),
        "similarity": pd.Series([r.similarity for r in results], dtype=np.float64),
        "rank": pd.Series([r.rank for r in results], dtype=np.int64),
    })
    if label is not None:
        table = table.rename(columns={"similarity": similarity_column(label), "rank": rank_column(label)})
    return table


def closest_to(store: VectorStore, query: Query, n: Optional[Union[int, float]] = None,
               exclude_terms: bool = False) -> pd.DataFrame:
    """
    Words closest to a query given as a word, expression text, expression
    tree or raw vector.

    Args:
        store: Store to search
        query: e.g. "king", '"king" - "man" + "woman"' or [0.1, 0.2, ...]
        n: Rows to return; defaults to the configured top-N
        exclude_terms: Leave the words named in the query out of the ranking

    Returns:
        DataFrame with word, "similarity to <query>" and "rank to <query>"
    """
    start_time = time.time()
    label = None
    try:
        expr = as_expression(query)
        label = describe(expr)
        vector = evaluate(expr, store)
        if n is None:
            n = get_default_n()
        exclude = terms(expr) if exclude_terms else None
        table = rank_table(vector, store, n=n, exclude=exclude, label=label)
    except WordspaceError as e:
        logger.log_query_error(label or repr(query), e)
        raise

    details = None
    if debug_enabled() and len(table):
        details = {"top_word": table["word"].iloc[0]}
    logger.log_query(label, n, len(table), (time.time() - start_time) * 1000, details=details)
    return table
