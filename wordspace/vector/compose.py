"""
Several independent rankings at once, as tables that join on word.
"""

import math
import time
from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from typing import Dict, List, Mapping, Optional, Sequence, Union
import pandas as pd

from .errors import WordspaceError
from .evaluator import Query, as_expression, evaluate
from .expressions import describe, terms
from .ranking import rank_table
from .store import VectorStore
from ..core.config import get_max_workers, is_parallel_compose_enabled
from util.logging import logger


def _labelled(queries: Union[Mapping[str, Query], Sequence[Query]]) -> Dict[str, object]:
    if isinstance(queries, Mapping):
        return {str(label): as_expression(query) for label, query in queries.items()}
    if isinstance(queries, str):
        queries = [queries]

    labelled = {}
    for query in queries:
        expr = as_expression(query)
        label = describe(expr)
        if label in labelled:
            raise ValueError(f"Duplicate query: {label}")
        labelled[label] = expr
    return labelled


def compose(queries: Union[Mapping[str, Query], Sequence[Query]], store: VectorStore,
            n: Union[int, float] = math.inf, exclude_terms: bool = False,
            parallel: Optional[bool] = None, max_workers: Optional[int] = None) -> Dict[str, pd.DataFrame]:
    """
    Run several similarity queries against one store.

    Every query is parsed and evaluated before any ranking runs, so an
    unknown word or malformed literal fails the whole call up front.

    Args:
        queries: Mapping of label -> query, or a sequence of queries labelled
            by their canonical text
        store: Store to search
        n: Rows per table; math.inf ranks the full vocabulary
        exclude_terms: Leave each query's own words out of its ranking
        parallel: Fan rankings out over a thread pool; defaults to config
        max_workers: Thread pool size; defaults to config

    Returns:
        Mapping of label -> DataFrame with columns word,
        "similarity to <label>" and "rank to <label>", in input order
    """
    start_time = time.time()
    if parallel is None:
        parallel = is_parallel_compose_enabled()

    labels: List[str] = []
    try:
        expressions = _labelled(queries)
        labels = list(expressions)
        jobs = []
        for label, expr in expressions.items():
            exclude = terms(expr) if exclude_terms else None
            jobs.append((label, evaluate(expr, store), exclude))

        def run(job) -> pd.DataFrame:
            label, vector, exclude = job
            return rank_table(vector, store, n=n, exclude=exclude, label=label)

        if parallel and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=max_workers or get_max_workers()) as pool:
                tables = list(pool.map(run, jobs))
        else:
            tables = [run(job) for job in jobs]
    except WordspaceError as e:
        logger.log_query_error(", ".join(labels) or repr(queries), e)
        raise

    logger.log_compose(labels, bool(parallel), (time.time() - start_time) * 1000)
    return dict(zip(labels, tables))


def intersect(tables: Union[Mapping[str, pd.DataFrame], Sequence[pd.DataFrame]]) -> pd.DataFrame:
    """
    Inner join of ranked tables on word, in the first table's order.

    The usual pattern is the top-N of one query against the full-vocabulary
    scores of another.
    """
    if isinstance(tables, Mapping):
        tables = list(tables.values())
    if not tables:
        raise ValueError("Nothing to intersect")
    return reduce(lambda left, right: pd.merge(left, right, on="word", how="inner", sort=False), tables)
