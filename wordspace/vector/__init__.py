"""
Vector query engine over word-embedding models.
Store, expression language, similarity ranking and multi-query compose.
"""

# Package initialization for vector module
from .store import VectorStore
from .types import SimilarityResult, WordMatrix
from .errors import (
    WordspaceError,
    UnknownWordError,
    DimensionMismatchError,
    EmptySelectionError,
    EmptyStoreError,
    ExpressionSyntaxError
)
from .expressions import Literal, NamedTerm, BinaryOp, Negate, parse, describe, terms
from .evaluator import as_expression, evaluate
from .ranking import cosine_similarities, rank, rank_table, closest_to
from .compose import compose, intersect
from .aggregate import centroid, sub_matrix
from .ops import magnitudes, cosine_similarity_matrix, project, reject

__all__ = [
    'VectorStore',
    'SimilarityResult',
    'WordMatrix',
    'WordspaceError',
    'UnknownWordError',
    'DimensionMismatchError',
    'EmptySelectionError',
    'EmptyStoreError',
    'ExpressionSyntaxError',
    'Literal',
    'NamedTerm',
    'BinaryOp',
    'Negate',
    'parse',
    'describe',
    'terms',
    'as_expression',
    'evaluate',
    'cosine_similarities',
    'rank',
    'rank_table',
    'closest_to',
    'compose',
    'intersect',
    'centroid',
    'sub_matrix',
    'magnitudes',
    'cosine_similarity_matrix',
    'project',
    'reject'
]
