"""
Errors raised by the vector query engine.
"""

from typing import Optional


class WordspaceError(Exception):
    """Base class for all query engine errors."""
    pass


class UnknownWordError(WordspaceError, KeyError):
    """Raised when a word is not in the store's vocabulary."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(word)

    def __str__(self) -> str:
        return f"Word not in vocabulary: {self.word!r}"


class DimensionMismatchError(WordspaceError, ValueError):
    """Raised when a vector does not have the store's dimension."""

    def __init__(self, expected: int, actual, context: str = "vector"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{context} dimension {actual} does not match expected dimension {expected}")


class EmptySelectionError(WordspaceError, ValueError):
    """Raised when an average is requested over zero words."""
    pass


class EmptyStoreError(WordspaceError, ValueError):
    """Raised when ranking against a store with no rows."""
    pass


class ExpressionSyntaxError(WordspaceError, ValueError):
    """Raised when a query expression cannot be parsed."""

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
