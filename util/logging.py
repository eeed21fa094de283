"""
Structured logging for the wordspace query engine.
Store construction, queries and lookup misses are reported as operations.
"""

import logging
import os
from typing import Any, Dict, List

class StructuredLogger:
    """Structured logger for store, query and compose operations."""

    def __init__(self, name: str = "wordspace"):
        self.logger = logging.getLogger(name)
        level_name = os.getenv("WORDSPACE_LOG_LEVEL", "INFO").upper()
        self.logger.setLevel(getattr(logging, level_name, logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status == "success":
            self.logger.info(message)
        else:
            self.logger.warning(message)

    def log_store_operation(self, operation: str, size: int, dimension: int, status: str = "success"):
        """Log construction of a store or a derived store."""
        self.log_operation(f"store.{operation}", status, {"size": size, "dimension": dimension})

    def log_query(self, query: str, n: Any, result_count: int, duration_ms: float,
                  status: str = "success", details: Dict[str, Any] = None):
        """Log a single ranking query."""
        log_details = {
            "query": query[:80] + "..." if len(query) > 80 else query,
            "n": n,
            "result_count": result_count,
            "duration_ms": round(duration_ms, 2)
        }
        if details:
            log_details.update(details)

        self.log_operation("query.rank", status, log_details)

    def log_compose(self, labels: List[str], parallel: bool, duration_ms: float, status: str = "success"):
        """Log a multi-query compose run."""
        log_details = {
            "query_count": len(labels),
            "labels": [label[:40] for label in labels],
            "parallel": parallel,
            "duration_ms": round(duration_ms, 2)
        }
        self.log_operation("query.compose", status, log_details)

    def log_lookup_miss(self, word: str, context: str = "vector_of"):
        """Log a vocabulary lookup miss."""
        self.log_operation(f"store.{context}", "failed", {"word": word[:50]})

    def log_query_error(self, query: str, error: Exception):
        """Log a query that failed before producing output."""
        log_details = {
            "query": query[:80],
            "error_type": type(error).__name__,
            "error": str(error)[:100]
        }
        self.log_operation("query.rank", "rejected", log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
