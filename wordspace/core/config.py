"""
Query engine configuration.
Only defaults live here; every value can be overridden per call.
"""

import os

# Version string
VERSION = "0.1.0"


def get_default_n():
    """Get the default top-N used when a caller gives no n."""
    return int(os.getenv("WORDSPACE_DEFAULT_N", "10"))


def is_parallel_compose_enabled():
    """Check if compose should fan queries out over a thread pool."""
    return os.getenv("WORDSPACE_PARALLEL_COMPOSE", "false").lower() == "true"


def get_max_workers():
    """Get the thread pool size for parallel compose."""
    return int(os.getenv("WORDSPACE_MAX_WORKERS", "4"))


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    try:
        if get_default_n() < 0:
            issues.append("WORDSPACE_DEFAULT_N must be >= 0")
    except ValueError:
        issues.append(f"Invalid WORDSPACE_DEFAULT_N: {os.getenv('WORDSPACE_DEFAULT_N')}")

    try:
        if get_max_workers() < 1:
            issues.append("WORDSPACE_MAX_WORKERS must be >= 1")
    except ValueError:
        issues.append(f"Invalid WORDSPACE_MAX_WORKERS: {os.getenv('WORDSPACE_MAX_WORKERS')}")

    level = os.getenv("WORDSPACE_LOG_LEVEL", "INFO").upper()
    if level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        issues.append(f"Invalid WORDSPACE_LOG_LEVEL: {level}")

    return issues
