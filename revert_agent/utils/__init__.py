"""Utility functions."""

from .logging import setup_logging, get_logger
from .retry import RetryPolicy, DEFAULT_FORK_RETRY

__all__ = [
    "setup_logging",
    "get_logger",
    "RetryPolicy",
    "DEFAULT_FORK_RETRY",
]
