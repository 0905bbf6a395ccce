"""Revert Agent: revert merged GitHub PRs with a standard revert PR."""

from .config import RevertConfig
from .orchestrator import RevertOrchestrator

__all__ = [
    "RevertConfig",
    "RevertOrchestrator",
]
