"""Revert orchestration.

This module provides:
- RevertOrchestrator: Sequences resolve, fork, clone, revert, push and PR creation
"""

from .orchestrator import RevertOrchestrator

__all__ = [
    "RevertOrchestrator",
]
