"""Data models for the revert workflow."""

from .pull_request import ChangeReference, ChangeMetadata, RepositoryRef
from .working_copy import (
    WorkingCopyHandle,
    CallerSupplied,
    Managed,
    WorkingCopy,
    revert_branch_name,
)
from .result import RevertResult

__all__ = [
    "ChangeReference",
    "ChangeMetadata",
    "RepositoryRef",
    "WorkingCopyHandle",
    "CallerSupplied",
    "Managed",
    "WorkingCopy",
    "revert_branch_name",
    "RevertResult",
]
