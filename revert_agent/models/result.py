"""Data models for workflow results."""

from dataclasses import dataclass, field
from typing import Set

from .pull_request import ChangeMetadata


@dataclass
class RevertResult:
    """Outcome of a successful revert run."""
    original: ChangeMetadata
    branch: str
    pull_request: ChangeMetadata                     # The counter-PR that was opened
    overridable: Set[str] = field(default_factory=set)

    def override_comment(self) -> str:
        """Comment that overrides every overridable CI context."""
        from ..pipeline.statuses import format_override_comment
        return format_override_comment(self.overridable)
