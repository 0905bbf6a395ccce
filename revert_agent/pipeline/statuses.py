"""Classify CI status contexts into overridable and unoverridable."""

import re
from typing import Iterable, Optional, Set, Union

from ..config import UNOVERRIDABLE_JOBS
from ..errors import MissingHeadError
from ..models import ChangeMetadata
from ..utils import get_logger


def classify(contexts: Iterable[str], pattern: Union[str, "re.Pattern[str]"] = UNOVERRIDABLE_JOBS) -> Set[str]:
    """
    Filter status contexts down to the ones that may be overridden.

    Args:
        contexts: Raw status contexts, possibly with duplicates
        pattern: Regex matching unoverridable job names (case-sensitive)

    Returns:
        Deduplicated set of overridable contexts
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return {c for c in contexts if c and not regex.search(c)}


def format_override_comment(contexts: Iterable[str]) -> str:
    """Render one `/override <context>` line per context."""
    return "".join(f"/override {c}\n" for c in sorted(contexts))


class StatusClassifier:
    """Finds the CI contexts on a PR that can be overridden."""

    def __init__(self, github, pattern: str = UNOVERRIDABLE_JOBS):
        """
        Args:
            github: Platform client exposing get_pull and list_status_contexts
            pattern: Regex matching unoverridable job names
        """
        self.github = github
        self.pattern = re.compile(pattern)
        self.logger = get_logger()

    def overridable_statuses(self, metadata: ChangeMetadata, sha: Optional[str] = None) -> Set[str]:
        """
        Get the overridable status contexts for a PR.

        Args:
            metadata: The PR to inspect
            sha: Commit to inspect. When omitted the PR is re-fetched and its
                current head SHA is used, since statuses follow the latest push.

        Returns:
            Set of overridable contexts

        Raises:
            MissingHeadError: If the PR's head SHA is unavailable
            RemoteLookupError: If the PR or its statuses cannot be fetched
        """
        if sha is None:
            current = self.github.get_pull(metadata.owner, metadata.repository, metadata.number)
            if not current.head_sha:
                raise MissingHeadError(f"Failed to retrieve SHA of PR {metadata.slug}#{metadata.number}")
            sha = current.head_sha
            self.logger.info(f"Most recent SHA of the PR: {sha}")

        contexts = self.github.list_status_contexts(metadata.owner, metadata.repository, sha)
        overridable = classify(contexts, self.pattern)

        self.logger.debug(
            f"{len(overridable)} of {len(set(contexts))} contexts on {sha} are overridable"
        )
        return overridable
