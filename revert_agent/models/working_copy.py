"""Data models for local working copies."""

import time
from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class WorkingCopyHandle:
    """A usable local repository and the names of its remotes."""
    local_path: str
    upstream_remote: str = "origin"
    fork_remote: str = "fork"


@dataclass(frozen=True)
class CallerSupplied:
    """A pre-existing checkout owned by the caller. Never deleted."""
    handle: WorkingCopyHandle

    @property
    def owned(self) -> bool:
        return False


@dataclass(frozen=True)
class Managed:
    """A temporary clone owned by the current run. Deleted at the end of the run."""
    handle: WorkingCopyHandle
    temp_dir: str

    @property
    def owned(self) -> bool:
        return True


WorkingCopy = Union[CallerSupplied, Managed]


def revert_branch_name(number: int, clock: Callable[[], float] = time.time) -> str:
    """
    Generate the revert branch name for a PR.

    Args:
        number: Number of the PR being reverted
        clock: Returns the current time in seconds (injectable for tests)

    Returns:
        Branch name in format "revert-<number>-<unix milliseconds>"
    """
    return f"revert-{number}-{int(clock() * 1000)}"
