"""Git subprocess wrapper."""

import os
import subprocess
from typing import List

from ..errors import GitCommandError, OperationError
from ..utils import get_logger


class GitTool:
    """
    Narrow wrapper around the git executable.

    Every command runs in an explicit working directory; the process's
    current directory is never changed. Exit status is the only success
    signal: git's output is streamed to the terminal and not parsed.
    """

    def __init__(self, executable: str = "git"):
        self.executable = executable
        self.logger = get_logger()

    def _run(self, args: List[str], cwd: str) -> None:
        cmd = [self.executable, *args]
        self.logger.debug(f"Running {' '.join(cmd)} in {cwd}")
        try:
            result = subprocess.run(cmd, cwd=cwd)
        except OSError as e:
            raise OperationError(f"Failed to run {self.executable}: {e}") from e
        if result.returncode != 0:
            raise GitCommandError(cmd, result.returncode, cwd)

    def clone(self, url: str, branch: str, directory: str) -> None:
        """Clone `url` at `branch` into `directory`."""
        parent = os.path.dirname(os.path.abspath(directory))
        self._run(["clone", "-b", branch, url, directory], cwd=parent)

    def add_remote(self, path: str, name: str, url: str) -> None:
        self._run(["remote", "add", name, url], cwd=path)

    def fetch(self, path: str, remote: str) -> None:
        self._run(["fetch", remote], cwd=path)

    def create_branch(self, path: str, branch: str, start_point: str) -> None:
        """Create and check out `branch` from `start_point`."""
        self._run(["checkout", "-b", branch, start_point], cwd=path)

    def revert_commit(self, path: str, sha: str) -> None:
        """Revert a merge commit against its first parent, keeping the generated message."""
        self._run(["revert", "-m1", "--no-edit", sha], cwd=path)

    def push(self, path: str, remote: str, branch: str) -> None:
        self._run(["push", remote, f"{branch}:{branch}"], cwd=path)

    def is_reverting(self, path: str) -> bool:
        """Check whether a revert is in progress (stopped on conflicts)."""
        result = subprocess.run(
            [self.executable, "rev-parse", "-q", "--verify", "REVERT_HEAD"],
            cwd=path,
            capture_output=True,
        )
        return result.returncode == 0
