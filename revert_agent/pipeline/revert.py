"""Revert the merge commit and push the revert branch."""

from ..errors import ConflictError, GitCommandError
from ..models import ChangeMetadata, WorkingCopyHandle
from ..utils import get_logger


class RevertOperation:
    """Applies the git revert and publishes it to the fork."""

    def __init__(self, git):
        self.git = git
        self.logger = get_logger()

    def revert(self, handle: WorkingCopyHandle, metadata: ChangeMetadata) -> None:
        """
        Revert the PR's merge commit against its first parent.

        Raises:
            ConflictError: If git stopped on conflicts
            OperationError: If git failed for any other reason
        """
        self.logger.info(f"Reverting merge commit {metadata.merge_commit_id}")
        try:
            self.git.revert_commit(handle.local_path, metadata.merge_commit_id)
        except GitCommandError as e:
            if self.git.is_reverting(handle.local_path):
                raise ConflictError(
                    f"Revert of {metadata.merge_commit_id} has conflicts in {handle.local_path}; "
                    "resolve them manually"
                ) from e
            raise

    def push(self, handle: WorkingCopyHandle, branch: str) -> None:
        """
        Push `branch` to the fork remote under the same name.

        Raises:
            OperationError: If the push is rejected
        """
        self.logger.info(f"Pushing {branch} to {handle.fork_remote}")
        self.git.push(handle.local_path, handle.fork_remote, branch)
