"""Prepare a local working copy and the revert branch."""

import shutil
import tempfile
import time
from typing import Callable, Optional

from ..config import UPSTREAM_URL_TEMPLATE
from ..errors import ConfigurationError, OperationError
from ..models import (
    ChangeMetadata,
    RepositoryRef,
    WorkingCopyHandle,
    CallerSupplied,
    Managed,
    WorkingCopy,
    revert_branch_name,
)
from ..utils import get_logger


class WorkingCopyManager:
    """
    Provides the local repository a revert is performed in.

    Handles:
    - Reusing a caller-supplied checkout as-is
    - Cloning the upstream repository into a temporary directory
    - Creating the revert branch from the upstream base branch
    - Removing temporary clones
    """

    def __init__(
        self,
        git,
        upstream_url_template: str = UPSTREAM_URL_TEMPLATE,
        upstream_remote: str = "origin",
        fork_remote: str = "fork",
        temp_prefix: str = "revert_agent_",
        clock: Callable[[], float] = time.time,
    ):
        self.git = git
        self.upstream_url_template = upstream_url_template
        self.upstream_remote = upstream_remote
        self.fork_remote = fork_remote
        self.temp_prefix = temp_prefix
        self.clock = clock
        self.logger = get_logger()

    def prepare(
        self,
        metadata: ChangeMetadata,
        fork: Optional[RepositoryRef],
        supplied: Optional[WorkingCopyHandle] = None,
    ) -> WorkingCopy:
        """
        Get a working copy for reverting `metadata`.

        Args:
            metadata: The PR being reverted
            fork: The user's fork (ignored when `supplied` is given)
            supplied: Existing checkout to use instead of cloning

        Returns:
            CallerSupplied wrapping `supplied`, or Managed for a fresh clone

        Raises:
            ConfigurationError: If the upstream URL template uses unknown fields
            OperationError: If cloning or adding the fork remote fails
        """
        if supplied is not None:
            self.logger.info(f"Using local repository at {supplied.local_path}")
            return CallerSupplied(supplied)

        if fork is None:
            raise OperationError("A fork is required to prepare a managed working copy")

        try:
            upstream_url = self.upstream_url_template.format(
                owner=metadata.owner, repo=metadata.repository
            )
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid upstream URL template {self.upstream_url_template!r}: {e!r}"
            ) from e

        try:
            temp_dir = tempfile.mkdtemp(prefix=self.temp_prefix)
        except OSError as e:
            raise OperationError(f"Failed to create temporary directory: {e}") from e

        copy = Managed(
            handle=WorkingCopyHandle(
                local_path=temp_dir,
                upstream_remote=self.upstream_remote,
                fork_remote=self.fork_remote,
            ),
            temp_dir=temp_dir,
        )

        try:
            self.logger.info(f"Cloning upstream repository {metadata.slug}...")
            self.git.clone(upstream_url, metadata.base_branch, temp_dir)

            # A fresh clone names its only remote "origin"
            if self.upstream_remote != "origin":
                self.git.add_remote(temp_dir, self.upstream_remote, upstream_url)

            self.logger.info("Adding personal fork remote")
            self.git.add_remote(temp_dir, self.fork_remote, fork.url)
        except OperationError:
            self.cleanup(copy)
            raise

        return copy

    def create_branch(self, handle: WorkingCopyHandle, metadata: ChangeMetadata) -> str:
        """
        Fetch upstream and check out a new revert branch from the base branch.

        Returns:
            Name of the new branch

        Raises:
            OperationError: If fetching or branching fails
        """
        self.git.fetch(handle.local_path, handle.upstream_remote)

        branch = revert_branch_name(metadata.number, self.clock)
        self.logger.info(f"Creating revert branch {branch}")
        self.git.create_branch(
            handle.local_path,
            branch,
            f"{handle.upstream_remote}/{metadata.base_branch}",
        )
        return branch

    def cleanup(self, copy: Optional[WorkingCopy]) -> None:
        """Remove a managed clone. Caller-supplied checkouts are left alone."""
        if isinstance(copy, Managed):
            self.logger.debug(f"Removing temporary clone {copy.temp_dir}")
            shutil.rmtree(copy.temp_dir, ignore_errors=True)
