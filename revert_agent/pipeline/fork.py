"""Ensure the acting user has a fork of the target repository."""

import time
from typing import Callable, Optional

from ..errors import ForkUnavailableError, RemoteLookupError, RemoteWriteError
from ..models import ChangeMetadata, RepositoryRef
from ..utils import RetryPolicy, get_logger


class ForkAcquirer:
    """
    Finds or creates the acting user's fork.

    Forks are looked up by name under the user's namespace, so a fork that
    was renamed will not be found and a new one is requested.
    """

    def __init__(
        self,
        github,
        retry: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            github: Platform client exposing find_repository and create_fork
            retry: Polling policy for queued fork creation
            sleep: Sleep function (injectable for tests)
        """
        self.github = github
        self.retry = retry or RetryPolicy()
        self.sleep = sleep
        self.logger = get_logger()

    def ensure_fork(self, metadata: ChangeMetadata, acting_user: str) -> RepositoryRef:
        """
        Return the user's fork of the PR's repository, creating it if needed.

        Raises:
            ForkUnavailableError: If a new fork never became available
            RemoteLookupError: If the lookup fails for a reason other than not-found
        """
        fork = self.github.find_repository(acting_user, metadata.repository)
        if fork is not None:
            self.logger.info(f"Fork of {metadata.repository!r} already exists for user {acting_user!r}")
            return fork

        self.logger.info(f"Fork of {metadata.repository!r} not found for user {acting_user!r}, creating one...")
        creation_error: Optional[RemoteWriteError] = None
        try:
            self.github.create_fork(metadata.owner, metadata.repository)
        except RemoteWriteError as e:
            # Creation may be reported as failed while still queued; polling decides
            self.logger.warning(f"Fork request returned an error, waiting to see if it appears: {e}")
            creation_error = e

        found = {}

        def fork_exists() -> bool:
            try:
                found["fork"] = self.github.find_repository(acting_user, metadata.repository)
            except RemoteLookupError as e:
                # Transient platform errors count as "not ready yet"
                self.logger.info(f"Fork lookup failed, will retry: {e}")
                return False
            return found["fork"] is not None

        slug = f"{acting_user}/{metadata.repository}"
        if not self.retry.poll(fork_exists, sleep=self.sleep, description=f"Fork {slug}"):
            self.logger.warning(f"Fork {slug} failed to become available")
            raise ForkUnavailableError(slug, self.retry.max_attempts) from creation_error

        return found["fork"]
