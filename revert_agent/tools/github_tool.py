"""GitHub API wrapper for revert operations."""

import os
from typing import List, Optional

from github import Auth, Github, GithubException, UnknownObjectException
from github.PullRequest import PullRequest
from github.Repository import Repository

from ..errors import ConfigurationError, RemoteLookupError, RemoteWriteError
from ..models import ChangeMetadata, RepositoryRef
from ..utils import get_logger


class GitHubTool:
    """
    GitHub API wrapper for the revert workflow.

    Handles:
    - Fetching PR metadata
    - Listing commit statuses
    - Looking up and creating forks
    - Opening the revert PR

    PyGithub errors are translated into the workflow's error types so that
    callers never handle GithubException directly.
    """

    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None):
        """
        Initialize GitHub tool.

        Args:
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            base_url: API root for GitHub Enterprise (defaults to api.github.com)

        Raises:
            ConfigurationError: If no token is available
        """
        self.token = token or os.environ.get("GITHUB_TOKEN")
        if not self.token:
            raise ConfigurationError(
                "GitHub token required. Set GITHUB_TOKEN env var or pass token parameter."
            )

        kwargs = {"auth": Auth.Token(self.token)}
        if base_url:
            kwargs["base_url"] = base_url
        self.gh = Github(**kwargs)
        self.logger = get_logger()

    def _repo(self, owner: str, repository: str) -> Repository:
        try:
            return self.gh.get_repo(f"{owner}/{repository}")
        except GithubException as e:
            raise RemoteLookupError(f"Failed to get repository {owner}/{repository}: {e}") from e

    def get_pull(self, owner: str, repository: str, number: int) -> ChangeMetadata:
        """
        Fetch a pull request.

        Returns:
            ChangeMetadata for the PR

        Raises:
            RemoteLookupError: If the PR cannot be fetched
        """
        repo = self._repo(owner, repository)
        try:
            pr = repo.get_pull(number)
        except GithubException as e:
            self.logger.warning(f"Failed to get PR {owner}/{repository}#{number}: {e}")
            raise RemoteLookupError(f"Failed to get PR {owner}/{repository}#{number}: {e}") from e

        return _to_metadata(owner, repository, pr)

    def list_status_contexts(self, owner: str, repository: str, sha: str) -> List[str]:
        """
        List the status contexts recorded against a commit.

        Duplicates are kept; GitHub reports one status per state change.
        """
        repo = self._repo(owner, repository)
        try:
            statuses = repo.get_commit(sha).get_statuses()
            return [s.context for s in statuses if s is not None and s.context]
        except GithubException as e:
            self.logger.warning(f"Failed to get statuses for {owner}/{repository}@{sha}: {e}")
            raise RemoteLookupError(f"Failed to get statuses for SHA {sha}: {e}") from e

    def get_acting_user(self) -> str:
        """Get the login of the authenticated user."""
        try:
            return self.gh.get_user().login
        except GithubException as e:
            raise RemoteLookupError(f"Failed to fetch user details: {e}") from e

    def find_repository(self, owner: str, name: str) -> Optional[RepositoryRef]:
        """
        Look up a repository.

        Returns:
            RepositoryRef, or None if the repository does not exist

        Raises:
            RemoteLookupError: On any failure other than not-found
        """
        try:
            repo = self.gh.get_repo(f"{owner}/{name}")
        except UnknownObjectException:
            return None
        except GithubException as e:
            raise RemoteLookupError(f"Failed to look up {owner}/{name}: {e}") from e

        return RepositoryRef(owner=repo.owner.login, name=repo.name, url=repo.ssh_url)

    def create_fork(self, owner: str, repository: str) -> None:
        """
        Request a fork of a repository under the authenticated user.

        GitHub queues fork creation, so the fork may not be usable yet when
        this returns.
        """
        repo = self._repo(owner, repository)
        try:
            repo.create_fork()
        except GithubException as e:
            raise RemoteWriteError(f"Failed to fork {owner}/{repository}: {e}") from e

    def create_pull(
        self,
        owner: str,
        repository: str,
        title: str,
        head: str,
        base: str,
        body: str,
        maintainer_can_modify: bool = True,
    ) -> ChangeMetadata:
        """
        Open a pull request.

        Args:
            owner: Owner of the target repository
            repository: Name of the target repository
            title: PR title
            head: Head ref in format "user:branch"
            base: Branch to merge into
            body: PR description
            maintainer_can_modify: Allow maintainers to push to the head branch

        Returns:
            ChangeMetadata for the created PR
        """
        repo = self._repo(owner, repository)
        try:
            pr = repo.create_pull(
                base=base,
                head=head,
                title=title,
                body=body,
                maintainer_can_modify=maintainer_can_modify,
            )
        except GithubException as e:
            self.logger.warning(f"create_pull returned error: {e}")
            raise RemoteWriteError(f"Failed to create PR on {owner}/{repository}: {e}") from e

        return _to_metadata(owner, repository, pr)


def _to_metadata(owner: str, repository: str, pr: PullRequest) -> ChangeMetadata:
    """Convert a PyGithub PullRequest into ChangeMetadata."""
    # GitHub also reports a test merge commit for open PRs, so only trust it once merged
    merge_commit_id = (pr.merge_commit_sha or "") if pr.merged else ""

    return ChangeMetadata(
        owner=owner,
        repository=repository,
        number=pr.number,
        merge_commit_id=merge_commit_id,
        base_branch=pr.base.ref if pr.base is not None else "",
        title=pr.title or "",
        author=pr.user.login if pr.user is not None else "",
        head_sha=(pr.head.sha or "") if pr.head is not None else "",
        url=pr.html_url or "",
    )
