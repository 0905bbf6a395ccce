"""Main orchestrator for reverting a merged PR."""

import time
from typing import Callable, Optional, Set

from ..config import RevertConfig
from ..errors import NotMergedError
from ..models import (
    ChangeMetadata,
    RevertResult,
    WorkingCopy,
    WorkingCopyHandle,
)
from ..pipeline import (
    ReferenceResolver,
    StatusClassifier,
    ForkAcquirer,
    WorkingCopyManager,
    RevertOperation,
    render_revert_body,
    render_revert_title,
)
from ..tools import GitHubTool, GitTool
from ..utils import get_logger


class RevertOrchestrator:
    """
    Orchestrates the revert of a merged PR.

    Pipeline:
    - Resolve the PR URL
    - Find or create the user's fork and clone upstream (skipped for a local repository)
    - Create the revert branch, revert the merge commit, push to the fork
    - Open the revert PR
    - Report the CI contexts that can be overridden

    Any failing step aborts the run and its error propagates unchanged.
    Temporary clones are removed on the way out either way.
    """

    def __init__(
        self,
        github=None,
        git=None,
        config: Optional[RevertConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the orchestrator.

        Args:
            github: Platform client (defaults to GitHubTool from config)
            git: Git capability (defaults to GitTool from config)
            config: Revert configuration (defaults to environment)
            sleep: Sleep function used while waiting for forks
            clock: Time source used for branch names
        """
        self.config = config or RevertConfig.from_env()
        self.logger = get_logger()

        self.github = github or GitHubTool(
            token=self.config.github_token,
            base_url=self.config.github_api_url,
        )
        self.git = git or GitTool(self.config.git_executable)

        self.resolver = ReferenceResolver(self.github)
        self.classifier = StatusClassifier(self.github, self.config.unoverridable_pattern)
        self.fork_acquirer = ForkAcquirer(self.github, self.config.fork_retry, sleep=sleep)
        self.working_copies = WorkingCopyManager(
            self.git,
            upstream_url_template=self.config.upstream_url_template,
            upstream_remote=self.config.upstream_remote,
            fork_remote=self.config.fork_remote,
            temp_prefix=self.config.temp_prefix,
            clock=clock,
        )
        self.reverter = RevertOperation(self.git)

    def run(
        self,
        url: str,
        jira_ticket: str,
        rationale: str,
        verification_jobs: str,
        working_copy: Optional[WorkingCopyHandle] = None,
    ) -> RevertResult:
        """
        Revert the PR at `url` and open a revert PR.

        Args:
            url: URL of the merged PR
            jira_ticket: Tracking ticket for the revert
            rationale: Why the PR is being reverted
            verification_jobs: Jobs to run before un-reverting
            working_copy: Local repository to use instead of a fresh clone

        Returns:
            RevertResult with the new PR and the overridable contexts
        """
        original = self.resolver.resolve(url)
        if not original.is_merged:
            raise NotMergedError(f"PR {original.slug}#{original.number} has no merge commit; was it merged?")

        user = self.github.get_acting_user()

        copy: Optional[WorkingCopy] = None
        try:
            fork = None
            if working_copy is None:
                fork = self.fork_acquirer.ensure_fork(original, user)
            copy = self.working_copies.prepare(original, fork, working_copy)

            branch = self.working_copies.create_branch(copy.handle, original)
            self.reverter.revert(copy.handle, original)
            self.reverter.push(copy.handle, branch)
        finally:
            self.working_copies.cleanup(copy)

        pull_request = self._open_revert_pr(original, user, branch, jira_ticket, rationale, verification_jobs)

        # The revert PR is not rolled back if this fails
        overridable = self.classifier.overridable_statuses(original, sha=original.merge_commit_id)

        return RevertResult(
            original=original,
            branch=branch,
            pull_request=pull_request,
            overridable=overridable,
        )

    def overrides(self, url: str) -> Set[str]:
        """
        Get the overridable CI contexts on the latest commit of the PR at `url`.

        Returns:
            Set of overridable contexts
        """
        metadata = self.resolver.resolve(url)
        return self.classifier.overridable_statuses(metadata)

    def _open_revert_pr(
        self,
        original: ChangeMetadata,
        user: str,
        branch: str,
        jira_ticket: str,
        rationale: str,
        verification_jobs: str,
    ) -> ChangeMetadata:
        body = render_revert_body(original, jira_ticket, rationale, verification_jobs)

        pull_request = self.github.create_pull(
            original.owner,
            original.repository,
            title=render_revert_title(original, jira_ticket),
            head=f"{user}:{branch}",
            base=original.base_branch,
            body=body,
            maintainer_can_modify=True,
        )

        self.logger.info(f"PR created {pull_request.url}")
        return pull_request
