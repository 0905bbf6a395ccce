"""Shared fakes for the GitHub API and git.

Only the external boundaries are faked; everything between them is real.
"""

from typing import Dict, List, Optional, Tuple

import pytest

from revert_agent.errors import GitCommandError, RemoteLookupError, RemoteWriteError
from revert_agent.models import ChangeMetadata, RepositoryRef


class FakeGitHub:
    """In-memory stand-in for GitHubTool."""

    def __init__(self, login: str = "alice"):
        self.login = login
        self.pulls: Dict[Tuple[str, str, int], ChangeMetadata] = {}
        self.statuses: Dict[str, List[str]] = {}
        self.repositories: Dict[str, RepositoryRef] = {}
        self.fork_ready_on_check: Optional[int] = None  # Lookup after create_fork that finds the fork
        self.forking = False
        self.checks_since_fork = 0
        self.calls: List[tuple] = []
        self.created_pulls: List[dict] = []
        self.fail_create_pull = False
        self.fail_create_fork = False
        self.fork_lookup_errors: Dict[int, Exception] = {}  # Check number after create_fork -> error

    def add_pull(self, metadata: ChangeMetadata):
        self.pulls[(metadata.owner, metadata.repository, metadata.number)] = metadata

    def get_pull(self, owner, repository, number):
        self.calls.append(("get_pull", owner, repository, number))
        try:
            return self.pulls[(owner, repository, number)]
        except KeyError:
            raise RemoteLookupError(f"PR {owner}/{repository}#{number} not found")

    def list_status_contexts(self, owner, repository, sha):
        self.calls.append(("list_status_contexts", owner, repository, sha))
        return list(self.statuses.get(sha, []))

    def get_acting_user(self):
        self.calls.append(("get_acting_user",))
        return self.login

    def find_repository(self, owner, name):
        self.calls.append(("find_repository", owner, name))
        slug = f"{owner}/{name}"
        if slug in self.repositories:
            return self.repositories[slug]
        if self.forking:
            self.checks_since_fork += 1
            if self.checks_since_fork in self.fork_lookup_errors:
                raise self.fork_lookup_errors[self.checks_since_fork]
            if self.fork_ready_on_check is not None and self.checks_since_fork >= self.fork_ready_on_check:
                self.repositories[slug] = RepositoryRef(owner, name, f"git@github.com:{slug}.git")
                return self.repositories[slug]
        return None

    def create_fork(self, owner, repository):
        self.calls.append(("create_fork", owner, repository))
        self.forking = True
        if self.fail_create_fork:
            raise RemoteWriteError("Accepted, fork is queued")

    def create_pull(self, owner, repository, title, head, base, body, maintainer_can_modify=True):
        self.calls.append(("create_pull", owner, repository))
        if self.fail_create_pull:
            raise RemoteWriteError("Validation Failed")
        number = 1000 + len(self.created_pulls)
        self.created_pulls.append({
            "owner": owner,
            "repository": repository,
            "title": title,
            "head": head,
            "base": base,
            "body": body,
            "maintainer_can_modify": maintainer_can_modify,
        })
        return ChangeMetadata(
            owner=owner,
            repository=repository,
            number=number,
            base_branch=base,
            title=title,
            author=self.login,
            url=f"https://github.com/{owner}/{repository}/pull/{number}",
        )

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


class FakeGit:
    """Records git invocations instead of running them."""

    def __init__(self):
        self.commands: List[tuple] = []
        self.fail_on: Dict[str, int] = {}  # command name -> exit status
        self.reverting = False

    def _record(self, name, *args):
        self.commands.append((name, *args))
        if name in self.fail_on:
            raise GitCommandError(["git", name, *args], self.fail_on[name])

    def clone(self, url, branch, directory):
        self._record("clone", url, branch, directory)

    def add_remote(self, path, name, url):
        self._record("add_remote", path, name, url)

    def fetch(self, path, remote):
        self._record("fetch", path, remote)

    def create_branch(self, path, branch, start_point):
        self._record("create_branch", path, branch, start_point)

    def revert_commit(self, path, sha):
        self._record("revert_commit", path, sha)

    def push(self, path, remote, branch):
        self._record("push", path, remote, branch)

    def is_reverting(self, path):
        return self.reverting

    def names(self) -> List[str]:
        return [c[0] for c in self.commands]


@pytest.fixture
def merged_pr() -> ChangeMetadata:
    return ChangeMetadata(
        owner="o",
        repository="r",
        number=7,
        merge_commit_id="abc123",
        base_branch="main",
        title="Add shiny feature",
        author="bob",
        head_sha="def456",
        url="https://github.com/o/r/pull/7",
    )


@pytest.fixture
def github(merged_pr) -> FakeGitHub:
    gh = FakeGitHub(login="alice")
    gh.add_pull(merged_pr)
    return gh


@pytest.fixture
def git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def delays() -> List[float]:
    """Collects requested sleeps; pass `delays.append` as the sleep function."""
    return []
