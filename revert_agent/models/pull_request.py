"""Data models for pull requests and repositories."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChangeReference:
    """Hosting coordinates of a pull request."""
    owner: str
    repository: str
    number: int

    @property
    def slug(self) -> str:
        """Repository in format "owner/repo"."""
        return f"{self.owner}/{self.repository}"


@dataclass(frozen=True)
class ChangeMetadata(ChangeReference):
    """A pull request as reported by the platform."""
    merge_commit_id: str = ""     # Empty if the PR was never merged
    base_branch: str = ""
    title: str = ""
    author: str = ""              # Login of the original submitter
    head_sha: str = ""
    url: str = ""

    @property
    def is_merged(self) -> bool:
        return bool(self.merge_commit_id)


@dataclass(frozen=True)
class RepositoryRef:
    """A repository on the platform, usually the acting user's fork."""
    owner: str
    name: str
    url: str  # Remote URL used for pushing

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"
