"""Configuration for the revert agent."""

from dataclasses import dataclass, field
from typing import Optional
import os

from .errors import ConfigurationError
from .utils.retry import RetryPolicy


# Jobs we typically don't want to override: fast running and the bare minimum
# to make sure things build.
UNOVERRIDABLE_JOBS = r".*(unit|lint|images|verify|tide|verify-deps|fmt|vendor|vet)$"
UNOVERRIDABLE_JOBS_SHORT = r".*(unit|lint|images|verify|tide|verify-deps)$"

UPSTREAM_URL_TEMPLATE = "https://github.com/{owner}/{repo}.git"


def _env_number(name: str, default: str, kind: type):
    value = os.environ.get(name, default)
    try:
        return kind(value)
    except ValueError as e:
        expected = "an integer" if kind is int else "a number"
        raise ConfigurationError(f"{name} must be {expected}, got {value!r}") from e


@dataclass
class RevertConfig:
    """Configuration for the revert workflow."""

    # GitHub settings
    github_token: Optional[str] = None
    github_api_url: Optional[str] = None  # GitHub Enterprise API root; None for github.com

    # Status classification
    unoverridable_pattern: str = UNOVERRIDABLE_JOBS

    # Working copy
    upstream_url_template: str = UPSTREAM_URL_TEMPLATE
    upstream_remote: str = "origin"
    fork_remote: str = "fork"
    temp_prefix: str = "revert_agent_"
    git_executable: str = "git"

    # Fork creation is queued on GitHub's side, so poll until it shows up
    fork_retry: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_env(cls) -> "RevertConfig":
        """Create config from environment variables."""
        return cls(
            github_token=os.environ.get("GITHUB_TOKEN"),
            github_api_url=os.environ.get("GITHUB_API_URL") or None,
            unoverridable_pattern=os.environ.get("REVERT_UNOVERRIDABLE_PATTERN", UNOVERRIDABLE_JOBS),
            upstream_url_template=os.environ.get("REVERT_UPSTREAM_URL", UPSTREAM_URL_TEMPLATE),
            git_executable=os.environ.get("GIT_EXECUTABLE", "git"),
            fork_retry=RetryPolicy(
                max_attempts=_env_number("REVERT_FORK_RETRY_ATTEMPTS", "10", int),
                initial_delay=_env_number("REVERT_FORK_RETRY_DELAY", "1.0", float),
                factor=_env_number("REVERT_FORK_RETRY_FACTOR", "1.5", float),
                jitter=_env_number("REVERT_FORK_RETRY_JITTER", "0.2", float),
            ),
        )


# Default configurations
DEFAULT_CONFIG = RevertConfig()
