"""Error taxonomy for the revert workflow."""

from typing import List, Optional


class RevertAgentError(Exception):
    """Base exception for all revert workflow errors."""


class ConfigurationError(RevertAgentError):
    """Raised when required configuration (e.g. GITHUB_TOKEN) is missing or invalid."""


class ParseError(RevertAgentError):
    """Raised when a pull request URL cannot be parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid GitHub PR URL {url!r}: {reason}")


class RemoteLookupError(RevertAgentError):
    """Raised when a read from the hosting platform fails (not found, auth, transient)."""


class NotMergedError(RemoteLookupError):
    """Raised when the PR to revert has no merge commit."""


class MissingHeadError(RemoteLookupError):
    """Raised when the head SHA of a PR is unavailable."""


class RemoteWriteError(RevertAgentError):
    """Raised when the platform rejects a write (fork or PR creation)."""


class ForkUnavailableError(RevertAgentError):
    """Raised when a fork never became available within the retry budget."""

    def __init__(self, repository: str, attempts: int):
        self.repository = repository
        self.attempts = attempts
        super().__init__(f"Fork {repository} not available after {attempts} attempts")


class OperationError(RevertAgentError):
    """Raised when a local git or filesystem step fails."""


class GitCommandError(OperationError):
    """Raised when a git subprocess exits non-zero."""

    def __init__(self, args: List[str], returncode: int, cwd: Optional[str] = None):
        self.command = list(args)
        self.returncode = returncode
        self.cwd = cwd
        super().__init__(f"`{' '.join(self.command)}` exited with status {returncode}")


class ConflictError(RevertAgentError):
    """Raised when a revert could not be applied cleanly."""
