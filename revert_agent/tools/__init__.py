"""Tools for the revert agent."""

from .github_tool import GitHubTool
from .git_tool import GitTool

__all__ = [
    "GitHubTool",
    "GitTool",
]
