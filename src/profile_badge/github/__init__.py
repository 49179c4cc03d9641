"""GitHub API access."""

from .client import GitHubAPIError, GitHubClient

__all__ = ["GitHubAPIError", "GitHubClient"]
