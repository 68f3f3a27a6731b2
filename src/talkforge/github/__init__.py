"""GitHub profile lookups."""

from talkforge.github.client import GitHubClient

__all__ = ["GitHubClient"]
