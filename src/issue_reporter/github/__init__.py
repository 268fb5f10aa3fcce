"""GitHub tracker integration."""

from issue_reporter.github.client import GitHubTrackerClient

__all__ = ["GitHubTrackerClient"]
