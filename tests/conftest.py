"""Test configuration and fixtures."""

from unittest.mock import Mock

import pytest

from issue_reporter.composer import ComposedIssue
from issue_reporter.publisher import RepositoryCoordinates, TrackerClient


@pytest.fixture
def coordinates() -> RepositoryCoordinates:
    """Provide a test target repository."""
    return RepositoryCoordinates(owner="octo-org", name="octo-repo")


@pytest.fixture
def composed_issue() -> ComposedIssue:
    """Provide a ready-to-publish issue."""
    return ComposedIssue(
        title="[error.log:42] Disk full",
        body="**Message**\nDisk full",
    )


@pytest.fixture
def tracker() -> Mock:
    """Provide a tracker client with no matching issues and a valid create response."""
    client = Mock(spec=TrackerClient)
    client.search_issues.return_value = {"total_count": 0, "items": []}
    client.create_issue.return_value = {
        "number": 17,
        "url": "https://api.github.com/repos/octo-org/octo-repo/issues/17",
        "html_url": "https://github.com/octo-org/octo-repo/issues/17",
    }
    client.add_label.return_value = None
    return client
