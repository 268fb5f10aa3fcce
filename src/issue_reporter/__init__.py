"""GitHub Issue Reporter.

Turns application errors into GitHub issues:
- compose a short title and a markdown body from an error context
- skip filing when an open `bug` issue with the same title exists
- label every new issue `bug`
"""

__version__ = "0.1.0"

from issue_reporter.composer import ComposedIssue, ErrorContext, compose_issue
from issue_reporter.publisher import (
    Created,
    Duplicate,
    IssuePublisher,
    MalformedResponse,
    PublishResult,
    RepositoryCoordinates,
    TrackerClient,
)
from issue_reporter.reporter import IssueReporter

__all__ = [
    "__version__",
    "ComposedIssue",
    "Created",
    "Duplicate",
    "ErrorContext",
    "IssuePublisher",
    "IssueReporter",
    "MalformedResponse",
    "PublishResult",
    "RepositoryCoordinates",
    "TrackerClient",
    "compose_issue",
]
