"""One-call error reporting: compose an issue and publish it."""

from __future__ import annotations

import logging

from issue_reporter.composer import ErrorContext, compose_issue
from issue_reporter.publisher import (
    IssuePublisher,
    PublishResult,
    RepositoryCoordinates,
    TrackerClient,
)

logger = logging.getLogger(__name__)


class IssueReporter:
    """High-level entry point for error-reporting integrations."""

    def __init__(self, client: TrackerClient) -> None:
        self._publisher = IssuePublisher(client)

    def report(self, context: ErrorContext, coordinates: RepositoryCoordinates) -> PublishResult:
        issue = compose_issue(context)
        logger.debug("Issue composed", extra={"title": issue.title})
        return self._publisher.publish(issue, coordinates)

    def report_exception(
        self,
        exc: BaseException,
        coordinates: RepositoryCoordinates,
        *,
        code: int | str | None = None,
        severity: int | str | None = None,
    ) -> PublishResult:
        """Report a caught exception, using its innermost frame as the location."""

        context = ErrorContext.from_exception(exc, code=code, severity=severity)
        return self.report(context, coordinates)
