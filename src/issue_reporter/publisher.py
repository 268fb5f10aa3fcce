"""Publish composed issues to GitHub without filing duplicates.

Protocol (strictly sequential):

1. search for an open, ``bug``-labelled issue with the same title
2. if one exists, stop and report ``Duplicate``
3. otherwise create the issue and validate the response
4. apply the ``bug`` label to the new issue

Two concurrent publishes of the same title can both pass step 1 and each
create an issue. Callers that need at most one issue per title must serialize
publishes per (repository, title) themselves.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from issue_reporter.composer import ComposedIssue

logger = logging.getLogger(__name__)

BUG_LABEL = "bug"


@dataclass(frozen=True, slots=True)
class RepositoryCoordinates:
    """Target repository on the tracker."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner.strip() or not self.name.strip():
            raise ValueError("Repository owner and name are required")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> RepositoryCoordinates:
        """Parse ``owner/name``."""

        parts = value.strip().split("/")
        if len(parts) != 2:
            raise ValueError(f"Repository must be in the form 'owner/name', got {value!r}")
        return cls(owner=parts[0].strip(), name=parts[1].strip())


@dataclass(frozen=True, slots=True)
class Duplicate:
    """An open issue with the same title already exists."""


@dataclass(frozen=True, slots=True)
class Created:
    """A new issue was filed and labelled."""

    number: int
    url: str


PublishResult: TypeAlias = Duplicate | Created


class MalformedResponse(ValueError):
    """The tracker accepted the create call but omitted issue identifiers."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(f"Missing GitHub issue info parameter: {', '.join(missing)}")


class TrackerClient(ABC):
    """An already-authenticated issue tracker.

    Implementations raise their own transport and authentication errors;
    the publisher lets them through untouched.
    """

    @abstractmethod
    def search_issues(self, query: str) -> Mapping[str, Any]:
        """Run an issue search.

        Returns:
            A mapping with at least ``total_count``; ``items`` holds the first
            page of matches.
        """

    @abstractmethod
    def create_issue(self, owner: str, name: str, *, title: str, body: str) -> Mapping[str, Any]:
        """Create an issue and return the raw response payload."""

    @abstractmethod
    def add_label(self, owner: str, name: str, issue_number: int, label: str) -> None:
        """Attach a label to an existing issue."""


def build_duplicate_query(title: str, coordinates: RepositoryCoordinates) -> str:
    return (
        f"{title} in:title state:open label:{BUG_LABEL} repo:{coordinates.full_name}"
    )


class IssuePublisher:
    """Dedup-then-create-then-label workflow over a ``TrackerClient``."""

    def __init__(self, client: TrackerClient) -> None:
        self._client = client

    def publish(self, issue: ComposedIssue, coordinates: RepositoryCoordinates) -> PublishResult:
        """File ``issue`` unless an open duplicate exists.

        Raises:
            ValueError: If the issue title is blank; such a search would match
                every open bug.
            MalformedResponse: If the create response lacks ``number`` or ``url``,
                or ``number`` is not an integer. No label is applied in that case.

        Any error raised by the client propagates unchanged. If labelling fails,
        the issue already exists remotely without its label.
        """

        if not issue.title.strip():
            raise ValueError("Issue title is required")

        query = build_duplicate_query(issue.title, coordinates)
        logger.debug(
            "Searching for duplicate issues",
            extra={"repo": coordinates.full_name, "query": query},
        )
        duplicates = self._client.search_issues(query)

        if int(duplicates.get("total_count") or 0) > 0:
            logger.info(
                "Duplicate issue already open",
                extra={
                    "repo": coordinates.full_name,
                    "title": issue.title,
                    "total_count": duplicates.get("total_count"),
                },
            )
            return Duplicate()

        issue_info = self._client.create_issue(
            coordinates.owner,
            coordinates.name,
            title=issue.title,
            body=issue.body,
        )

        missing = tuple(key for key in ("number", "url") if issue_info.get(key) is None)
        if missing:
            logger.error(
                "Create issue response is missing identifiers",
                extra={"repo": coordinates.full_name, "missing": list(missing)},
            )
            raise MalformedResponse(missing)

        try:
            number = int(issue_info["number"])
        except (TypeError, ValueError):
            logger.error(
                "Create issue response has a non-integer number",
                extra={"repo": coordinates.full_name, "number": issue_info["number"]},
            )
            raise MalformedResponse(("number",)) from None
        url = str(issue_info["url"])
        logger.info(
            "Issue created",
            extra={"repo": coordinates.full_name, "issue_number": number, "title": issue.title},
        )

        self._client.add_label(coordinates.owner, coordinates.name, number, BUG_LABEL)
        logger.info(
            "Label applied",
            extra={"repo": coordinates.full_name, "issue_number": number, "label": BUG_LABEL},
        )

        return Created(number=number, url=url)
