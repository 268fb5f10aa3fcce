"""GitHub implementation of the tracker client.

Search and issue creation go through PyGithub; the label endpoint is called
over a plain ``requests`` session, which keeps the label step to a single
request addressed by issue number.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests
from github import Auth, Github

from issue_reporter.publisher import TrackerClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"


class GitHubTrackerClient(TrackerClient):
    """Authenticated GitHub client exposing search, create and label."""

    def __init__(
        self,
        *,
        token: str = "",
        username: str = "",
        password: str = "",
        base_url: str = DEFAULT_BASE_URL,
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if token:
            auth: Auth.Auth = Auth.Token(token)
        elif username and password:
            auth = Auth.Login(username, password)
        else:
            raise ValueError("A GitHub token or username/password is required")

        self._rest_base_url = base_url.rstrip("/")
        self._github = github_api or Github(auth=auth, base_url=self._rest_base_url)

        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "github-issue-reporter",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        else:
            self._session.auth = (username, password)

    def __enter__(self) -> GitHubTrackerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _labels_url(self, *, owner: str, name: str, issue_number: int) -> str:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        return f"{self._rest_base_url}/repos/{owner}/{name}/issues/{issue_number}/labels"

    def search_issues(self, query: str) -> Mapping[str, Any]:
        logger.debug("Searching issues", extra={"query": query})
        results = self._github.search_issues(query)

        # Fetching the first page also records total_count; never page further.
        first_page = results.get_page(0)
        return {
            "total_count": results.totalCount,
            "items": [issue.raw_data for issue in first_page],
        }

    def create_issue(self, owner: str, name: str, *, title: str, body: str) -> Mapping[str, Any]:
        if not title.strip():
            raise ValueError("Issue title is required")

        repo = self._github.get_repo(f"{owner}/{name}", lazy=True)
        issue = repo.create_issue(title=title, body=body)
        logger.debug(
            "GitHub create issue response received",
            extra={"repo": f"{owner}/{name}"},
        )
        return dict(issue.raw_data)

    def add_label(self, owner: str, name: str, issue_number: int, label: str) -> None:
        url = self._labels_url(owner=owner, name=name, issue_number=issue_number)
        resp = self._session.post(url, json={"labels": [label]}, timeout=30)
        resp.raise_for_status()

    def close(self) -> None:
        self._session.close()
        self._github.close()
