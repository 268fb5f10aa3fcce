"""Unit tests for the GitHub tracker client.

A PyGithub double and a requests session double are injected so no network
calls happen.
"""

from __future__ import annotations

from unittest.mock import MagicMock, Mock

import pytest
import requests

from issue_reporter.github.client import GitHubTrackerClient


def _client(**kwargs: object) -> tuple[GitHubTrackerClient, MagicMock, MagicMock]:
    github_api = MagicMock()
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    client = GitHubTrackerClient(
        github_api=github_api,
        session=session,
        **kwargs,  # type: ignore[arg-type]
    )
    return client, github_api, session


def test_requires_credentials() -> None:
    with pytest.raises(ValueError):
        GitHubTrackerClient(github_api=MagicMock(), session=MagicMock(spec=requests.Session))

    with pytest.raises(ValueError):
        GitHubTrackerClient(
            username="octocat",
            github_api=MagicMock(),
            session=MagicMock(spec=requests.Session),
        )


def test_token_auth_sets_bearer_header() -> None:
    _, _, session = _client(token="secret")
    assert session.headers["Authorization"] == "Bearer secret"


def test_basic_auth_uses_session_auth() -> None:
    _, _, session = _client(username="octocat", password="hunter2")
    assert "Authorization" not in session.headers
    assert session.auth == ("octocat", "hunter2")


def test_search_reads_first_page_only() -> None:
    client, github_api, _ = _client(token="secret")

    match = Mock()
    match.raw_data = {"number": 3, "title": "Boom"}
    results = MagicMock()
    results.get_page.return_value = [match]
    results.totalCount = 1
    github_api.search_issues.return_value = results

    payload = client.search_issues("Boom in:title state:open label:bug repo:o/r")

    github_api.search_issues.assert_called_once_with("Boom in:title state:open label:bug repo:o/r")
    results.get_page.assert_called_once_with(0)
    assert payload == {"total_count": 1, "items": [{"number": 3, "title": "Boom"}]}


def test_create_issue_returns_raw_payload() -> None:
    client, github_api, _ = _client(token="secret")

    repo = github_api.get_repo.return_value
    repo.create_issue.return_value.raw_data = {
        "number": 9,
        "url": "https://api.github.com/repos/o/r/issues/9",
    }

    payload = client.create_issue("o", "r", title="Boom", body="**Message**\nBoom")

    github_api.get_repo.assert_called_once_with("o/r", lazy=True)
    repo.create_issue.assert_called_once_with(title="Boom", body="**Message**\nBoom")
    assert payload == {"number": 9, "url": "https://api.github.com/repos/o/r/issues/9"}


def test_create_issue_rejects_blank_title() -> None:
    client, github_api, _ = _client(token="secret")

    with pytest.raises(ValueError):
        client.create_issue("o", "r", title="  ", body="")

    github_api.get_repo.assert_not_called()


def test_add_label_posts_to_labels_endpoint() -> None:
    client, _, session = _client(token="secret", base_url="https://ghe.example.com/api/v3/")

    client.add_label("o", "r", 9, "bug")

    session.post.assert_called_once_with(
        "https://ghe.example.com/api/v3/repos/o/r/issues/9/labels",
        json={"labels": ["bug"]},
        timeout=30,
    )
    session.post.return_value.raise_for_status.assert_called_once_with()


def test_add_label_http_error_propagates() -> None:
    client, _, session = _client(token="secret")
    session.post.return_value.raise_for_status.side_effect = requests.HTTPError("404")

    with pytest.raises(requests.HTTPError):
        client.add_label("o", "r", 9, "bug")


def test_context_manager_closes_connections() -> None:
    client, github_api, session = _client(token="secret")

    with client:
        pass

    session.close.assert_called_once_with()
    github_api.close.assert_called_once_with()
