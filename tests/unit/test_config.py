"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from issue_reporter.config import ReporterSettings
from issue_reporter.publisher import RepositoryCoordinates

_ENV_VARS = (
    "ISSUE_REPORTER_GITHUB_TOKEN",
    "ISSUE_REPORTER_GITHUB_USERNAME",
    "ISSUE_REPORTER_GITHUB_PASSWORD",
    "ISSUE_REPORTER_REPOSITORY",
    "GITHUB_BASE_URL",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "ISSUE_REPORTER_GITHUB_TOKEN=test-token",
                "ISSUE_REPORTER_REPOSITORY=octo-org/octo-repo",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ReporterSettings()

    assert settings.github_token == "test-token"
    assert settings.log_level == "DEBUG"
    assert settings.github_base_url == "https://api.github.com"
    assert settings.coordinates() == RepositoryCoordinates(owner="octo-org", name="octo-repo")


def test_settings_accept_basic_credentials(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ISSUE_REPORTER_GITHUB_USERNAME", "octocat")
    monkeypatch.setenv("ISSUE_REPORTER_GITHUB_PASSWORD", "hunter2")

    settings = ReporterSettings()

    assert settings.github_token == ""
    assert settings.github_username == "octocat"


def test_settings_require_credentials(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValidationError):
        ReporterSettings()

    monkeypatch.setenv("ISSUE_REPORTER_GITHUB_USERNAME", "octocat")
    with pytest.raises(ValidationError):
        ReporterSettings()


def test_coordinates_override_wins(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISSUE_REPORTER_GITHUB_TOKEN", "test-token")
    monkeypatch.setenv("ISSUE_REPORTER_REPOSITORY", "octo-org/octo-repo")

    settings = ReporterSettings()

    assert settings.coordinates("other-org/other-repo").full_name == "other-org/other-repo"


def test_coordinates_require_a_repository(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ISSUE_REPORTER_GITHUB_TOKEN", "test-token")

    with pytest.raises(ValueError):
        ReporterSettings().coordinates()
