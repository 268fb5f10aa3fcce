"""Configuration for the issue reporter.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Credentials use dedicated `ISSUE_REPORTER_*` variables so they do not collide
with other tools that read `GITHUB_TOKEN`.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from issue_reporter.publisher import RepositoryCoordinates


class ReporterSettings(BaseSettings):
    """Settings for the issue reporter.

    Environment variables:
    - ISSUE_REPORTER_GITHUB_TOKEN
    - ISSUE_REPORTER_GITHUB_USERNAME / ISSUE_REPORTER_GITHUB_PASSWORD (alternative to a token)
    - ISSUE_REPORTER_REPOSITORY (optional default target, 'owner/name')
    - GITHUB_BASE_URL   (optional)
    - LOG_LEVEL         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ReporterSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="ISSUE_REPORTER_GITHUB_TOKEN",
        description="GitHub token used for API authentication",
    )
    github_username: str = Field(
        default="",
        validation_alias="ISSUE_REPORTER_GITHUB_USERNAME",
        description="GitHub login for basic authentication",
    )
    github_password: str = Field(
        default="",
        validation_alias="ISSUE_REPORTER_GITHUB_PASSWORD",
        description="GitHub password for basic authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    repository: str = Field(
        default="",
        validation_alias="ISSUE_REPORTER_REPOSITORY",
        description="Default target repository in the form 'owner/name'",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> ReporterSettings:
        if self.github_token.strip():
            return self
        if self.github_username.strip() and self.github_password:
            return self
        raise ValueError(
            "ISSUE_REPORTER_GITHUB_TOKEN (or ISSUE_REPORTER_GITHUB_USERNAME and "
            "ISSUE_REPORTER_GITHUB_PASSWORD) is required"
        )

    def coordinates(self, override: str | None = None) -> RepositoryCoordinates:
        """Resolve the target repository, preferring an explicit override."""

        value = (override or self.repository).strip()
        if not value:
            raise ValueError("No target repository given (use --repo or ISSUE_REPORTER_REPOSITORY)")
        return RepositoryCoordinates.parse(value)
