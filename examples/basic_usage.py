#!/usr/bin/env python3
"""Programmatic error reporting example.

This demonstrates using the reporter components directly:

* load credentials from `.env`
* catch an exception
* file it as a `bug` issue, unless an open duplicate already exists

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from issue_reporter.config import ReporterSettings
from issue_reporter.github.client import GitHubTrackerClient
from issue_reporter.logging import configure_logging
from issue_reporter.publisher import Created, RepositoryCoordinates
from issue_reporter.reporter import IssueReporter


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report a caught exception as a GitHub issue.")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/name"')
    parser.add_argument("--severity", default="critical", help="Severity recorded on the issue")
    return parser.parse_args(argv)


def _load_config() -> dict[str, int]:
    return {"retries": int("three")}


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ReporterSettings()
    configure_logging(settings.log_level)

    coordinates = RepositoryCoordinates.parse(args.repo)

    with GitHubTrackerClient(
        token=settings.github_token,
        username=settings.github_username,
        password=settings.github_password,
        base_url=settings.github_base_url,
    ) as client:
        reporter = IssueReporter(client)
        try:
            _load_config()
            return 0
        except ValueError as exc:
            result = reporter.report_exception(exc, coordinates, severity=args.severity)

    if isinstance(result, Created):
        print(f"Created issue #{result.number}: {result.url}")
    else:
        print("An open issue for this error already exists")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
