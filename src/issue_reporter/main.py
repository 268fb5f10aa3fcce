"""CLI entrypoint: preview or file a GitHub issue for an error."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from issue_reporter import __version__
from issue_reporter.composer import DEFAULT_MESSAGE, ErrorContext, compose_issue
from issue_reporter.config import ReporterSettings
from issue_reporter.github.client import GitHubTrackerClient
from issue_reporter.logging import configure_logging
from issue_reporter.publisher import Created, MalformedResponse
from issue_reporter.reporter import IssueReporter

logger = logging.getLogger(__name__)


def _parse_classifier(value: str | None) -> int | str | None:
    if value is None:
        return None
    stripped = value.strip()
    if stripped.isdigit():
        return int(stripped)
    return stripped


def _read_trace(value: str | None) -> str | None:
    if value is None:
        return None
    if value == "-":
        return sys.stdin.read().rstrip("\n")
    return Path(value).read_text(encoding="utf-8").rstrip("\n")


def _add_context_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--message", default=DEFAULT_MESSAGE, help="Error message")
    parser.add_argument("--code", default=None, help="Error code")
    parser.add_argument("--severity", default=None, help="Error severity, e.g. 'critical'")
    parser.add_argument("--path", default=None, help="Source file where the error happened")
    parser.add_argument("--line", type=int, default=None, help="Line number in --path")
    parser.add_argument(
        "--trace-file",
        default=None,
        help="File holding the stack trace ('-' reads stdin)",
    )


def _context_from_args(args: argparse.Namespace) -> ErrorContext:
    return ErrorContext(
        message=args.message,
        code=_parse_classifier(args.code),
        severity=_parse_classifier(args.severity),
        path=args.path,
        line_number=args.line,
        trace=_read_trace(args.trace_file),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-reporter",
        description="Turn application errors into GitHub bug issues",
    )
    parser.add_argument(
        "--version", action="version", version=f"github-issue-reporter {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser(
        "preview", help="Print the issue that would be filed, without contacting GitHub"
    )
    _add_context_arguments(preview)

    report = subparsers.add_parser(
        "report", help="File a 'bug' issue unless an open duplicate exists"
    )
    report.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Target repository in the form 'owner/name' (default: ISSUE_REPORTER_REPOSITORY)",
    )
    _add_context_arguments(report)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "preview":
        issue = compose_issue(_context_from_args(args))
        print(issue.title)
        print()
        print(issue.body)
        return 0

    try:
        settings = ReporterSettings()
        coordinates = settings.coordinates(args.repository)
    except (ValidationError, ValueError) as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        context = _context_from_args(args)
        with GitHubTrackerClient(
            token=settings.github_token,
            username=settings.github_username,
            password=settings.github_password,
            base_url=settings.github_base_url,
        ) as client:
            result = IssueReporter(client).report(context, coordinates)

        if isinstance(result, Created):
            print(f"Created issue #{result.number}: {result.url}")
        else:
            print(f"Duplicate issue already open: {compose_issue(context).title}")
        return 0

    except MalformedResponse as e:
        logger.error(str(e), extra={"missing": list(e.missing)})
        print(str(e), file=sys.stderr)
        return 4

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
