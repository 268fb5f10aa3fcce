"""Issue composition: turn an error context into a title and a markdown body.

Everything in this module is pure formatting. No I/O happens here, so every
function can be exercised without a GitHub client.

Body layout (sections are omitted when their inputs are absent):

- classification table (code / severity)
- path, with line number
- message
- stack trace
"""

from __future__ import annotations

import traceback
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

READABLE_TITLE_LENGTH = 50
ELLIPSIS = "…"
DEFAULT_MESSAGE = "An error occured."
PATH_SEPARATOR = "/"
LINE_BREAK = "\n"

_SHORT_PATH_DEPTH = 3


class ErrorContext(BaseModel):
    """Everything known about a single error event."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(default=DEFAULT_MESSAGE)
    code: int | str | None = Field(default=None)
    severity: int | str | None = Field(default=None)
    path: str | None = Field(default=None)
    line_number: int | None = Field(default=None)
    trace: str | None = Field(default=None)

    @field_validator("message", mode="before")
    @classmethod
    def _default_message(cls, value: object) -> object:
        return DEFAULT_MESSAGE if value is None else value

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        code: int | str | None = None,
        severity: int | str | None = None,
    ) -> ErrorContext:
        """Build a context from a raised exception.

        The path and line number point at the innermost traceback frame, which
        is where the exception was actually raised.
        """

        message = str(exc).strip() or type(exc).__name__

        path: str | None = None
        line_number: int | None = None
        trace: str | None = None
        if exc.__traceback__ is not None:
            frames = traceback.extract_tb(exc.__traceback__)
            if frames:
                path = frames[-1].filename
                line_number = frames[-1].lineno
            trace = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ).rstrip()

        return cls(
            message=message,
            code=code,
            severity=severity,
            path=path,
            line_number=line_number,
            trace=trace,
        )


@dataclass(frozen=True, slots=True)
class ComposedIssue:
    """A ready-to-file issue."""

    title: str
    body: str


def _basename(path: str) -> str:
    return path.rstrip(PATH_SEPARATOR).rsplit(PATH_SEPARATOR, 1)[-1]


def format_title(path: str | None, line_number: int | None, message: str) -> str:
    """Format the issue title as ``[file:line] message``.

    Only the message is held to ``READABLE_TITLE_LENGTH``; the bracketed
    location prefix comes on top of it.
    """

    title = ""
    if path is not None:
        title += "[" + _basename(path)
        if line_number is not None:
            title += f":{line_number}"
        title += "] "

    short_message = message
    if len(message) >= READABLE_TITLE_LENGTH:
        short_message = message[: READABLE_TITLE_LENGTH - 1] + ELLIPSIS

    return title + short_message


def format_short_path(path: str) -> str:
    """Keep the last three path segments, e.g. ``../log/app/error.log``."""

    segments = path.split(PATH_SEPARATOR)
    return ".." + PATH_SEPARATOR + PATH_SEPARATOR.join(segments[-_SHORT_PATH_DEPTH:])


def format_classification_table(code: int | str | None, severity: int | str | None) -> str:
    """Render the code/severity table.

    Raises:
        ValueError: If neither code nor severity is given.
    """

    if code is None and severity is None:
        raise ValueError("A classification table needs a code or a severity")

    divider = "---"
    if code is not None and severity is not None:
        header = "Code | Severity"
        divider = "--- | ---"
        contents = f"{code} | {severity}"
    elif code is not None:
        header = "Code"
        contents = str(code)
    else:
        header = "Severity"
        contents = str(severity)

    return LINE_BREAK.join(
        [
            f"| {header} |",
            f"| {divider} |",
            f"| {contents} |",
        ]
    )


def format_path_section(short_path: str, line_number: int | None) -> str:
    text = "**Path**" + LINE_BREAK + short_path
    if line_number is not None:
        text += f":**{line_number}**"
    return text


def format_message_section(message: str) -> str:
    return "**Message**" + LINE_BREAK + message


def format_trace_section(trace: str) -> str:
    return LINE_BREAK.join(["**Stack trace**", "```", trace, "```"])


def format_body(sections: Sequence[str]) -> str:
    """Join body sections with one blank line between them."""

    return (LINE_BREAK * 2).join(sections)


def compose_issue(context: ErrorContext) -> ComposedIssue:
    """Compose the title and body for an error context."""

    title = format_title(context.path, context.line_number, context.message)

    sections: list[str] = []
    if context.code is not None or context.severity is not None:
        sections.append(format_classification_table(context.code, context.severity))
    if context.path is not None:
        sections.append(
            format_path_section(format_short_path(context.path), context.line_number)
        )
    sections.append(format_message_section(context.message))
    if context.trace is not None:
        sections.append(format_trace_section(context.trace))

    return ComposedIssue(title=title, body=format_body(sections))
