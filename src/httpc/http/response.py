"""Simple HTTP response object for the low-level HTTP library."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Iterator, Optional

from .headers import HEADER_LINE

__all__ = ("Response",)


def _iter_lines(text: str) -> Iterator[str]:
    """Iterates over the lines of the given text.

    Lines are separated by ``\\n``; a trailing ``\\r`` is stripped from each
    line and a newline at the very end of the text does not start a new,
    empty line.
    """
    if not text:
        return

    lines = text.split("\n")
    if not lines[-1]:
        lines.pop()

    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


@dataclass(frozen=True)
class Response:
    """Simple HTTP response object parsed from the raw text received from
    the server.
    """

    status_line: str = ""
    """The status line of the response, e.g. ``HTTP/1.1 200 OK``."""

    headers: dict[str, str] = field(default_factory=dict)
    """The headers of the response."""

    body: str = ""
    """The body of the response."""

    @classmethod
    def parse(cls, raw_text: str) -> Response:
        """Parses a response from the raw text received from the server.

        The first line is the status line. Every other line that looks like
        a ``key: value`` header field is treated as a header; all the other
        lines are collected into the body, each followed by a newline. This
        means that body lines that look like a header end up among the
        headers, and the blank line separating the headers from the body is
        kept at the start of the body.

        Parameters:
            raw_text: the raw text of the response

        Returns:
            the parsed response
        """
        lines = _iter_lines(raw_text)
        status_line = next(lines, "")

        headers: dict[str, str] = {}
        body = StringIO()
        for line in lines:
            match = HEADER_LINE.search(line)
            if match:
                headers[match.group(1)] = match.group(3)
            else:
                body.write(f"{line}\n")

        return cls(status_line=status_line, headers=headers, body=body.getvalue())

    @property
    def status_code(self) -> Optional[int]:
        """The numeric status code from the status line, or ``None`` if the
        status line does not contain one.
        """
        parts = self.status_line.split(None, 2)
        if len(parts) < 2:
            return None
        try:
            return int(parts[1])
        except ValueError:
            return None

    @property
    def is_redirect(self) -> bool:
        """Whether the response asks the client to look elsewhere."""
        return "302" in self.status_line

    def format(self, verbose: bool = False, line_ending: str = "\n") -> str:
        """Formats the response for reporting it to the user.

        Parameters:
            verbose: whether to include the status line and the headers
            line_ending: line ending to use after the status line and the
                headers

        Returns:
            the formatted response; just the body if ``verbose`` is not set
        """
        output = StringIO()
        if verbose:
            output.write(f"{self.status_line}{line_ending}")
            for key, value in self.headers.items():
                output.write(f"{key}: {value}{line_ending}")
        output.write(self.body)
        return output.getvalue()

    def to_string(self) -> str:
        """Returns the wire representation of the response as a string."""
        response = StringIO()
        response.write(f"{self.status_line}\r\n")
        for key, value in self.headers.items():
            response.write(f"{key}: {value}\r\n")
        response.write("\r\n")
        response.write(f"{self.body}\r\n")
        return response.getvalue()
