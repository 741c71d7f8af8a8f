"""Parsing of header fields from command line arguments and raw responses."""

import re

__all__ = ("HEADER_LINE", "parse_header_arg")


HEADER_LINE = re.compile(r'([^\s"]+)(:\s)([^"]+)')
"""Regular expression matching a ``key: value`` header field. The key may
not contain whitespace or double quotes and the value may not contain double
quotes; a double quote therefore terminates a header field.
"""


def parse_header_arg(value: str) -> dict[str, str]:
    """Parses header fields from a header string given on the command line.

    Every non-overlapping match of `HEADER_LINE` becomes an entry; later
    entries overwrite earlier ones with the same key. Note that the value of
    a header extends up to the next double quote, so commas do *not*
    separate header fields.

    Parameters:
        value: the header string to parse

    Returns:
        the parsed header fields; empty if the string contains no header
    """
    return {match.group(1): match.group(3) for match in HEADER_LINE.finditer(value)}
