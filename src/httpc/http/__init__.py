"""Very low-level HTTP client library.

This is used in place of higher-level libraries like ``http.client`` because
the client needs full control over the raw request text and parses the
response text leniently.
"""

from .errors import HttpError
from .headers import parse_header_arg
from .request import Operation, Request
from .resource import extract_path
from .response import Response

__all__ = (
    "HttpError",
    "Operation",
    "Request",
    "Response",
    "extract_path",
    "parse_header_arg",
)
