"""Simple HTTP request object for the low-level HTTP library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from io import StringIO
from typing import Optional

from httpc.config import ClientConfig, DEFAULT_CONFIG

from .errors import RequestEncodingError

__all__ = ("Operation", "Request")


class Operation(Enum):
    """Enum representing the operations that the client can perform on a
    URL. The value of each member is the corresponding HTTP method.
    """

    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class Request:
    """HTTP request object."""

    target_host: str
    """The host that the request is sent to."""

    request_line: str
    """The request line, e.g. ``GET /index.html HTTP/1.1``."""

    headers: dict[str, str] = field(default_factory=dict)
    """The headers to send with the HTTP request."""

    body: str = ""
    """The body of the HTTP request; empty if there is no body."""

    @classmethod
    def build(
        cls,
        host: str,
        operation: Operation,
        resource: str,
        headers: Optional[dict[str, str]] = None,
        body: str = "",
        config: Optional[ClientConfig] = None,
    ) -> Request:
        """Constructs a new HTTP request with the default headers of the
        client.

        Headers supplied by the caller are merged last so they override the
        defaults, including ``Content-Type`` and ``Content-Length``.

        Parameters:
            host: the host to send the request to
            operation: the operation to perform
            resource: the resource path to put in the request line
            headers: additional headers of the request
            body: the body of the request
            config: the client configuration that provides the user agent;
                ``None`` means the default configuration

        Returns:
            the constructed request
        """
        config = config or DEFAULT_CONFIG

        all_headers = {
            "Host": host,
            "User-Agent": config.user_agent,
            "Accept-Language": "en-us",
            "Accept-Encoding": "utf-8",
            "Connection": "keep-alive",
        }
        if body:
            all_headers["Content-Type"] = "application/json"
            # Counts characters, not bytes
            all_headers["Content-Length"] = str(len(body))
        if headers:
            all_headers.update(headers)

        return cls(
            target_host=host,
            request_line=f"{operation.value} {resource} HTTP/1.1",
            headers=all_headers,
            body=body,
        )

    @property
    def method(self) -> str:
        """The HTTP method of the request."""
        return self.request_line.partition(" ")[0]

    def encode(self) -> bytes:
        """Returns the wire representation of the request as strict UTF-8.

        Raises:
            RequestEncodingError: if the request contains characters that
                cannot be encoded in UTF-8
        """
        try:
            return self.to_string().encode("utf-8", errors="strict")
        except UnicodeEncodeError as ex:
            raise RequestEncodingError(
                f"Request cannot be encoded as UTF-8: {ex}"
            ) from ex

    def to_string(self) -> str:
        """Returns the wire representation of the request as a string."""
        request = StringIO()
        request.write(f"{self.request_line}\r\n")
        for key, value in self.headers.items():
            request.write(f"{key}: {value}\r\n")
        request.write("\r\n")
        request.write(f"{self.body}\r\n")
        return request.getvalue()
