"""Error classes for the low-level HTTP module."""

from typing import Optional

from httpc.errors import Error

__all__ = (
    "ConnectionFailedError",
    "HttpError",
    "InvalidURLError",
    "MissingLocationError",
    "ReadTimeoutError",
    "ReceiveError",
    "RequestEncodingError",
    "ResolutionError",
    "SendError",
    "TooManyRedirectsError",
    "UnsupportedSchemeError",
)


class HttpError(Error):
    """Superclass for all errors raised while talking to an HTTP server."""

    pass


class UnsupportedSchemeError(HttpError):
    """Error thrown when the client is asked to fetch a secure (HTTPS) URL."""

    pass


class InvalidURLError(HttpError):
    """Error thrown when no host can be extracted from a URL."""

    pass


class ResolutionError(HttpError):
    """Error thrown when the host of a URL cannot be resolved to a socket
    address.
    """

    pass


class ConnectionFailedError(HttpError):
    """Error thrown when the TCP connection to the server cannot be
    established.
    """

    pass


class RequestEncodingError(HttpError):
    """Error thrown when a request cannot be encoded as strict UTF-8."""

    pass


class SendError(HttpError):
    """Error thrown when the request could not be written to the socket."""

    pass


class ReceiveError(HttpError):
    """Error thrown when reading the response from the socket failed."""

    pass


class ReadTimeoutError(ReceiveError):
    """Error thrown when the server did not send anything for longer than the
    read timeout of the socket.

    The bytes that were received before the timeout are kept in the
    ``partial`` attribute of the exception.
    """

    partial: bytes

    def __init__(self, message: str, partial: Optional[bytes] = None):
        super().__init__(message)
        self.partial = partial or b""


class MissingLocationError(HttpError):
    """Error thrown when a redirect response does not tell where to go
    next.
    """

    pass


class TooManyRedirectsError(HttpError):
    """Error thrown when the server keeps on redirecting the client beyond
    the configured limit.
    """

    pass
