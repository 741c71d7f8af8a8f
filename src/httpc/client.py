"""HTTP client related classes and the command line interface of the
client.
"""

from __future__ import annotations

import click
import logging
import socket

from dataclasses import dataclass, replace
from typing import Iterator, Optional
from urllib.parse import urlsplit

from httpc.config import ClientConfig, DEFAULT_CONFIG
from httpc.errors import Error
from httpc.http import Operation, Request, Response, extract_path, parse_header_arg
from httpc.http.errors import (
    ConnectionFailedError,
    InvalidURLError,
    MissingLocationError,
    ReadTimeoutError,
    ReceiveError,
    ResolutionError,
    SendError,
    TooManyRedirectsError,
    UnsupportedSchemeError,
)
from httpc.version import __version__

__all__ = ("Exchange", "HttpClient", "httpc", "main")

log = logging.getLogger(__name__)

Address = tuple[socket.AddressFamily, socket.SocketKind, int, str, tuple]
"""Type alias for a single entry returned by ``socket.getaddrinfo()``."""


@dataclass(frozen=True)
class Exchange:
    """Dataclass that holds a single request-response pair performed by the
    client.
    """

    url: str
    """The URL that the request was sent to."""

    request: Request
    """The request that was sent."""

    response: Response
    """The response that was received."""

    timed_out: bool = False
    """Whether reading the response ended because of the read timeout of the
    socket instead of the server closing the connection.
    """


class HttpClient:
    """HTTP client that sends requests over plain TCP sockets and follows
    redirects.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """Constructor.

        Parameters:
            config: the configuration of the client; ``None`` means the
                default configuration
        """
        self.config = config or DEFAULT_CONFIG

    def fetch(
        self,
        url: str,
        operation: Operation,
        headers: Optional[dict[str, str]] = None,
        body: str = "",
        resource: Optional[str] = None,
    ) -> Iterator[Exchange]:
        """Performs the given operation on the given URL, following
        redirects.

        Yields one exchange for each request sent to the server. When the
        server responds with a redirect, the next request is sent to the new
        location with the same operation, resource path, headers and body.

        Parameters:
            url: the URL to fetch
            operation: the operation to perform
            headers: additional headers of the request
            body: the body of the request
            resource: the resource path to request; ``None`` means that it
                is derived from the URL

        Raises:
            ConnectionFailedError: when the client failed to connect to the
                server. Exchanges of earlier hops have already been yielded.
            MissingLocationError: when a redirect response has no
                ``Location`` header
            TooManyRedirectsError: when the server redirected the client
                more times than allowed by the configuration
        """
        if resource is None:
            resource = extract_path(url, operation)

        redirects = 0
        while True:
            exchange = self.send(url, operation, resource, headers, body)
            yield exchange

            response = exchange.response
            if not response.is_redirect:
                return

            location = response.headers.get("Location")
            if location is None:
                raise MissingLocationError(
                    f"Redirect response from {url} has no Location header"
                )

            if redirects >= self.config.max_redirects:
                raise TooManyRedirectsError(
                    f"Exceeded the maximum of {self.config.max_redirects} redirects"
                )

            redirects += 1
            log.info(f"Following redirect #{redirects} from {url} to {location}")
            url = location

    def send(
        self,
        url: str,
        operation: Operation,
        resource: str,
        headers: Optional[dict[str, str]] = None,
        body: str = "",
    ) -> Exchange:
        """Sends a single request to the server of the given URL and reads
        the response, without following redirects.

        Parameters:
            url: the URL whose host the request is sent to
            operation: the operation to perform
            resource: the resource path to put in the request line
            headers: additional headers of the request
            body: the body of the request

        Returns:
            the request and the parsed response
        """
        host = self.get_host(url)
        address = self.resolve(host)

        timed_out = False
        with self.connect(address) as sock:
            request = Request.build(
                host, operation, resource, headers, body, self.config
            )
            data = request.encode()

            try:
                sock.sendall(data)
            except OSError as ex:
                raise SendError(f"Failed to send request to {host}") from ex
            log.debug(
                f"Sent {request.method} request of {len(data)} bytes to {host}"
            )

            try:
                raw = self._receive(sock)
            except ReadTimeoutError as ex:
                # The server may keep the connection alive; the timeout marks
                # the end of the response then
                log.debug(
                    f"Read timed out after {len(ex.partial)} bytes, treating it "
                    f"as the end of the response"
                )
                raw = ex.partial
                timed_out = True
            except ReceiveError as ex:
                log.warning(f"Failed to read response from {host}: {ex}")
                raw = b""

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            log.warning(f"Response from {host} is not valid UTF-8, ignoring it")
            text = ""

        response = Response.parse(text)
        log.debug(f"Received {len(raw)} bytes, status code: {response.status_code}")

        return Exchange(
            url=url, request=request, response=response, timed_out=timed_out
        )

    @staticmethod
    def get_host(url: str) -> str:
        """Returns the host of the given URL.

        Raises:
            UnsupportedSchemeError: if the URL refers to secure HTTP
            InvalidURLError: if the URL has no host
        """
        if "https" in url:
            raise UnsupportedSchemeError("Not compatible with secure HTTP (https).")

        try:
            host = urlsplit(url).hostname
        except ValueError as ex:
            raise InvalidURLError(f"Invalid URL: {url!r}") from ex

        if not host:
            raise InvalidURLError(f"No host found in URL: {url!r}")

        return host

    def resolve(self, host: str) -> Address:
        """Resolves the given host to the address of the socket to connect
        to, using the port from the configuration.

        Raises:
            ResolutionError: if the host cannot be resolved
        """
        try:
            addresses = socket.getaddrinfo(
                host, self.config.port, type=socket.SOCK_STREAM
            )
        except (OSError, UnicodeError) as ex:
            raise ResolutionError(f"Failed to resolve host: {host}") from ex

        if not addresses:
            raise ResolutionError(f"No address found for host: {host}")

        log.debug(f"Resolved {host} to {addresses[0][4]!r}")
        return addresses[0]

    def connect(self, address: Address) -> socket.socket:
        """Opens a blocking TCP connection to the given address and sets the
        read timeout of the socket.

        Raises:
            ConnectionFailedError: if the connection cannot be established
        """
        family, type, proto, _, sockaddr = address
        sock = socket.socket(family, type, proto)
        try:
            sock.connect(sockaddr)
        except OSError as ex:
            sock.close()
            raise ConnectionFailedError(f"Failed to connect to {sockaddr!r}") from ex

        sock.settimeout(self.config.read_timeout)
        log.debug(f"Connected to {sockaddr!r}")
        return sock

    def _receive(self, sock: socket.socket, block_size: int = 4096) -> bytes:
        """Reads from the given socket until the server closes the
        connection.

        Raises:
            ReadTimeoutError: if the server did not send anything within the
                read timeout of the socket. The data received so far is
                attached to the exception.
            ReceiveError: if reading from the socket failed
        """
        buffer = bytearray()
        while True:
            try:
                chunk = sock.recv(block_size)
            except socket.timeout:
                raise ReadTimeoutError(
                    "Timed out while reading the response", bytes(buffer)
                ) from None
            except OSError as ex:
                raise ReceiveError(str(ex)) from ex

            if not chunk:
                return bytes(buffer)

            buffer += chunk


def _report(response: Response, verbose: bool, output: Optional[str]) -> None:
    """Reports a response to the user, either on the standard output or by
    appending it to the given file.
    """
    if output:
        with open(output, "a", encoding="utf-8", newline="") as fp:
            fp.write(response.format(verbose, line_ending="\r\n"))
    else:
        click.echo(response.format(verbose))


def _read_body(path: str) -> str:
    """Reads the body of a request from the given file, keeping its line
    endings intact.
    """
    try:
        with open(path, encoding="utf-8", newline="") as fp:
            return fp.read()
    except UnicodeDecodeError:
        raise click.BadParameter(
            f"{path} is not a valid UTF-8 file", param_hint="--f"
        ) from None


@click.command()
@click.argument("operation", type=click.Choice(["get", "post"]))
@click.argument("url")
@click.option(
    "-v",
    "verbose",
    is_flag=True,
    default=False,
    help="Prints all details of the response, such as protocol, status and headers.",
)
@click.option(
    "-h",
    "header",
    metavar="HEADERS",
    default="",
    help="Associates headers to the request with the format 'key: value'.",
)
@click.option(
    "--d",
    "inline",
    metavar="INLINE",
    default=None,
    help="Passes the request body from the command line.",
)
@click.option(
    "--f",
    "file",
    metavar="FILE",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Sends the contents of the given file as the request body.",
)
@click.option(
    "-o",
    "output",
    metavar="FILE",
    type=click.Path(dir_okay=False),
    default=None,
    help="Appends the response to the given file instead of printing it.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_CONFIG.read_timeout,
    show_default=True,
    help="Read timeout of the connection, in seconds.",
)
@click.option(
    "--max-redirects",
    type=click.IntRange(min=0),
    default=DEFAULT_CONFIG.max_redirects,
    show_default=True,
    help="Maximum number of redirects to follow.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Logs the details of the connection to the standard error.",
)
@click.version_option(__version__)
def httpc(
    operation: str,
    url: str,
    verbose: bool = False,
    header: str = "",
    inline: Optional[str] = None,
    file: Optional[str] = None,
    output: Optional[str] = None,
    timeout: float = 1.0,
    max_redirects: int = 10,
    debug: bool = False,
):
    """Sends an HTTP request to the given URL and prints the response.

    OPERATION is either 'get' or 'post'. POST requests need a body, passed
    either inline with --d or from a file with --f.

    Requests are always sent to port 8080 of the host in the URL; secure
    HTTP (https) is not supported.
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    op = Operation[operation.upper()]

    body = ""
    if op is Operation.POST:
        if inline is not None and file is not None:
            raise click.UsageError(
                "Pass the request body with either --d or --f, not both."
            )
        elif inline is not None:
            body = inline
        elif file is not None:
            body = _read_body(file)
        else:
            raise click.UsageError("POST request without inline or file body.")

    config = replace(DEFAULT_CONFIG, read_timeout=timeout, max_redirects=max_redirects)
    client = HttpClient(config)

    try:
        headers = parse_header_arg(header)
        for exchange in client.fetch(url, op, headers=headers, body=body):
            response = exchange.response
            _report(response, verbose, output)
            if response.is_redirect and "Location" in response.headers:
                click.echo(f"Redirect to {response.headers['Location']}")
    except ConnectionFailedError as ex:
        log.debug(f"{ex}: {ex.__cause__}")
        click.echo("Failed to connect.")
    except Error as ex:
        raise click.ClickException(str(ex)) from ex


def main():
    """Entry point of the command line interface."""
    httpc(auto_envvar_prefix="HTTPC")  # type: ignore


if __name__ == "__main__":
    main()
