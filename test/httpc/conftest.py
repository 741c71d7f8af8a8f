import socket

from pytest import fixture
from threading import Thread
from time import sleep
from typing import Sequence


class ScriptedServer:
    """TCP server running in a background thread that answers each
    connection with the next response from a script. The last response is
    repeated once the script runs out.
    """

    def __init__(self, responses: Sequence[bytes], linger: float = 0.0):
        self.requests: list[bytes] = []
        self._responses = list(responses)
        self._linger = linger

        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(5)
        self.port = self._sock.getsockname()[1]

        self._thread = Thread(target=self._serve, daemon=True)
        self._thread.start()

    def close(self) -> None:
        self._sock.close()

    def _next_response(self) -> bytes:
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    def _read_request(self, conn: socket.socket) -> bytes:
        data = b""
        while b"\r\n\r\n" not in data:
            chunk = conn.recv(4096)
            if not chunk:
                return data
            data += chunk

        head, _, rest = data.partition(b"\r\n\r\n")
        length = 0
        for line in head.split(b"\r\n"):
            key, sep, value = line.partition(b": ")
            if sep and key == b"Content-Length":
                length = int(value)

        # The body is always followed by a line terminator
        while len(rest) < length + 2:
            chunk = conn.recv(4096)
            if not chunk:
                break
            rest += chunk

        return head + b"\r\n\r\n" + rest

    def _serve(self) -> None:
        while True:
            try:
                conn, _ = self._sock.accept()
            except OSError:
                return

            with conn:
                self.requests.append(self._read_request(conn))
                conn.sendall(self._next_response())
                if self._linger:
                    sleep(self._linger)


@fixture
def http_server():
    servers: list[ScriptedServer] = []

    def factory(*responses: bytes, linger: float = 0.0) -> ScriptedServer:
        server = ScriptedServer(responses, linger=linger)
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.close()


@fixture
def unused_port() -> int:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
