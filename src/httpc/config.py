"""Configuration of the HTTP client."""

from dataclasses import dataclass

from .version import __version__

__all__ = ("ClientConfig", "DEFAULT_CONFIG")


@dataclass(frozen=True)
class ClientConfig:
    """Dataclass that holds the fixed parameters of the HTTP client."""

    application: str = "httpc"
    """Application name advertised in the ``User-Agent`` header."""

    version: str = __version__
    """Application version advertised in the ``User-Agent`` header."""

    port: int = 8080
    """The TCP port to connect to, regardless of the port in the URL."""

    read_timeout: float = 1.0
    """Read timeout of the socket, in seconds."""

    max_redirects: int = 10
    """Maximum number of redirects to follow for a single fetch."""

    @property
    def user_agent(self) -> str:
        """The value of the ``User-Agent`` header sent with each request."""
        return f"{self.application}/{self.version}"


DEFAULT_CONFIG = ClientConfig()
