"""Minimal HTTP/1.1 command-line client over plain TCP sockets."""

from .errors import Error
from .version import __version__, __version_info__

__all__ = ("__version__", "__version_info__", "Error")
