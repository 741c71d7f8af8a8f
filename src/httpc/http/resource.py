"""Extraction of the resource path to request from a URL."""

import re

from .request import Operation

__all__ = ("extract_path",)


_path_regexes = {
    Operation.GET: re.compile(r"^[^/]+//[^/]+/([^\s;]+).*"),
    # Query strings are not part of the target of POST requests
    Operation.POST: re.compile(r"^[^/]+//[^/]+/([^\s;?]+).*"),
}


def extract_path(url: str, operation: Operation) -> str:
    """Returns the resource path that should be sent in the request line when
    the given URL is requested with the given operation.

    Parameters:
        url: the URL to request
        operation: the operation to perform on the URL

    Returns:
        the resource path, always starting with a slash; a single slash if
        the URL does not have a path
    """
    match = _path_regexes[operation].match(url)
    return f"/{match.group(1)}" if match else "/"
