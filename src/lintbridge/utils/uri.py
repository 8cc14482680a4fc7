"""Conversion of document URIs to filesystem paths."""

from __future__ import annotations

from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

__all__ = ["uri_to_path"]


def uri_to_path(uri: str) -> str:
    """Convert a ``file://`` URI or plain path to a filesystem path.

    Percent-encoded characters are decoded. Strings without a ``file``
    scheme are returned unchanged, so callers may pass either form.

    Args:
        uri: Document URI as sent by the host editor.

    Returns:
        Filesystem path string.

    Example:
        >>> uri_to_path("file:///home/user/my%20project/app.py")
        '/home/user/my project/app.py'
        >>> uri_to_path("/tmp/app.py")
        '/tmp/app.py'
    """
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return uri
    if parsed.netloc and parsed.netloc != "localhost":
        # UNC path: file://server/share/file.py
        return unquote(f"//{parsed.netloc}{parsed.path}")
    return url2pathname(parsed.path)
