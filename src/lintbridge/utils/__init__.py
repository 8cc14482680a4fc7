"""Small helpers shared across lintbridge."""

from __future__ import annotations

from lintbridge.utils.uri import uri_to_path

__all__ = ["uri_to_path"]
