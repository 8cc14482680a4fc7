"""Formatter adapters."""

from __future__ import annotations

from lintbridge.formatting.formatter import FormatOutcome, ToolFormatter

__all__ = ["FormatOutcome", "ToolFormatter"]
