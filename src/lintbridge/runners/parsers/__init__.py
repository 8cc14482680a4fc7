"""Output parsers for extracting diagnostic records from tool output."""

from __future__ import annotations

from lintbridge.runners.parsers.base import OutputParser
from lintbridge.runners.parsers.lines import (
    LineParser,
    normalize_column,
    parse_line,
    split_lines,
)
from lintbridge.runners.parsers.pattern import PatternMatcher, RawMatch, normalize_pattern

__all__ = [
    "LineParser",
    "OutputParser",
    "PatternMatcher",
    "RawMatch",
    "normalize_column",
    "normalize_pattern",
    "parse_line",
    "split_lines",
]
