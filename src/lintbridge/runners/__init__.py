"""Subprocess execution and output parsing for external tools."""

from __future__ import annotations

from lintbridge.runners.cancellation import CancellationSignal
from lintbridge.runners.command import ExecutionAdapter
from lintbridge.runners.models import ExecutionRequest, OutputSource, ToolOutput
from lintbridge.runners.parsers import LineParser, OutputParser, PatternMatcher

__all__ = [
    # Models
    "ExecutionRequest",
    "OutputSource",
    "ToolOutput",
    # Execution
    "CancellationSignal",
    "ExecutionAdapter",
    # Parsing
    "LineParser",
    "OutputParser",
    "PatternMatcher",
]
