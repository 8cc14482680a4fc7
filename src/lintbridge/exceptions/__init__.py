"""lintbridge exception hierarchy.

All exceptions can be imported from this package:
    from lintbridge.exceptions import ConfigError, ExecutionError
"""

from __future__ import annotations

# Base exception
from lintbridge.exceptions.base import LintBridgeError

# Configuration exceptions
from lintbridge.exceptions.config import ConfigError, PatternError

# Parsing exceptions
from lintbridge.exceptions.parse import DiagnosticParseError

# Runner-related exceptions
from lintbridge.exceptions.runner import (
    CommandNotFoundError,
    CommandTimeoutError,
    ExecutionCancelledError,
    ExecutionError,
    RunnerError,
    WorkingDirectoryError,
)

__all__ = [
    # Base
    "LintBridgeError",
    # Config
    "ConfigError",
    "PatternError",
    # Parsing
    "DiagnosticParseError",
    # Runner
    "CommandNotFoundError",
    "CommandTimeoutError",
    "ExecutionCancelledError",
    "ExecutionError",
    "RunnerError",
    "WorkingDirectoryError",
]
