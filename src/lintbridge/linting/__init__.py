"""Linting engine: coordinators, adapters and reporting sinks."""

from __future__ import annotations

from lintbridge.linting.coordinator import LintOutcome, LintRunCoordinator, RunStatus
from lintbridge.linting.linter import PatternLinter, create_linters, lint_document
from lintbridge.linting.protocols import Formatter, Linter
from lintbridge.linting.reporting import (
    LoggingReportingSink,
    NullReportingSink,
    ReportingSink,
)

__all__ = [
    "Formatter",
    "LintOutcome",
    "LintRunCoordinator",
    "Linter",
    "LoggingReportingSink",
    "NullReportingSink",
    "PatternLinter",
    "ReportingSink",
    "RunStatus",
    "create_linters",
    "lint_document",
]
