"""Output formatting utilities for the lintbridge CLI."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from rich.table import Table
from rich.text import Text

from lintbridge.diagnostics import DiagnosticRecord, NormalizedSeverity

__all__ = [
    "OutputFormat",
    "build_diagnostics_table",
    "format_error",
    "format_json",
]

_SEVERITY_STYLES: dict[NormalizedSeverity, str] = {
    NormalizedSeverity.ERROR: "red",
    NormalizedSeverity.WARNING: "yellow",
    NormalizedSeverity.INFORMATION: "cyan",
    NormalizedSeverity.HINT: "dim",
}


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands.

    Values:
        TEXT: Rich table for terminals (default).
        JSON: Machine-readable JSON output.
    """

    TEXT = "text"
    JSON = "json"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error(
        ...     "Unknown tool: mypy",
        ...     details=["Configured tools: flake8, pylint"],
        ...     suggestion="Add it under 'tools' in lintbridge.yaml",
        ... ))
        Error: Unknown tool: mypy
          Configured tools: flake8, pylint
        Suggestion: Add it under 'tools' in lintbridge.yaml
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as JSON with 2-space indentation.

    Raises:
        TypeError: If data is not JSON-serializable.
    """
    return json.dumps(data, indent=2)


def build_diagnostics_table(
    diagnostics: Mapping[str, list[DiagnosticRecord]], title: str | None = None
) -> Table:
    """Build a Rich Table of diagnostics, sorted by position.

    Args:
        diagnostics: Records per tool id.
        title: Optional table title, usually the document path.

    Returns:
        A Rich Table with one row per diagnostic.
    """
    table = Table(title=title, show_lines=False)
    for header in ("Line", "Col", "Severity", "Code", "Message", "Tool"):
        table.add_column(header)

    records = [record for records in diagnostics.values() for record in records]
    records.sort(key=lambda r: (r.line, r.column))
    for record in records:
        style = _SEVERITY_STYLES.get(record.severity, "")
        severity = record.severity.value
        table.add_row(
            str(record.line),
            str(record.column),
            f"[{style}]{severity}[/{style}]" if style else severity,
            Text(record.code),
            Text(record.message),
            record.provider_id,
        )
    return table
