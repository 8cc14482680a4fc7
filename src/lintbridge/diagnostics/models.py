"""Diagnostic record model returned to the host editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lintbridge.diagnostics.severity import NormalizedSeverity

__all__ = ["DiagnosticRecord"]


@dataclass(frozen=True, slots=True)
class DiagnosticRecord:
    """A single structured finding extracted from tool output.

    Attributes:
        line: Line number as reported by the tool (assumed 1-based, unmodified).
        column: Column after offset correction; 0 means unknown.
        code: Tool-specific message code (e.g., "E0602").
        message: Human-readable message text.
        severity: Normalized severity.
        provider_id: Identifier of the tool that produced the record.
        file: File named by the tool output, if the pattern captured one.

    Raises:
        ValueError: If column is negative.
    """

    line: int
    column: int
    code: str
    message: str
    severity: NormalizedSeverity
    provider_id: str
    file: str | None = None

    def __post_init__(self) -> None:
        """Validate the record after initialization."""
        if self.column < 0:
            raise ValueError(f"column must be non-negative, got {self.column}")

    def to_dict(self) -> dict[str, Any]:
        """Render the record using the host wire schema."""
        return {
            "line": self.line,
            "column": self.column,
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "providerId": self.provider_id,
            "file": self.file,
        }
