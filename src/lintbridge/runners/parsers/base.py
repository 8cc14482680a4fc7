"""Base protocol for output parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lintbridge.diagnostics.models import DiagnosticRecord

__all__ = ["OutputParser"]


@runtime_checkable
class OutputParser(Protocol):
    """Protocol for turning captured tool output into diagnostic records."""

    def parse(self, output: str) -> list[DiagnosticRecord]:
        """Parse output and return the records in output order."""
        ...
