"""Protocols implemented by concrete tool adapters.

Adapters expose one operation and get the execution and parsing engine by
composition (see LintRunCoordinator) instead of inheriting it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lintbridge.diagnostics import DiagnosticRecord
    from lintbridge.formatting.formatter import FormatOutcome
    from lintbridge.runners.cancellation import CancellationSignal

__all__ = ["Formatter", "Linter"]


@runtime_checkable
class Linter(Protocol):
    """A tool adapter that produces diagnostics for a document."""

    @property
    def tool_id(self) -> str:
        """Identifier stamped on every diagnostic as providerId."""
        ...

    async def run_linter(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None = None,
    ) -> list[DiagnosticRecord]:
        """Lint one document.

        Note:
            Implementations must not raise; failures yield an empty list.
        """
        ...


@runtime_checkable
class Formatter(Protocol):
    """A tool adapter that formats a document."""

    @property
    def tool_id(self) -> str: ...

    async def run_formatter(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None = None,
    ) -> FormatOutcome:
        """Format one document.

        Note:
            Implementations must not raise; failures are reported in the outcome.
        """
        ...
