"""Reporting sinks that receive execution metadata and raw tool output.

A host editor usually shows these in an output panel; the engine only needs
somewhere to send them. Sink failures are logged and never abort a run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lintbridge.logging import get_logger

if TYPE_CHECKING:
    from lintbridge.exceptions import DiagnosticParseError
    from lintbridge.runners.models import ExecutionRequest

__all__ = ["LoggingReportingSink", "NullReportingSink", "ReportingSink"]

logger = get_logger(__name__)


@runtime_checkable
class ReportingSink(Protocol):
    """Receiver for the side-channel output of a run.

    Example:
        A sink that appends to an editor output panel::

            class OutputPanelSink:
                def __init__(self, panel):
                    self._panel = panel

                def report_execution(self, tool_id, request):
                    self._panel.append_line(f"Run linter {tool_id}: {request.argv}")

                ...
    """

    def report_execution(self, tool_id: str, request: ExecutionRequest) -> None:
        """Called before the tool is spawned."""
        ...

    def report_output(self, tool_id: str, output: str) -> None:
        """Called with the raw captured output before it is parsed."""
        ...

    def report_failure(self, tool_id: str, message: str) -> None:
        """Called when the run failed and returns no diagnostics."""
        ...

    def report_parse_failure(
        self, tool_id: str, line: str, error: DiagnosticParseError
    ) -> None:
        """Called for each output line that matched but could not be converted."""
        ...


class LoggingReportingSink:
    """Sink that writes everything to the structured log."""

    def report_execution(self, tool_id: str, request: ExecutionRequest) -> None:
        logger.info("tool_run", tool_id=tool_id, **request.describe())

    def report_output(self, tool_id: str, output: str) -> None:
        logger.debug("tool_output", tool_id=tool_id, output=output)

    def report_failure(self, tool_id: str, message: str) -> None:
        logger.warning("tool_run_failed", tool_id=tool_id, error=message)

    def report_parse_failure(
        self, tool_id: str, line: str, error: DiagnosticParseError
    ) -> None:
        logger.debug("tool_line_skipped", tool_id=tool_id, line=line, error=error.message)


class NullReportingSink:
    """Sink that discards everything."""

    def report_execution(self, tool_id: str, request: ExecutionRequest) -> None:
        pass

    def report_output(self, tool_id: str, output: str) -> None:
        pass

    def report_failure(self, tool_id: str, message: str) -> None:
        pass

    def report_parse_failure(
        self, tool_id: str, line: str, error: DiagnosticParseError
    ) -> None:
        pass
