"""Run coordinator: one tool, one document, one list of diagnostics.

The coordinator ties the execution adapter to the line parser and is the
isolation boundary between the host and misbehaving tools: whatever the tool
does, :meth:`LintRunCoordinator.lint` returns a list.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from lintbridge.exceptions import (
    DiagnosticParseError,
    ExecutionCancelledError,
    LintBridgeError,
)
from lintbridge.linting.reporting import LoggingReportingSink, ReportingSink
from lintbridge.logging import get_logger
from lintbridge.runners.command import ExecutionAdapter
from lintbridge.runners.models import ExecutionRequest, ToolOutput
from lintbridge.runners.parsers import LineParser, PatternMatcher
from lintbridge.utils.uri import uri_to_path

if TYPE_CHECKING:
    from lintbridge.config import FormatterConfig, LintBridgeConfig, ToolConfig
    from lintbridge.diagnostics import DiagnosticRecord
    from lintbridge.runners.cancellation import CancellationSignal

__all__ = [
    "LintOutcome",
    "LintRunCoordinator",
    "RunStatus",
    "build_execution_request",
]

logger = get_logger(__name__)


class RunStatus(str, Enum):
    """How a lint run ended."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class LintOutcome:
    """Diagnostics of one run together with how the run ended.

    Attributes:
        status: Run status. Only COMPLETED runs carry diagnostics.
        diagnostics: Records in the order the tool printed them.
        error: Failure message for FAILED runs.
    """

    status: RunStatus
    diagnostics: tuple[DiagnosticRecord, ...] = ()
    error: str | None = None


def build_execution_request(
    tool: ToolConfig | FormatterConfig,
    config: LintBridgeConfig,
    document_text: str,
    document_path: str,
    cancellation: CancellationSignal | None = None,
) -> ExecutionRequest:
    """Build the execution request for one run of a linter or formatter.

    Module tools run through the configured interpreter. In stdin mode the
    document text is sent on stdin; otherwise the document path is appended
    to the configured arguments.
    """
    command = config.python_path if tool.module_name else tool.command
    if tool.stdin_support:
        args: tuple[str, ...] = tuple(tool.args)
    else:
        args = (*tool.args, document_path)

    return ExecutionRequest(
        command=command or "",
        args=args,
        module_name=tool.module_name,
        cwd=config.working_directory,
        stdin=document_text if tool.stdin_support else None,
        cancellation=cancellation,
        timeout=tool.timeout_seconds,
    )


class LintRunCoordinator:
    """Execute one configured tool against documents and parse its output.

    The coordinator captures the configuration snapshot it is given and keeps
    no per-run state, so concurrent :meth:`lint` calls are independent.

    Attributes:
        tool_id: Identifier stamped on every diagnostic.

    Example:
        ```python
        config = load_config()
        coordinator = LintRunCoordinator("pylint", config.tools["pylint"], config)
        diagnostics = await coordinator.lint(text, "file:///src/app.py")
        ```
    """

    def __init__(
        self,
        tool_id: str,
        tool: ToolConfig,
        config: LintBridgeConfig,
        *,
        adapter: ExecutionAdapter | None = None,
        sink: ReportingSink | None = None,
    ) -> None:
        """Initialize the LintRunCoordinator.

        Args:
            tool_id: Identifier of the tool.
            tool: The tool's configuration.
            config: Root configuration (linting settings, interpreter, cwd).
            adapter: Execution adapter; a default one is created if omitted.
            sink: Receiver for execution metadata and raw output.

        Raises:
            PatternError: If the tool's output pattern is invalid.
        """
        self.tool_id = tool_id
        self._tool = tool
        self._config = config
        self._adapter = adapter or ExecutionAdapter()
        self._sink: ReportingSink = sink or LoggingReportingSink()
        self._matcher = PatternMatcher(tool.pattern)

    def is_enabled(self, document_uri: str) -> bool:
        return self._tool.is_enabled(uri_to_path(document_uri), self._config.linting)

    def build_request(
        self,
        document_text: str,
        document_path: str,
        cancellation: CancellationSignal | None = None,
    ) -> ExecutionRequest:
        return build_execution_request(
            self._tool, self._config, document_text, document_path, cancellation
        )

    async def lint(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None = None,
    ) -> list[DiagnosticRecord]:
        """Lint one document.

        Never raises: disabled documents, execution failures and cancelled
        runs all produce an empty list.

        Args:
            document_text: Current text of the document.
            document_uri: Document URI (``file://`` or a plain path).
            cancellation: Optional signal that abandons the run.

        Returns:
            Diagnostics in output order, at most max_number_of_problems.
        """
        outcome = await self.lint_with_status(document_text, document_uri, cancellation)
        return list(outcome.diagnostics)

    async def lint_with_status(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None = None,
    ) -> LintOutcome:
        """Lint one document and report how the run ended.

        Like :meth:`lint`, but distinguishes a cancelled or failed run from a
        run that found nothing.
        """
        try:
            return await self._lint(document_text, document_uri, cancellation)
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.exception("lint_failed_unexpectedly", tool_id=self.tool_id)
            self._report(self._sink.report_failure, self.tool_id, str(e))
            return LintOutcome(status=RunStatus.FAILED, error=str(e))

    async def _lint(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None,
    ) -> LintOutcome:
        document_path = uri_to_path(document_uri)
        log = logger.bind(tool_id=self.tool_id, document=document_path)

        if not self._tool.is_enabled(document_path, self._config.linting):
            log.debug("lint_skipped")
            return LintOutcome(status=RunStatus.SKIPPED)

        request = self.build_request(document_text, document_path, cancellation)
        self._report(self._sink.report_execution, self.tool_id, request)

        try:
            output = await self._execute(request)
        except ExecutionCancelledError:
            log.debug("lint_cancelled")
            return LintOutcome(status=RunStatus.CANCELLED)
        except LintBridgeError as e:
            log.warning("lint_execution_failed", error=e.message)
            self._report(self._sink.report_failure, self.tool_id, e.message)
            return LintOutcome(status=RunStatus.FAILED, error=e.message)

        self._report(self._sink.report_output, self.tool_id, output.text)

        parser = LineParser(
            self._matcher,
            self.tool_id,
            column_offset=self._tool.column_offset,
            category_severity=self._tool.category_severity,
            max_number_of_problems=self._config.linting.max_number_of_problems,
            on_parse_failure=self._report_parse_failure,
        )
        diagnostics = parser.parse(output.text)
        log.debug("lint_completed", count=len(diagnostics))
        return LintOutcome(status=RunStatus.COMPLETED, diagnostics=tuple(diagnostics))

    async def _execute(self, request: ExecutionRequest) -> ToolOutput:
        if self._tool.stdin_support:
            return await self._adapter.run_stdin(request)
        return await self._adapter.run(request)

    def _report_parse_failure(self, line: str, error: DiagnosticParseError) -> None:
        self._report(self._sink.report_parse_failure, self.tool_id, line, error)

    def _report(self, method: Callable[..., None], *args: Any) -> None:
        """Call a sink method; a broken sink must not break the run."""
        try:
            method(*args)
        except Exception:  # noqa: BLE001
            logger.exception("reporting_sink_failed", tool_id=self.tool_id)
