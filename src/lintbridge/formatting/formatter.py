"""Configuration-driven formatter adapters.

Formatters share the execution path of linters but return the tool's stdout
unparsed, typically formatted source or a diff.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lintbridge.exceptions import ExecutionCancelledError, LintBridgeError
from lintbridge.linting.coordinator import RunStatus, build_execution_request
from lintbridge.linting.reporting import LoggingReportingSink, ReportingSink
from lintbridge.logging import get_logger
from lintbridge.runners.command import ExecutionAdapter
from lintbridge.utils.uri import uri_to_path

if TYPE_CHECKING:
    from lintbridge.config import FormatterConfig, LintBridgeConfig
    from lintbridge.runners.cancellation import CancellationSignal
    from lintbridge.runners.models import ExecutionRequest

__all__ = ["FormatOutcome", "ToolFormatter"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FormatOutcome:
    """Result of one formatter run.

    Attributes:
        status: How the run ended.
        output: Formatter stdout for COMPLETED runs.
        error: Failure message for FAILED runs.
    """

    status: RunStatus
    output: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status == RunStatus.COMPLETED


class ToolFormatter:
    """Formatter whose command and arguments come from config.

    Satisfies the :class:`~lintbridge.linting.protocols.Formatter` protocol.

    Example:
        ```python
        formatter = ToolFormatter("black", config.formatters["black"], config)
        outcome = await formatter.run_formatter(text, "file:///src/app.py")
        if outcome.success:
            print(outcome.output)
        ```
    """

    def __init__(
        self,
        tool_id: str,
        formatter: FormatterConfig,
        config: LintBridgeConfig,
        *,
        adapter: ExecutionAdapter | None = None,
        sink: ReportingSink | None = None,
    ) -> None:
        self._tool_id = tool_id
        self._formatter = formatter
        self._config = config
        self._adapter = adapter or ExecutionAdapter()
        self._sink: ReportingSink = sink or LoggingReportingSink()

    @property
    def tool_id(self) -> str:
        return self._tool_id

    async def run_formatter(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None = None,
    ) -> FormatOutcome:
        """Format one document.

        Never raises for tool failures; they are reported in the outcome.

        Args:
            document_text: Current text of the document.
            document_uri: Document URI (``file://`` or a plain path).
            cancellation: Optional signal that abandons the run.

        Returns:
            FormatOutcome carrying the formatter's stdout on success.
        """
        document_path = uri_to_path(document_uri)
        log = logger.bind(tool_id=self._tool_id, document=document_path)

        if not self._formatter.enabled:
            log.debug("format_skipped")
            return FormatOutcome(status=RunStatus.SKIPPED)

        try:
            request = build_execution_request(
                self._formatter, self._config, document_text, document_path, cancellation
            )
            self._report_execution(request)
            if self._formatter.stdin_support:
                output = await self._adapter.run_stdin(request)
            else:
                output = await self._adapter.run(request)
        except ExecutionCancelledError:
            log.debug("format_cancelled")
            return FormatOutcome(status=RunStatus.CANCELLED)
        except LintBridgeError as e:
            log.warning("format_execution_failed", error=e.message)
            return self._failed(e.message)
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            log.exception("format_failed_unexpectedly")
            return self._failed(str(e))

        log.debug("format_completed", size=len(output.text))
        return FormatOutcome(status=RunStatus.COMPLETED, output=output.text)

    def _report_execution(self, request: ExecutionRequest) -> None:
        try:
            self._sink.report_execution(self._tool_id, request)
        except Exception:  # noqa: BLE001
            logger.exception("reporting_sink_failed", tool_id=self._tool_id)

    def _failed(self, message: str) -> FormatOutcome:
        try:
            self._sink.report_failure(self._tool_id, message)
        except Exception:  # noqa: BLE001
            logger.exception("reporting_sink_failed", tool_id=self._tool_id)
        return FormatOutcome(status=RunStatus.FAILED, error=message)
