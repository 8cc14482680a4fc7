"""Tests for reporting sinks."""

from __future__ import annotations

from unittest.mock import patch

from lintbridge.exceptions import DiagnosticParseError
from lintbridge.linting import LoggingReportingSink, NullReportingSink, ReportingSink
from lintbridge.runners.models import ExecutionRequest


class TestReportingSinks:
    def test_sinks_satisfy_protocol(self) -> None:
        assert isinstance(LoggingReportingSink(), ReportingSink)
        assert isinstance(NullReportingSink(), ReportingSink)

    def test_logging_sink_emits_events(self) -> None:
        sink = LoggingReportingSink()
        request = ExecutionRequest(command="flake8", args=("app.py",))

        with patch("lintbridge.linting.reporting.logger") as logger:
            sink.report_execution("flake8", request)
            sink.report_output("flake8", "1,1,E,E1:x")
            sink.report_failure("flake8", "boom")
            sink.report_parse_failure(
                "flake8", "x,y", DiagnosticParseError("bad line", line="x,y")
            )

        logger.info.assert_called_once_with(
            "tool_run",
            tool_id="flake8",
            command="flake8",
            module_name=None,
            args=["app.py"],
            argv=["flake8", "app.py"],
            cwd=None,
            stdin=False,
        )
        logger.warning.assert_called_once_with(
            "tool_run_failed", tool_id="flake8", error="boom"
        )
        assert [c.args[0] for c in logger.debug.call_args_list] == [
            "tool_output",
            "tool_line_skipped",
        ]

    def test_null_sink_accepts_everything(self) -> None:
        sink = NullReportingSink()
        request = ExecutionRequest(command="flake8")

        sink.report_execution("flake8", request)
        sink.report_output("flake8", "")
        sink.report_failure("flake8", "boom")
        sink.report_parse_failure("flake8", "", DiagnosticParseError("bad"))
