"""Configuration-driven linter adapters."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lintbridge.linting.coordinator import LintOutcome, LintRunCoordinator

if TYPE_CHECKING:
    from lintbridge.config import LintBridgeConfig, ToolConfig
    from lintbridge.diagnostics import DiagnosticRecord
    from lintbridge.linting.reporting import ReportingSink
    from lintbridge.runners.cancellation import CancellationSignal
    from lintbridge.runners.command import ExecutionAdapter

__all__ = ["PatternLinter", "create_linters", "lint_document"]


class PatternLinter:
    """Linter whose command, arguments and output pattern all come from config.

    Satisfies the :class:`~lintbridge.linting.protocols.Linter` protocol by
    delegating to a composed LintRunCoordinator.
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
        self._engine = LintRunCoordinator(
            tool_id, tool, config, adapter=adapter, sink=sink
        )

    @property
    def tool_id(self) -> str:
        return self._engine.tool_id

    @property
    def engine(self) -> LintRunCoordinator:
        return self._engine

    async def run_linter(
        self,
        document_text: str,
        document_uri: str,
        cancellation: CancellationSignal | None = None,
    ) -> list[DiagnosticRecord]:
        return await self._engine.lint(document_text, document_uri, cancellation)


def create_linters(
    config: LintBridgeConfig,
    tool_ids: Iterable[str] | None = None,
    *,
    adapter: ExecutionAdapter | None = None,
    sink: ReportingSink | None = None,
) -> list[PatternLinter]:
    """Create one linter per configured tool.

    Args:
        config: Root configuration.
        tool_ids: Restrict to these tools; all configured tools if None.
        adapter: Shared execution adapter.
        sink: Shared reporting sink.

    Returns:
        Linters in configuration order.

    Raises:
        KeyError: If a requested tool id is not configured.
    """
    selected = list(config.tools) if tool_ids is None else list(tool_ids)
    return [
        PatternLinter(tool_id, config.tools[tool_id], config, adapter=adapter, sink=sink)
        for tool_id in selected
    ]


async def lint_document(
    linters: Iterable[PatternLinter],
    document_text: str,
    document_uri: str,
    cancellation: CancellationSignal | None = None,
) -> dict[str, LintOutcome]:
    """Run several linters concurrently on one document.

    Returns:
        Outcome per tool id.
    """
    linters = list(linters)
    outcomes = await asyncio.gather(
        *(
            linter.engine.lint_with_status(document_text, document_uri, cancellation)
            for linter in linters
        )
    )
    return {linter.tool_id: outcome for linter, outcome in zip(linters, outcomes)}
