"""Data models for tool execution.

This module defines immutable, frozen dataclasses for representing:
- What to execute (ExecutionRequest)
- What the tool printed (ToolOutput)

All models use frozen dataclasses with slots for memory efficiency and immutability.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from lintbridge.runners.cancellation import CancellationSignal

__all__ = [
    "ExecutionRequest",
    "OutputSource",
    "ToolOutput",
]

OutputSource = Literal["stdout", "stderr"]


@dataclass(frozen=True, slots=True)
class ExecutionRequest:
    """Everything needed to run one tool once.

    Built fresh for every run and discarded afterwards.

    Attributes:
        command: Executable path. For module runs this is the interpreter.
        args: Ordered tool arguments.
        module_name: When set, the tool runs as ``command -m module_name args...``.
        cwd: Working directory for the process (None inherits the caller's).
        stdin: Text streamed to the tool's stdin in stdin mode.
        cancellation: Signal observed while the process runs.
        timeout: Seconds before the process is terminated (None for no limit).

    Raises:
        ValueError: If command is empty.

    Example:
        >>> request = ExecutionRequest(
        ...     command="/usr/bin/python3",
        ...     args=("--output-format=text", "app.py"),
        ...     module_name="pylint",
        ... )
        >>> request.argv
        ['/usr/bin/python3', '-m', 'pylint', '--output-format=text', 'app.py']
    """

    command: str
    args: tuple[str, ...] = ()
    module_name: str | None = None
    cwd: Path | None = None
    stdin: str | None = None
    cancellation: CancellationSignal | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.command:
            raise ValueError("Command cannot be empty")

    @property
    def argv(self) -> list[str]:
        """Full argument vector handed to the OS."""
        if self.module_name:
            return [self.command, "-m", self.module_name, *self.args]
        return [self.command, *self.args]

    @property
    def is_cancelled(self) -> bool:
        return self.cancellation is not None and self.cancellation.is_cancelled

    def describe(self) -> dict[str, Any]:
        """Execution metadata suitable for logs and reporting sinks."""
        return {
            "command": self.command,
            "module_name": self.module_name,
            "args": list(self.args),
            "argv": self.argv,
            "cwd": str(self.cwd) if self.cwd is not None else None,
            "stdin": self.stdin is not None,
        }


@dataclass(frozen=True, slots=True)
class ToolOutput:
    """Text captured from one tool execution.

    Attributes:
        source: Stream the text was captured from.
        text: Decoded output text.
    """

    source: OutputSource
    text: str
