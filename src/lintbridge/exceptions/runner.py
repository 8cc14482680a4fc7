from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lintbridge.exceptions.base import LintBridgeError


class RunnerError(LintBridgeError):
    """Base exception for runner failures.

    Attributes:
        message: Human-readable error message.
    """

    pass


class WorkingDirectoryError(RunnerError):
    """Working directory does not exist or is not accessible.

    Attributes:
        message: Human-readable error message.
        path: The path that was not found.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize the WorkingDirectoryError.

        Args:
            message: Human-readable error message.
            path: The path that was not found.
        """
        self.path = path
        super().__init__(message)


class ExecutionError(RunnerError):
    """External tool could not be executed or reported a fatal error.

    Attributes:
        message: Human-readable error message.
        command: The argv that was executed, if known.
        stderr: Text captured from the tool's error stream, if any.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialize the ExecutionError.

        Args:
            message: Human-readable error message.
            command: The argv that was executed.
            stderr: Captured error stream text.
        """
        self.command = list(command) if command is not None else None
        self.stderr = stderr
        super().__init__(message)


class CommandNotFoundError(ExecutionError):
    """Executable not found in PATH.

    Attributes:
        message: Human-readable error message.
        executable: The command that was not found.
    """

    def __init__(
        self,
        message: str,
        executable: str | None = None,
        command: Sequence[str] | None = None,
    ) -> None:
        """Initialize the CommandNotFoundError.

        Args:
            message: Human-readable error message.
            executable: The command that was not found.
            command: The full argv that was attempted.
        """
        self.executable = executable
        super().__init__(message, command=command)


class CommandTimeoutError(ExecutionError):
    """Command execution exceeded timeout.

    Attributes:
        message: Human-readable error message.
        timeout_seconds: The timeout that was exceeded.
    """

    def __init__(
        self,
        message: str,
        timeout_seconds: float | None = None,
        command: Sequence[str] | None = None,
    ) -> None:
        """Initialize the CommandTimeoutError.

        Args:
            message: Human-readable error message.
            timeout_seconds: The timeout value that was exceeded.
            command: The command that timed out.
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(message, command=command)


class ExecutionCancelledError(ExecutionError):
    """Execution was cancelled through its cancellation signal.

    The process and its streams have already been released when this is
    raised.
    """

    pass
