from __future__ import annotations

from lintbridge.exceptions.base import LintBridgeError


class DiagnosticParseError(LintBridgeError):
    """A tool output line matched the pattern but could not be converted.

    Raised for non-numeric line numbers or a record that fails construction.
    The line parser logs and skips the line; the run continues.

    Attributes:
        message: Human-readable error message.
        line: The raw output line that failed to convert.
    """

    def __init__(self, message: str, line: str | None = None) -> None:
        """Initialize the DiagnosticParseError.

        Args:
            message: Human-readable error message.
            line: The raw output line.
        """
        self.line = line
        super().__init__(message)
