from __future__ import annotations

from typing import Any

from lintbridge.exceptions.base import LintBridgeError


class ConfigError(LintBridgeError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when configuration cannot be loaded, parsed, or validated. This
    includes YAML parsing failures, Pydantic validation errors, and invalid
    environment variable values.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional dotted field path that caused the error
            (e.g., "tools.pylint.pattern").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError(
            "Invalid configuration value",
            field="linting.max_number_of_problems",
            value=0,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)


class PatternError(ConfigError):
    """Output pattern could not be compiled.

    Attributes:
        message: Human-readable error message.
        pattern: The pattern source that failed to compile.
    """

    def __init__(self, message: str, pattern: str | None = None) -> None:
        """Initialize the PatternError.

        Args:
            message: Human-readable error message.
            pattern: The offending pattern source.
        """
        self.pattern = pattern
        super().__init__(message, field="pattern", value=pattern)
