from __future__ import annotations


class LintBridgeError(Exception):
    """Base exception class for all lintbridge-specific errors.

    This is the root of the lintbridge exception hierarchy. Catching it at the
    CLI or host boundary handles every failure raised by this package while
    letting system exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            config = load_config(path)
        except LintBridgeError as e:
            logger.error("config_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the LintBridgeError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
