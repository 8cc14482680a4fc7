"""Per-run cap on the number of diagnostics surfaced."""

from __future__ import annotations

from lintbridge.constants import DEFAULT_MAX_NUMBER_OF_PROBLEMS

__all__ = ["MessageGovernor"]


class MessageGovernor:
    """Count accepted diagnostics and signal when parsing must stop.

    The governor is consulted after each record is produced. Once the count
    reaches the maximum it returns False and the parser stops reading lines,
    so runaway tool output costs at most ``max_count`` records of work.

    Attributes:
        max_count: Maximum number of records accepted in one run.
        count: Records accepted so far.

    Example:
        >>> governor = MessageGovernor(2)
        >>> governor.accept()
        True
        >>> governor.accept()
        False
    """

    def __init__(self, max_count: int = DEFAULT_MAX_NUMBER_OF_PROBLEMS) -> None:
        if max_count < 1:
            raise ValueError(f"max_count must be at least 1, got {max_count}")
        self.max_count = max_count
        self.count = 0

    @property
    def exhausted(self) -> bool:
        """True once the cap has been reached."""
        return self.count >= self.max_count

    def accept(self) -> bool:
        """Record one accepted diagnostic.

        Returns:
            True if parsing may continue, False if the cap was reached.
        """
        self.count += 1
        return not self.exhausted
