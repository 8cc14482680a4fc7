"""Cooperative cancellation signal for tool runs."""

from __future__ import annotations

import asyncio

__all__ = ["CancellationSignal"]


class CancellationSignal:
    """One-shot flag a host sets to abandon an in-flight run.

    The execution adapter races the tool process against :meth:`wait`; when
    the signal fires it terminates the process and releases its streams.

    Example:
        ```python
        signal = CancellationSignal()
        task = asyncio.create_task(coordinator.lint(text, uri, signal))
        signal.cancel()  # the user typed again; results are stale
        assert await task == []
        ```
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        """True once :meth:`cancel` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    async def wait(self) -> None:
        """Block until cancellation is requested."""
        await self._event.wait()
