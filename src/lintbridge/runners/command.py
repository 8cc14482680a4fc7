"""Execution adapter for running external tools as async subprocesses.

This module provides the ExecutionAdapter class, which spawns a tool either
with the target file on its command line (file mode) or with the document
text streamed over stdin (stdin mode), drains stdout and stderr concurrently,
and releases the process on every exit path including cancellation and
timeout.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lintbridge.constants import (
    DEFAULT_SPAWN_ATTEMPTS,
    READ_CHUNK_SIZE,
    STDIN_ENCODING,
    TERMINATION_GRACE_PERIOD,
)
from lintbridge.exceptions import (
    CommandNotFoundError,
    CommandTimeoutError,
    ExecutionCancelledError,
    ExecutionError,
    WorkingDirectoryError,
)
from lintbridge.logging import get_logger
from lintbridge.runners.models import ExecutionRequest, OutputSource, ToolOutput

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["ExecutionAdapter"]

logger = get_logger(__name__)


@dataclass(slots=True)
class _StreamCapture:
    """Bytes collected from both output streams of one process."""

    stdout: list[bytes] = field(default_factory=list)
    stderr: list[bytes] = field(default_factory=list)
    first_source: OutputSource | None = None

    async def drain(
        self, stream: asyncio.StreamReader | None, source: OutputSource
    ) -> None:
        if stream is None:
            return
        chunks = self.stdout if source == "stdout" else self.stderr
        while True:
            chunk = await stream.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            if self.first_source is None:
                self.first_source = source
            chunks.append(chunk)

    def text(self, source: OutputSource) -> str:
        chunks = self.stdout if source == "stdout" else self.stderr
        return b"".join(chunks).decode("utf-8", errors="replace")


class ExecutionAdapter:
    """Spawn external tools and capture their output.

    Provides async execution with:
    - File mode (:meth:`run`) and stdin-streamed mode (:meth:`run_stdin`)
    - Concurrent draining of stdout and stderr
    - Cancellation through the request's CancellationSignal
    - Timeout handling with graceful termination (SIGTERM + grace period + SIGKILL)
    - Retry of transient spawn failures

    The adapter holds no per-run state, so one instance can serve any number
    of concurrent runs.

    Example:
        ```python
        adapter = ExecutionAdapter()
        request = ExecutionRequest(command="flake8", args=("app.py",))
        output = await adapter.run(request)
        print(output.text)
        ```
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
        max_spawn_attempts: int = DEFAULT_SPAWN_ATTEMPTS,
        spawn_retry_delay: float = 0.1,
    ) -> None:
        """Initialize the ExecutionAdapter.

        Args:
            timeout: Default timeout in seconds, used when a request sets none.
            env: Additional environment variables merged over os.environ.
            max_spawn_attempts: Attempts made when the OS refuses to fork.
            spawn_retry_delay: Initial backoff between spawn attempts.
        """
        self._timeout = timeout
        self._extra_env = env or {}
        self._max_spawn_attempts = max(1, max_spawn_attempts)
        self._spawn_retry_delay = spawn_retry_delay

    async def run(self, request: ExecutionRequest) -> ToolOutput:
        """Run a tool that reads its target from the command line.

        The error stream is drained but otherwise ignored; stdout is returned
        whatever the exit code.

        Args:
            request: What to execute.

        Returns:
            ToolOutput tagged ``stdout``.

        Raises:
            ExecutionError: If the process cannot be started or times out.
            ExecutionCancelledError: If the request was cancelled.
            WorkingDirectoryError: If the working directory does not exist.
        """
        capture, returncode = await self._execute(request, payload=None)
        stderr = capture.text("stderr")
        if stderr:
            logger.debug(
                "tool_stderr_ignored",
                command=request.argv[0],
                returncode=returncode,
                stderr=stderr[:500],
            )
        return ToolOutput(source="stdout", text=capture.text("stdout"))

    async def run_stdin(self, request: ExecutionRequest) -> ToolOutput:
        """Run a tool that reads the document from stdin.

        The document text is written using UTF-8 and stdin is closed. If the
        first output the tool produces arrives on stderr, the run is treated
        as a failure.

        Args:
            request: What to execute; ``request.stdin`` holds the document.

        Returns:
            ToolOutput tagged ``stdout`` holding everything the tool printed there.

        Raises:
            ExecutionError: If the process cannot be started, times out, or
                speaks first on stderr.
            ExecutionCancelledError: If the request was cancelled.
            WorkingDirectoryError: If the working directory does not exist.
        """
        capture, _ = await self._execute(request, payload=request.stdin or "")
        if capture.first_source == "stderr":
            stderr = capture.text("stderr")
            raise ExecutionError(stderr, command=request.argv, stderr=stderr)
        return ToolOutput(source="stdout", text=capture.text("stdout"))

    def _validate_cwd(self, cwd: Path | None) -> None:
        """Validate working directory exists.

        Raises:
            WorkingDirectoryError: If directory does not exist.
        """
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._extra_env)
        return env

    def _resolve_timeout(self, request: ExecutionRequest) -> float | None:
        timeout = request.timeout if request.timeout is not None else self._timeout
        if timeout is not None and timeout <= 0:
            return None
        return timeout

    async def _spawn(
        self,
        argv: Sequence[str],
        cwd: Path | None,
        *,
        pipe_stdin: bool,
    ) -> asyncio.subprocess.Process:
        """Start the process, retrying transient fork failures.

        Raises:
            CommandNotFoundError: If the executable does not exist.
            ExecutionError: For any other failure to start the process.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_spawn_attempts),
                wait=wait_exponential(
                    multiplier=self._spawn_retry_delay,
                    min=self._spawn_retry_delay,
                    max=2,
                ),
                retry=retry_if_exception_type(BlockingIOError),
                reraise=True,
            ):
                with attempt:
                    return await asyncio.create_subprocess_exec(
                        *argv,
                        stdin=(
                            asyncio.subprocess.PIPE
                            if pipe_stdin
                            else asyncio.subprocess.DEVNULL
                        ),
                        stdout=asyncio.subprocess.PIPE,
                        stderr=asyncio.subprocess.PIPE,
                        cwd=cwd,
                        env=self._build_env(),
                    )
        except FileNotFoundError as e:
            raise CommandNotFoundError(
                f"Command not found: {argv[0]}",
                executable=argv[0],
                command=argv,
            ) from e
        except PermissionError as e:
            raise ExecutionError(f"Permission denied: {argv[0]}", command=argv) from e
        except OSError as e:
            raise ExecutionError(
                f"Failed to start {argv[0]}: {e}", command=argv
            ) from e

        raise RuntimeError("Retry exhausted with no process")

    async def _feed_stdin(
        self, process: asyncio.subprocess.Process, payload: str
    ) -> None:
        stdin = process.stdin
        if stdin is None:
            return
        try:
            stdin.write(payload.encode(STDIN_ENCODING))
            await stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # Tool exited without reading its input; its output still counts.
            logger.debug("stdin_closed_early", pid=process.pid)
        finally:
            stdin.close()

    async def _execute(
        self, request: ExecutionRequest, *, payload: str | None
    ) -> tuple[_StreamCapture, int]:
        """Run the process to completion, cancellation, or timeout.

        Returns:
            The captured streams and the exit code.
        """
        argv = request.argv
        self._validate_cwd(request.cwd)
        if request.is_cancelled:
            raise ExecutionCancelledError("Execution cancelled", command=argv)

        timeout = self._resolve_timeout(request)
        process = await self._spawn(argv, request.cwd, pipe_stdin=payload is not None)
        logger.debug("tool_spawned", command=argv[0], pid=process.pid)

        capture = _StreamCapture()
        readers = [
            asyncio.create_task(capture.drain(process.stdout, "stdout")),
            asyncio.create_task(capture.drain(process.stderr, "stderr")),
        ]
        cancel_waiter: asyncio.Task[None] | None = None
        completion: asyncio.Task[int] | None = None

        try:
            # stdin is fed inside the raced task; a tool that never reads it
            # still times out or gets cancelled.
            completion = asyncio.create_task(
                self._wait_for_exit(process, readers, payload)
            )
            waiters: set[asyncio.Task[Any]] = {completion}
            if request.cancellation is not None:
                cancel_waiter = asyncio.create_task(request.cancellation.wait())
                waiters.add(cancel_waiter)

            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )

            if request.is_cancelled:
                logger.debug("tool_cancelled", command=argv[0], pid=process.pid)
                raise ExecutionCancelledError("Execution cancelled", command=argv)
            if completion not in done:
                raise CommandTimeoutError(
                    f"Command timed out after {timeout:.1f}s: {argv[0]}",
                    timeout_seconds=timeout,
                    command=argv,
                )
            return capture, completion.result()
        finally:
            pending = [t for t in (cancel_waiter, completion) if t is not None]
            for task in pending:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            await self._release(process, readers)

    async def _wait_for_exit(
        self,
        process: asyncio.subprocess.Process,
        readers: list[asyncio.Task[None]],
        payload: str | None = None,
    ) -> int:
        if payload is not None:
            await self._feed_stdin(process, payload)
        await asyncio.gather(*readers)
        return await process.wait()

    async def _release(
        self,
        process: asyncio.subprocess.Process,
        readers: list[asyncio.Task[None]],
    ) -> None:
        """Terminate the process if needed and close both ends of its pipes."""
        if process.returncode is None:
            await self._terminate(process)

        for task in readers:
            if not task.done():
                task.cancel()
        await asyncio.gather(*readers, return_exceptions=True)

        if process.stdin is not None and not process.stdin.is_closing():
            process.stdin.close()

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        # Graceful termination: SIGTERM first
        with contextlib.suppress(ProcessLookupError):
            process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=TERMINATION_GRACE_PERIOD)
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
