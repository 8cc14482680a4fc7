"""Tests for the ExecutionAdapter class.

Processes are replaced by FakeProcess doubles patched in through
asyncio.create_subprocess_exec; no real tool is spawned.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from lintbridge.exceptions import (
    CommandNotFoundError,
    CommandTimeoutError,
    ExecutionCancelledError,
    ExecutionError,
    WorkingDirectoryError,
)
from lintbridge.runners.cancellation import CancellationSignal
from lintbridge.runners.command import ExecutionAdapter
from lintbridge.runners.models import ExecutionRequest, ToolOutput


class TestFileMode:
    """Tests for ExecutionAdapter.run."""

    @pytest.mark.asyncio
    async def test_returns_stdout(self, fake_process) -> None:
        """The captured stdout is returned tagged as stdout."""
        process = fake_process(stdout=b"1,0,error,E1:boom\n")
        spawn = AsyncMock(return_value=process)

        with patch("asyncio.create_subprocess_exec", spawn):
            output = await ExecutionAdapter().run(
                ExecutionRequest(command="fakelint", args=("app.py",))
            )

        assert output == ToolOutput(source="stdout", text="1,0,error,E1:boom\n")

    @pytest.mark.asyncio
    async def test_module_argv(self, fake_process) -> None:
        """Module runs are spawned as <interpreter> -m <module> args..."""
        spawn = AsyncMock(return_value=fake_process())

        with patch("asyncio.create_subprocess_exec", spawn):
            await ExecutionAdapter().run(
                ExecutionRequest(
                    command="/usr/bin/python3",
                    module_name="pylint",
                    args=("--reports=n", "app.py"),
                )
            )

        assert spawn.call_args.args == (
            "/usr/bin/python3",
            "-m",
            "pylint",
            "--reports=n",
            "app.py",
        )
        assert spawn.call_args.kwargs["stdin"] == asyncio.subprocess.DEVNULL

    @pytest.mark.asyncio
    async def test_stderr_is_ignored(self, fake_process) -> None:
        """Error output does not fail a file-mode run."""
        process = fake_process(stdout=b"out", stderr=b"No config file found")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            output = await ExecutionAdapter().run(ExecutionRequest(command="fakelint"))

        assert output.text == "out"

    @pytest.mark.asyncio
    async def test_nonzero_exit_still_returns_output(self, fake_process) -> None:
        """Linters exit non-zero when they find problems; output still counts."""
        process = fake_process(stdout=b"1,0,error,E1:x", returncode=2)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            output = await ExecutionAdapter().run(ExecutionRequest(command="fakelint"))

        assert output.text == "1,0,error,E1:x"

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_replaced(self, fake_process) -> None:
        process = fake_process(stdout=b"bad \xff byte")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            output = await ExecutionAdapter().run(ExecutionRequest(command="fakelint"))

        assert output.text == "bad � byte"


class TestStdinMode:
    """Tests for ExecutionAdapter.run_stdin."""

    @pytest.mark.asyncio
    async def test_writes_document_and_closes_stdin(self, fake_process) -> None:
        """The document is written as UTF-8 and stdin is closed."""
        process = fake_process(stdout=b"2,4,warning,W1:unused\n")
        spawn = AsyncMock(return_value=process)

        with patch("asyncio.create_subprocess_exec", spawn):
            output = await ExecutionAdapter().run_stdin(
                ExecutionRequest(command="fakelint", args=("-",), stdin="x = 'é'\n")
            )

        process.stdin.write.assert_called_once_with("x = 'é'\n".encode())
        process.stdin.close.assert_called()
        assert spawn.call_args.kwargs["stdin"] == asyncio.subprocess.PIPE
        assert output.text == "2,4,warning,W1:unused\n"

    @pytest.mark.asyncio
    async def test_stderr_first_is_failure(self, fake_process) -> None:
        """A tool that speaks first on stderr fails the run."""
        process = fake_process(stderr=b"fatal: cannot parse")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ExecutionError) as exc_info:
                await ExecutionAdapter().run_stdin(
                    ExecutionRequest(command="fakelint", stdin="text")
                )

        assert exc_info.value.stderr == "fatal: cannot parse"
        assert "fatal: cannot parse" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_stdout_first_then_stderr_succeeds(self, fake_process) -> None:
        """Only the first output decides; later stderr is tolerated."""
        process = fake_process(stdout=b"1,1,error,E2:x", stderr=b"warning: slow")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            output = await ExecutionAdapter().run_stdin(
                ExecutionRequest(command="fakelint", stdin="text")
            )

        assert output.text == "1,1,error,E2:x"

    @pytest.mark.asyncio
    async def test_broken_pipe_is_tolerated(self, fake_process) -> None:
        """A tool that exits without reading stdin still has its output used."""
        process = fake_process(stdout=b"done")
        process.stdin.drain = AsyncMock(side_effect=BrokenPipeError())

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            output = await ExecutionAdapter().run_stdin(
                ExecutionRequest(command="fakelint", stdin="text")
            )

        assert output.text == "done"
        process.stdin.close.assert_called()


class TestSpawnFailures:
    """Tests for process start failures."""

    @pytest.mark.asyncio
    async def test_missing_executable(self) -> None:
        spawn = AsyncMock(side_effect=FileNotFoundError())

        with patch("asyncio.create_subprocess_exec", spawn):
            with pytest.raises(CommandNotFoundError) as exc_info:
                await ExecutionAdapter().run(ExecutionRequest(command="nolint"))

        assert exc_info.value.executable == "nolint"

    @pytest.mark.asyncio
    async def test_permission_denied(self) -> None:
        spawn = AsyncMock(side_effect=PermissionError())

        with patch("asyncio.create_subprocess_exec", spawn):
            with pytest.raises(ExecutionError, match="Permission denied"):
                await ExecutionAdapter().run(ExecutionRequest(command="./lint.sh"))

    @pytest.mark.asyncio
    async def test_transient_fork_failure_is_retried(self, fake_process) -> None:
        """BlockingIOError from fork is retried before giving up."""
        process = fake_process(stdout=b"ok")
        spawn = AsyncMock(side_effect=[BlockingIOError(), process])

        with patch("asyncio.create_subprocess_exec", spawn):
            output = await ExecutionAdapter(spawn_retry_delay=0.01).run(
                ExecutionRequest(command="fakelint")
            )

        assert output.text == "ok"
        assert spawn.call_count == 2

    @pytest.mark.asyncio
    async def test_missing_working_directory(self, temp_dir: Path) -> None:
        """The working directory is validated before spawning."""
        spawn = AsyncMock()

        with patch("asyncio.create_subprocess_exec", spawn):
            with pytest.raises(WorkingDirectoryError):
                await ExecutionAdapter().run(
                    ExecutionRequest(command="fakelint", cwd=temp_dir / "missing")
                )

        spawn.assert_not_called()


class TestCancellationAndTimeout:
    """Tests for abandoning in-flight runs."""

    @pytest.mark.asyncio
    async def test_cancel_before_start_never_spawns(self) -> None:
        signal = CancellationSignal()
        signal.cancel()
        spawn = AsyncMock()

        with patch("asyncio.create_subprocess_exec", spawn):
            with pytest.raises(ExecutionCancelledError):
                await ExecutionAdapter().run(
                    ExecutionRequest(command="fakelint", cancellation=signal)
                )

        spawn.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancel_while_running_terminates(self, fake_process) -> None:
        """Cancelling terminates the process and releases its streams."""
        process = fake_process(hang=True)
        signal = CancellationSignal()
        asyncio.get_running_loop().call_later(0.05, signal.cancel)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ExecutionCancelledError):
                await ExecutionAdapter().run(
                    ExecutionRequest(command="fakelint", cancellation=signal)
                )

        process.terminate.assert_called_once()
        assert process.returncode is not None

    @pytest.mark.asyncio
    async def test_timeout_terminates(self, fake_process) -> None:
        process = fake_process(hang=True)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(CommandTimeoutError) as exc_info:
                await ExecutionAdapter().run(
                    ExecutionRequest(command="fakelint", timeout=0.05)
                )

        assert exc_info.value.timeout_seconds == 0.05
        process.terminate.assert_called_once()

    @pytest.mark.asyncio
    async def test_adapter_default_timeout(self, fake_process) -> None:
        """The adapter timeout applies when the request sets none."""
        process = fake_process(hang=True)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(CommandTimeoutError):
                await ExecutionAdapter(timeout=0.05).run(
                    ExecutionRequest(command="fakelint")
                )

    @pytest.mark.asyncio
    async def test_task_cancellation_releases_process(self, fake_process) -> None:
        """Cancelling the awaiting task still terminates the tool."""
        process = fake_process(hang=True)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            task = asyncio.create_task(
                ExecutionAdapter().run(ExecutionRequest(command="fakelint"))
            )
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.terminate.assert_called_once()


class TestUnreadStdin:
    """A stdin-mode tool that never reads its input must still be released."""

    @staticmethod
    def block_stdin(process) -> None:
        async def full_pipe() -> None:
            await asyncio.Event().wait()

        process.stdin.drain = AsyncMock(side_effect=full_pipe)

    @pytest.mark.asyncio
    async def test_timeout_fires(self, fake_process) -> None:
        process = fake_process(hang=True)
        self.block_stdin(process)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(CommandTimeoutError):
                await asyncio.wait_for(
                    ExecutionAdapter().run_stdin(
                        ExecutionRequest(
                            command="fakelint", stdin="x" * 2_000_000, timeout=0.05
                        )
                    ),
                    timeout=5,
                )

        process.terminate.assert_called_once()
        process.stdin.close.assert_called()

    @pytest.mark.asyncio
    async def test_cancellation_fires(self, fake_process) -> None:
        process = fake_process(hang=True)
        self.block_stdin(process)
        signal = CancellationSignal()
        asyncio.get_running_loop().call_later(0.05, signal.cancel)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ExecutionCancelledError):
                await asyncio.wait_for(
                    ExecutionAdapter().run_stdin(
                        ExecutionRequest(
                            command="fakelint",
                            stdin="x" * 2_000_000,
                            cancellation=signal,
                        )
                    ),
                    timeout=5,
                )

        process.terminate.assert_called_once()
        process.stdin.close.assert_called()
