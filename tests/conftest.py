from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from lintbridge.config import LintBridgeConfig, ToolConfig


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Log output goes to stderr at WARNING level so that it does not mix with
    CLI output captured on stdout.
    """
    from lintbridge.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory to prevent
    tests that use os.chdir() from affecting other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all LINTBRIDGE_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("LINTBRIDGE_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_config_env(
    temp_dir: Path, clean_env: None, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Run in an empty directory with an empty home so no real config leaks in."""
    home = temp_dir / "home"
    home.mkdir()
    workspace = temp_dir / "workspace"
    workspace.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workspace)
    return workspace


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample lintbridge.yaml content for testing."""
    return """
python_path: /usr/bin/python3

linting:
  max_number_of_problems: 50
  ignore_patterns:
    - "build/**"

tools:
  pylint:
    module_name: pylint
    args:
      - "--msg-template={line},{column},{category},{symbol}:{msg}"
      - "--reports=n"
    category_severity:
      convention: Hint
      error: Error
      fatal: Error
      refactor: Hint
      warning: Warning
  flake8:
    command: flake8
    column_offset: 1
    pattern: "(?<line>\\\\d+),(?<column>-?\\\\d+),(?<type>\\\\w+),(?<code>\\\\w+\\\\d+):(?<message>.*)"

formatters:
  black:
    module_name: black
    args: ["--diff", "--quiet"]

verbosity: info
"""


@pytest.fixture
def tool_config() -> ToolConfig:
    """A file-mode linter using the default output pattern."""
    return ToolConfig(command="fakelint")


@pytest.fixture
def lint_config(temp_dir: Path, tool_config: ToolConfig) -> LintBridgeConfig:
    """Root configuration with one tool and a real workspace directory."""
    return LintBridgeConfig.model_construct(
        python_path="/usr/bin/python3",
        workspace_root=temp_dir,
        tools={"fakelint": tool_config},
    )


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process backed by real StreamReaders.

    Must be created inside a running event loop. A hanging process keeps its
    streams open until terminate() or kill() is called.
    """

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        *,
        hang: bool = False,
    ) -> None:
        self.pid = 12345
        self.returncode: int | None = None
        self._final_returncode = returncode
        self._exited = asyncio.Event()

        self.stdout = asyncio.StreamReader()
        self.stderr = asyncio.StreamReader()
        if stdout:
            self.stdout.feed_data(stdout)
        if stderr:
            self.stderr.feed_data(stderr)
        if not hang:
            self.stdout.feed_eof()
            self.stderr.feed_eof()
            self._exited.set()

        self.stdin = MagicMock()
        self.stdin.drain = AsyncMock()
        self.stdin.is_closing.return_value = False

        self.terminate = MagicMock(side_effect=self._stop)
        self.kill = MagicMock(side_effect=self._stop)

    def _stop(self) -> None:
        self._final_returncode = -15
        self.stdout.feed_eof()
        self.stderr.feed_eof()
        self._exited.set()

    async def wait(self) -> int:
        await self._exited.wait()
        self.returncode = self._final_returncode
        return self.returncode


@pytest.fixture
def fake_process() -> type[FakeProcess]:
    """Factory for fake processes; instantiate inside async tests."""
    return FakeProcess
