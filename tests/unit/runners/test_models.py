"""Tests for runner data models."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from lintbridge.runners.cancellation import CancellationSignal
from lintbridge.runners.models import ExecutionRequest, ToolOutput


class TestExecutionRequest:
    """Tests for ExecutionRequest."""

    def test_argv_for_command(self) -> None:
        request = ExecutionRequest(command="flake8", args=("--max-line-length=100", "a.py"))

        assert request.argv == ["flake8", "--max-line-length=100", "a.py"]

    def test_argv_for_module(self) -> None:
        request = ExecutionRequest(
            command="/usr/bin/python3", module_name="pylint", args=("a.py",)
        )

        assert request.argv == ["/usr/bin/python3", "-m", "pylint", "a.py"]

    def test_empty_command_rejected(self) -> None:
        with pytest.raises(ValueError, match="Command cannot be empty"):
            ExecutionRequest(command="")

    def test_is_frozen(self) -> None:
        request = ExecutionRequest(command="flake8")

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.command = "pylint"  # type: ignore[misc]

    def test_is_cancelled(self) -> None:
        signal = CancellationSignal()
        request = ExecutionRequest(command="flake8", cancellation=signal)

        assert request.is_cancelled is False
        signal.cancel()
        assert request.is_cancelled is True
        assert ExecutionRequest(command="flake8").is_cancelled is False

    def test_describe(self) -> None:
        request = ExecutionRequest(
            command="/usr/bin/python3",
            module_name="pylint",
            args=("-",),
            cwd=Path("/work"),
            stdin="x = 1\n",
        )

        assert request.describe() == {
            "command": "/usr/bin/python3",
            "module_name": "pylint",
            "args": ["-"],
            "argv": ["/usr/bin/python3", "-m", "pylint", "-"],
            "cwd": "/work",
            "stdin": True,
        }


class TestToolOutput:
    def test_fields(self) -> None:
        output = ToolOutput(source="stdout", text="1,0,error,E1:x")

        assert output.source == "stdout"
        assert output.text == "1,0,error,E1:x"
