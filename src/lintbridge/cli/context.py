"""CLI context and utilities for lintbridge.

This module provides the exit codes, the typed context shared by commands,
and the bridge from Click's synchronous interface to the async engine.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

from lintbridge.config import LintBridgeConfig

__all__ = [
    "ExitCode",
    "CLIContext",
    "async_command",
]


class ExitCode(IntEnum):
    """Exit codes for the lintbridge CLI.

    - 0 when the run succeeded and found no errors
    - 1 when an error diagnostic was found or the command failed
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared by all commands.

    Attributes:
        config: Loaded configuration.
        config_path: Path given with --config, if any.
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: LintBridgeConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async Click commands with asyncio.run().

    Example:
        >>> @cli.command()
        >>> @click.pass_context
        >>> @async_command
        >>> async def lint(ctx: click.Context, path: str) -> None:
        >>>     await lint_document(linters, text, path)
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]
