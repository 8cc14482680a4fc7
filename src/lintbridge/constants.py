"""lintbridge constants.

This module provides a single source of truth for defaults shared by the
execution engine, the output parsers and the configuration layer.
"""

from __future__ import annotations

# =============================================================================
# Output Parsing
# =============================================================================

#: Default output grammar: ``line,column,type,code:message``.
#: Negative columns are allowed (pylint reports -1 for some messages).
DEFAULT_PATTERN: str = (
    r"(?P<line>\d+),(?P<column>-?\d+),(?P<type>\w+),"
    r"(?P<code>\w+\d+):(?P<message>.*)\r?(?:\n|$)"
)

#: Default cap on diagnostics surfaced per run
DEFAULT_MAX_NUMBER_OF_PROBLEMS: int = 100

#: Upper bound accepted for the diagnostic cap
MAX_NUMBER_OF_PROBLEMS_LIMIT: int = 10000

# =============================================================================
# Process Execution
# =============================================================================

#: Encoding used when streaming document text to a tool's stdin
STDIN_ENCODING: str = "utf-8"

#: Seconds to wait after SIGTERM before sending SIGKILL
TERMINATION_GRACE_PERIOD: float = 2.0

#: Spawn attempts when the OS reports a transient fork failure
DEFAULT_SPAWN_ATTEMPTS: int = 3

#: Chunk size used when draining process output streams
READ_CHUNK_SIZE: int = 65536

# =============================================================================
# Configuration
# =============================================================================

#: Project configuration file name
PROJECT_CONFIG_FILENAME: str = "lintbridge.yaml"

#: Document globs that are never linted
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "**/site-packages/**/*.py",
    ".vscode/*.py",
)
