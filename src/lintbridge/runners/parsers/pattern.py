"""Named-capture pattern matching for single lines of tool output."""

from __future__ import annotations

import re
from dataclasses import dataclass

from lintbridge.constants import DEFAULT_PATTERN
from lintbridge.exceptions import PatternError

__all__ = ["PatternMatcher", "RawMatch", "normalize_pattern"]

REQUIRED_GROUPS: tuple[str, ...] = ("line", "message")

# ``(?<name>`` but not the lookbehind forms ``(?<=`` / ``(?<!``
_JS_NAMED_GROUP = re.compile(r"\(\?<(?=[A-Za-z_])")


def normalize_pattern(source: str) -> str:
    """Rewrite JavaScript-style named groups to Python syntax.

    Tool patterns are often shared with editor extensions that use
    ``(?<line>\\d+)``; Python spells the same group ``(?P<line>\\d+)``.

    Example:
        >>> normalize_pattern(r"(?<line>\\d+):(?<message>.*)")
        '(?P<line>\\\\d+):(?P<message>.*)'
    """
    return _JS_NAMED_GROUP.sub("(?P<", source)


@dataclass(frozen=True, slots=True)
class RawMatch:
    """Text captured by each named group, before any conversion.

    Attributes:
        line: Captured ``line`` group.
        column: Captured ``column`` group.
        type: Captured ``type`` group (the tool's category label).
        code: Captured ``code`` group.
        message: Captured ``message`` group.
        file: Captured ``file`` group, when the pattern defines one.
    """

    line: str | None
    column: str | None
    type: str | None
    code: str | None
    message: str | None
    file: str | None = None


class PatternMatcher:
    """Compile an output pattern once and match it against single lines.

    Matching uses search semantics, so the pattern may match anywhere in the
    line. A line that does not match is a normal outcome, not an error.
    Diagnostics that span several output lines cannot be matched.

    Attributes:
        pattern: The pattern source as configured.

    Raises:
        PatternError: If the pattern does not compile or lacks the ``line``
            or ``message`` group.
    """

    def __init__(self, pattern: str = DEFAULT_PATTERN) -> None:
        self.pattern = pattern
        try:
            self._regex = re.compile(normalize_pattern(pattern))
        except re.error as e:
            raise PatternError(f"Invalid output pattern: {e}", pattern=pattern) from e

        missing = [name for name in REQUIRED_GROUPS if name not in self._regex.groupindex]
        if missing:
            raise PatternError(
                f"Output pattern is missing named group(s): {', '.join(missing)}",
                pattern=pattern,
            )

    def match(self, line: str) -> RawMatch | None:
        """Extract the named groups from one line.

        Args:
            line: A single line of tool output.

        Returns:
            The captured fields, or None if the line does not match.
        """
        found = self._regex.search(line)
        if found is None:
            return None
        groups = found.groupdict()
        return RawMatch(
            line=groups.get("line"),
            column=groups.get("column"),
            type=groups.get("type"),
            code=groups.get("code"),
            message=groups.get("message"),
            file=groups.get("file"),
        )
