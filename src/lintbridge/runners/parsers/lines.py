"""Line-oriented parsing of tool output into diagnostic records."""

from __future__ import annotations

import re
from collections.abc import Callable

from lintbridge.constants import DEFAULT_MAX_NUMBER_OF_PROBLEMS
from lintbridge.diagnostics import (
    CategorySeverityMap,
    DiagnosticRecord,
    MessageGovernor,
    SeverityMapper,
)
from lintbridge.exceptions import DiagnosticParseError
from lintbridge.logging import get_logger
from lintbridge.runners.parsers.pattern import PatternMatcher

__all__ = ["LineParser", "normalize_column", "parse_line", "split_lines"]

logger = get_logger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")

ParseFailureHandler = Callable[[str, DiagnosticParseError], None]


def split_lines(output: str) -> list[str]:
    """Split output on line breaks without trimming or dropping empty lines."""
    return _LINE_BREAK.split(output)


def normalize_column(raw_column: str | None, column_offset: int = 0) -> int:
    """Convert a captured column to the reported column.

    Non-numeric, missing, zero and negative columns all mean "unknown" and
    become 0; anything else is shifted by ``column_offset`` and never drops
    below 0.

    Example:
        >>> normalize_column("-1")
        0
        >>> normalize_column("5", column_offset=1)
        4
    """
    try:
        column = int(raw_column)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if column <= 0:
        return 0
    return max(column - column_offset, 0)


def parse_line(
    line: str,
    matcher: PatternMatcher,
    provider_id: str,
    *,
    column_offset: int = 0,
    severity: SeverityMapper | None = None,
) -> DiagnosticRecord | None:
    """Parse one output line.

    Args:
        line: The raw output line.
        matcher: Compiled output pattern.
        provider_id: Tool identifier stamped on the record.
        column_offset: Subtracted from positive columns.
        severity: Category resolver; everything is Information without one.

    Returns:
        The record, or None if the line does not match the pattern.

    Raises:
        DiagnosticParseError: If the line matched but could not be converted.
    """
    raw = matcher.match(line)
    if raw is None:
        return None

    resolve = severity or SeverityMapper()
    try:
        return DiagnosticRecord(
            line=int(raw.line),  # type: ignore[arg-type]
            column=normalize_column(raw.column, column_offset),
            code=raw.code or "",
            message=raw.message or "",
            severity=resolve(raw.type),
            provider_id=provider_id,
            file=raw.file,
        )
    except (TypeError, ValueError) as e:
        raise DiagnosticParseError(f"Failed to convert output line: {e}", line=line) from e


class LineParser:
    """Convert a tool's output text into diagnostic records.

    Every line is matched independently. Lines that fail conversion are
    logged and skipped; the rest of the output is still parsed. A fresh
    MessageGovernor is used per call and parsing stops as soon as it reports
    the cap reached.

    Example:
        ```python
        parser = LineParser(
            PatternMatcher(),
            "pylint",
            category_severity={"error": "Error", "convention": "Hint"},
            max_number_of_problems=100,
        )
        records = parser.parse(output)
        ```
    """

    def __init__(
        self,
        matcher: PatternMatcher,
        provider_id: str,
        *,
        column_offset: int = 0,
        category_severity: CategorySeverityMap | None = None,
        max_number_of_problems: int = DEFAULT_MAX_NUMBER_OF_PROBLEMS,
        on_parse_failure: ParseFailureHandler | None = None,
    ) -> None:
        self._matcher = matcher
        self._provider_id = provider_id
        self._column_offset = column_offset
        self._severity = SeverityMapper(category_severity)
        self._max_number_of_problems = max_number_of_problems
        self._on_parse_failure = on_parse_failure

    def parse(self, output: str) -> list[DiagnosticRecord]:
        records: list[DiagnosticRecord] = []
        governor = MessageGovernor(self._max_number_of_problems)

        for line in split_lines(output):
            try:
                record = parse_line(
                    line,
                    self._matcher,
                    self._provider_id,
                    column_offset=self._column_offset,
                    severity=self._severity,
                )
            except DiagnosticParseError as e:
                logger.warning(
                    "line_parse_failed",
                    provider_id=self._provider_id,
                    line=line,
                    error=e.message,
                )
                if self._on_parse_failure is not None:
                    self._on_parse_failure(line, e)
                continue

            if record is None:
                continue

            records.append(record)
            if not governor.accept():
                logger.debug(
                    "problem_cap_reached",
                    provider_id=self._provider_id,
                    max_number_of_problems=governor.max_count,
                )
                break

        return records
