"""Severity normalization for tool-specific category labels.

Every tool has its own vocabulary (pylint says ``convention``/``refactor``,
flake8 reports ``E``/``W``/``F`` prefixes, mypy prints ``note``). Tools map
their raw category to one of four canonical names through a
``category_severity`` mapping supplied by configuration; this module resolves
that mapping into a :class:`NormalizedSeverity`.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

__all__ = [
    "CategorySeverityMap",
    "NormalizedSeverity",
    "SeverityMapper",
    "map_severity",
]

CategorySeverityMap = Mapping[str, str]


class NormalizedSeverity(str, Enum):
    """Closed set of severities surfaced to the host editor.

    Values match the canonical names used in configuration and on the wire.
    """

    ERROR = "Error"
    WARNING = "Warning"
    INFORMATION = "Information"
    HINT = "Hint"

    @property
    def lsp_code(self) -> int:
        """Language Server Protocol ``DiagnosticSeverity`` value (1-4)."""
        return _LSP_CODES[self]

    @classmethod
    def from_alias(cls, name: str) -> NormalizedSeverity | None:
        """Resolve an alias such as ``warn`` or ``"1"`` to a severity.

        Args:
            name: Alias text; matching is case-insensitive.

        Returns:
            The matching severity, or None if the alias is not recognized.
        """
        return _ALIASES.get(name.strip().lower())


_LSP_CODES: dict[NormalizedSeverity, int] = {
    NormalizedSeverity.ERROR: 1,
    NormalizedSeverity.WARNING: 2,
    NormalizedSeverity.INFORMATION: 3,
    NormalizedSeverity.HINT: 4,
}

_CANONICAL: dict[str, NormalizedSeverity] = {
    severity.value: severity for severity in NormalizedSeverity
}

_ALIASES: dict[str, NormalizedSeverity] = {
    **{severity.value.lower(): severity for severity in NormalizedSeverity},
    **{str(code): severity for severity, code in _LSP_CODES.items()},
    "err": NormalizedSeverity.ERROR,
    "warn": NormalizedSeverity.WARNING,
    "info": NormalizedSeverity.INFORMATION,
    "note": NormalizedSeverity.INFORMATION,
}


def map_severity(
    raw_category: str | None,
    mapping: CategorySeverityMap | None,
) -> NormalizedSeverity:
    """Resolve a raw tool category to a normalized severity.

    Resolution order: the category must be a key of ``mapping``; its mapped
    name resolves directly when canonical (``Error``, ``Warning``,
    ``Information``, ``Hint``), otherwise through the alias table. Anything
    else resolves to ``Information``.

    Args:
        raw_category: Category text captured from the tool output.
        mapping: Category-to-severity-name mapping from configuration.

    Returns:
        The resolved severity.

    Example:
        >>> map_severity("convention", {"convention": "Hint"})
        <NormalizedSeverity.HINT: 'Hint'>
        >>> map_severity("unknown", {"convention": "Hint"})
        <NormalizedSeverity.INFORMATION: 'Information'>
    """
    if not raw_category or not mapping:
        return NormalizedSeverity.INFORMATION

    severity_name = mapping.get(raw_category)
    if not severity_name:
        return NormalizedSeverity.INFORMATION

    canonical = _CANONICAL.get(severity_name)
    if canonical is not None:
        return canonical

    return NormalizedSeverity.from_alias(severity_name) or NormalizedSeverity.INFORMATION


class SeverityMapper:
    """Bind a category mapping once and resolve categories against it."""

    def __init__(self, mapping: CategorySeverityMap | None = None) -> None:
        self._mapping: dict[str, str] = dict(mapping or {})

    def __call__(self, raw_category: str | None) -> NormalizedSeverity:
        return map_severity(raw_category, self._mapping)
