"""Diagnostic records, severity normalization and the per-run cap."""

from __future__ import annotations

from lintbridge.diagnostics.governor import MessageGovernor
from lintbridge.diagnostics.models import DiagnosticRecord
from lintbridge.diagnostics.severity import (
    CategorySeverityMap,
    NormalizedSeverity,
    SeverityMapper,
    map_severity,
)

__all__ = [
    "CategorySeverityMap",
    "DiagnosticRecord",
    "MessageGovernor",
    "NormalizedSeverity",
    "SeverityMapper",
    "map_severity",
]
