"""Validation, confidence scoring and auto-fixing of element sequences."""

from scriptkit.validation.autofix import AutoFixer, AutoFixResult
from scriptkit.validation.report import (
    ConfidenceLevel,
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationReport,
    calculate_confidence,
)
from scriptkit.validation.validator import ScriptValidator, ValidationResult

__all__ = [
    "AutoFixResult",
    "AutoFixer",
    "ConfidenceLevel",
    "IssueCode",
    "ScriptValidator",
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "ValidationResult",
    "calculate_confidence",
]
