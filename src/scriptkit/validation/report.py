"""Validation issues, confidence scoring and report formatting."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCode(str, Enum):
    """Stable identifiers for every validation rule."""

    SCHEMA_INVALID = "schema-invalid"
    LOWERCASE_CHARACTER = "lowercase-character"
    UNBALANCED_PARENTHETICAL = "unbalanced-parenthetical"
    EMPTY_CONTENT = "empty-content"
    SCENE_HEADING_FORMAT = "scene-heading-format"
    ORPHANED_CHARACTER = "orphaned-character"
    UNPAIRED_DUAL = "unpaired-dual"
    SEQUENCE_GAPS = "sequence-gaps"
    DUPLICATE_IDS = "duplicate-ids"
    EMPTY_SCRIPT = "empty-script"
    NO_TITLE_PAGE = "no-title-page"
    MISSING_TITLE = "missing-title"
    MISSING_AUTHORS = "missing-authors"


SEVERITY_WEIGHTS: dict[Severity, float] = {
    Severity.ERROR: 0.5,
    Severity.WARNING: 0.2,
    Severity.INFO: 0.05,
}


class ConfidenceLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"
    FAILED = "failed"


# Lower bound of each level, checked top to bottom
CONFIDENCE_THRESHOLDS: list[tuple[float, ConfidenceLevel]] = [
    (1.0, ConfidenceLevel.EXCELLENT),
    (0.9, ConfidenceLevel.GOOD),
    (0.7, ConfidenceLevel.ACCEPTABLE),
    (0.5, ConfidenceLevel.POOR),
]

LEVEL_DESCRIPTIONS: dict[ConfidenceLevel, str] = {
    ConfidenceLevel.EXCELLENT: "Perfect - no issues detected",
    ConfidenceLevel.GOOD: "Good - minor issues that don't affect functionality",
    ConfidenceLevel.ACCEPTABLE: "Acceptable - some issues but script is usable",
    ConfidenceLevel.POOR: "Poor - significant issues, review recommended",
    ConfidenceLevel.FAILED: "Failed - critical issues, script may not work correctly",
}

LEVEL_ACTIONS: dict[ConfidenceLevel, str] = {
    ConfidenceLevel.EXCELLENT: "Script is ready to use",
    ConfidenceLevel.GOOD: "Script is ready to use. Consider reviewing warnings.",
    ConfidenceLevel.ACCEPTABLE: "Review warnings and consider auto-fixing issues",
    ConfidenceLevel.POOR: "Review and fix issues before using script",
    ConfidenceLevel.FAILED: "Script has critical errors. Manual review required.",
}

# More errors than this block further processing regardless of confidence
BLOCKING_ERROR_COUNT = 10


class ValidationIssue(BaseModel):
    """A single problem found in a script."""

    model_config = ConfigDict(frozen=True)

    code: IssueCode
    message: str
    severity: Severity
    element_id: str | None = None
    element_sequence: int | None = None
    element_type: str | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ReportSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    errors: int = 0
    warnings: int = 0
    info: int = 0


def calculate_confidence(issues: list[ValidationIssue], total_elements: int) -> float:
    """Score a script from 0.0 to 1.0.

    Issues are weighted by severity and the penalty is normalised by the
    element count, so one warning in a long script barely moves the score.
    """
    if not issues:
        return 1.0
    if total_elements == 0:
        return 0.0
    penalty = sum(SEVERITY_WEIGHTS[issue.severity] for issue in issues)
    return max(0.0, min(1.0, 1.0 - penalty / max(total_elements, 1)))


def confidence_level(confidence: float) -> ConfidenceLevel:
    for threshold, level in CONFIDENCE_THRESHOLDS:
        if confidence >= threshold:
            return level
    return ConfidenceLevel.FAILED


class ValidationReport(BaseModel):
    """Outcome of validating an element sequence."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    confidence: float = Field(ge=0.0, le=1.0)
    total_elements: int = Field(ge=0)
    valid_elements: int = Field(ge=0)
    issues: tuple[ValidationIssue, ...] = ()
    summary: ReportSummary = Field(default_factory=ReportSummary)

    @classmethod
    def build(
        cls,
        issues: list[ValidationIssue],
        total_elements: int,
        valid_elements: int,
    ) -> ValidationReport:
        summary = ReportSummary(
            errors=sum(1 for i in issues if i.severity == Severity.ERROR),
            warnings=sum(1 for i in issues if i.severity == Severity.WARNING),
            info=sum(1 for i in issues if i.severity == Severity.INFO),
        )
        return cls(
            valid=summary.errors == 0,
            confidence=calculate_confidence(issues, total_elements),
            total_elements=total_elements,
            valid_elements=valid_elements,
            issues=tuple(issues),
            summary=summary,
        )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def level(self) -> ConfidenceLevel:
        return confidence_level(self.confidence)

    def codes(self) -> set[IssueCode]:
        return {issue.code for issue in self.issues}

    def issues_for(self, element_id: str) -> list[ValidationIssue]:
        return [i for i in self.issues if i.element_id == element_id]

    def group_by_severity(self) -> dict[Severity, list[ValidationIssue]]:
        return {
            Severity.ERROR: self.errors,
            Severity.WARNING: self.warnings,
            Severity.INFO: self.infos,
        }

    def should_block(self) -> bool:
        """Whether the script is too broken to hand to downstream stages."""
        return (
            self.level == ConfidenceLevel.FAILED
            or self.summary.errors > BLOCKING_ERROR_COUNT
        )

    def recommended_action(self) -> str:
        return LEVEL_ACTIONS[self.level]

    def format_summary(self) -> str:
        """One line summary, e.g. ``Confidence: 94% (GOOD) | 2 warnings``."""
        parts = [f"Confidence: {self.confidence:.0%} ({self.level.value.upper()})"]
        if self.summary.errors:
            parts.append(f"{self.summary.errors} errors")
        if self.summary.warnings:
            parts.append(f"{self.summary.warnings} warnings")
        if self.summary.info:
            parts.append(f"{self.summary.info} info")
        return " | ".join(parts)

    def format_console(self, max_issues: int = 10) -> str:
        """Multi-line human readable report."""
        lines = [
            "=== Script Validation Report ===",
            f"Status: {'VALID' if self.valid else 'INVALID'}",
            f"Confidence: {self.confidence:.1%} ({self.level.value.upper()})",
            f"Description: {LEVEL_DESCRIPTIONS[self.level]}",
            f"Elements: {self.valid_elements}/{self.total_elements} valid",
        ]
        for severity, issues in self.group_by_severity().items():
            if not issues:
                continue
            lines.append("")
            lines.append(f"{severity.value.upper()} ({len(issues)}):")
            for issue in issues[:max_issues]:
                where = (
                    f" [#{issue.element_sequence}]"
                    if issue.element_sequence is not None
                    else ""
                )
                lines.append(f"  - {issue.code.value}{where}: {issue.message}")
                if issue.suggestion:
                    lines.append(f"    suggestion: {issue.suggestion}")
            if len(issues) > max_issues:
                lines.append(f"  ... and {len(issues) - max_issues} more")
        lines.append("")
        lines.append(f"Recommended action: {self.recommended_action()}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "confidence": self.confidence,
            "confidenceLevel": self.level.value,
            "totalElements": self.total_elements,
            "validElements": self.valid_elements,
            "summary": self.summary.model_dump(),
            "issues": [issue.to_dict() for issue in self.issues],
        }
