"""Rule based validation of screenplay element sequences."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from pydantic import ValidationError as PydanticValidationError

from scriptkit.config import get_logger
from scriptkit.models import (
    SPEECH_TYPES,
    DualPosition,
    ElementType,
    ScriptElement,
    TitlePageData,
)
from scriptkit.validation.report import (
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationReport,
)

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Schema-valid elements together with the report about all input."""

    elements: list[ScriptElement] = field(default_factory=list)
    report: ValidationReport = field(
        default_factory=lambda: ValidationReport.build([], 0, 0)
    )


def _issue(
    code: IssueCode,
    severity: Severity,
    message: str,
    element: ScriptElement | None = None,
    suggestion: str | None = None,
) -> ValidationIssue:
    return ValidationIssue(
        code=code,
        severity=severity,
        message=message,
        element_id=element.id if element else None,
        element_sequence=element.sequence if element else None,
        element_type=element.type.value if element else None,
        suggestion=suggestion,
    )


class ScriptValidator:
    """Validate element sequences and produce a confidence-scored report."""

    SCENE_HEADING_PREFIXES: ClassVar[tuple[str, ...]] = (
        "INT./EXT.",
        "INT/EXT.",
        "INT/EXT ",
        "I/E.",
        "I/E ",
        "INT.",
        "EXT.",
        "EST.",
    )
    LOWERCASE_PATTERN = re.compile(r"[a-z]")

    def check(self, elements: Iterable[ScriptElement | Mapping[str, Any]]) -> ValidationResult:
        """Validate raw input and keep only elements that pass the schema.

        Args:
            elements: Elements or plain mappings in their camelCase JSON shape

        Returns:
            The schema-valid elements (in input order) and the full report
        """
        raw_elements = list(elements)
        issues: list[ValidationIssue] = []
        valid: list[ScriptElement] = []

        for position, raw in enumerate(raw_elements, start=1):
            element = self._coerce(raw, position, issues)
            if element is None:
                continue
            valid.append(element)
            issues.extend(self.check_element(element))

        issues.extend(self.check_sequence(valid))
        if not raw_elements:
            issues.append(
                _issue(
                    IssueCode.EMPTY_SCRIPT,
                    Severity.INFO,
                    "Script has no elements",
                )
            )

        failing_ids = {
            issue.element_id
            for issue in issues
            if issue.severity == Severity.ERROR and issue.element_id
        }
        report = ValidationReport.build(
            issues,
            total_elements=len(raw_elements),
            valid_elements=sum(1 for e in valid if e.id not in failing_ids),
        )
        logger.debug(
            "Validated elements",
            total=report.total_elements,
            issues=len(report.issues),
            confidence=round(report.confidence, 3),
        )
        return ValidationResult(elements=valid, report=report)

    def validate(
        self, elements: Iterable[ScriptElement | Mapping[str, Any]]
    ) -> ValidationReport:
        """Validate elements and return only the report."""
        return self.check(elements).report

    def _coerce(
        self,
        raw: ScriptElement | Mapping[str, Any],
        position: int,
        issues: list[ValidationIssue],
    ) -> ScriptElement | None:
        if isinstance(raw, ScriptElement):
            return raw
        try:
            return ScriptElement.model_validate(raw)
        except (PydanticValidationError, TypeError) as e:
            raw_id = raw.get("id") if isinstance(raw, Mapping) else None
            fields = (
                ", ".join(".".join(map(str, err["loc"])) for err in e.errors())
                if isinstance(e, PydanticValidationError)
                else "element"
            )
            issues.append(
                ValidationIssue(
                    code=IssueCode.SCHEMA_INVALID,
                    severity=Severity.ERROR,
                    message=f"Element {position} does not match the schema: {fields}",
                    element_id=str(raw_id) if raw_id else None,
                    element_sequence=position,
                )
            )
            return None

    def check_element(self, element: ScriptElement) -> list[ValidationIssue]:
        """Per-element formatting rules."""
        issues = []
        content = element.content.strip()

        if not content:
            issues.append(
                _issue(
                    IssueCode.EMPTY_CONTENT,
                    Severity.WARNING,
                    f"Empty {element.type.value} element",
                    element,
                    "Remove the element or add content",
                )
            )
            return issues

        if element.type == ElementType.CHARACTER and self.LOWERCASE_PATTERN.search(
            content
        ):
            issues.append(
                _issue(
                    IssueCode.LOWERCASE_CHARACTER,
                    Severity.WARNING,
                    f"Character name '{content}' is not uppercase",
                    element,
                    f"Use '{content.upper()}'",
                )
            )
        elif element.type == ElementType.PARENTHETICAL:
            wrapped = content.startswith("(") and content.endswith(")")
            if not wrapped:
                issues.append(
                    _issue(
                        IssueCode.UNBALANCED_PARENTHETICAL,
                        Severity.WARNING,
                        "Parenthetical is not wrapped in parentheses",
                        element,
                        f"Use '({content.strip('()')})'",
                    )
                )
            elif content.count("(") != content.count(")"):
                issues.append(
                    _issue(
                        IssueCode.UNBALANCED_PARENTHETICAL,
                        Severity.WARNING,
                        "Parenthetical has unbalanced inner parentheses",
                        element,
                    )
                )
        elif element.type == ElementType.SCENE_HEADING and not content.upper().startswith(
            self.SCENE_HEADING_PREFIXES
        ):
            issues.append(
                _issue(
                    IssueCode.SCENE_HEADING_FORMAT,
                    Severity.WARNING,
                    f"Scene heading '{content}' does not start with INT., EXT., "
                    "INT./EXT., I/E or EST.",
                    element,
                    "Start scene headings with INT. or EXT.",
                )
            )
        return issues

    def check_sequence(self, elements: list[ScriptElement]) -> list[ValidationIssue]:
        """Rules that need neighbouring elements."""
        issues: list[ValidationIssue] = []

        for index, element in enumerate(elements):
            following = elements[index + 1] if index + 1 < len(elements) else None
            if element.type == ElementType.CHARACTER and (
                following is None or following.type not in SPEECH_TYPES
            ):
                issues.append(
                    _issue(
                        IssueCode.ORPHANED_CHARACTER,
                        Severity.WARNING,
                        f"Character '{element.content.strip()}' has no dialogue",
                        element,
                        "Add dialogue after the character cue or remove it",
                    )
                )
            if element.dual is not None and not self._dual_is_paired(elements, index):
                issues.append(
                    _issue(
                        IssueCode.UNPAIRED_DUAL,
                        Severity.ERROR,
                        f"Dual dialogue ({element.dual.value}) has no matching "
                        "partner column",
                        element,
                        "Tag the adjacent speaker block with the opposite column",
                    )
                )

        if any(e.sequence != i for i, e in enumerate(elements, start=1)):
            issues.append(
                _issue(
                    IssueCode.SEQUENCE_GAPS,
                    Severity.WARNING,
                    "Element sequence numbers are not contiguous from 1",
                    suggestion="Re-sequence the elements",
                )
            )

        counts = Counter(e.id for e in elements)
        for element_id, count in counts.items():
            if count > 1:
                first = next(e for e in elements if e.id == element_id)
                issues.append(
                    _issue(
                        IssueCode.DUPLICATE_IDS,
                        Severity.ERROR,
                        f"Element id '{element_id}' is used {count} times",
                        first,
                    )
                )
        return issues

    @staticmethod
    def _speaker_block_start(elements: list[ScriptElement], index: int) -> int:
        """Index of the cue owning the element at ``index`` (or ``index``)."""
        start = index
        while start >= 0 and elements[start].type in SPEECH_TYPES:
            start -= 1
        return start

    def _dual_is_paired(self, elements: list[ScriptElement], index: int) -> bool:
        """Whether a dual-tagged element sits in a properly paired block."""
        element = elements[index]
        if element.type not in SPEECH_TYPES and element.type != ElementType.CHARACTER:
            return False

        cue_index = self._speaker_block_start(elements, index)
        if cue_index < 0 or elements[cue_index].type != ElementType.CHARACTER:
            return False
        cue = elements[cue_index]
        if cue.dual != element.dual:
            return False
        if cue_index != index:
            # Pairing is reported once, on the cue
            return True

        if cue.dual == DualPosition.LEFT:
            end = cue_index + 1
            while end < len(elements) and elements[end].type in SPEECH_TYPES:
                end += 1
            return (
                end < len(elements)
                and elements[end].type == ElementType.CHARACTER
                and elements[end].dual == DualPosition.RIGHT
            )

        previous_end = cue_index - 1
        if previous_end < 0 or elements[previous_end].type not in SPEECH_TYPES:
            return False
        partner = self._speaker_block_start(elements, previous_end)
        return (
            partner >= 0
            and elements[partner].type == ElementType.CHARACTER
            and elements[partner].dual == DualPosition.LEFT
        )

    def check_title_page(self, title_page: TitlePageData | None) -> list[ValidationIssue]:
        """Title page checks; reported separately from element confidence."""
        if title_page is None or title_page.is_empty():
            return [
                _issue(
                    IssueCode.NO_TITLE_PAGE,
                    Severity.INFO,
                    "Script has no title page",
                    suggestion="Add a title page with title and author",
                )
            ]
        issues = []
        if not title_page.title:
            issues.append(
                _issue(
                    IssueCode.MISSING_TITLE,
                    Severity.WARNING,
                    "Title page has no title",
                )
            )
        if not title_page.authors:
            issues.append(
                _issue(
                    IssueCode.MISSING_AUTHORS,
                    Severity.WARNING,
                    "Title page has no authors",
                )
            )
        return issues
