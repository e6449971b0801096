"""Idempotent mechanical repairs for common formatting problems."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from scriptkit.config import get_logger
from scriptkit.models import PAGINATION_FIELDS, ElementType, ScriptElement, resequence
from scriptkit.validation.report import IssueCode, ValidationIssue

logger = get_logger(__name__)


@dataclass
class AutoFixResult:
    """Repaired elements plus a log of what changed."""

    elements: list[ScriptElement]
    changes: dict[str, list[str]] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)

    @property
    def changed_ids(self) -> list[str]:
        return list(self.changes)

    @property
    def total_fixed(self) -> int:
        return len(self.changes) + len(self.removed)

    def summary(self) -> str:
        if not self.total_fixed:
            return "No fixes applied"
        lines = [f"Applied fixes to {self.total_fixed} elements:"]
        for element_id, descriptions in self.changes.items():
            lines.append(f"  {element_id}: {', '.join(descriptions)}")
        for element_id in self.removed:
            lines.append(f"  {element_id}: removed empty element")
        return "\n".join(lines)


class AutoFixer:
    """Apply mechanical fixes that never need human judgement.

    Unpaired dual dialogue and orphaned cues are left alone: pairing them
    would mean guessing which speaker belongs to which column.
    """

    FIXABLE_CODES: ClassVar[frozenset[IssueCode]] = frozenset(
        {
            IssueCode.LOWERCASE_CHARACTER,
            IssueCode.UNBALANCED_PARENTHETICAL,
            IssueCode.EMPTY_CONTENT,
            IssueCode.SCENE_HEADING_FORMAT,
            IssueCode.SEQUENCE_GAPS,
        }
    )

    HEADING_REWRITES: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        (re.compile(r"^INTERIOR\b\.?\s*", re.I), "INT. "),
        (re.compile(r"^EXTERIOR\b\.?\s*", re.I), "EXT. "),
        (re.compile(r"^(INT|EXT)(?=\s)\s*", re.I), r"\1. "),
    ]
    OUTER_PARENS = re.compile(r"^\(|\)$")

    def can_fix(self, issue: ValidationIssue) -> bool:
        """Whether an issue is of a kind the fixer may resolve."""
        return issue.code in self.FIXABLE_CODES

    def fix_element(self, element: ScriptElement) -> tuple[ScriptElement | None, list[str]]:
        """Fix one element; returns ``None`` when it should be removed."""
        changes: list[str] = []
        content = element.content
        update: dict[str, Any] = {}

        if content != content.strip():
            content = content.strip()
            changes.append("Trimmed whitespace")

        if not content:
            return None, ["Removed empty element"]

        if element.type == ElementType.CHARACTER and content != content.upper():
            content = content.upper()
            changes.append("Converted character name to uppercase")
        elif element.type == ElementType.PARENTHETICAL and not (
            content.startswith("(") and content.endswith(")")
        ):
            content = f"({self.OUTER_PARENS.sub('', content).strip()})"
            changes.append("Wrapped parenthetical in parentheses")
        elif element.type == ElementType.SCENE_HEADING:
            for pattern, replacement in self.HEADING_REWRITES:
                rewritten = pattern.sub(replacement, content, count=1).rstrip()
                if rewritten != content:
                    content = rewritten
                    changes.append("Normalized scene heading prefix")
                    break

        if element.has_pagination_metadata:
            update.update(dict.fromkeys(PAGINATION_FIELDS, False))
            changes.append("Cleared stale pagination metadata")

        if content != element.content:
            update["content"] = content
        if update:
            element = element.model_copy(update=update)
        return element, changes

    def fix(self, elements: Sequence[ScriptElement]) -> AutoFixResult:
        """Fix every element and re-sequence the survivors.

        Running ``fix`` on its own output changes nothing.
        """
        kept: list[ScriptElement] = []
        result = AutoFixResult(elements=[])
        for element in elements:
            fixed, changes = self.fix_element(element)
            if fixed is None:
                result.removed.append(element.id)
                continue
            if changes:
                result.changes[element.id] = changes
            kept.append(fixed)

        result.elements = resequence(kept)
        if result.total_fixed:
            logger.info(
                "Auto-fixed elements",
                changed=len(result.changes),
                removed=len(result.removed),
            )
        return result
