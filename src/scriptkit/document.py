"""Immutable screenplay document with copy-on-write edits."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from scriptkit.config import get_logger
from scriptkit.exceptions import ScriptKitError, ScriptValidationFailed
from scriptkit.models import ElementType, ScriptElement, TitlePageData, resequence
from scriptkit.pagination import DEFAULT_METRICS, PageLayout, PageMetrics, paginate
from scriptkit.validation import ScriptValidator, ValidationReport

logger = get_logger(__name__)

DOCUMENT_VERSION = "1.0"

ElementInput = ScriptElement | Mapping[str, Any]


class ScriptDocument:
    """Validated, immutable snapshot of a screenplay.

    Build instances with :meth:`create`. Every edit returns a new snapshot
    and leaves the original untouched; elements always carry sequences
    1..n and never carry pagination annotations.
    """

    __slots__ = ("_elements", "_index", "_title_page", "_validation_report")

    def __init__(
        self,
        elements: tuple[ScriptElement, ...],
        title_page: TitlePageData | None,
        validation_report: ValidationReport,
    ) -> None:
        self._elements = elements
        self._title_page = title_page
        self._validation_report = validation_report
        self._index = {element.id: element for element in reversed(elements)}

    # Construction

    @classmethod
    def create(
        cls,
        elements: Iterable[ElementInput] = (),
        title_page: TitlePageData | Mapping[str, Any] | None = None,
        *,
        strict: bool = False,
        log_validation: bool = False,
    ) -> ScriptDocument:
        """Validate ``elements`` and freeze them into a document.

        Args:
            elements: Elements or camelCase mappings, in script order
            title_page: Optional title page fields
            strict: Raise instead of dropping invalid elements
            log_validation: Log the formatted validation report

        Returns:
            New document

        Raises:
            ScriptValidationFailed: In strict mode, when errors were found
        """
        if title_page is not None and not isinstance(title_page, TitlePageData):
            title_page = TitlePageData.model_validate(title_page)

        result = ScriptValidator().check(elements)
        report = result.report

        if log_validation:
            logger.info(
                "Script validation report",
                summary=report.format_summary(),
                report=report.format_console(),
            )

        if strict and not report.valid:
            logger.warning(
                "Strict validation failed",
                errors=report.summary.errors,
                confidence=round(report.confidence, 3),
            )
            raise ScriptValidationFailed(report)

        frozen = tuple(
            resequence([element.without_pagination() for element in result.elements])
        )
        return cls(frozen, title_page, report)

    @classmethod
    def empty(cls) -> ScriptDocument:
        return cls.create([])

    # Read access

    @property
    def elements(self) -> tuple[ScriptElement, ...]:
        return self._elements

    @property
    def title_page(self) -> TitlePageData | None:
        return self._title_page

    @property
    def validation_report(self) -> ValidationReport:
        return self._validation_report

    @property
    def element_count(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[ScriptElement]:
        return iter(self._elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScriptDocument):
            return NotImplemented
        return (
            self._elements == other._elements
            and self._title_page == other._title_page
        )

    def __hash__(self) -> int:
        return hash((self._elements, self._title_page))

    def __repr__(self) -> str:
        return (
            f"ScriptDocument(elements={len(self._elements)}, "
            f"confidence={self._validation_report.confidence:.2f})"
        )

    def get_element(self, element_id: str) -> ScriptElement | None:
        return self._index.get(element_id)

    def get_element_by_sequence(self, sequence: int) -> ScriptElement | None:
        if 1 <= sequence <= len(self._elements):
            return self._elements[sequence - 1]
        return None

    def get_elements_by_type(self, element_type: ElementType | str) -> list[ScriptElement]:
        element_type = ElementType(element_type)
        return [e for e in self._elements if e.type == element_type]

    def is_valid(self) -> bool:
        return self._validation_report.valid

    def confidence(self) -> float:
        return self._validation_report.confidence

    # Copy-on-write edits

    def _rebuild(
        self,
        elements: Iterable[ElementInput],
        title_page: TitlePageData | None = None,
        strict: bool = False,
    ) -> ScriptDocument:
        sequenced: list[ElementInput] = []
        for sequence, element in enumerate(elements, start=1):
            if isinstance(element, ScriptElement):
                if element.sequence != sequence:
                    element = element.model_copy(update={"sequence": sequence})
                sequenced.append(element)
            else:
                sequenced.append({**element, "sequence": sequence})
        return type(self).create(
            sequenced,
            title_page if title_page is not None else self._title_page,
            strict=strict,
        )

    def _position(self, element_id: str) -> int:
        for position, element in enumerate(self._elements):
            if element.id == element_id:
                return position
        raise ScriptKitError(
            message=f"Element not found: {element_id}",
            hint="Look up ids with get_element() before editing",
        )

    def insert_element(
        self, index: int, element: ElementInput, *, strict: bool = False
    ) -> ScriptDocument:
        """Return a new document with ``element`` inserted before ``index``."""
        elements: list[ElementInput] = list(self._elements)
        elements.insert(index, element)
        return self._rebuild(elements, strict=strict)

    def append_element(self, element: ElementInput, *, strict: bool = False) -> ScriptDocument:
        return self.insert_element(len(self._elements), element, strict=strict)

    def update_element(
        self,
        element_id: str,
        changes: Mapping[str, Any] | None = None,
        *,
        strict: bool = False,
        **fields: Any,
    ) -> ScriptDocument:
        """Return a new document with one element's fields replaced.

        The id and sequence of an element cannot be changed this way.
        """
        position = self._position(element_id)
        update = {**(changes or {}), **fields}
        update.pop("id", None)
        update.pop("sequence", None)
        current = self._elements[position].to_dict()
        elements: list[ElementInput] = list(self._elements)
        elements[position] = {
            **current,
            **{self._alias(key): value for key, value in update.items()},
        }
        return self._rebuild(elements, strict=strict)

    @staticmethod
    def _alias(name: str) -> str:
        field = ScriptElement.model_fields.get(name)
        if field is not None and field.alias:
            return field.alias
        return name

    def delete_element(self, element_id: str) -> ScriptDocument:
        position = self._position(element_id)
        elements = list(self._elements)
        del elements[position]
        return self._rebuild(elements)

    def replace_elements(
        self, elements: Iterable[ElementInput], *, strict: bool = False
    ) -> ScriptDocument:
        return self._rebuild(list(elements), strict=strict)

    def update_title_page(
        self, changes: Mapping[str, Any] | None = None, **fields: Any
    ) -> ScriptDocument:
        base = self._title_page or TitlePageData()
        title_page = TitlePageData.model_validate(
            {**base.model_dump(), **(changes or {}), **fields}
        )
        return type(self).create(self._elements, title_page)

    # Layout

    def paginate(self, metrics: PageMetrics = DEFAULT_METRICS) -> PageLayout:
        """Lay out the current elements. The result is not stored."""
        return paginate(self._elements, metrics)

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": DOCUMENT_VERSION,
            "elements": [element.to_dict() for element in self._elements],
        }
        if self._title_page is not None:
            data["titlePage"] = self._title_page.to_dict()
        data["validationReport"] = self._validation_report.to_dict()
        return data

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, strict: bool = False) -> ScriptDocument:
        """Rebuild a document; stored validation reports are recomputed."""
        title_page = data.get("titlePage")
        return cls.create(data.get("elements", []), title_page, strict=strict)

    @classmethod
    def from_json(cls, text: str, *, strict: bool = False) -> ScriptDocument:
        return cls.from_dict(json.loads(text), strict=strict)
