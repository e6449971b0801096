"""Element model shared by every stage of the screenplay pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

PAGINATION_FIELDS = frozenset({"is_continued", "continues_next", "kept_together"})


class ElementType(str, Enum):
    """Closed set of screenplay element kinds; drives all layout semantics."""

    SCENE_HEADING = "scene_heading"
    ACTION = "action"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    TRANSITION = "transition"


class DualPosition(str, Enum):
    """Column of a dual dialogue block. Absence means a normal block."""

    LEFT = "left"
    RIGHT = "right"


# Element types that make up the body of a speaker block
SPEECH_TYPES = frozenset({ElementType.DIALOGUE, ElementType.PARENTHETICAL})


class ScriptElement(BaseModel):
    """One typed, ordered unit of a screenplay.

    Elements are immutable; use ``model_copy(update=...)`` to derive a
    changed element. The pagination annotations are derived data and are
    recomputed by every pagination run.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    type: ElementType
    content: str = ""
    sequence: int = Field(default=1, ge=1)
    scene_number: str | None = None
    dual: DualPosition | None = None
    is_continued: bool = False
    continues_next: bool = False
    kept_together: bool = False

    @field_validator("dual", mode="before")
    @classmethod
    def normalize_dual(cls, v: Any) -> Any:
        """Treat ``"none"`` and empty values as a normal (non-dual) block."""
        if v is None or (isinstance(v, str) and v.strip().lower() in {"", "none"}):
            return None
        return v

    @field_validator("scene_number", mode="before")
    @classmethod
    def normalize_scene_number(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_pagination_metadata(self) -> bool:
        return self.is_continued or self.continues_next or self.kept_together

    def without_pagination(self) -> ScriptElement:
        """Return this element with all pagination annotations cleared."""
        if not self.has_pagination_metadata:
            return self
        return self.model_copy(
            update=dict.fromkeys(PAGINATION_FIELDS, False)
        )

    def to_dict(self, include_pagination: bool = False) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape used by documents."""
        exclude = None if include_pagination else set(PAGINATION_FIELDS)
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude=exclude
        )


class TitlePageData(BaseModel):
    """Title page fields; every field is optional."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str | None = None
    credit: str | None = None
    authors: tuple[str, ...] = ()
    source: str | None = None
    draft_date: str | None = None
    draft_version: str | None = None
    contact: str | None = None
    copyright: str | None = None
    additional_info: str | None = None

    @field_validator("authors", mode="before")
    @classmethod
    def split_authors(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(a.strip() for a in v.split("\n") if a.strip())
        return v

    def is_empty(self) -> bool:
        return not any(
            value for value in self.model_dump(exclude_none=True).values()
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if not data.get("authors"):
            data.pop("authors", None)
        return data


class ScriptMetadata(BaseModel):
    """Lightweight metadata reported alongside parsed elements."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    author: str | None = None
    source_format: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def resequence(elements: list[ScriptElement] | tuple[ScriptElement, ...]) -> list[ScriptElement]:
    """Return copies of ``elements`` with sequences 1..n in order."""
    result = []
    for index, element in enumerate(elements, start=1):
        if element.sequence != index:
            element = element.model_copy(update={"sequence": index})
        result.append(element)
    return result


__all__ = [
    "PAGINATION_FIELDS",
    "SPEECH_TYPES",
    "DualPosition",
    "ElementType",
    "ScriptElement",
    "ScriptMetadata",
    "TitlePageData",
    "resequence",
]
