"""Shared building blocks for the format parsers."""

from __future__ import annotations

import hashlib
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from scriptkit.models import (
    SPEECH_TYPES,
    DualPosition,
    ElementType,
    ScriptElement,
    ScriptMetadata,
    TitlePageData,
)


def stable_element_id(source: str, index: int, text: str) -> str:
    """Derive a deterministic element id from its source position and text.

    The same input bytes always produce the same ids, so repeated imports of
    an unchanged file yield identical element streams.
    """
    digest = hashlib.sha256(f"{source}\x00{index}\x00{text}".encode()).digest()
    return str(uuid.UUID(bytes=digest[:16]))


@dataclass
class DraftElement:
    """Mutable element under construction inside a parser."""

    type: ElementType
    content: str
    scene_number: str | None = None
    dual: DualPosition | None = None


@dataclass
class ParsedScript:
    """Output of every format parser."""

    elements: list[ScriptElement]
    metadata: ScriptMetadata = field(default_factory=ScriptMetadata)
    title_page: TitlePageData | None = None


def assign_dual_columns(drafts: list[DraftElement]) -> None:
    """Complete dual dialogue tagging in place.

    Parsers tag only the cue of the second speaker as ``RIGHT``. This pass
    spreads the tag over that speaker's dialogue and parentheticals and tags
    the immediately preceding speaker block ``LEFT``. A right cue with no
    speaker block right before it keeps its tag and stays unpaired.
    """
    for index, draft in enumerate(drafts):
        if draft.type != ElementType.CHARACTER or draft.dual != DualPosition.RIGHT:
            continue

        follow = index + 1
        while follow < len(drafts) and drafts[follow].type in SPEECH_TYPES:
            drafts[follow].dual = DualPosition.RIGHT
            follow += 1

        start = index - 1
        while start >= 0 and drafts[start].type in SPEECH_TYPES:
            start -= 1
        if start < 0 or start == index - 1:
            continue
        if drafts[start].type != ElementType.CHARACTER or drafts[start].dual:
            continue
        for left in drafts[start:index]:
            left.dual = DualPosition.LEFT


class BaseParser(ABC):
    """Common interface: turn raw bytes or text into a ``ParsedScript``."""

    #: Short format name, used in ids, metadata and log events
    format_name: str = ""

    @abstractmethod
    def parse(self, data: bytes | str) -> ParsedScript:
        """Parse raw input into elements, metadata and an optional title page."""

    def finish(self, drafts: list[DraftElement]) -> list[ScriptElement]:
        """Freeze drafts into elements with sequences 1..n and stable ids."""
        elements = []
        for index, draft in enumerate(drafts, start=1):
            elements.append(
                ScriptElement(
                    id=stable_element_id(self.format_name, index, draft.content),
                    type=draft.type,
                    content=draft.content,
                    sequence=index,
                    scene_number=draft.scene_number,
                    dual=draft.dual,
                )
            )
        return elements
