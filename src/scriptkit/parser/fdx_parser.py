"""Final Draft (FDX) XML parser built on lxml."""

from __future__ import annotations

from typing import Any, ClassVar

from lxml import etree

from scriptkit.config import get_logger
from scriptkit.exceptions import ParseError
from scriptkit.models import (
    SPEECH_TYPES,
    DualPosition,
    ElementType,
    ScriptMetadata,
    TitlePageData,
)
from scriptkit.parser.base import (
    BaseParser,
    DraftElement,
    ParsedScript,
    assign_dual_columns,
)

logger = get_logger(__name__)


class FDXParser(BaseParser):
    """Parse Final Draft XML into the element stream."""

    format_name = "fdx"

    TYPE_MAP: ClassVar[dict[str, ElementType]] = {
        "scene heading": ElementType.SCENE_HEADING,
        "shot": ElementType.SCENE_HEADING,
        "action": ElementType.ACTION,
        "general": ElementType.ACTION,
        "character": ElementType.CHARACTER,
        "dialogue": ElementType.DIALOGUE,
        "parenthetical": ElementType.PARENTHETICAL,
        "transition": ElementType.TRANSITION,
    }

    TITLE_FIELD_MAP: ClassVar[dict[str, str]] = {
        "title": "title",
        "credit": "credit",
        "author": "authors",
        "authors": "authors",
        "source": "source",
        "draft date": "draft_date",
        "draft": "draft_version",
        "draft version": "draft_version",
        "revision": "draft_version",
        "contact": "contact",
        "copyright": "copyright",
    }

    CREDIT_LINES = frozenset({"by", "written by", "screenplay by", "teleplay by"})
    # Paragraphs inside these containers are annotations, not script text
    SKIPPED_CONTAINERS = frozenset({"ScriptNote", "ScriptNotes", "Notes"})

    @staticmethod
    def _paragraph_text(paragraph: Any) -> str:
        """Concatenate the Text runs of a paragraph and collapse whitespace."""
        runs = ["".join(text.itertext()) for text in paragraph.iterchildren("Text")]
        return " ".join("".join(runs).split())

    def _load_root(self, data: bytes | str) -> Any:
        if isinstance(data, str):
            data = data.encode("utf-8")
        parser = etree.XMLParser(
            resolve_entities=False, no_network=True, remove_comments=True
        )
        try:
            root = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            raise ParseError(
                message="Failed to parse FDX file: malformed XML",
                hint="Re-export the script from Final Draft",
                details={"xml_error": str(e)},
            ) from e
        if root.tag != "FinalDraft":
            raise ParseError(
                message="Failed to parse FDX file: not a Final Draft document",
                hint="The root element must be <FinalDraft>",
                details={"root": str(root.tag)},
            )
        return root

    def _body_paragraphs(self, root: Any) -> list[Any]:
        """Leaf paragraphs of the script body in document order."""
        content = root.find("Content")
        if content is None:
            return []
        leaves = []
        for paragraph in content.iter("Paragraph"):
            if paragraph.find(".//Paragraph") is not None:
                continue
            if any(
                ancestor.tag in self.SKIPPED_CONTAINERS
                for ancestor in paragraph.iterancestors()
            ):
                continue
            leaves.append(paragraph)
        return leaves

    def _build_drafts(self, paragraphs: list[Any]) -> list[DraftElement]:
        drafts: list[DraftElement] = []
        current_dual_group: Any = None
        cues_in_group = 0

        for paragraph in paragraphs:
            text = self._paragraph_text(paragraph)
            if not text:
                continue

            type_name = (paragraph.get("Type") or "General").strip().lower()
            element_type = self.TYPE_MAP.get(type_name, ElementType.ACTION)
            draft = DraftElement(type=element_type, content=text)

            if element_type == ElementType.SCENE_HEADING:
                draft.scene_number = paragraph.get("Number") or None

            group = next(paragraph.iterancestors("DualDialogue"), None)
            if group is not None:
                if group is not current_dual_group:
                    current_dual_group = group
                    cues_in_group = 0
                if element_type == ElementType.CHARACTER:
                    cues_in_group += 1
                if element_type == ElementType.CHARACTER or element_type in SPEECH_TYPES:
                    draft.dual = (
                        DualPosition.LEFT if cues_in_group <= 1 else DualPosition.RIGHT
                    )
            elif (
                element_type == ElementType.CHARACTER
                and (paragraph.get("Dual") or "").lower() == "yes"
            ):
                draft.dual = DualPosition.RIGHT

            drafts.append(draft)

        assign_dual_columns(drafts)
        return drafts

    def _parse_title_page(self, root: Any) -> TitlePageData | None:
        paragraphs = root.findall("TitlePage/Content/Paragraph")
        fields: dict[str, Any] = {}
        authors: list[str] = []
        extra: list[str] = []
        expect_author = False

        for paragraph in paragraphs:
            text = self._paragraph_text(paragraph)
            if not text:
                continue
            field = self.TITLE_FIELD_MAP.get((paragraph.get("Type") or "").lower())

            if field == "authors" or expect_author:
                authors.append(text)
                expect_author = False
            elif field and field not in fields:
                fields[field] = text
            elif text.lower() in self.CREDIT_LINES:
                fields.setdefault("credit", text)
                expect_author = True
            elif "title" not in fields:
                fields["title"] = text
            else:
                extra.append(text)

        if authors:
            fields["authors"] = tuple(authors)
        if extra:
            fields["additional_info"] = "\n".join(extra)
        return TitlePageData(**fields) if fields else None

    def parse(self, data: bytes | str) -> ParsedScript:
        """Parse FDX XML into elements, title page and metadata.

        Args:
            data: Raw FDX bytes or text

        Returns:
            Parsed elements with title page and metadata

        Raises:
            ParseError: If the XML is malformed or not a Final Draft document
        """
        root = self._load_root(data)
        paragraphs = self._body_paragraphs(root)
        elements = self.finish(self._build_drafts(paragraphs))
        title_page = self._parse_title_page(root)

        metadata = ScriptMetadata(source_format=self.format_name)
        if title_page:
            metadata = ScriptMetadata(
                title=title_page.title,
                author=", ".join(title_page.authors) or None,
                source_format=self.format_name,
            )
        logger.info(
            "Parsed FDX script",
            paragraphs=len(paragraphs),
            elements=len(elements),
        )
        return ParsedScript(elements=elements, metadata=metadata, title_page=title_page)
