"""Generate Fountain text from a document."""

from __future__ import annotations

from scriptkit.document import ScriptDocument
from scriptkit.models import DualPosition, ElementType, TitlePageData

SCENE_PREFIXES = ("INT", "EXT", "EST", "INT./EXT", "INT/EXT", "I/E", "I./E")
TWO_SPACES = "  "

# Element types that start a new paragraph
BLOCK_TYPES = frozenset(
    {
        ElementType.SCENE_HEADING,
        ElementType.ACTION,
        ElementType.CHARACTER,
        ElementType.TRANSITION,
    }
)


def _looks_like_scene(text: str) -> bool:
    return text.upper().startswith(SCENE_PREFIXES)


def _title_page_lines(title_page: TitlePageData) -> list[str]:
    lines: list[str] = []

    def add(key: str, value: str | None) -> None:
        if not value:
            return
        parts = value.split("\n")
        if len(parts) == 1:
            lines.append(f"{key}: {value}")
        else:
            lines.append(f"{key}:")
            lines.extend(f"    {part}" for part in parts)

    add("Title", title_page.title)
    add("Credit", title_page.credit)
    add("Author", "\n".join(title_page.authors) or None)
    add("Source", title_page.source)
    add("Draft date", title_page.draft_date)
    add("Draft", title_page.draft_version)
    add("Contact", title_page.contact)
    add("Copyright", title_page.copyright)
    add("Notes", title_page.additional_info)
    return lines


def to_fountain(document: ScriptDocument) -> str:
    """Render a document as Fountain text."""
    lines: list[str] = []
    if document.title_page is not None and not document.title_page.is_empty():
        lines.extend(_title_page_lines(document.title_page))

    for element in document.elements:
        text = element.content

        if element.type in BLOCK_TYPES and lines and lines[-1] != "":
            lines.append("")

        if element.type == ElementType.SCENE_HEADING:
            if not _looks_like_scene(text):
                text = "." + text
            if element.scene_number:
                text += f" #{element.scene_number}#"
        elif element.type == ElementType.ACTION:
            # Upper-case action lines would read as character cues
            text = "\n".join(
                line + TWO_SPACES if line.isupper() else line
                for line in text.split("\n")
            )
        elif element.type == ElementType.CHARACTER:
            if not text.isupper():
                text = "@" + text
            if element.dual == DualPosition.RIGHT:
                text += " ^"
        elif element.type == ElementType.TRANSITION:
            if not text.endswith("TO:"):
                text = "> " + text
        elif element.type == ElementType.DIALOGUE:
            text = "\n".join(line or TWO_SPACES for line in text.split("\n"))

        lines.append(text)

    return "\n".join(lines) + "\n"
