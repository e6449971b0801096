"""Turn jouvence paragraphs into draft elements, correcting what it misses."""

import re
from typing import Any

from jouvence.document import (
    TYPE_ACTION,
    TYPE_CENTEREDACTION,
    TYPE_CHARACTER,
    TYPE_DIALOG,
    TYPE_LYRICS,
    TYPE_PARENTHETICAL,
    TYPE_TRANSITION,
)

from scriptkit.config import get_logger
from scriptkit.models import SPEECH_TYPES, DualPosition, ElementType
from scriptkit.parser.base import DraftElement

logger = get_logger(__name__)


class FountainElementProcessor:
    """Map a parsed jouvence document onto the screenplay element stream."""

    SCENE_NUMBER_PATTERN = re.compile(r"\s*#([^#\n]+)#\s*$")
    TRANSITION_PATTERN = re.compile(r"^[A-Z][A-Z\s.']*:$")
    # A single lower-case word, optionally with an extension such as (V.O.)
    LOWERCASE_CUE_PATTERN = re.compile(r"^[a-z][a-z'\-]*(\s*\([^)]*\))?\s*\^?$")
    BLOCK_SEPARATOR = re.compile(r"\n[ \t]*\n")

    def __init__(self) -> None:
        self.drafts: list[DraftElement] = []

    def process(self, doc: Any) -> list[DraftElement]:
        """Walk every jouvence scene and return draft elements in order."""
        self.drafts = []
        for scene in doc.scenes:
            if scene.header:
                self._add_scene_heading(scene.header)
            for paragraph in scene.paragraphs:
                self._process_paragraph(paragraph)
        return self.drafts

    @property
    def last_type(self) -> ElementType | None:
        return self.drafts[-1].type if self.drafts else None

    def _emit(self, element_type: ElementType, content: str, **kwargs: Any) -> None:
        self.drafts.append(DraftElement(type=element_type, content=content, **kwargs))

    def _add_scene_heading(self, header: str) -> None:
        heading = header.strip()
        scene_number = None
        match = self.SCENE_NUMBER_PATTERN.search(heading)
        if match:
            scene_number = match.group(1).strip()
            heading = heading[: match.start()].rstrip()
        if heading.startswith(".") and not heading.startswith(".."):
            heading = heading[1:].lstrip()
        self._emit(ElementType.SCENE_HEADING, heading, scene_number=scene_number)

    def _process_paragraph(self, paragraph: Any) -> None:
        text = (paragraph.text or "").strip()
        element_type = paragraph.type

        if element_type == TYPE_CHARACTER:
            self._add_character(text)
        elif element_type == TYPE_DIALOG:
            self._add_dialogue(text)
        elif element_type == TYPE_PARENTHETICAL:
            self._emit(ElementType.PARENTHETICAL, self.wrap_parenthetical(text))
        elif element_type == TYPE_TRANSITION:
            self._emit(ElementType.TRANSITION, text.lstrip(">").strip())
        elif element_type == TYPE_ACTION:
            self._process_action(paragraph.text or "")
        elif element_type in (TYPE_CENTEREDACTION, TYPE_LYRICS):
            content = text.strip("><~ \t")
            if content:
                self._emit(ElementType.ACTION, content)
        else:
            # Page breaks, sections and synopses carry no layout content
            logger.debug("Skipping fountain paragraph", paragraph_type=element_type)

    def _add_character(self, text: str) -> None:
        dual = None
        name = text.lstrip("@").strip()
        if name.endswith("^"):
            name = name[:-1].rstrip()
            dual = DualPosition.RIGHT
        self._emit(ElementType.CHARACTER, name, dual=dual)

    def _add_dialogue(self, text: str) -> None:
        if not text:
            return
        if self.last_type == ElementType.DIALOGUE:
            # jouvence splits dialogue at line breaks inside one speech
            self.drafts[-1].content += "\n" + text
            return
        self._emit(ElementType.DIALOGUE, text)

    def _process_action(self, text: str) -> None:
        """Split action text into blocks and reclassify the ones jouvence missed.

        jouvence treats speaker blocks with lower-case or unusual cues as
        action, so each blank-line separated block is checked for a cue line
        followed by speech, a parenthetical continuing the previous speech,
        or a colon-terminated transition.
        """
        for block in self.BLOCK_SEPARATOR.split(text.strip("\n")):
            lines = [line.strip() for line in block.split("\n") if line.strip()]
            if not lines:
                continue

            if len(lines) == 1 and self.TRANSITION_PATTERN.match(lines[0]):
                self._emit(ElementType.TRANSITION, lines[0])
            elif len(lines) > 1 and self.is_character_cue(lines[0]):
                self._add_character(lines[0])
                self._add_speech(lines[1:])
            elif (
                self.last_type in SPEECH_TYPES
                and self._is_parenthetical_line(lines[0])
            ):
                self._add_speech(lines)
            else:
                self._emit(ElementType.ACTION, "\n".join(lines))

    def _add_speech(self, lines: list[str]) -> None:
        for line in lines:
            if self._is_parenthetical_line(line):
                self._emit(ElementType.PARENTHETICAL, line)
            elif self.last_type == ElementType.DIALOGUE:
                self.drafts[-1].content += "\n" + line
            else:
                self._emit(ElementType.DIALOGUE, line)

    @staticmethod
    def _is_parenthetical_line(line: str) -> bool:
        return line.startswith("(") and line.endswith(")")

    @staticmethod
    def wrap_parenthetical(text: str) -> str:
        """Force parenthetical text into a single pair of parentheses."""
        if text.startswith("(") and text.endswith(")"):
            return text
        return f"({text.strip('()').strip()})"

    def is_character_cue(self, line: str) -> bool:
        """Check if a line looks like a character cue.

        Cues are mostly upper-case and may contain apostrophes, numbers,
        periods and an extension. A single lower-case word is accepted too,
        so a sloppy cue is kept as a character and flagged by validation.
        """
        line = line.lstrip("@").strip()
        if not line or len(line) > 50 or line.endswith(":"):
            return False

        line_upper = line.upper()
        if line_upper.startswith(("INT.", "EXT.", "EST.", "I/E", "INT/EXT")):
            return False
        if line_upper.startswith(("FADE ", "CUT TO", "MONTAGE", "INTERCUT")):
            return False

        if self.LOWERCASE_CUE_PATTERN.match(line):
            return True

        cleaned = re.sub(r"['\.\(\)0-9\s\-\^]", "", line)
        return cleaned.isupper() and len(cleaned) > 1
