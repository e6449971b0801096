"""Heuristic screenplay recovery from PDF glyph geometry.

Element types are inferred from each line's horizontal offset relative to
the dominant left margin of the document, then corrected by textual cues
(scene heading prefixes, transitions, parentheses). All distances are in
points.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass

from scriptkit.config import get_logger
from scriptkit.models import ElementType, ScriptMetadata
from scriptkit.parser.base import BaseParser, DraftElement, ParsedScript
from scriptkit.parser.pdf_extractor import PDFContent, TextRun, extract_text_runs

logger = get_logger(__name__)

# Header and footer bands (page numbers, revision marks)
MARGIN_BAND = 40.0
# Runs whose tops differ by less than this share a line
LINE_TOLERANCE = 4.0
# Consecutive same-type lines whose tops are closer than this (single line
# spacing) merge into one element
MERGE_GAP = 20.0

# Offset ladder from the dominant left margin
ACTION_MAX_OFFSET = 36.0
DIALOGUE_MAX_OFFSET = 100.0
PARENTHETICAL_MAX_OFFSET = 130.0
CHARACTER_MAX_OFFSET = 250.0

SCENE_HEADING_PATTERN = re.compile(r"^(INT\./EXT|INT/EXT|I/E|INT|EXT|EST)[\.\s]")
SCENE_NUMBER_PATTERN = re.compile(r"^\d+[A-Z]?\.?$")
CONTINUED_PATTERN = re.compile(r"\s*\((CONT'D|CONT’D|CONTINUED|CONT)\)\s*$", re.I)
MORE_PATTERN = re.compile(r"^\(MORE\)$", re.I)


@dataclass
class TextLine:
    """Runs sharing a baseline, with an optional leading scene number."""

    page: int
    x: float
    top: float
    bottom: float
    text: str
    scene_number: str | None = None


def _join_runs(runs: list[TextRun]) -> str:
    parts = [runs[0].text]
    for previous, run in zip(runs, runs[1:], strict=False):
        if run.x - previous.right > 1.0 and not parts[-1].endswith(" "):
            parts.append(" ")
        parts.append(run.text)
    return " ".join("".join(parts).split())


def group_lines(runs: list[TextRun]) -> list[TextLine]:
    """Drop margin runs and group the rest into sorted lines."""
    body = [
        run
        for run in runs
        if run.top >= MARGIN_BAND and run.bottom <= run.page_height - MARGIN_BAND
    ]
    body.sort(key=lambda run: (run.page, round(run.top, 1), run.x))

    grouped: list[list[TextRun]] = []
    for run in body:
        current = grouped[-1] if grouped else None
        if (
            current
            and current[0].page == run.page
            and abs(current[0].top - run.top) <= LINE_TOLERANCE
        ):
            current.append(run)
        else:
            grouped.append([run])

    lines = []
    for line_runs in grouped:
        line_runs.sort(key=lambda run: run.x)
        scene_number = None
        if len(line_runs) > 1 and SCENE_NUMBER_PATTERN.match(line_runs[0].text.strip()):
            scene_number = line_runs[0].text.strip().rstrip(".")
            line_runs = line_runs[1:]
            # Scene numbers are often repeated in the right margin
            if len(line_runs) > 1 and line_runs[-1].text.strip().rstrip(".") == scene_number:
                line_runs = line_runs[:-1]
        lines.append(
            TextLine(
                page=line_runs[0].page,
                x=line_runs[0].x,
                top=min(run.top for run in line_runs),
                bottom=max(run.bottom for run in line_runs),
                text=_join_runs(line_runs),
                scene_number=scene_number,
            )
        )
    return lines


def dominant_left_margin(lines: list[TextLine]) -> float:
    """Most common rounded line x; ties resolve to the leftmost value."""
    if not lines:
        return 0.0
    counts = Counter(round(line.x) for line in lines)
    best = max(counts.values())
    return float(min(x for x, count in counts.items() if count == best))


def classify_line(text: str, offset: float) -> ElementType:
    """Infer an element type from a line's text and offset from the margin."""
    upper = text.upper()
    if SCENE_HEADING_PATTERN.match(upper):
        return ElementType.SCENE_HEADING
    if text == upper and (upper.endswith("TO:") or upper.startswith("FADE")):
        return ElementType.TRANSITION
    is_wrapped = text.startswith("(") and text.endswith(")")
    if is_wrapped and offset >= ACTION_MAX_OFFSET:
        return ElementType.PARENTHETICAL

    if offset < ACTION_MAX_OFFSET:
        return ElementType.ACTION
    if offset < DIALOGUE_MAX_OFFSET:
        return ElementType.DIALOGUE
    if offset < PARENTHETICAL_MAX_OFFSET:
        return ElementType.PARENTHETICAL if text.startswith("(") else ElementType.DIALOGUE
    if offset < CHARACTER_MAX_OFFSET:
        has_letters = any(ch.isalpha() for ch in text)
        return ElementType.CHARACTER if has_letters and text == upper else ElementType.DIALOGUE
    return ElementType.TRANSITION


class PDFParser(BaseParser):
    """Best-effort PDF parser; never fails on ambiguous layout."""

    format_name = "pdf"

    NO_MERGE_TYPES = frozenset({ElementType.SCENE_HEADING, ElementType.CHARACTER})

    def build_drafts(self, lines: list[TextLine]) -> list[DraftElement]:
        baseline = dominant_left_margin(lines)
        drafts: list[DraftElement] = []
        previous: TextLine | None = None

        for line in lines:
            if MORE_PATTERN.match(line.text):
                continue
            element_type = classify_line(line.text, line.x - baseline)
            text = line.text
            if element_type == ElementType.CHARACTER:
                text = CONTINUED_PATTERN.sub("", text)

            last = drafts[-1] if drafts else None
            if (
                last is not None
                and previous is not None
                and last.type == element_type
                and element_type not in self.NO_MERGE_TYPES
                and previous.page == line.page
                and line.top - previous.top < MERGE_GAP
            ):
                last.content += " " + text
            else:
                drafts.append(
                    DraftElement(
                        type=element_type,
                        content=text,
                        scene_number=(
                            line.scene_number
                            if element_type == ElementType.SCENE_HEADING
                            else None
                        ),
                    )
                )
            previous = line
        return drafts

    def parse_content(self, content: PDFContent) -> ParsedScript:
        lines = group_lines(content.runs)
        elements = self.finish(self.build_drafts(lines))
        logger.info(
            "Parsed PDF script",
            pages=content.page_count,
            lines=len(lines),
            elements=len(elements),
        )
        return ParsedScript(
            elements=elements,
            metadata=ScriptMetadata(
                title=content.title,
                author=content.author,
                source_format=self.format_name,
            ),
        )

    def parse(self, data: bytes | str) -> ParsedScript:
        """Parse PDF bytes into the element stream."""
        if isinstance(data, str):
            data = data.encode("latin-1")
        return self.parse_content(extract_text_runs(data))
