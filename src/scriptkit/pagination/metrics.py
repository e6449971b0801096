"""Line metrics of the US screenplay page (12pt Courier, 6 lines per inch)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from scriptkit.models import ElementType, ScriptElement

PAGE_LINES = 54

DEFAULT_WIDTHS: Mapping[ElementType, int] = MappingProxyType(
    {
        ElementType.SCENE_HEADING: 60,
        ElementType.ACTION: 60,
        ElementType.CHARACTER: 35,
        ElementType.DIALOGUE: 35,
        ElementType.PARENTHETICAL: 25,
        ElementType.TRANSITION: 20,
    }
)

DEFAULT_SPACING: Mapping[ElementType, int] = MappingProxyType(
    {
        ElementType.SCENE_HEADING: 2,
        ElementType.ACTION: 1,
        ElementType.CHARACTER: 1,
        ElementType.DIALOGUE: 0,
        ElementType.PARENTHETICAL: 0,
        ElementType.TRANSITION: 1,
    }
)


def wrap_words(text: str, width: int) -> list[str]:
    """Greedy word wrap; words longer than ``width`` are hard-wrapped."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        while len(word) > width:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:width])
            word = word[width:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


@dataclass(frozen=True)
class PageMetrics:
    """Page capacity, column widths and spacing, all in lines/characters.

    The line cursor starts at 1 on each page and an element fits while
    ``cursor + height <= capacity``.
    """

    capacity: int = PAGE_LINES
    widths: Mapping[ElementType, int] = field(default_factory=lambda: DEFAULT_WIDTHS)
    spacing: Mapping[ElementType, int] = field(default_factory=lambda: DEFAULT_SPACING)
    # Lines of a split dialogue block required on each side of the break
    min_split_lines: int = 2
    # Line reserved at the page bottom for (MORE)
    more_lines: int = 1

    def wrap(self, element: ScriptElement) -> list[str]:
        return wrap_words(element.content, self.widths[element.type])

    def line_count(self, element: ScriptElement) -> int:
        """Wrapped content lines; empty content still takes one line."""
        return max(1, len(self.wrap(element)))

    def spacing_before(self, element: ScriptElement, first_on_page: bool) -> int:
        return 0 if first_on_page else self.spacing[element.type]

    def height(self, element: ScriptElement, first_on_page: bool = False) -> int:
        return self.spacing_before(element, first_on_page) + self.line_count(element)


DEFAULT_METRICS = PageMetrics()
