"""Plain text rendering of laid out pages."""

from __future__ import annotations

from scriptkit.models import ElementType, ScriptElement
from scriptkit.pagination.engine import Page, PageLayout
from scriptkit.pagination.metrics import DEFAULT_METRICS, PageMetrics, wrap_words

# Left indent in characters, measured from the action margin
INDENTS: dict[ElementType, int] = {
    ElementType.SCENE_HEADING: 0,
    ElementType.ACTION: 0,
    ElementType.CHARACTER: 22,
    ElementType.DIALOGUE: 10,
    ElementType.PARENTHETICAL: 16,
    ElementType.TRANSITION: 45,
}
MORE_INDENT = 22
CONTINUED_MARKER = " (CONT'D)"
MORE_MARKER = "(MORE)"


def display_text(element: ScriptElement) -> str:
    """Printed text of an element, including the CONT'D marker on cues."""
    if element.type == ElementType.CHARACTER and element.is_continued:
        return element.content + CONTINUED_MARKER
    if element.type == ElementType.SCENE_HEADING and element.scene_number:
        return f"{element.scene_number} {element.content}"
    return element.content


def render_page(page: Page, metrics: PageMetrics = DEFAULT_METRICS) -> str:
    lines: list[str] = [f"{page.number}.".rjust(INDENTS[ElementType.TRANSITION] + 15), ""]
    for position, element in enumerate(page.elements):
        if position and metrics.spacing[element.type]:
            lines.extend([""] * metrics.spacing[element.type])
        indent = " " * INDENTS[element.type]
        width = metrics.widths[element.type]
        wrapped = wrap_words(display_text(element), width) or [""]
        lines.extend(indent + line for line in wrapped)
        if element.continues_next:
            lines.append(" " * MORE_INDENT + MORE_MARKER)
    return "\n".join(lines)


def render_text(layout: PageLayout, metrics: PageMetrics = DEFAULT_METRICS) -> str:
    """Render every page, separated by form feeds."""
    return "\n\f\n".join(render_page(page, metrics) for page in layout.pages)
