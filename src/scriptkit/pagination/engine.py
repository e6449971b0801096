"""Page layout with keep-together rules, dual dialogue and continuations.

The engine is a pure function of its input: pagination annotations on the
incoming elements are cleared first, the input is never mutated and the
same elements always produce the same pages.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from scriptkit.config import get_logger
from scriptkit.models import SPEECH_TYPES, DualPosition, ElementType, ScriptElement
from scriptkit.pagination.metrics import DEFAULT_METRICS, PageMetrics

logger = get_logger(__name__)

# Id suffixes of elements derived during layout
SPLIT_SUFFIX = ":cont"
CONTINUED_CUE_SUFFIX = ":contd"


def source_id(layout_id: str) -> str:
    """Map a layout element id back to the id of the element it came from."""
    for suffix in (CONTINUED_CUE_SUFFIX, SPLIT_SUFFIX):
        if layout_id.endswith(suffix):
            return layout_id[: -len(suffix)]
    return layout_id


def fingerprint(elements: Sequence[ScriptElement]) -> str:
    """Stable cache key for a layout input, ignoring pagination annotations."""
    payload = json.dumps(
        [element.to_dict() for element in elements],
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class Page:
    """One laid out page; elements carry their continuation markers."""

    number: int
    elements: tuple[ScriptElement, ...]
    lines_used: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "pageNumber": self.number,
            "linesUsed": self.lines_used,
            "elements": [e.to_dict(include_pagination=True) for e in self.elements],
        }


@dataclass(frozen=True)
class PageLayout:
    """Ordered pages; the flat element to page map is derived from them."""

    pages: tuple[Page, ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page_map(self) -> dict[str, int]:
        """Source element id -> first page on which any part of it appears."""
        mapping: dict[str, int] = {}
        for page in self.pages:
            for element in page.elements:
                mapping.setdefault(source_id(element.id), page.number)
        return mapping

    def page_of(self, element_id: str) -> int | None:
        return self.page_map().get(element_id)

    def elements(self) -> list[ScriptElement]:
        return [element for page in self.pages for element in page.elements]

    def to_dict(self) -> dict[str, Any]:
        return {
            "pageCount": self.page_count,
            "pages": [page.to_dict() for page in self.pages],
        }


@dataclass
class _PageBuilder:
    metrics: PageMetrics
    pages: list[Page] = field(default_factory=list)
    current: list[ScriptElement] = field(default_factory=list)
    cursor: int = 1

    @property
    def first_on_page(self) -> bool:
        return not self.current

    @property
    def available(self) -> int:
        return self.metrics.capacity - self.cursor

    def fits(self, height: int) -> bool:
        return self.cursor + height <= self.metrics.capacity

    def place(self, element: ScriptElement, height: int) -> None:
        self.current.append(element)
        self.cursor += height

    def new_page(self) -> None:
        if self.current:
            self.pages.append(
                Page(
                    number=len(self.pages) + 1,
                    elements=tuple(self.current),
                    lines_used=self.cursor - 1,
                )
            )
        self.current = []
        self.cursor = 1

    def finish(self) -> PageLayout:
        self.new_page()
        return PageLayout(pages=tuple(self.pages))


class PaginationEngine:
    """Lay out an element sequence onto fixed-capacity pages.

    Keep-together rules, in priority order:

    1. A character cue must fit together with at least two lines of its
       dialogue, otherwise the cue moves to the next page.
    2. A scene heading must fit together with the start of what follows it,
       unless that is another scene heading.
    3. A two or three line action block never leaves a single line at the
       bottom of a page.
    4. Transitions only move when they overflow.

    Speaker blocks that still overflow are split with (MORE) / (CONT'D)
    markers; dual dialogue pairs are never split.
    """

    def __init__(self, metrics: PageMetrics = DEFAULT_METRICS) -> None:
        self.metrics = metrics

    def paginate(self, elements: Sequence[ScriptElement]) -> PageLayout:
        items = [element.without_pagination() for element in elements]
        builder = _PageBuilder(self.metrics)

        index = 0
        while index < len(items):
            element = items[index]
            if element.type == ElementType.CHARACTER:
                run_end = self._speech_end(items, index)
                partner = items[run_end] if run_end < len(items) else None
                if (
                    element.dual == DualPosition.LEFT
                    and run_end > index + 1
                    and partner is not None
                    and partner.type == ElementType.CHARACTER
                    and partner.dual == DualPosition.RIGHT
                ):
                    right_end = self._speech_end(items, run_end)
                    self._layout_dual(
                        builder, items[index:run_end], items[run_end:right_end]
                    )
                    index = right_end
                    continue
                if run_end > index + 1:
                    self._layout_speaker(builder, element, items[index + 1 : run_end])
                    index = run_end
                    continue
            self._layout_single(builder, items, index)
            index += 1

        layout = builder.finish()
        logger.debug(
            "Paginated elements", elements=len(items), pages=layout.page_count
        )
        return layout

    @staticmethod
    def _speech_end(items: list[ScriptElement], cue_index: int) -> int:
        end = cue_index + 1
        while end < len(items) and items[end].type in SPEECH_TYPES:
            end += 1
        return end

    def _block_lines(self, items: list[ScriptElement], index: int) -> int:
        """Content lines of the element at ``index`` plus its dialogue, if a cue."""
        lines = self.metrics.line_count(items[index])
        if items[index].type == ElementType.CHARACTER:
            for element in items[index + 1 : self._speech_end(items, index)]:
                lines += self.metrics.line_count(element)
        return lines

    def _speaker_starts_here(
        self, items: list[ScriptElement], cue_index: int, available: int
    ) -> bool:
        """Whether the speaker block at ``cue_index`` starts in ``available`` lines.

        Mirrors the decisions of :meth:`_layout_speaker` and :meth:`_layout_dual`
        for a cue that is not first on its page.
        """
        metrics = self.metrics
        cue = items[cue_index]
        run_end = self._speech_end(items, cue_index)
        run = items[cue_index + 1 : run_end]
        cue_height = metrics.height(cue, False)
        run_lines = [metrics.line_count(element) for element in run]

        partner = items[run_end] if run_end < len(items) else None
        if (
            cue.dual == DualPosition.LEFT
            and partner is not None
            and partner.type == ElementType.CHARACTER
            and partner.dual == DualPosition.RIGHT
        ):
            right = items[run_end + 1 : self._speech_end(items, run_end)]
            right_height = metrics.height(partner, False) + sum(
                metrics.line_count(element) for element in right
            )
            return max(cue_height + sum(run_lines), right_height) <= available

        if cue_height + sum(run_lines) <= available:
            return True
        budget = available - cue_height - metrics.more_lines
        return self._split_run(run, run_lines, budget) is not None

    def _layout_single(
        self, builder: _PageBuilder, items: list[ScriptElement], index: int
    ) -> None:
        metrics = self.metrics
        element = items[index]
        first = builder.first_on_page
        height = metrics.height(element, first)
        keep_together = False

        following = items[index + 1] if index + 1 < len(items) else None
        if (
            element.type == ElementType.SCENE_HEADING
            and following is not None
            and following.type != ElementType.SCENE_HEADING
        ):
            if (
                following.type == ElementType.CHARACTER
                and self._speech_end(items, index + 1) > index + 2
            ):
                room = builder.available - height
                keep_together = room < 0 or not self._speaker_starts_here(
                    items, index + 1, room
                )
            else:
                needed = (
                    height
                    + metrics.spacing_before(following, False)
                    + min(metrics.min_split_lines, self._block_lines(items, index + 1))
                )
                keep_together = not builder.fits(needed)
        elif element.type == ElementType.ACTION and not builder.fits(height):
            # Actions never split: the guard only marks why a short block moved
            lines = metrics.line_count(element)
            room = builder.available - metrics.spacing_before(element, first)
            keep_together = 2 <= lines <= 3 and room == 1

        if (keep_together or not builder.fits(height)) and not first:
            builder.new_page()
            height = metrics.height(element, True)
            if keep_together:
                element = element.model_copy(update={"kept_together": True})
        builder.place(element, height)

    def _layout_speaker(
        self, builder: _PageBuilder, cue: ScriptElement, run: list[ScriptElement]
    ) -> None:
        """Place a cue with its dialogue, splitting across pages as needed."""
        metrics = self.metrics
        while True:
            first = builder.first_on_page
            cue_height = metrics.height(cue, first)
            run_lines = [metrics.line_count(element) for element in run]

            if builder.fits(cue_height + sum(run_lines)):
                builder.place(cue, cue_height)
                for element, lines in zip(run, run_lines, strict=True):
                    builder.place(element, lines)
                return

            budget = builder.available - cue_height - metrics.more_lines
            split = self._split_run(run, run_lines, budget)
            if split is None:
                if first:
                    # Nothing better is possible on an empty page
                    builder.place(cue, cue_height)
                    for element, lines in zip(run, run_lines, strict=True):
                        builder.place(element, lines)
                    return
                builder.new_page()
                cue = cue.model_copy(update={"kept_together": True})
                continue

            head, tail = split
            builder.place(cue, cue_height)
            for position, element in enumerate(head):
                if position == len(head) - 1:
                    element = element.model_copy(update={"continues_next": True})
                builder.place(element, metrics.line_count(element))
            builder.cursor += metrics.more_lines
            builder.new_page()

            cue = cue.model_copy(
                update={
                    "id": source_id(cue.id) + CONTINUED_CUE_SUFFIX,
                    "is_continued": True,
                    "kept_together": False,
                }
            )
            run = tail

    def _split_run(
        self, run: list[ScriptElement], run_lines: list[int], budget: int
    ) -> tuple[list[ScriptElement], list[ScriptElement]] | None:
        """Split dialogue so that ``budget`` lines stay on this page.

        Returns ``None`` when no split leaves at least two lines of the block
        on this page, or when the page would end on a parenthetical.
        """
        metrics = self.metrics
        minimum = metrics.min_split_lines
        head: list[tuple[ScriptElement, int]] = []
        tail: list[ScriptElement] = []
        used = 0

        for position, (element, lines) in enumerate(zip(run, run_lines, strict=True)):
            if lines <= budget - used:
                head.append((element, lines))
                used += lines
                continue
            take = min(budget - used, lines - minimum)
            if element.type == ElementType.DIALOGUE and take >= minimum:
                wrapped = metrics.wrap(element)
                head.append(
                    (element.model_copy(update={"content": " ".join(wrapped[:take])}), take)
                )
                used += take
                tail = [
                    element.model_copy(
                        update={
                            "id": source_id(element.id) + SPLIT_SUFFIX,
                            "content": " ".join(wrapped[take:]),
                        }
                    ),
                    *run[position + 1 :],
                ]
            else:
                tail = list(run[position:])
            break

        while head and head[-1][0].type == ElementType.PARENTHETICAL:
            element, lines = head.pop()
            used -= lines
            tail.insert(0, element)

        if not head or not tail or used < min(minimum, sum(run_lines)):
            return None
        return [element for element, _ in head], tail

    def _layout_dual(
        self,
        builder: _PageBuilder,
        left: list[ScriptElement],
        right: list[ScriptElement],
    ) -> None:
        """Place two speaker blocks side by side; the pair never splits."""
        metrics = self.metrics

        def column_height(block: list[ScriptElement], first: bool) -> int:
            return metrics.height(block[0], first) + sum(
                metrics.line_count(element) for element in block[1:]
            )

        first = builder.first_on_page
        tallest = max(column_height(left, first), column_height(right, first))
        if not builder.fits(tallest) and not first:
            builder.new_page()
            first = True
            left = [left[0].model_copy(update={"kept_together": True}), *left[1:]]

        start = builder.cursor
        bottoms = []
        for column in (left, right):
            builder.cursor = start
            builder.place(column[0], metrics.height(column[0], first))
            for element in column[1:]:
                builder.place(element, metrics.line_count(element))
            bottoms.append(builder.cursor)
        builder.cursor = max(bottoms)


def paginate(
    elements: Sequence[ScriptElement], metrics: PageMetrics = DEFAULT_METRICS
) -> PageLayout:
    """Lay out ``elements`` with the default engine."""
    return PaginationEngine(metrics).paginate(elements)


def page_map(
    elements: Sequence[ScriptElement], metrics: PageMetrics = DEFAULT_METRICS
) -> dict[str, int]:
    """Flat element id -> page number view of :func:`paginate`."""
    return paginate(elements, metrics).page_map()
