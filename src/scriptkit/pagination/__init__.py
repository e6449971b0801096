"""Pagination engine for the US screenplay page standard."""

from scriptkit.pagination.engine import (
    CONTINUED_CUE_SUFFIX,
    SPLIT_SUFFIX,
    Page,
    PageLayout,
    PaginationEngine,
    fingerprint,
    page_map,
    paginate,
    source_id,
)
from scriptkit.pagination.metrics import DEFAULT_METRICS, PageMetrics, wrap_words
from scriptkit.pagination.render import display_text, render_page, render_text

__all__ = [
    "CONTINUED_CUE_SUFFIX",
    "DEFAULT_METRICS",
    "SPLIT_SUFFIX",
    "Page",
    "PageLayout",
    "PageMetrics",
    "PaginationEngine",
    "display_text",
    "fingerprint",
    "page_map",
    "paginate",
    "render_page",
    "render_text",
    "source_id",
    "wrap_words",
]
