"""PDF text run extraction with page geometry, via PyMuPDF."""

from __future__ import annotations

from dataclasses import dataclass

import fitz  # PyMuPDF

from scriptkit.config import get_logger
from scriptkit.exceptions import ParseError

logger = get_logger(__name__)


@dataclass(frozen=True)
class TextRun:
    """A span of text with its box in points (72 per inch, top-left origin)."""

    page: int
    x: float
    right: float
    top: float
    bottom: float
    text: str
    page_height: float


@dataclass(frozen=True)
class PDFContent:
    """Everything the heuristic parser needs from a PDF."""

    runs: list[TextRun]
    page_count: int
    title: str | None = None
    author: str | None = None


def extract_text_runs(data: bytes) -> PDFContent:
    """Extract positioned text runs from PDF bytes.

    Args:
        data: Raw PDF bytes

    Returns:
        Text runs in extraction order plus document info

    Raises:
        ParseError: If the bytes are not a readable PDF
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise ParseError(
            message="Failed to open PDF file",
            hint="Check that the file is a valid, unencrypted PDF",
            details={"pdf_error": str(e)},
        ) from e

    runs: list[TextRun] = []
    try:
        for page_index in range(len(doc)):
            page = doc[page_index]
            page_height = page.rect.height
            for block in page.get_text("dict")["blocks"]:
                # Image blocks have type 1 and no lines
                if block.get("type", 0) != 0:
                    continue
                for line in block["lines"]:
                    for span in line["spans"]:
                        text = span["text"]
                        if not text.strip():
                            continue
                        x0, y0, x1, y1 = span["bbox"]
                        runs.append(
                            TextRun(
                                page=page_index + 1,
                                x=x0,
                                right=x1,
                                top=y0,
                                bottom=y1,
                                text=text,
                                page_height=page_height,
                            )
                        )
        info = doc.metadata or {}
        page_count = len(doc)
    finally:
        doc.close()

    logger.debug("Extracted PDF text runs", runs=len(runs), pages=page_count)
    return PDFContent(
        runs=runs,
        page_count=page_count,
        title=(info.get("title") or "").strip() or None,
        author=(info.get("author") or "").strip() or None,
    )
