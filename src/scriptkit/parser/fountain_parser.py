"""Fountain screenplay format parser using jouvence library."""

import re
from typing import Any

from jouvence.parser import JouvenceParser

from scriptkit.config import get_logger, get_settings
from scriptkit.exceptions import ParseError
from scriptkit.models import ScriptMetadata, TitlePageData
from scriptkit.parser.base import BaseParser, ParsedScript, assign_dual_columns
from scriptkit.parser.fountain_processor import FountainElementProcessor

logger = get_logger(__name__)


class FountainParser(BaseParser):
    """Parse Fountain screenplay format using jouvence."""

    format_name = "fountain"

    BONEYARD_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
    NOTE_PATTERN = re.compile(r"\[\[.*?\]\]", re.DOTALL)

    AUTHOR_KEYS = ("author", "authors", "writer", "writers", "written by")
    TITLE_PAGE_KEYS: dict[str, tuple[str, ...]] = {
        "title": ("title",),
        "credit": ("credit",),
        "source": ("source",),
        "draft_date": ("draft date", "date"),
        "draft_version": ("draft version", "draft", "revision", "version"),
        "contact": ("contact",),
        "copyright": ("copyright",),
    }

    def __init__(self) -> None:
        """Initialize the fountain parser."""
        self.processor = FountainElementProcessor()

    def _strip_markup(self, content: str) -> str:
        """Remove boneyard and notes before tokenizing.

        jouvence 0.4.2 can loop forever on some boneyard blocks, and neither
        boneyard nor notes are printed content.
        """
        content = self.BONEYARD_PATTERN.sub("", content)
        return self.NOTE_PATTERN.sub("", content)

    @staticmethod
    def _clean_value(value: Any) -> str | None:
        if value is None:
            return None
        lines = [line.strip() for line in str(value).splitlines()]
        cleaned = "\n".join(line for line in lines if line)
        return cleaned or None

    def _extract_title_page(
        self, doc: Any
    ) -> tuple[TitlePageData | None, ScriptMetadata]:
        """Map jouvence title values onto title page fields and metadata."""
        values = {
            key.strip().lower(): value
            for key, value in (doc.title_values or {}).items()
        }
        if not values:
            return None, ScriptMetadata(source_format=self.format_name)

        used: set[str] = set()
        fields: dict[str, Any] = {}
        for field_name, keys in self.TITLE_PAGE_KEYS.items():
            for key in keys:
                if key in values:
                    fields[field_name] = self._clean_value(values[key])
                    used.add(key)
                    break

        for key in self.AUTHOR_KEYS:
            if key in values:
                fields["authors"] = self._clean_value(values[key])
                used.add(key)
                break

        extra = [
            f"{key.title()}: {self._clean_value(value)}"
            for key, value in values.items()
            if key not in used and self._clean_value(value)
        ]
        if extra:
            fields["additional_info"] = "\n".join(extra)

        title_page = TitlePageData(**fields)
        metadata = ScriptMetadata(
            title=title_page.title,
            author=", ".join(title_page.authors) or None,
            source_format=self.format_name,
        )
        return title_page, metadata

    def parse(self, data: bytes | str) -> ParsedScript:
        """Parse Fountain content into the element stream.

        Args:
            data: Raw Fountain bytes or text

        Returns:
            Parsed elements with title page and metadata
        """
        if isinstance(data, bytes):
            encoding = get_settings().text_encoding
            if encoding == "utf-8":
                encoding = "utf-8-sig"
            content = data.decode(encoding, errors="replace")
        else:
            content = data.lstrip("\ufeff")
        content = content.replace("\r\n", "\n").replace("\r", "\n")

        # jouvence 0.4.2 parse() with file objects is broken; use parseString()
        parser = JouvenceParser()
        try:
            doc = parser.parseString(self._strip_markup(content))
        except (ValueError, TypeError, AttributeError, RuntimeError) as e:
            logger.error(f"Jouvence parser failed: {e}")
            raise ParseError(
                message="Failed to parse Fountain text",
                hint="Check Fountain syntax and format.",
                details={"parser_error": str(e)},
            ) from e

        title_page, metadata = self._extract_title_page(doc)

        drafts = self.processor.process(doc)
        assign_dual_columns(drafts)
        elements = self.finish(drafts)

        logger.info(
            "Parsed fountain script",
            elements=len(elements),
            has_title_page=title_page is not None,
        )
        return ParsedScript(elements=elements, metadata=metadata, title_page=title_page)
