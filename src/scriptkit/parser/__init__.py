"""Format parsers and extension based dispatch."""

from __future__ import annotations

from pathlib import PurePath

from scriptkit.exceptions import UnsupportedFormatError
from scriptkit.parser.base import BaseParser, ParsedScript
from scriptkit.parser.fdx_parser import FDXParser
from scriptkit.parser.fountain_parser import FountainParser
from scriptkit.parser.pdf_parser import PDFParser

PARSERS_BY_EXTENSION: dict[str, type[BaseParser]] = {
    ".fountain": FountainParser,
    ".txt": FountainParser,
    ".fdx": FDXParser,
    ".pdf": PDFParser,
}


def get_parser(filename: str | PurePath) -> BaseParser:
    """Return a parser for ``filename`` based on its extension.

    Raises:
        UnsupportedFormatError: If the extension is not recognised
    """
    name = PurePath(filename).name
    suffix = PurePath(name).suffix.lower()
    parser_class = PARSERS_BY_EXTENSION.get(suffix)
    if parser_class is None:
        raise UnsupportedFormatError(name, sorted(PARSERS_BY_EXTENSION))
    return parser_class()


__all__ = [
    "PARSERS_BY_EXTENSION",
    "BaseParser",
    "FDXParser",
    "FountainParser",
    "PDFParser",
    "ParsedScript",
    "get_parser",
]
