"""Tests for extension based parser dispatch."""

import pytest

from scriptkit.exceptions import ParseError, UnsupportedFormatError
from scriptkit.parser import FDXParser, FountainParser, PDFParser, get_parser


class TestGetParser:
    """Test parser selection by file extension."""

    @pytest.mark.parametrize(
        ("filename", "parser_class"),
        [
            ("script.fountain", FountainParser),
            ("script.txt", FountainParser),
            ("script.fdx", FDXParser),
            ("script.pdf", PDFParser),
            ("SCRIPT.FDX", FDXParser),
            ("drafts/v2/script.Fountain", FountainParser),
        ],
    )
    def test_known_extensions(self, filename, parser_class):
        assert isinstance(get_parser(filename), parser_class)

    @pytest.mark.parametrize("filename", ["script.docx", "script", "script.fdx.bak"])
    def test_unsupported(self, filename):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            get_parser(filename)
        assert exc_info.value.message == f"Unsupported format: {filename}"
        assert ".fdx" in exc_info.value.details["supported_extensions"]

    def test_unsupported_is_parse_error(self):
        with pytest.raises(ParseError):
            get_parser("notes.md")
