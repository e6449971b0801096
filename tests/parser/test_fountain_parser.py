"""Tests for the Fountain parser."""

import pytest

from scriptkit.config import set_settings
from scriptkit.config.settings import ScriptKitSettings
from scriptkit.models import DualPosition, ElementType
from scriptkit.parser import FountainParser
from scriptkit.parser.fountain_processor import FountainElementProcessor
from scriptkit.validation import AutoFixer


def types(parsed):
    return [element.type for element in parsed.elements]


class TestFountainParser:
    """Test parsing complete Fountain documents."""

    def test_element_stream(self, sample_fountain):
        parsed = FountainParser().parse(sample_fountain)
        assert types(parsed) == [
            ElementType.SCENE_HEADING,
            ElementType.ACTION,
            ElementType.CHARACTER,
            ElementType.PARENTHETICAL,
            ElementType.DIALOGUE,
            ElementType.CHARACTER,
            ElementType.DIALOGUE,
            ElementType.TRANSITION,
            ElementType.SCENE_HEADING,
            ElementType.ACTION,
        ]
        contents = [element.content for element in parsed.elements]
        assert contents[0] == "INT. COFFEE SHOP - DAY"
        assert contents[2] == "MARY"
        assert contents[3] == "(quietly)"
        assert contents[4] == "We're closing."
        assert contents[7] == "CUT TO:"

    def test_sequences_are_contiguous(self, sample_fountain):
        parsed = FountainParser().parse(sample_fountain)
        assert [e.sequence for e in parsed.elements] == list(
            range(1, len(parsed.elements) + 1)
        )

    def test_scene_numbers(self, sample_fountain):
        parsed = FountainParser().parse(sample_fountain)
        headings = [e for e in parsed.elements if e.type == ElementType.SCENE_HEADING]
        assert [h.scene_number for h in headings] == ["1", "2"]
        assert headings[1].content == "EXT. STREET - NIGHT"

    def test_title_page(self, sample_fountain):
        parsed = FountainParser().parse(sample_fountain)
        title_page = parsed.title_page
        assert title_page is not None
        assert title_page.title == "The Last Cup"
        assert title_page.credit == "Written by"
        assert title_page.authors == ("Jane Doe",)
        assert title_page.draft_date == "2024-03-01"
        assert title_page.contact == "jane@example.com"
        assert parsed.metadata.title == "The Last Cup"
        assert parsed.metadata.author == "Jane Doe"
        assert parsed.metadata.source_format == "fountain"

    def test_no_title_page(self, coffee_shop_fountain):
        parsed = FountainParser().parse(coffee_shop_fountain)
        assert parsed.title_page is None
        assert parsed.metadata.title is None

    def test_deterministic_ids(self, sample_fountain):
        """Parsing the same input twice yields identical elements."""
        first = FountainParser().parse(sample_fountain)
        second = FountainParser().parse(sample_fountain.encode("utf-8"))
        assert first.elements == second.elements
        assert len({e.id for e in first.elements}) == len(first.elements)

    def test_bytes_with_bom_and_crlf(self, sample_fountain):
        data = b"\xef\xbb\xbf" + sample_fountain.replace("\n", "\r\n").encode("utf-8")
        parsed = FountainParser().parse(data)
        assert parsed.title_page.title == "The Last Cup"
        assert parsed.elements[0].content == "INT. COFFEE SHOP - DAY"

    def test_configured_encoding(self):
        set_settings(ScriptKitSettings(text_encoding="latin-1"))
        text = "INT. CAFÉ - DAY\n\nRené sips.\n"
        parsed = FountainParser().parse(text.encode("latin-1"))
        assert parsed.elements[0].content == "INT. CAFÉ - DAY"
        assert parsed.elements[1].content == "René sips."

    def test_boneyard_and_notes_removed(self):
        text = (
            "INT. HOUSE - DAY\n\n"
            "Tom sits. [[check the timing]]\n\n"
            "/*\nEXT. GARDEN - DAY\n\nCut scene.\n*/\n\n"
            "Tom stands.\n"
        )
        parsed = FountainParser().parse(text)
        contents = [e.content for e in parsed.elements]
        assert "EXT. GARDEN - DAY" not in contents
        assert all("[[" not in content for content in contents)
        assert contents[-1] == "Tom stands."

    def test_dual_dialogue(self):
        text = (
            "INT. HOUSE - DAY\n\n"
            "TOM\nStop!\n\n"
            "ANNA ^\nNo, you stop!\n"
        )
        parsed = FountainParser().parse(text)
        cues = [e for e in parsed.elements if e.type == ElementType.CHARACTER]
        assert [c.content for c in cues] == ["TOM", "ANNA"]
        assert [c.dual for c in cues] == [DualPosition.LEFT, DualPosition.RIGHT]
        speech = [e for e in parsed.elements if e.type == ElementType.DIALOGUE]
        assert [s.dual for s in speech] == [DualPosition.LEFT, DualPosition.RIGHT]

    def test_multi_line_dialogue_is_one_element(self):
        text = "INT. HOUSE - DAY\n\nTOM\nFirst line.\nSecond line.\n"
        parsed = FountainParser().parse(text)
        dialogue = [e for e in parsed.elements if e.type == ElementType.DIALOGUE]
        assert len(dialogue) == 1
        assert dialogue[0].content == "First line.\nSecond line."

    def test_empty_input(self):
        parsed = FountainParser().parse("")
        assert parsed.elements == []


class TestCoffeeShopScenario:
    """Lower-case cues and loose parentheticals are recovered."""

    def test_recovers_speaker_block(self, coffee_shop_fountain):
        parsed = FountainParser().parse(coffee_shop_fountain)
        assert types(parsed) == [
            ElementType.SCENE_HEADING,
            ElementType.CHARACTER,
            ElementType.DIALOGUE,
            ElementType.PARENTHETICAL,
            ElementType.DIALOGUE,
        ]
        assert parsed.elements[1].content == "john"

    def test_auto_fix_uppercases_cue(self, coffee_shop_fountain):
        parsed = FountainParser().parse(coffee_shop_fountain)
        fixed = AutoFixer().fix(parsed.elements).elements
        character = next(e for e in fixed if e.type == ElementType.CHARACTER)
        parenthetical = next(e for e in fixed if e.type == ElementType.PARENTHETICAL)
        assert character.content == "JOHN"
        assert parenthetical.content == "(nervous)"


class TestFountainElementProcessor:
    """Test cue detection heuristics."""

    @pytest.mark.parametrize(
        "line",
        ["JOHN", "MARY (V.O.)", "DR. SMITH", "O'BRIEN", "john", "anna (cont'd)", "@JOHN"],
    )
    def test_character_cues(self, line):
        assert FountainElementProcessor().is_character_cue(line)

    @pytest.mark.parametrize(
        "line",
        [
            "INT. HOUSE - DAY",
            "CUT TO:",
            "FADE OUT.",
            "He walks away.",
            "",
            "A" * 60,
        ],
    )
    def test_not_character_cues(self, line):
        assert not FountainElementProcessor().is_character_cue(line)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("(nervous)", "(nervous)"),
            ("nervous", "(nervous)"),
            ("(nervous", "(nervous)"),
            ("nervous)", "(nervous)"),
        ],
    )
    def test_wrap_parenthetical(self, text, expected):
        assert FountainElementProcessor.wrap_parenthetical(text) == expected
