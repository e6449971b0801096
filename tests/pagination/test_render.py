"""Tests for plain text page rendering."""

from scriptkit.models import ScriptElement
from scriptkit.pagination import display_text, paginate, render_page, render_text
from tests.factories import ElementFactory, dialogue_lines


class TestDisplayText:
    """Test printed element text."""

    def test_continued_cue(self):
        cue = ScriptElement(type="character", content="TOM", is_continued=True)
        assert display_text(cue) == "TOM (CONT'D)"

    def test_numbered_scene_heading(self):
        heading = ScriptElement(type="scene_heading", content="INT. HOUSE", scene_number="4")
        assert display_text(heading) == "4 INT. HOUSE"

    def test_plain(self):
        assert display_text(ScriptElement(type="action", content="Rain.")) == "Rain."


class TestRender:
    """Test rendering laid out pages."""

    def test_split_markers_rendered(self):
        layout = paginate(
            [*ElementFactory.actions(20), *ElementFactory.speaker("TOM", dialogue_lines(20))]
        )
        first, second = render_text(layout).split("\f")
        assert first.rstrip().endswith("(MORE)")
        assert "TOM (CONT'D)" in second

    def test_indents(self):
        layout = paginate(ElementFactory.speaker("TOM", "Hello."))
        lines = render_page(layout.pages[0]).split("\n")
        assert " " * 22 + "TOM" in lines
        assert " " * 10 + "Hello." in lines

    def test_page_number_header(self):
        layout = paginate(ElementFactory.actions(30))
        pages = render_text(layout).split("\f")
        assert pages[1].strip().startswith("2.")
