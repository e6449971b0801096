"""Generate Final Draft XML from a document."""

from __future__ import annotations

from lxml import etree

from scriptkit.document import ScriptDocument
from scriptkit.models import DualPosition, ElementType, TitlePageData

XML_TYPES: dict[ElementType, str] = {
    ElementType.SCENE_HEADING: "Scene Heading",
    ElementType.ACTION: "Action",
    ElementType.CHARACTER: "Character",
    ElementType.DIALOGUE: "Dialogue",
    ElementType.PARENTHETICAL: "Parenthetical",
    ElementType.TRANSITION: "Transition",
}


def _add_paragraph(parent: etree._Element, type_name: str, text: str) -> etree._Element:
    paragraph = etree.SubElement(parent, "Paragraph")
    paragraph.set("Type", type_name)
    etree.SubElement(paragraph, "Text").text = text
    return paragraph


def _add_title_page(root: etree._Element, title_page: TitlePageData) -> None:
    content = etree.SubElement(etree.SubElement(root, "TitlePage"), "Content")
    fields = [
        ("Title", title_page.title),
        ("Credit", title_page.credit),
        *(("Author", author) for author in title_page.authors),
        ("Source", title_page.source),
        ("Draft Date", title_page.draft_date),
        ("Draft", title_page.draft_version),
        ("Contact", title_page.contact),
        ("Copyright", title_page.copyright),
    ]
    for type_name, value in fields:
        if value:
            _add_paragraph(content, type_name, value)
    if title_page.additional_info:
        for line in title_page.additional_info.split("\n"):
            _add_paragraph(content, "General", line)


def to_fdx(document: ScriptDocument) -> bytes:
    """Render a document as an FDX file."""
    root = etree.Element("FinalDraft")
    root.set("DocumentType", "Script")
    root.set("Template", "No")
    root.set("Version", "4")
    content = etree.SubElement(root, "Content")

    for element in document.elements:
        paragraph = _add_paragraph(content, XML_TYPES[element.type], element.content)
        if element.type == ElementType.SCENE_HEADING and element.scene_number:
            paragraph.set("Number", element.scene_number)
        if element.type == ElementType.CHARACTER and element.dual == DualPosition.RIGHT:
            paragraph.set("Dual", "Yes")

    if document.title_page is not None and not document.title_page.is_empty():
        _add_title_page(root, document.title_page)

    return etree.tostring(
        root, xml_declaration=True, encoding="UTF-8", pretty_print=True
    )
