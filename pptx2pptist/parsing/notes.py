import re

from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.elements.common import placeholder_of
from pptx2pptist.parsing.elements.text import plain_text

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def extract_notes(notes_slide: XmlNode | None) -> str | None:
    """Speaker notes text from the notes slide's body placeholder."""
    if notes_slide is None:
        return None
    tree = notes_slide.find("p:cSld", "p:spTree")
    if tree is None:
        return None

    lines: list[str] = []
    for shape in tree.children("p:sp"):
        ph = placeholder_of(shape)
        if ph is None or ph.attr("type") != "body":
            continue
        lines.extend(plain_text(shape.child("p:txBody")))

    text = _EXCESS_NEWLINES.sub("\n\n", "\n".join(lines)).strip()
    return text or None
