"""
Shape tree traversal.

The shape tree's children are visited in document order (the z-order),
rebuilt by ``XmlNode.ordered_children`` from the recorded tag/position
pairs. ``mc:AlternateContent`` wrappers are replaced by their fallback
content in place.
"""

from __future__ import annotations

import logging
from typing import Callable

from pptx2pptist.data_types import Element
from pptx2pptist.diagnostics import WARN_ELEMENT_FAILED, WARN_UNSUPPORTED_ELEMENT
from pptx2pptist.exceptions import ElementParseError
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.connector import parse_connector
from pptx2pptist.parsing.elements.graphic_frame import parse_graphic_frame
from pptx2pptist.parsing.elements.group import GROUP_PROPERTY_TAGS, parse_group
from pptx2pptist.parsing.elements.picture import parse_picture
from pptx2pptist.parsing.elements.shape import parse_shape

logger = logging.getLogger(__name__)

ElementParser = Callable[[XmlNode, ParsingContext], "Element | None"]

ALTERNATE_CONTENT = "mc:AlternateContent"


def _parse_group(node: XmlNode, ctx: ParsingContext) -> Element:
    return parse_group(node, ctx, parse_elements)


ELEMENT_PARSERS: dict[str, ElementParser] = {
    "p:sp": parse_shape,
    "p:pic": parse_picture,
    "p:cxnSp": parse_connector,
    "p:graphicFrame": parse_graphic_frame,
    "p:grpSp": _parse_group,
}

_SKIPPED_TAGS = GROUP_PROPERTY_TAGS + ("p:extLst",)


def unwrap_alternate_content(node: XmlNode) -> list[XmlNode]:
    """Fallback children, else the first choice's children."""
    branch = node.child("mc:Fallback")
    if branch is None:
        branch = node.child("mc:Choice")
    if branch is None:
        return []
    return branch.ordered_children()


def visual_children(container: XmlNode) -> list[XmlNode]:
    """Children of a shape tree or group in document order."""
    result = []
    for child in container.ordered_children(exclude=_SKIPPED_TAGS):
        if child.tag == ALTERNATE_CONTENT:
            result.extend(unwrap_alternate_content(child))
        else:
            result.append(child)
    return result


def parse_element(node: XmlNode, ctx: ParsingContext) -> Element | None:
    """
    Parse one shape-tree child.

    Failures are recorded as warnings and the element is dropped; siblings
    are unaffected.
    """
    parser = ELEMENT_PARSERS.get(node.tag)
    if parser is None:
        ctx.warn(WARN_UNSUPPORTED_ELEMENT, f"Unsupported element type {node.tag}")
        return None
    try:
        element = parser(node, ctx)
    except ElementParseError as exc:
        ctx.warn(WARN_ELEMENT_FAILED, f"{exc} on slide {ctx.slide_index}")
        return None
    except Exception as exc:
        logger.debug(
            "Element %s failed on slide %d", node.tag, ctx.slide_index, exc_info=True
        )
        ctx.warn(
            WARN_ELEMENT_FAILED,
            f"Failed to parse {node.tag} element on slide {ctx.slide_index}: {exc}",
        )
        return None

    if element is None:
        ctx.warn(
            WARN_UNSUPPORTED_ELEMENT,
            f"Unsupported graphic content in {node.tag} on slide {ctx.slide_index}",
        )
    return element


def parse_elements(container: XmlNode, ctx: ParsingContext) -> list[Element]:
    elements: list[Element] = []
    for child in visual_children(container):
        element = parse_element(child, ctx)
        if element is None:
            continue
        element.z_order = len(elements)
        elements.append(element)
    return elements
