from __future__ import annotations

from typing import Callable

from pptx2pptist.data_types import Element, GroupElement, LineElement, Transform
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.common import element_identity, parse_xfrm

GROUP_PROPERTY_TAGS = ("p:nvGrpSpPr", "p:grpSpPr")

ChildrenParser = Callable[[XmlNode, ParsingContext], list[Element]]


class _ChildSpace:
    """Affine map from a group's child coordinate space to its parent's."""

    def __init__(self, xfrm: XmlNode | None):
        transform = parse_xfrm(xfrm, "group") or Transform()
        ch_off = xfrm.child("a:chOff") if xfrm is not None else None
        ch_ext = xfrm.child("a:chExt") if xfrm is not None else None
        self.off_x, self.off_y = transform.x, transform.y
        self.child_x = ch_off.int_attr("x", 0) if ch_off is not None else transform.x
        self.child_y = ch_off.int_attr("y", 0) if ch_off is not None else transform.y
        child_w = ch_ext.int_attr("cx", 0) if ch_ext is not None else transform.width
        child_h = ch_ext.int_attr("cy", 0) if ch_ext is not None else transform.height
        self.scale_x = transform.width / child_w if child_w else 1.0
        self.scale_y = transform.height / child_h if child_h else 1.0

    def point(self, x: int, y: int) -> tuple[int, int]:
        return (
            round(self.off_x + (x - self.child_x) * self.scale_x),
            round(self.off_y + (y - self.child_y) * self.scale_y),
        )

    def apply(self, element: Element) -> None:
        transform = element.transform
        transform.x, transform.y = self.point(transform.x, transform.y)
        transform.width = round(transform.width * self.scale_x)
        transform.height = round(transform.height * self.scale_y)
        if isinstance(element, LineElement):
            element.start = self.point(*element.start)
            element.end = self.point(*element.end)
        if isinstance(element, GroupElement):
            # nested children were already mapped into this group's child space
            for child in element.children:
                self.apply(child)


def parse_group(
    node: XmlNode, ctx: ParsingContext, parse_children: ChildrenParser
) -> GroupElement:
    """
    Parse a ``p:grpSp`` and its children in document order.

    Child transforms are mapped into slide coordinates; the group itself
    stays nested.
    """
    element_id, name = element_identity(node)
    xfrm = node.find("p:grpSpPr", "a:xfrm")
    transform = parse_xfrm(xfrm, "group") or Transform()

    children = parse_children(node, ctx)
    space = _ChildSpace(xfrm)
    for child in children:
        space.apply(child)

    return GroupElement(
        id=element_id, name=name, transform=transform, children=children
    )
