from __future__ import annotations

from pptx2pptist.data_types import LineElement
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.common import element_identity, resolve_transform
from pptx2pptist.style.fill import resolve_stroke


def parse_connector(node: XmlNode, ctx: ParsingContext) -> LineElement:
    """Straight segment from the box offset to offset + extent, flips swap ends."""
    element_id, name = element_identity(node)
    sp_pr = node.child("p:spPr")
    transform = resolve_transform(
        node, sp_pr.child("a:xfrm") if sp_pr is not None else None, ctx, "connector"
    )

    x1, y1 = transform.x, transform.y
    x2, y2 = transform.x + transform.width, transform.y + transform.height
    if transform.flip_h:
        x1, x2 = x2, x1
    if transform.flip_v:
        y1, y2 = y2, y1

    return LineElement(
        id=element_id,
        name=name,
        transform=transform,
        start=(x1, y1),
        end=(x2, y2),
        stroke=resolve_stroke(
            sp_pr.child("a:ln") if sp_pr is not None else None,
            ctx,
            node.find("p:style", "a:lnRef"),
        ),
    )
