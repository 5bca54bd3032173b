from __future__ import annotations

import logging

from pptx2pptist.data_types import ShapeElement, TextElement
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.common import (
    element_identity,
    inherited_list_styles,
    placeholder_of,
    placeholder_type,
    resolve_transform,
)
from pptx2pptist.parsing.elements.text import has_visible_text, parse_text_body
from pptx2pptist.style.fill import resolve_shape_fill, resolve_stroke

logger = logging.getLogger(__name__)

DEFAULT_PRESET = "rect"


def parse_adjustment(geometry: XmlNode | None) -> int | None:
    """Value of the first guide named ``adj`` (``fmla="val 16667"``)."""
    if geometry is None:
        return None
    av_lst = geometry.child("a:avLst")
    if av_lst is None:
        return None
    for guide in av_lst.children("a:gd"):
        if guide.attr("name") != "adj":
            continue
        formula = (guide.attr("fmla") or "").split()
        if len(formula) == 2 and formula[0] == "val":
            try:
                return int(formula[1])
            except ValueError:
                logger.debug("Non-numeric adjustment formula %r", guide.attr("fmla"))
        return None
    return None


def parse_shape(node: XmlNode, ctx: ParsingContext) -> ShapeElement | TextElement:
    """
    Parse a ``p:sp``.

    Shapes whose text body holds any non-whitespace run come back as a
    TextElement; decorative geometry, fill and outline are not read for them.
    """
    element_id, name = element_identity(node)
    sp_pr = node.child("p:spPr")
    transform = resolve_transform(
        node, sp_pr.child("a:xfrm") if sp_pr is not None else None, ctx, "shape"
    )
    ph = placeholder_of(node)

    tx_body = node.child("p:txBody")
    if has_visible_text(tx_body):
        return TextElement(
            id=element_id,
            name=name,
            transform=transform,
            paragraphs=parse_text_body(tx_body, ctx, inherited_list_styles(ph, ctx)),
            placeholder_type=placeholder_type(ph),
        )

    geometry = sp_pr.child("a:prstGeom") if sp_pr is not None else None
    preset = DEFAULT_PRESET
    if geometry is not None:
        preset = geometry.attr("prst", DEFAULT_PRESET)
    if geometry is None and sp_pr is not None and sp_pr.has("a:custGeom"):
        logger.debug("Custom geometry on shape %s rendered as rectangle", element_id)

    return ShapeElement(
        id=element_id,
        name=name,
        transform=transform,
        preset=preset,
        adjustment=parse_adjustment(geometry),
        fill=resolve_shape_fill(node, ctx, ctx.media_key),
        stroke=resolve_stroke(
            sp_pr.child("a:ln") if sp_pr is not None else None,
            ctx,
            node.find("p:style", "a:lnRef"),
        ),
    )
