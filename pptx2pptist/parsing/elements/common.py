"""Helpers shared by the element parsers: identity, transforms, placeholders."""

from __future__ import annotations

import uuid

from pptx2pptist.data_types import Transform
from pptx2pptist.exceptions import ElementParseError
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext

NON_VISUAL_TAGS = (
    "p:nvSpPr",
    "p:nvPicPr",
    "p:nvCxnSpPr",
    "p:nvGraphicFramePr",
    "p:nvGrpSpPr",
)

# Rotation is stored in 60000ths of a degree
ROTATION_UNIT = 60000

# ph elements without a type attribute are body/content placeholders
DEFAULT_PLACEHOLDER_TYPE = "body"


def non_visual(node: XmlNode) -> XmlNode | None:
    for tag in NON_VISUAL_TAGS:
        nv = node.child(tag)
        if nv is not None:
            return nv
    return None


def element_identity(node: XmlNode) -> tuple[str, str | None]:
    """(id, name) from ``cNvPr``; a generated id when the source has none."""
    nv = non_visual(node)
    c_nv_pr = nv.child("p:cNvPr") if nv is not None else None
    if c_nv_pr is None:
        return str(uuid.uuid4()), None
    element_id = c_nv_pr.attr("id") or str(uuid.uuid4())
    return element_id, c_nv_pr.attr("name")


def placeholder_of(node: XmlNode) -> XmlNode | None:
    nv = non_visual(node)
    if nv is None:
        return None
    return nv.find("p:nvPr", "p:ph")


def placeholder_type(ph: XmlNode | None) -> str | None:
    if ph is None:
        return None
    return ph.attr("type", DEFAULT_PLACEHOLDER_TYPE)


def _int(node: XmlNode, name: str, element_type: str) -> int:
    value = node.attr(name)
    if value is None:
        return 0
    try:
        return int(value)
    except ValueError as exc:
        raise ElementParseError(
            element_type, f"Invalid {node.tag}@{name} value {value!r}", cause=exc
        ) from exc


def parse_xfrm(xfrm: XmlNode | None, element_type: str = "shape") -> Transform | None:
    """Transform from an ``a:xfrm``/``p:xfrm`` node, None when absent."""
    if xfrm is None:
        return None
    transform = Transform(
        rotation=_int(xfrm, "rot", element_type) / ROTATION_UNIT,
        flip_h=xfrm.attr("flipH") in ("1", "true"),
        flip_v=xfrm.attr("flipV") in ("1", "true"),
    )
    off = xfrm.child("a:off")
    if off is not None:
        transform.x = _int(off, "x", element_type)
        transform.y = _int(off, "y", element_type)
    ext = xfrm.child("a:ext")
    if ext is not None:
        transform.width = _int(ext, "cx", element_type)
        transform.height = _int(ext, "cy", element_type)
    return transform


def _shape_tree(part: XmlNode | None) -> XmlNode | None:
    if part is None:
        return None
    return part.find("p:cSld", "p:spTree")


def find_placeholder(part: XmlNode | None, ph: XmlNode) -> XmlNode | None:
    """Matching placeholder shape on a layout or master: by idx, then by type."""
    tree = _shape_tree(part)
    if tree is None:
        return None
    candidates = [
        (shape, placeholder_of(shape))
        for shape in tree.children("p:sp")
        if placeholder_of(shape) is not None
    ]
    idx = ph.attr("idx")
    if idx is not None:
        for shape, candidate in candidates:
            if candidate.attr("idx") == idx:
                return shape
    wanted = placeholder_type(ph)
    for shape, candidate in candidates:
        if placeholder_type(candidate) == wanted:
            return shape
    return None


def inherited_transform(ph: XmlNode | None, ctx: ParsingContext) -> Transform | None:
    if ph is None:
        return None
    for part in (ctx.layout, ctx.master):
        shape = find_placeholder(part, ph)
        if shape is None:
            continue
        transform = parse_xfrm(shape.find("p:spPr", "a:xfrm"))
        if transform is not None:
            return transform
    return None


_MASTER_TEXT_STYLES = {
    "title": "p:titleStyle",
    "ctrTitle": "p:titleStyle",
    "body": "p:bodyStyle",
    "subTitle": "p:bodyStyle",
    "obj": "p:bodyStyle",
}


def inherited_list_styles(
    ph: XmlNode | None, ctx: ParsingContext
) -> tuple[XmlNode, ...]:
    """List styles a text body inherits, most specific first."""
    if ph is None:
        if ctx.default_text_style is not None:
            return (ctx.default_text_style,)
        return ()

    styles: list[XmlNode] = []
    for part in (ctx.layout, ctx.master):
        shape = find_placeholder(part, ph)
        list_style = shape.find("p:txBody", "a:lstStyle") if shape is not None else None
        if list_style is not None:
            styles.append(list_style)
    if ctx.master is not None:
        style_tag = _MASTER_TEXT_STYLES.get(placeholder_type(ph), "p:otherStyle")
        master_style = ctx.master.find("p:txStyles", style_tag)
        if master_style is not None:
            styles.append(master_style)
    return tuple(styles)


def resolve_transform(
    node: XmlNode, xfrm: XmlNode | None, ctx: ParsingContext, element_type: str
) -> Transform:
    """Own transform, else the inherited placeholder transform, else zeros."""
    transform = parse_xfrm(xfrm, element_type)
    if transform is not None:
        return transform
    return inherited_transform(placeholder_of(node), ctx) or Transform()
