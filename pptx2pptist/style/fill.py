"""Fill, outline and background resolution into FillSource / Stroke values."""

from __future__ import annotations

from typing import Callable

from pptx2pptist.data_types import (
    FillSource,
    GradientFill,
    GradientStop,
    ImageFill,
    LineDash,
    NoFill,
    SolidFill,
    Stroke,
)
from pptx2pptist.geometry.units import emu_to_points
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.style.color_resolver import (
    ColorContext,
    is_fully_transparent,
    resolve_merged,
    resolve_with_separate_alpha,
)

MediaKeyFactory = Callable[[str], str]

DEFAULT_STROKE_WIDTH = 1.0


def _gradient(grad_fill: XmlNode, ctx: ColorContext) -> GradientFill | None:
    stops = []
    gs_lst = grad_fill.child("a:gsLst")
    for gs in gs_lst.children("a:gs") if gs_lst is not None else ():
        color = resolve_with_separate_alpha(gs, ctx)
        if color is None:
            continue
        # pos is in 1000ths of a percent
        stops.append(GradientStop(position=(gs.int_attr("pos") or 0) / 1000, color=color))
    if not stops:
        return None
    lin = grad_fill.child("a:lin")
    angle = (lin.int_attr("ang") or 0) / 60000 if lin is not None else 0.0
    return GradientFill(stops=tuple(stops), angle=angle)


def resolve_fill(
    props: XmlNode | None,
    ctx: ColorContext,
    media_key_for: MediaKeyFactory | None = None,
) -> FillSource | None:
    """
    Read the fill declared on a property node (``p:spPr``, ``p:bgPr``, ``a:tcPr``).

    None means the node declares nothing usable and the caller should fall
    back; NoFill means fill was explicitly switched off or made fully
    transparent.
    """
    if props is None:
        return None
    if props.has("a:noFill"):
        return NoFill()

    solid = props.child("a:solidFill")
    if solid is not None:
        color = resolve_with_separate_alpha(solid, ctx)
        if color is not None:
            return SolidFill(color)
        return NoFill() if is_fully_transparent(solid) else None

    grad_fill = props.child("a:gradFill")
    if grad_fill is not None:
        return _gradient(grad_fill, ctx)

    blip_fill = props.child("a:blipFill")
    if blip_fill is not None:
        blip = blip_fill.child("a:blip")
        rel_id = blip.attr("r:embed") if blip is not None else None
        if rel_id:
            media_key = media_key_for(rel_id) if media_key_for else rel_id
            return ImageFill(rel_id=rel_id, media_key=media_key)
    return None


def resolve_shape_fill(
    shape: XmlNode,
    ctx: ColorContext,
    media_key_for: MediaKeyFactory | None = None,
) -> FillSource | None:
    """Explicit ``p:spPr`` fill, else the shape style's ``a:fillRef``."""
    fill = resolve_fill(shape.child("p:spPr"), ctx, media_key_for)
    if fill is not None:
        return fill
    fill_ref = shape.find("p:style", "a:fillRef")
    if fill_ref is None:
        return None
    if fill_ref.attr("idx") == "0":
        return NoFill()
    color = resolve_with_separate_alpha(fill_ref, ctx)
    return SolidFill(color) if color is not None else None


def resolve_stroke(
    ln: XmlNode | None,
    ctx: ColorContext,
    line_ref: XmlNode | None = None,
) -> Stroke | None:
    if ln is None and line_ref is None:
        return None
    if ln is not None and (
        ln.has("a:noFill") or is_fully_transparent(ln.child("a:solidFill"))
    ):
        return Stroke(color=None, width=0.0, dash=LineDash.NONE)

    color = None
    if ln is not None:
        color = resolve_merged(ln.child("a:solidFill"), ctx)
    if color is None and line_ref is not None and line_ref.attr("idx") != "0":
        color = resolve_merged(line_ref, ctx)

    width = DEFAULT_STROKE_WIDTH
    dash = LineDash.SOLID
    if ln is not None:
        line_width = ln.int_attr("w")
        if line_width is not None:
            width = round(emu_to_points(line_width), 2)
        prst_dash = ln.child("a:prstDash")
        if prst_dash is not None and prst_dash.attr("val", "solid") != "solid":
            dash = LineDash.DASHED

    if color is None and ln is None:
        return None
    return Stroke(color=color, width=width, dash=dash)


def resolve_background(
    part: XmlNode | None,
    ctx: ColorContext,
    media_key_for: MediaKeyFactory | None = None,
) -> FillSource | None:
    """Background of one slide/layout/master part, None when it declares none."""
    if part is None:
        return None
    bg = part.find("p:cSld", "p:bg")
    if bg is None:
        return None
    bg_pr = bg.child("p:bgPr")
    if bg_pr is not None:
        return resolve_fill(bg_pr, ctx, media_key_for)
    bg_ref = bg.child("p:bgRef")
    if bg_ref is not None:
        color = resolve_with_separate_alpha(bg_ref, ctx)
        if color is not None:
            return SolidFill(color)
        return NoFill() if is_fully_transparent(bg_ref) else None
    return None
