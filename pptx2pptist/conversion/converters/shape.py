from __future__ import annotations

import logging

from pptx2pptist.data_types import (
    FillSource,
    GradientFill,
    ImageFill,
    LineDash,
    ShapeElement,
    SolidFill,
    Stroke,
)
from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.geometry.path_generator import generate_path, is_supported_preset

logger = logging.getLogger(__name__)

TRANSPARENT = "transparent"


def fill_color(fill: FillSource | None) -> str:
    """Single CSS color for a fill; gradients use their first stop."""
    if isinstance(fill, SolidFill):
        return fill.color.merged()
    if isinstance(fill, GradientFill) and fill.stops:
        return fill.stops[0].color.merged()
    return TRANSPARENT


def gradient_dict(fill: GradientFill) -> dict:
    return {
        "type": "linear",
        "colors": [
            {"pos": stop.position, "color": stop.color.merged()} for stop in fill.stops
        ],
        "rotate": fill.angle,
    }


def outline_dict(stroke: Stroke | None, ctx: ConversionContext) -> dict | None:
    if stroke is None or stroke.dash == LineDash.NONE:
        return None
    return {
        "style": "dashed" if stroke.dash == LineDash.DASHED else "solid",
        "width": ctx.stroke_px(stroke.width),
        "color": stroke.color or ctx.settings.default_color,
    }


def add_flips(result: dict, element) -> None:
    if element.transform.flip_h:
        result["flipH"] = True
    if element.transform.flip_v:
        result["flipV"] = True


def convert_shape(element: ShapeElement, ctx: ConversionContext) -> dict:
    box = ctx.box(element.transform)
    if not is_supported_preset(element.preset):
        logger.debug("Preset %s drawn as rectangle", element.preset)

    result = {
        "id": element.id,
        "type": "shape",
        **box,
        "viewBox": [box["width"], box["height"]],
        "path": generate_path(
            element.preset, box["width"], box["height"], element.adjustment
        ),
        "fixedRatio": False,
        "fill": fill_color(element.fill),
        "opacity": 1,
    }
    if isinstance(element.fill, GradientFill):
        result["gradient"] = gradient_dict(element.fill)
    if isinstance(element.fill, ImageFill) and ctx.has_media(element.fill.media_key):
        result["pattern"] = element.fill.media_key

    outline = outline_dict(element.stroke, ctx)
    if outline is not None:
        result["outline"] = outline
    add_flips(result, element)
    return result
