from __future__ import annotations

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.conversion.converters.shape import gradient_dict
from pptx2pptist.data_types import FillSource, GradientFill, ImageFill, SolidFill
from pptx2pptist.diagnostics import WARN_MEDIA_UNRESOLVED


def convert_background(fill: FillSource | None, ctx: ConversionContext) -> dict | None:
    if isinstance(fill, SolidFill):
        return {"type": "solid", "color": fill.color.merged()}
    if isinstance(fill, GradientFill):
        return {"type": "gradient", "gradient": gradient_dict(fill)}
    if isinstance(fill, ImageFill):
        if not ctx.has_media(fill.media_key):
            ctx.warn(
                WARN_MEDIA_UNRESOLVED,
                f"Failed to resolve media reference {fill.media_key} "
                f"on slide {ctx.slide_index}",
            )
            return None
        return {"type": "image", "image": {"src": fill.media_key, "size": "cover"}}
    return None
