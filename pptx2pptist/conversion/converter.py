"""
Element converters: intermediate elements to PPTist element dicts.

``convert_element`` returns one dict, a list of dicts (groups flatten into
their children) or None when the element has no output (unresolved media,
invisible line).
"""

from __future__ import annotations

from typing import Callable

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.conversion.converters.chart import convert_chart
from pptx2pptist.conversion.converters.group import convert_group
from pptx2pptist.conversion.converters.line import convert_line
from pptx2pptist.conversion.converters.media import (
    convert_audio,
    convert_image,
    convert_video,
)
from pptx2pptist.conversion.converters.shape import convert_shape
from pptx2pptist.conversion.converters.table import convert_table
from pptx2pptist.conversion.converters.text import convert_text
from pptx2pptist.data_types import (
    AudioElement,
    ChartElement,
    Element,
    GroupElement,
    ImageElement,
    LineElement,
    ShapeElement,
    TableElement,
    TextElement,
    VideoElement,
)
from pptx2pptist.diagnostics import WARN_UNSUPPORTED_ELEMENT


def _convert_group(element: GroupElement, ctx: ConversionContext) -> list[dict]:
    return convert_group(element, ctx, convert_element)


CONVERTERS: dict[type, Callable] = {
    ShapeElement: convert_shape,
    TextElement: convert_text,
    ImageElement: convert_image,
    VideoElement: convert_video,
    AudioElement: convert_audio,
    LineElement: convert_line,
    ChartElement: convert_chart,
    TableElement: convert_table,
    GroupElement: _convert_group,
}


def convert_element(
    element: Element, ctx: ConversionContext
) -> dict | list[dict] | None:
    converter = CONVERTERS.get(type(element))
    if converter is None:
        ctx.warn(
            WARN_UNSUPPORTED_ELEMENT,
            f"No converter for {type(element).__name__} on slide {ctx.slide_index}",
        )
        return None
    return converter(element, ctx)
