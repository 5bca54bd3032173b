"""
Presentation Assembler
======================

Turns a parsed ``Presentation`` into the PPTist document:

    {
        "slides": [{"id", "elements", "background"?, "remark"?}, ...],
        "media": {"0_rId2": {"data": <base64>, "contentType": "image/png"}},
        "slideSize": {"width": <emu>, "height": <emu>},
        "width": <px>, "height": <px>,
        "theme": {"themeColors": [...], "fontName": ...},
        "warnings": [{"code", "message", "count"}, ...],
    }

Element ``src`` values are media map keys; resolving them to URLs or data
URIs is left to whoever serves the document.
"""

from __future__ import annotations

import base64
import io
import logging

from pptx2pptist.config import Settings
from pptx2pptist.conversion.background import convert_background
from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.conversion.converter import convert_element
from pptx2pptist.data_types import MediaItem, Presentation, Slide
from pptx2pptist.diagnostics import WARN_ELEMENT_FAILED, WarningCollector
from pptx2pptist.exceptions import ConversionError
from pptx2pptist.geometry.units import ScaleFactors
from pptx2pptist.ooxml.zip_bomb import ZipBombLimits
from pptx2pptist.parsing.presentation_parser import read_pptx

logger = logging.getLogger(__name__)


def _media_dict(media: dict[str, MediaItem], include_data: bool) -> dict:
    result = {}
    for key, item in media.items():
        entry = {"contentType": item.content_type}
        if include_data:
            entry["data"] = base64.b64encode(item.data).decode("utf-8")
        result[key] = entry
    return result


def convert_slide(slide: Slide, ctx: ConversionContext) -> dict:
    ctx.slide_index = slide.index
    elements: list[dict] = []
    for element in slide.elements:
        try:
            converted = convert_element(element, ctx)
        except Exception as exc:
            logger.debug("Converting %s failed", element.id, exc_info=True)
            ctx.warn(
                WARN_ELEMENT_FAILED,
                f"Failed to convert {element.kind} element {element.id} "
                f"on slide {slide.index}: {exc}",
            )
            continue
        if converted is None:
            continue
        if isinstance(converted, list):
            elements.extend(converted)
        else:
            elements.append(converted)

    result: dict = {"id": slide.id, "elements": elements}
    background = convert_background(slide.background, ctx)
    if background is not None:
        result["background"] = background
    if slide.notes:
        result["remark"] = slide.notes
    return result


def assemble(
    presentation: Presentation,
    warnings: WarningCollector | None = None,
    settings: Settings | None = None,
) -> dict:
    settings = settings or Settings()
    warnings = warnings if warnings is not None else WarningCollector()
    scale = ScaleFactors.for_slide_size(
        presentation.slide_width, presentation.slide_height
    )
    ctx = ConversionContext(
        scale=scale,
        warnings=warnings,
        media_map=presentation.media,
        theme_colors=tuple(presentation.theme.accent_colors),
        settings=settings,
    )

    slides = [convert_slide(slide, ctx) for slide in presentation.slides]

    return {
        "slides": slides,
        "media": _media_dict(presentation.media, settings.include_media),
        "slideSize": {
            "width": presentation.slide_width,
            "height": presentation.slide_height,
        },
        "width": scale.target_width,
        "height": scale.target_height,
        "theme": {
            "themeColors": list(presentation.theme.accent_colors)
            or [settings.default_color],
            "fontName": presentation.theme.minor_font or settings.default_font,
        },
        "warnings": warnings.to_list(),
    }


def convert_pptx(
    file_like: io.BytesIO,
    path: str | None = None,
    settings: Settings | None = None,
) -> dict:
    """
    Convert a .pptx file to a PPTist document dict.

    Partial success is the normal outcome: slides and elements that fail are
    reported in ``warnings``. Only package-level failures raise.

    Raises:
        ConversionError: or one of its package subclasses, see read_pptx.
    """
    settings = settings or Settings()
    warnings = WarningCollector()
    presentation = read_pptx(
        file_like,
        path,
        warnings=warnings,
        limits=ZipBombLimits.from_settings(settings),
    )
    try:
        document = assemble(presentation, warnings, settings)
    except ConversionError:
        raise
    except Exception as exc:
        raise ConversionError("Failed to convert PPTX file", cause=exc) from exc

    logger.info(
        "Converted PPTX: %d slides, %d media, %d warnings",
        len(document["slides"]),
        len(document["media"]),
        len(document["warnings"]),
    )
    return document
