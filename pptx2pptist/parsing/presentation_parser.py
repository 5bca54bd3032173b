"""
PPTX Presentation Parser
========================

Builds the intermediate ``Presentation`` model from a PPTX package.

Slides are processed sequentially in presentation order. Each slide gets its
own ParsingContext (slide, layout, master and theme trees plus relationship
maps); the theme, slide size and default text style are read once.

Failure scopes:
    - package level (not a zip, encrypted, missing presentation part):
      fatal, raised to the caller;
    - slide level: recorded as WARN_SLIDE_FAILED and the slide is kept
      with no elements;
    - element level: recorded as WARN_ELEMENT_FAILED and the element is
      dropped (see shape_tree).

Media embedded in a slide is stored in ``Presentation.media`` under
``"{slide_index}_{rId}"``; relationship ids repeat across slides, the
composite key does not.
"""

from __future__ import annotations

import io
import logging

from pptx2pptist.data_types import Presentation, Slide, ThemeInfo
from pptx2pptist.diagnostics import WARN_SLIDE_FAILED, WarningCollector
from pptx2pptist.exceptions import (
    ConversionError,
    PackageCorruptedError,
    SlideParseError,
    XmlParseError,
)
from pptx2pptist.geometry.units import DEFAULT_SLIDE_HEIGHT_EMU, DEFAULT_SLIDE_WIDTH_EMU
from pptx2pptist.ooxml.package import PRESENTATION_PATH, PptxPackage
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.ooxml.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits
from pptx2pptist.parsing.slide_parser import PresentationInfo, parse_slide, slide_id
from pptx2pptist.style.color_resolver import theme_slot_color
from pptx2pptist.style.text_style import ThemeFonts

logger = logging.getLogger(__name__)

ACCENT_SLOTS = tuple(f"accent{i}" for i in range(1, 7))


def accent_palette(theme: XmlNode | None) -> tuple[str, ...]:
    """accent1..accent6 as ``#RRGGBB``; undefined slots are left out."""
    colors = []
    for slot in ACCENT_SLOTS:
        color = theme_slot_color(slot, theme)
        if color is not None:
            colors.append(color)
    return tuple(colors)


def read_presentation_info(package: PptxPackage) -> PresentationInfo:
    presentation = package.read_xml(PRESENTATION_PATH)

    width, height = DEFAULT_SLIDE_WIDTH_EMU, DEFAULT_SLIDE_HEIGHT_EMU
    sld_sz = presentation.child("p:sldSz")
    if sld_sz is not None:
        width = sld_sz.int_attr("cx", width) or width
        height = sld_sz.int_attr("cy", height) or height

    theme_path = package.rels(PRESENTATION_PATH).theme
    theme = package.read_optional_xml(theme_path)
    if theme is None:
        # Some writers only link the theme from the first master
        for rel in package.rels(PRESENTATION_PATH).of_type("slideMaster"):
            master_theme = package.rels(rel.target).theme
            theme = package.read_optional_xml(master_theme)
            if theme is not None:
                theme_path = master_theme
                break

    return PresentationInfo(
        slide_width=width,
        slide_height=height,
        theme_path=theme_path,
        theme=theme,
        accent_colors=accent_palette(theme),
        theme_fonts=ThemeFonts.from_theme(theme),
        default_text_style=presentation.child("p:defaultTextStyle"),
    )


def parse_presentation(
    package: PptxPackage, warnings: WarningCollector | None = None
) -> Presentation:
    if warnings is None:
        warnings = WarningCollector()

    info = read_presentation_info(package)
    result = Presentation(
        slide_width=info.slide_width,
        slide_height=info.slide_height,
        theme=ThemeInfo(
            accent_colors=list(info.accent_colors),
            major_font=info.theme_fonts.major,
            minor_font=info.theme_fonts.minor,
        ),
    )

    for slide_index, slide_path in enumerate(package.slide_paths()):
        try:
            slide = parse_slide(
                package, info, slide_path, slide_index, result.media, warnings
            )
        except ConversionError:
            raise
        except Exception as exc:
            error = SlideParseError(slide_index, cause=exc)
            logger.debug("Slide %s failed", slide_path, exc_info=True)
            warnings.add(WARN_SLIDE_FAILED, f"{error}: {exc}")
            slide = Slide(index=slide_index, id=slide_id(slide_path), path=slide_path)
        result.slides.append(slide)

    result.warnings = warnings.warnings
    return result


def read_pptx(
    file_like: io.BytesIO,
    path: str | None = None,
    *,
    warnings: WarningCollector | None = None,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
) -> Presentation:
    """
    Parse a .pptx file into the intermediate Presentation model.

    Args:
        file_like: BytesIO holding the complete PPTX file. The stream position
            is reset before reading.
        path: Optional source path, only used in log messages.
        warnings: Collector to append non-fatal warnings to; a fresh one is
            used when omitted.
        limits: ZIP-bomb thresholds applied when the archive is opened.

    Returns:
        Presentation with slides in order, the media map, slide size in EMU,
        theme colors/fonts and the collected warnings.

    Raises:
        PackageInvalidError: Not a ZIP, or the root parts are missing.
        PackageEncryptedError: The file is password-protected.
        PackageCorruptedError: A required part is missing or malformed, or
            the archive trips the ZIP-bomb limits.
        ConversionError: Any other failure, with the original as cause.
    """
    try:
        logger.debug("Reading pptx %s", path or "<stream>")
        package = PptxPackage(file_like, limits=limits)
        try:
            presentation = parse_presentation(package, warnings)
        finally:
            package.close()
    except ConversionError:
        raise
    except XmlParseError as exc:
        raise PackageCorruptedError(
            f"Malformed XML in package part: {exc.part_path}", cause=exc
        ) from exc
    except KeyError as exc:
        raise PackageCorruptedError(f"Missing part: {exc}", cause=exc) from exc
    except Exception as exc:
        raise ConversionError("Failed to read PPTX file", cause=exc) from exc

    logger.info(
        "Parsed PPTX: %d slides, %d media, %d warnings",
        len(presentation.slides),
        len(presentation.media),
        len(presentation.warnings),
    )
    return presentation
