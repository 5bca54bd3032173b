"""
Per-slide parsing: builds the ParsingContext for one slide, walks its shape
tree, and resolves its background and speaker notes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from pptx2pptist.data_types import FillSource, ImageFill, MediaItem, Slide
from pptx2pptist.diagnostics import WarningCollector
from pptx2pptist.exceptions import XmlParseError
from pptx2pptist.ooxml.package import PptxPackage
from pptx2pptist.ooxml.relationships import MEDIA_TYPES, REL_CHART, RelationshipMap
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.notes import extract_notes
from pptx2pptist.parsing.shape_tree import parse_elements
from pptx2pptist.style.fill import resolve_background
from pptx2pptist.style.text_style import ThemeFonts

logger = logging.getLogger(__name__)

LAYOUT_SCOPE = "layout"
MASTER_SCOPE = "master"


@dataclass(frozen=True)
class PresentationInfo:
    """Presentation-wide parts shared read-only by every slide."""

    slide_width: int
    slide_height: int
    theme_path: Optional[str] = None
    theme: Optional[XmlNode] = None
    accent_colors: tuple[str, ...] = ()
    theme_fonts: ThemeFonts = field(default_factory=ThemeFonts)
    default_text_style: Optional[XmlNode] = None


def _load_chart_parts(
    package: PptxPackage, rels: RelationshipMap
) -> dict[str, XmlNode]:
    charts: dict[str, XmlNode] = {}
    for rel in rels.of_type(REL_CHART):
        if rel.external or not package.exists(rel.target):
            continue
        try:
            charts[rel.target] = package.read_xml(rel.target)
        except XmlParseError:
            logger.debug("Chart part %s is not well-formed", rel.target)
    return charts


def build_parsing_context(
    package: PptxPackage,
    info: PresentationInfo,
    slide_path: str,
    slide_index: int,
    warnings: WarningCollector | None = None,
) -> ParsingContext:
    slide = package.read_xml(slide_path)
    slide_rels = package.rels(slide_path)

    layout_path = slide_rels.slide_layout
    layout = package.read_optional_xml(layout_path)
    layout_rels = package.rels(layout_path) if layout is not None else None

    master_path = layout_rels.slide_master if layout_rels is not None else None
    master = package.read_optional_xml(master_path)
    master_rels = package.rels(master_path) if master is not None else None

    theme = info.theme
    if theme is None and master_rels is not None:
        theme = package.read_optional_xml(master_rels.theme)

    return ParsingContext(
        slide_index=slide_index,
        slide_path=slide_path,
        slide=slide,
        slide_rels=slide_rels,
        layout=layout,
        layout_rels=layout_rels,
        master=master,
        master_rels=master_rels,
        theme=theme,
        accent_colors=info.accent_colors,
        theme_fonts=info.theme_fonts,
        default_text_style=info.default_text_style,
        chart_parts=_load_chart_parts(package, slide_rels),
        warnings=warnings,
    )


def _load_media(
    package: PptxPackage,
    rels: RelationshipMap,
    rel_id: str,
    key: str,
    media: dict[str, MediaItem],
) -> None:
    if key in media:
        return
    rel = rels.get(rel_id)
    if rel is None or rel.external or not package.exists(rel.target):
        return
    media[key] = MediaItem(
        data=package.read_bytes(rel.target),
        content_type=package.content_type(rel.target),
        path=rel.target,
    )


def load_slide_media(
    package: PptxPackage, ctx: ParsingContext, media: dict[str, MediaItem]
) -> None:
    """Register every embedded image/audio/video of the slide under its composite key."""
    for rel in ctx.slide_rels.by_id.values():
        if rel.type_name in MEDIA_TYPES:
            _load_media(package, ctx.slide_rels, rel.id, ctx.media_key(rel.id), media)


def resolve_slide_background(
    package: PptxPackage, ctx: ParsingContext, media: dict[str, MediaItem]
) -> FillSource | None:
    """First background declared on the slide, its layout, then its master."""
    owners = (
        (ctx.slide, ctx.slide_rels, None),
        (ctx.layout, ctx.layout_rels, LAYOUT_SCOPE),
        (ctx.master, ctx.master_rels, MASTER_SCOPE),
    )
    for part, rels, scope in owners:
        if part is None:
            continue

        def key_for(rel_id: str, scope: str | None = scope) -> str:
            if scope is None:
                return ctx.media_key(rel_id)
            return ctx.scoped_media_key(scope, rel_id)

        background = resolve_background(part, ctx, key_for)
        if background is None:
            continue
        if isinstance(background, ImageFill) and rels is not None:
            _load_media(package, rels, background.rel_id, background.media_key, media)
        return background
    return None


def parse_slide(
    package: PptxPackage,
    info: PresentationInfo,
    slide_path: str,
    slide_index: int,
    media: dict[str, MediaItem],
    warnings: WarningCollector | None = None,
) -> Slide:
    ctx = build_parsing_context(package, info, slide_path, slide_index, warnings)

    tree = ctx.slide.find("p:cSld", "p:spTree")
    elements = parse_elements(tree, ctx) if tree is not None else []
    load_slide_media(package, ctx, media)

    notes_path = ctx.slide_rels.notes_slide
    notes = extract_notes(package.read_optional_xml(notes_path))

    slide = Slide(
        index=slide_index,
        id=slide_id(slide_path),
        path=slide_path,
        elements=elements,
        background=resolve_slide_background(package, ctx, media),
        notes=notes,
        layout_path=ctx.slide_rels.slide_layout,
    )
    logger.debug(
        "Parsed slide %d (%s): %d elements", slide_index, slide_path, len(elements)
    )
    return slide


def slide_id(slide_path: str) -> str:
    return slide_path.rsplit("/", 1)[-1].rsplit(".", 1)[0]
