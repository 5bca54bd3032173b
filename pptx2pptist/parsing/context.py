from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from pptx2pptist.diagnostics import WarningCollector
from pptx2pptist.ooxml.relationships import RelationshipMap
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.style.text_style import ThemeFonts


def media_key(slide_index: int, rel_id: str, scope: str | None = None) -> str:
    """
    Media map key for a relationship id.

    Relationship ids are only unique inside one part, so the key carries the
    slide index, plus the owning part kind for layout/master resources.
    """
    if scope:
        return f"{slide_index}_{scope}:{rel_id}"
    return f"{slide_index}_{rel_id}"


@dataclass(frozen=True)
class ParsingContext:
    """Everything one slide's parse pass reads. Built once per slide."""

    slide_index: int
    slide_path: str
    slide: XmlNode
    slide_rels: RelationshipMap
    layout: Optional[XmlNode] = None
    layout_rels: Optional[RelationshipMap] = None
    master: Optional[XmlNode] = None
    master_rels: Optional[RelationshipMap] = None
    theme: Optional[XmlNode] = None
    accent_colors: tuple[str, ...] = ()
    theme_fonts: ThemeFonts = field(default_factory=ThemeFonts)
    default_text_style: Optional[XmlNode] = None
    # chart part path -> parsed chart space
    chart_parts: Mapping[str, XmlNode] = field(default_factory=dict)
    warnings: Optional[WarningCollector] = None

    def media_key(self, rel_id: str) -> str:
        return media_key(self.slide_index, rel_id)

    def scoped_media_key(self, scope: str, rel_id: str) -> str:
        return media_key(self.slide_index, rel_id, scope)

    def warn(self, code: str, message: str) -> None:
        if self.warnings is not None:
            self.warnings.add(code, message)
