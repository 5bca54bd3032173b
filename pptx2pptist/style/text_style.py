"""
Run-level text style inheritance.

A run property is looked up through an ordered chain of property sources,
first populated source wins:

    1. the run's own ``a:rPr``
    2. the paragraph's ``a:pPr/a:defRPr``
    3. the paragraph's list level ``a:pPr/a:lvlNpPr/a:defRPr``
    4. the text body's ``a:lstStyle/a:lvlNpPr/a:defRPr``

followed by any list styles inherited from the matching layout and master
placeholders and the master's text styles. Nesting depth ``d`` (0-8) maps to
``a:lvl{d+1}pPr``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.style.color_resolver import ColorContext, resolve_merged

MAX_LEVEL = 8


@dataclass(frozen=True)
class ThemeFonts:
    major: Optional[str] = None
    minor: Optional[str] = None

    @classmethod
    def from_theme(cls, theme: XmlNode | None) -> "ThemeFonts":
        if theme is None:
            return cls()
        scheme = theme.find("a:themeElements", "a:fontScheme")
        if scheme is None:
            return cls()
        major = scheme.find("a:majorFont", "a:latin")
        minor = scheme.find("a:minorFont", "a:latin")
        return cls(
            major=major.attr("typeface") if major is not None else None,
            minor=minor.attr("typeface") if minor is not None else None,
        )

    def resolve(self, typeface: str | None) -> str | None:
        if not typeface:
            return None
        if typeface.startswith("+mj"):
            return self.major
        if typeface.startswith("+mn"):
            return self.minor
        return typeface


@dataclass(frozen=True)
class TextStyleScope:
    run_props: Optional[XmlNode] = None
    paragraph_props: Optional[XmlNode] = None
    list_style: Optional[XmlNode] = None
    level: int = 0
    # lvlNpPr containers from layout/master placeholders, most specific first
    inherited_list_styles: tuple[XmlNode, ...] = ()

    @property
    def level_tag(self) -> str:
        return f"a:lvl{min(max(self.level, 0), MAX_LEVEL) + 1}pPr"


PropertySource = Callable[[TextStyleScope], Optional[XmlNode]]


def _run_level(scope: TextStyleScope) -> XmlNode | None:
    return scope.run_props


def _paragraph_default(scope: TextStyleScope) -> XmlNode | None:
    if scope.paragraph_props is None:
        return None
    return scope.paragraph_props.child("a:defRPr")


def _paragraph_list_level(scope: TextStyleScope) -> XmlNode | None:
    if scope.paragraph_props is None:
        return None
    return scope.paragraph_props.find(scope.level_tag, "a:defRPr")


def _text_body_list_style(scope: TextStyleScope) -> XmlNode | None:
    if scope.list_style is None:
        return None
    return scope.list_style.find(scope.level_tag, "a:defRPr")


TEXT_STYLE_CHAIN: tuple[PropertySource, ...] = (
    _run_level,
    _paragraph_default,
    _paragraph_list_level,
    _text_body_list_style,
)


def iter_property_nodes(
    scope: TextStyleScope, chain: tuple[PropertySource, ...] = TEXT_STYLE_CHAIN
) -> Iterator[XmlNode]:
    for source in chain:
        node = source(scope)
        if node is not None:
            yield node
    for list_style in scope.inherited_list_styles:
        node = list_style.find(scope.level_tag, "a:defRPr")
        if node is not None:
            yield node


def resolve_text_color(
    scope: TextStyleScope,
    ctx: ColorContext,
    chain: tuple[PropertySource, ...] = TEXT_STYLE_CHAIN,
) -> str | None:
    """Merged ``#RRGGBB[AA]`` from the first level carrying a solid fill."""
    for props in iter_property_nodes(scope, chain):
        fill = props.child("a:solidFill")
        if fill is not None:
            return resolve_merged(fill, ctx)
    return None


def resolve_font_size(scope: TextStyleScope) -> float | None:
    """Points; ``sz`` is stored in hundredths of a point."""
    for props in iter_property_nodes(scope):
        size = props.int_attr("sz")
        if size is not None:
            return size / 100
    return None


def resolve_font(scope: TextStyleScope, fonts: ThemeFonts) -> str | None:
    for props in iter_property_nodes(scope):
        latin = props.child("a:latin")
        if latin is not None and latin.attr("typeface"):
            return fonts.resolve(latin.attr("typeface"))
    return None


def resolve_flag(scope: TextStyleScope, name: str) -> bool:
    for props in iter_property_nodes(scope):
        value = props.attr(name)
        if value is not None:
            return value in ("1", "true")
    return False


def resolve_underline(scope: TextStyleScope) -> bool:
    for props in iter_property_nodes(scope):
        value = props.attr("u")
        if value is not None:
            return value != "none"
    return False


def resolve_strikethrough(scope: TextStyleScope) -> bool:
    for props in iter_property_nodes(scope):
        value = props.attr("strike")
        if value is not None:
            return value in ("sngStrike", "dblStrike")
    return False
