"""
Color Resolution
================

Resolves a DrawingML color reference to a concrete value.

A fill-like node (``a:solidFill``, ``a:fillRef``, ``a:bgRef``, ``a:gs``...)
carries exactly one color child:

    a:srgbClr val="FF0000"        explicit RGB
    a:schemeClr val="accent1"     theme slot, via the color map
    a:scrgbClr r= g= b=           RGB in 1000ths of a percent
    a:prstClr val="dkBlue"        preset name
    a:hslClr hue= sat= lum=       HSL
    a:sysClr val= lastClr=        system color with its last known value

The color child may in turn hold modifiers (``a:lumMod``, ``a:tint``...).
Lightness/hue/saturation modifiers are applied in a fixed order on the HSL
form of the color; alpha is tracked on the side so callers can merge it into
``#RRGGBBAA`` or keep it as a separate opacity.

Scheme names go through the color map before the theme lookup: the slide's
override, then the layout's override, then the master's ``p:clrMap``. Only
tx1/tx2/bg1/bg2 are remapped; accents and hyperlinks are physical slots.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from pptx2pptist.data_types import ResolvedColor
from pptx2pptist.diagnostics import WARN_STYLE_RESOLUTION, WarningCollector
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.style.color import hex_to_hsl, hsl_to_hex, normalize_hex, rgb_to_hex
from pptx2pptist.style.preset_colors import lookup_preset_color

logger = logging.getLogger(__name__)

COLOR_TAGS = (
    "a:srgbClr",
    "a:schemeClr",
    "a:scrgbClr",
    "a:prstClr",
    "a:hslClr",
    "a:sysClr",
)

# Logical slot -> physical slot when no color map says otherwise
DEFAULT_COLOR_MAP = {
    "tx1": "dk1",
    "tx2": "dk2",
    "bg1": "lt1",
    "bg2": "lt2",
}

_SYSTEM_COLOR_FALLBACKS = {
    "windowText": "000000",
    "window": "FFFFFF",
}

_PERCENT = 100000.0


class ColorContext(Protocol):
    """What the resolver needs from the parsing context."""

    theme: Optional[XmlNode]
    slide: Optional[XmlNode]
    layout: Optional[XmlNode]
    master: Optional[XmlNode]
    warnings: Optional[WarningCollector]


def _override_mapping(part: XmlNode | None) -> XmlNode | None:
    if part is None:
        return None
    return part.find("p:clrMapOvr", "a:overrideClrMapping")


def map_scheme_slot(name: str, ctx: ColorContext) -> str:
    """Map a logical scheme name (tx1, bg2...) to the physical theme slot."""
    if name not in DEFAULT_COLOR_MAP:
        return name
    candidates = (
        _override_mapping(ctx.slide),
        _override_mapping(ctx.layout),
        ctx.master.child("p:clrMap") if ctx.master is not None else None,
    )
    for mapping in candidates:
        if mapping is not None and mapping.attr(name):
            return mapping.attr(name)
    return DEFAULT_COLOR_MAP[name]


def theme_slot_color(slot: str, theme: XmlNode | None) -> str | None:
    """``#RRGGBB`` stored in the theme's color scheme for a physical slot."""
    if theme is None:
        return None
    slot_node = theme.find("a:themeElements", "a:clrScheme", f"a:{slot}")
    if slot_node is None:
        return None
    srgb = slot_node.child("a:srgbClr")
    if srgb is not None:
        return normalize_hex(srgb.attr("val"))
    sys_clr = slot_node.child("a:sysClr")
    if sys_clr is not None:
        return _system_color(sys_clr)
    return None


def _system_color(node: XmlNode) -> str | None:
    last = normalize_hex(node.attr("lastClr"))
    if last is not None:
        return last
    fallback = _SYSTEM_COLOR_FALLBACKS.get(node.attr("val", ""))
    return normalize_hex(fallback)


def _warn(ctx: ColorContext, message: str) -> None:
    warnings = getattr(ctx, "warnings", None)
    if warnings is not None:
        warnings.add(WARN_STYLE_RESOLUTION, message)
    else:
        logger.warning("%s: %s", WARN_STYLE_RESOLUTION, message)


def _percent_attr(node: XmlNode, name: str, default: float = 0.0) -> float:
    value = node.int_attr(name)
    if value is None:
        return default
    return value / _PERCENT


def _base_color(
    color_node: XmlNode, ctx: ColorContext, placeholder_color: str | None
) -> str | None:
    tag = color_node.tag
    if tag == "a:srgbClr":
        return normalize_hex(color_node.attr("val"))
    if tag == "a:schemeClr":
        name = color_node.attr("val", "")
        if name == "phClr":
            return normalize_hex(placeholder_color)
        slot = map_scheme_slot(name, ctx)
        color = theme_slot_color(slot, ctx.theme)
        if color is None:
            logger.debug("Theme slot %s (%s) not defined", slot, name)
        return color
    if tag == "a:scrgbClr":
        return rgb_to_hex(
            _percent_attr(color_node, "r") * 255,
            _percent_attr(color_node, "g") * 255,
            _percent_attr(color_node, "b") * 255,
        )
    if tag == "a:prstClr":
        name = color_node.attr("val", "")
        value = lookup_preset_color(name)
        if value is None:
            _warn(ctx, f"Unknown preset color '{name}', using black")
            value = "000000"
        return normalize_hex(value)
    if tag == "a:hslClr":
        hue = (color_node.int_attr("hue") or 0) / 60000.0
        return hsl_to_hex(
            hue, _percent_attr(color_node, "sat"), _percent_attr(color_node, "lum")
        )
    if tag == "a:sysClr":
        return _system_color(color_node)
    return None


def _has_any(node: XmlNode, tags: tuple[str, ...]) -> bool:
    return any(node.has(tag) for tag in tags)


_HSL_MODIFIERS = ("a:hueMod", "a:lumMod", "a:lumOff", "a:satMod", "a:shade", "a:tint")


def color_alpha(color_node: XmlNode) -> float:
    """Alpha in 0..1 from the ``alpha``, ``alphaMod`` and ``alphaOff`` children."""
    alpha = 1.0
    alpha_node = color_node.child("a:alpha")
    if alpha_node is not None:
        alpha = _percent_attr(alpha_node, "val", 1.0)
    alpha_mod = color_node.child("a:alphaMod")
    if alpha_mod is not None:
        alpha *= _percent_attr(alpha_mod, "val", 1.0)
    alpha_off = color_node.child("a:alphaOff")
    if alpha_off is not None:
        alpha += _percent_attr(alpha_off, "val")
    return max(0.0, min(1.0, alpha))


def apply_modifiers(hex_color: str, color_node: XmlNode) -> tuple[str, float]:
    """
    Apply the modifier children of ``color_node``.

    Returns the new ``#RRGGBB`` and the alpha in 0..1.
    """
    alpha = color_alpha(color_node)

    if not _has_any(color_node, _HSL_MODIFIERS):
        return hex_color, alpha

    hue, saturation, lightness = hex_to_hsl(hex_color)

    node = color_node.child("a:hueMod")
    if node is not None:
        hue = (hue * _percent_attr(node, "val", 1.0)) % 360.0
    node = color_node.child("a:lumMod")
    if node is not None:
        lightness = min(1.0, lightness * _percent_attr(node, "val", 1.0))
    node = color_node.child("a:lumOff")
    if node is not None:
        lightness = max(0.0, min(1.0, lightness + _percent_attr(node, "val")))
    node = color_node.child("a:satMod")
    if node is not None:
        saturation = min(1.0, saturation * _percent_attr(node, "val", 1.0))
    node = color_node.child("a:shade")
    if node is not None:
        lightness *= min(1.0, _percent_attr(node, "val", 1.0))
    node = color_node.child("a:tint")
    if node is not None:
        tint = min(1.0, _percent_attr(node, "val", 1.0))
        lightness = lightness * tint + (1.0 - tint)

    return hsl_to_hex(hue, saturation, lightness), alpha


def find_color_node(fill_node: XmlNode) -> XmlNode | None:
    if fill_node.tag in COLOR_TAGS:
        return fill_node
    for tag in COLOR_TAGS:
        node = fill_node.child(tag)
        if node is not None:
            return node
    return None


def is_fully_transparent(fill_node: XmlNode | None) -> bool:
    """True when ``fill_node`` declares a color whose alpha is zero."""
    if fill_node is None:
        return False
    color_node = find_color_node(fill_node)
    return color_node is not None and color_alpha(color_node) <= 0.0


def resolve_color(
    fill_node: XmlNode | None,
    ctx: ColorContext,
    placeholder_color: str | None = None,
) -> ResolvedColor | None:
    """
    Resolve the color held by ``fill_node``.

    Returns None when nothing resolves (no color child, undefined theme slot)
    and when alpha drives the color fully transparent.
    """
    if fill_node is None:
        return None

    color_node = find_color_node(fill_node)
    if color_node is None:
        style_ref = fill_node.child("a:fillRef")
        if style_ref is not None:
            return resolve_color(style_ref, ctx, placeholder_color)
        return None

    base = _base_color(color_node, ctx, placeholder_color)
    if base is None:
        return None

    hex_color, alpha = apply_modifiers(base, color_node)
    if alpha <= 0.0:
        return None
    if alpha < 1.0:
        return ResolvedColor(hex=hex_color, opacity=round(alpha, 4))
    return ResolvedColor(hex=hex_color)


def resolve_merged(
    fill_node: XmlNode | None,
    ctx: ColorContext,
    placeholder_color: str | None = None,
) -> str | None:
    """Single color string, alpha folded in as ``#RRGGBBAA``."""
    color = resolve_color(fill_node, ctx, placeholder_color)
    return color.merged() if color is not None else None


def resolve_with_separate_alpha(
    fill_node: XmlNode | None,
    ctx: ColorContext,
    placeholder_color: str | None = None,
) -> ResolvedColor | None:
    """Color and opacity kept apart, for targets that apply opacity themselves."""
    return resolve_color(fill_node, ctx, placeholder_color)
