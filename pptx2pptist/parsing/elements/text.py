"""Text bodies (``p:txBody``) to Paragraph/Run lists."""

from __future__ import annotations

from pptx2pptist.data_types import Alignment, Paragraph, Run
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.style.text_style import (
    TextStyleScope,
    resolve_flag,
    resolve_font,
    resolve_font_size,
    resolve_strikethrough,
    resolve_text_color,
    resolve_underline,
)

ALIGNMENTS = {
    "l": Alignment.LEFT,
    "ctr": Alignment.CENTER,
    "r": Alignment.RIGHT,
    "just": Alignment.JUSTIFY,
    "dist": Alignment.JUSTIFY,
}

BULLET_TAGS = ("a:buFont", "a:buChar", "a:buAutoNum")

# Elements inside a:p that carry visible text
_RUN_TAGS = ("a:r", "a:fld")


def _run_text(run: XmlNode) -> str:
    text_node = run.child("a:t")
    return text_node.text_content() if text_node is not None else ""


def has_visible_text(tx_body: XmlNode | None) -> bool:
    """True when at least one run holds non-whitespace text."""
    if tx_body is None:
        return False
    for paragraph in tx_body.children("a:p"):
        for tag in _RUN_TAGS:
            for run in paragraph.children(tag):
                if _run_text(run).strip():
                    return True
    return False


def _parse_run(run: XmlNode, scope: TextStyleScope, ctx: ParsingContext) -> Run:
    return Run(
        text=_run_text(run),
        bold=resolve_flag(scope, "b"),
        italic=resolve_flag(scope, "i"),
        underline=resolve_underline(scope),
        strikethrough=resolve_strikethrough(scope),
        size=resolve_font_size(scope),
        font=resolve_font(scope, ctx.theme_fonts),
        color=resolve_text_color(scope, ctx),
    )


def parse_paragraph(
    paragraph: XmlNode,
    ctx: ParsingContext,
    list_style: XmlNode | None = None,
    inherited: tuple[XmlNode, ...] = (),
) -> Paragraph:
    p_pr = paragraph.child("a:pPr")
    level = p_pr.int_attr("lvl") if p_pr is not None else None

    result = Paragraph(level=level)
    if p_pr is not None:
        result.alignment = ALIGNMENTS.get(p_pr.attr("algn", ""))
        result.bullet = not p_pr.has("a:buNone") and any(
            p_pr.has(tag) for tag in BULLET_TAGS
        )

    for child in paragraph.ordered_children(exclude=("a:pPr", "a:endParaRPr")):
        if child.tag == "a:br":
            result.runs.append(Run(text="\n"))
            continue
        if child.tag not in _RUN_TAGS:
            continue
        scope = TextStyleScope(
            run_props=child.child("a:rPr"),
            paragraph_props=p_pr,
            list_style=list_style,
            level=level or 0,
            inherited_list_styles=inherited,
        )
        result.runs.append(_parse_run(child, scope, ctx))
    return result


def parse_text_body(
    tx_body: XmlNode, ctx: ParsingContext, inherited: tuple[XmlNode, ...] = ()
) -> list[Paragraph]:
    list_style = tx_body.child("a:lstStyle")
    return [
        parse_paragraph(paragraph, ctx, list_style, inherited)
        for paragraph in tx_body.children("a:p")
    ]


def plain_text(tx_body: XmlNode | None) -> list[str]:
    """Paragraph texts without styling, used for notes."""
    if tx_body is None:
        return []
    lines = []
    for paragraph in tx_body.children("a:p"):
        parts = []
        for child in paragraph.ordered_children():
            if child.tag in _RUN_TAGS:
                parts.append(_run_text(child))
            elif child.tag == "a:br":
                parts.append("\n")
        lines.append("".join(parts))
    return lines
