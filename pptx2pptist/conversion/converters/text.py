from __future__ import annotations

import html

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.conversion.converters.shape import add_flips
from pptx2pptist.data_types import Alignment, Paragraph, Run, TextElement

LINE_HEIGHT = 1.5
WORD_SPACE = 0
PARAGRAPH_SPACE = 5
LEVEL_INDENT_PX = 20


def run_to_html(run: Run, ctx: ConversionContext) -> str:
    content = html.escape(run.text, quote=False).replace("\n", "<br>")
    if run.strikethrough:
        content = f"<s>{content}</s>"
    if run.underline:
        content = f"<u>{content}</u>"
    if run.italic:
        content = f"<em>{content}</em>"
    if run.bold:
        content = f"<strong>{content}</strong>"

    styles = []
    if run.size:
        styles.append(f"font-size: {ctx.font_px(run.size):g}px")
    if run.color:
        styles.append(f"color: {run.color}")
    if run.font:
        styles.append(f"font-family: {html.escape(run.font)}")
    if styles:
        content = f'<span style="{"; ".join(styles)};">{content}</span>'
    return content


def paragraph_to_html(paragraph: Paragraph, ctx: ConversionContext) -> str:
    align = (paragraph.alignment or Alignment.LEFT).value
    style = f"text-align: {align};"
    if paragraph.level and not paragraph.bullet:
        style += f" margin-left: {paragraph.level * LEVEL_INDENT_PX}px;"
    runs = "".join(run_to_html(run, ctx) for run in paragraph.runs)
    return f'<p style="{style}">{runs}</p>'


def paragraphs_to_html(paragraphs: list[Paragraph], ctx: ConversionContext) -> str:
    """HTML rich text; consecutive bullet paragraphs share one ``<ul>``."""
    parts: list[str] = []
    in_list = False
    for paragraph in paragraphs:
        if paragraph.bullet and not in_list:
            parts.append("<ul>")
            in_list = True
        elif not paragraph.bullet and in_list:
            parts.append("</ul>")
            in_list = False
        body = paragraph_to_html(paragraph, ctx)
        parts.append(f"<li>{body}</li>" if paragraph.bullet else body)
    if in_list:
        parts.append("</ul>")
    return "".join(parts)


def _first_run(paragraphs: list[Paragraph]) -> Run | None:
    for paragraph in paragraphs:
        for run in paragraph.runs:
            if run.text.strip():
                return run
    return None


def convert_text(element: TextElement, ctx: ConversionContext) -> dict:
    first_run = _first_run(element.paragraphs)
    result = {
        "id": element.id,
        "type": "text",
        **ctx.box(element.transform),
        "content": paragraphs_to_html(element.paragraphs, ctx),
        "defaultFontName": (first_run.font if first_run else None)
        or ctx.settings.default_font,
        "defaultColor": (first_run.color if first_run else None)
        or ctx.settings.default_color,
        "lineHeight": LINE_HEIGHT,
        "wordSpace": WORD_SPACE,
        "paragraphSpace": PARAGRAPH_SPACE,
    }
    add_flips(result, element)
    return result
