from __future__ import annotations

from pptx2pptist.data_types import SolidFill, TableCell
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.text import parse_text_body
from pptx2pptist.style.fill import resolve_fill


def _cell(tc: XmlNode, ctx: ParsingContext) -> TableCell:
    cell = TableCell(
        col_span=tc.int_attr("gridSpan", 1) or 1,
        row_span=tc.int_attr("rowSpan", 1) or 1,
        merged=tc.attr("hMerge") in ("1", "true") or tc.attr("vMerge") in ("1", "true"),
    )

    tx_body = tc.child("a:txBody")
    if tx_body is not None:
        paragraphs = parse_text_body(tx_body, ctx)
        cell.text = "\n".join(paragraph.text for paragraph in paragraphs)
        if paragraphs:
            cell.alignment = paragraphs[0].alignment
        first_run = next(
            (run for paragraph in paragraphs for run in paragraph.runs if run.text.strip()),
            None,
        )
        if first_run is not None:
            cell.bold = first_run.bold
            cell.italic = first_run.italic
            cell.color = first_run.color
            cell.font_size = first_run.size

    fill = resolve_fill(tc.child("a:tcPr"), ctx)
    if isinstance(fill, SolidFill):
        cell.fill = fill.color.merged()
    return cell


def parse_table(
    tbl: XmlNode, ctx: ParsingContext
) -> tuple[list[list[TableCell]], list[int], list[int]]:
    """(rows of cells, column widths, row heights); widths and heights in EMU."""
    grid = tbl.child("a:tblGrid")
    grid_cols = grid.children("a:gridCol") if grid is not None else []
    column_widths = [gc.int_attr("w", 0) or 0 for gc in grid_cols]
    rows = []
    row_heights = []
    for tr in tbl.children("a:tr"):
        row_heights.append(tr.int_attr("h", 0) or 0)
        rows.append([_cell(tc, ctx) for tc in tr.children("a:tc")])
    return rows, column_widths, row_heights
