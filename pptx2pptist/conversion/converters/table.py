from __future__ import annotations

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.data_types import Alignment, TableCell, TableElement

CELL_MIN_HEIGHT = 30
DEFAULT_OUTLINE = {"width": 1, "style": "solid", "color": "#EEECE1"}


def column_fractions(widths: list[int], columns: int) -> list[float]:
    """Column widths as fractions of the table width."""
    if columns <= 0:
        return []
    total = sum(widths[:columns])
    if len(widths) < columns or total <= 0:
        return [round(1 / columns, 4)] * columns
    return [round(width / total, 4) for width in widths[:columns]]


def _cell_dict(cell: TableCell, cell_id: str, ctx: ConversionContext) -> dict:
    style: dict = {
        "bold": cell.bold,
        "em": cell.italic,
        "align": (cell.alignment or Alignment.LEFT).value,
    }
    if cell.color:
        style["color"] = cell.color
    if cell.fill:
        style["backcolor"] = cell.fill
    if cell.font_size:
        style["fontsize"] = f"{ctx.font_px(cell.font_size):g}px"
    return {
        "id": cell_id,
        "colspan": cell.col_span,
        "rowspan": cell.row_span,
        "text": cell.text,
        "style": style,
    }


def convert_table(element: TableElement, ctx: ConversionContext) -> dict | None:
    if not element.rows:
        return None
    columns = max(len(row) for row in element.rows)
    data = [
        [
            _cell_dict(cell, f"{element.id}-{row_index}-{col_index}", ctx)
            for col_index, cell in enumerate(row)
        ]
        for row_index, row in enumerate(element.rows)
    ]
    return {
        "id": element.id,
        "type": "table",
        **ctx.box(element.transform),
        "outline": dict(DEFAULT_OUTLINE),
        "colWidths": column_fractions(element.column_widths, columns),
        "cellMinHeight": CELL_MIN_HEIGHT,
        "data": data,
    }
