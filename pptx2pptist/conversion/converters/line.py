from __future__ import annotations

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.data_types import LineDash, LineElement

DEFAULT_LINE_WIDTH_PT = 1.0


def convert_line(element: LineElement, ctx: ConversionContext) -> dict | None:
    """Line in its bounding box; start/end are relative to left/top."""
    stroke = element.stroke
    if stroke is not None and stroke.dash == LineDash.NONE:
        return None

    start_x, start_y = ctx.px_x(element.start[0]), ctx.px_y(element.start[1])
    end_x, end_y = ctx.px_x(element.end[0]), ctx.px_y(element.end[1])
    left, top = min(start_x, end_x), min(start_y, end_y)

    return {
        "id": element.id,
        "type": "line",
        "left": left,
        "top": top,
        "width": ctx.stroke_px(stroke.width if stroke else DEFAULT_LINE_WIDTH_PT),
        "start": [round(start_x - left, 2), round(start_y - top, 2)],
        "end": [round(end_x - left, 2), round(end_y - top, 2)],
        "style": "dashed" if stroke and stroke.dash == LineDash.DASHED else "solid",
        "color": (stroke.color if stroke else None) or ctx.settings.default_color,
        "points": ["", ""],
    }
