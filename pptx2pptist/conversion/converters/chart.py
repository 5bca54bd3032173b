from __future__ import annotations

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.data_types import ChartElement
from pptx2pptist.diagnostics import WARN_CHART_PARTIAL


def convert_chart(element: ChartElement, ctx: ConversionContext) -> dict:
    """Chart placeholder: the type survives, the series data does not."""
    ctx.warn(
        WARN_CHART_PARTIAL,
        f"Chart {element.id} converted without data (type {element.chart_type})",
    )
    return {
        "id": element.id,
        "type": "chart",
        **ctx.box(element.transform),
        "chartType": element.chart_type,
        "data": {"labels": [], "legends": [], "series": []},
        "themeColors": list(ctx.theme_colors) or [ctx.settings.default_color],
        "fill": "transparent",
    }
