from __future__ import annotations

from pptx2pptist.ooxml.xml_node import XmlNode

DEFAULT_CHART_TYPE = "column"

# plotArea child tag -> output chart type
PLOT_TYPES = {
    "c:lineChart": "line",
    "c:line3DChart": "line",
    "c:pieChart": "pie",
    "c:pie3DChart": "pie",
    "c:ofPieChart": "pie",
    "c:doughnutChart": "ring",
    "c:areaChart": "area",
    "c:area3DChart": "area",
    "c:scatterChart": "scatter",
    "c:bubbleChart": "scatter",
    "c:radarChart": "radar",
}

_BAR_TAGS = ("c:barChart", "c:bar3DChart")


def detect_chart_type(chart_space: XmlNode | None) -> str:
    """Chart type from the first plot in ``c:plotArea``. No series data is read."""
    if chart_space is None:
        return DEFAULT_CHART_TYPE
    plot_area = chart_space.find("c:chart", "c:plotArea")
    if plot_area is None:
        return DEFAULT_CHART_TYPE
    for plot in plot_area.ordered_children(exclude=("c:layout",)):
        if plot.tag in _BAR_TAGS:
            bar_dir = plot.find("c:barDir")
            if bar_dir is not None and bar_dir.attr("val") == "bar":
                return "bar"
            return "column"
        if plot.tag in PLOT_TYPES:
            return PLOT_TYPES[plot.tag]
    return DEFAULT_CHART_TYPE
