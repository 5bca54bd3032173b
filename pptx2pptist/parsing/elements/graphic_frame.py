from __future__ import annotations

import logging

from pptx2pptist.data_types import ChartElement, TableElement
from pptx2pptist.ooxml.namespaces import CHART_URI_MARKER, TABLE_URI_MARKER
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.chart import detect_chart_type
from pptx2pptist.parsing.elements.common import element_identity, resolve_transform
from pptx2pptist.parsing.elements.table import parse_table

logger = logging.getLogger(__name__)


def parse_graphic_frame(
    node: XmlNode, ctx: ParsingContext
) -> ChartElement | TableElement | None:
    """
    Dispatch a ``p:graphicFrame`` on its ``a:graphicData`` uri.

    Returns None for graphic content other than charts and tables (SmartArt,
    OLE objects).
    """
    element_id, name = element_identity(node)
    transform = resolve_transform(node, node.child("p:xfrm"), ctx, "graphicFrame")

    graphic_data = node.find("a:graphic", "a:graphicData")
    uri = graphic_data.attr("uri", "") if graphic_data is not None else ""

    if CHART_URI_MARKER in uri:
        chart = graphic_data.child("c:chart")
        rel_id = chart.attr("r:id", "") if chart is not None else ""
        chart_path = ctx.slide_rels.target(rel_id)
        return ChartElement(
            id=element_id,
            name=name,
            transform=transform,
            chart_type=detect_chart_type(ctx.chart_parts.get(chart_path or "")),
            rel_id=rel_id,
            chart_path=chart_path,
        )

    if TABLE_URI_MARKER in uri:
        tbl = graphic_data.child("a:tbl")
        if tbl is None:
            return None
        rows, column_widths, row_heights = parse_table(tbl, ctx)
        return TableElement(
            id=element_id,
            name=name,
            transform=transform,
            rows=rows,
            column_widths=column_widths,
            row_heights=row_heights,
        )

    logger.debug("Unsupported graphic frame %s with uri %r", element_id, uri)
    return None
