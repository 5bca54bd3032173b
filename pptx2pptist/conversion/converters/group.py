from __future__ import annotations

import logging
from typing import Callable

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.data_types import Element, GroupElement
from pptx2pptist.diagnostics import WARN_ELEMENT_FAILED

logger = logging.getLogger(__name__)

ElementConverter = Callable[[Element, ConversionContext], "dict | list[dict] | None"]


def convert_group(
    element: GroupElement, ctx: ConversionContext, convert: ElementConverter
) -> list[dict]:
    """
    Flatten a group into its converted children, each tagged with the
    group's id. Nested groups end up tagged with the outermost group.
    """
    flattened: list[dict] = []
    for child in element.children:
        try:
            converted = convert(child, ctx)
        except Exception as exc:
            logger.debug(
                "Converting %s in group %s failed", child.id, element.id, exc_info=True
            )
            ctx.warn(
                WARN_ELEMENT_FAILED,
                f"Failed to convert {child.kind} element {child.id} in group "
                f"{element.id} on slide {ctx.slide_index}: {exc}",
            )
            continue
        if converted is None:
            continue
        items = converted if isinstance(converted, list) else [converted]
        for item in items:
            item["groupId"] = element.id
            flattened.append(item)
    return flattened
