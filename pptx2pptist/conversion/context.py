from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pptx2pptist.config import DEFAULT_SETTINGS, Settings
from pptx2pptist.data_types import MediaItem, Transform
from pptx2pptist.diagnostics import WarningCollector
from pptx2pptist.geometry.units import ScaleFactors, points_to_pixels


@dataclass
class ConversionContext:
    """
    State shared by the element converters of one conversion.

    The assembler owns it and moves ``slide_index`` forward; converters only
    append to ``warnings``.
    """

    scale: ScaleFactors
    warnings: WarningCollector = field(default_factory=WarningCollector)
    media_map: Mapping[str, MediaItem] = field(default_factory=dict)
    slide_index: int = 0
    theme_colors: tuple[str, ...] = ()
    settings: Settings = DEFAULT_SETTINGS

    def warn(self, code: str, message: str) -> None:
        self.warnings.add(code, message)

    def has_media(self, key: str | None) -> bool:
        return bool(key) and key in self.media_map

    def px_x(self, emu: float) -> float:
        return self.scale.px_x(emu)

    def px_y(self, emu: float) -> float:
        return self.scale.px_y(emu)

    def box(self, transform: Transform) -> dict:
        """left/top/width/height/rotate in output pixels."""
        return {
            "left": self.px_x(transform.x),
            "top": self.px_y(transform.y),
            "width": self.px_x(transform.width),
            "height": self.px_y(transform.height),
            "rotate": transform.rotation,
        }

    def font_px(self, points: float) -> float:
        return round(points_to_pixels(points) * self.scale.y, 2)

    def stroke_px(self, points: float) -> float:
        return round(points_to_pixels(points) * self.scale.x, 2)
