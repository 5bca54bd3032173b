"""
EMU conversions and output canvas detection.

OOXML lengths are EMU (914400 per inch, 12700 per point). The output canvas
is one of a few standard pixel sizes picked by aspect ratio, so EMU map to
pixels through per-presentation scale factors rather than a fixed DPI.
"""

from dataclasses import dataclass

EMU_PER_INCH = 914400
EMU_PER_POINT = 12700
PIXELS_PER_INCH = 96

DEFAULT_SLIDE_WIDTH_EMU = 9144000
DEFAULT_SLIDE_HEIGHT_EMU = 6858000

RATIO_TOLERANCE = 0.01
CUSTOM_WIDTH_PX = 1280

# (aspect ratio, width px, height px)
STANDARD_SIZES = (
    (16 / 9, 1280, 720),
    (4 / 3, 960, 720),
    (16 / 10, 1152, 720),
)


def emu_to_points(emu: float) -> float:
    return emu / EMU_PER_POINT


def points_to_emu(points: float) -> float:
    return points * EMU_PER_POINT


def points_to_pixels(points: float) -> float:
    return points / 72 * PIXELS_PER_INCH


def emu_to_pixels(emu: float) -> float:
    """Natural pixels at 96 DPI."""
    return emu / EMU_PER_INCH * PIXELS_PER_INCH


def detect_target_size(width_emu: int, height_emu: int) -> tuple[int, int]:
    """Output canvas (width, height) in pixels for a slide size in EMU."""
    if width_emu <= 0 or height_emu <= 0:
        width_emu, height_emu = DEFAULT_SLIDE_WIDTH_EMU, DEFAULT_SLIDE_HEIGHT_EMU
    ratio = width_emu / height_emu
    for standard_ratio, width, height in STANDARD_SIZES:
        if abs(ratio - standard_ratio) < RATIO_TOLERANCE:
            return width, height
    return CUSTOM_WIDTH_PX, round(CUSTOM_WIDTH_PX / ratio)


@dataclass(frozen=True)
class ScaleFactors:
    x: float = 1.0
    y: float = 1.0
    target_width: int = 0
    target_height: int = 0

    @classmethod
    def for_slide_size(cls, width_emu: int, height_emu: int) -> "ScaleFactors":
        target_width, target_height = detect_target_size(width_emu, height_emu)
        natural_width = emu_to_pixels(width_emu or DEFAULT_SLIDE_WIDTH_EMU)
        natural_height = emu_to_pixels(height_emu or DEFAULT_SLIDE_HEIGHT_EMU)
        return cls(
            x=target_width / natural_width,
            y=target_height / natural_height,
            target_width=target_width,
            target_height=target_height,
        )

    def px_x(self, emu: float) -> float:
        return round(emu_to_pixels(emu) * self.x, 2)

    def px_y(self, emu: float) -> float:
        return round(emu_to_pixels(emu) * self.y, 2)
