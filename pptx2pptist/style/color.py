import colorsys
import re

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")


def normalize_hex(value: str | None) -> str | None:
    """``ff0000``, ``#FF0000`` or ``F00`` to ``#FF0000``; None when not a color."""
    if not value:
        return None
    value = value.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) == 8:
        value = value[:6]
    if not _HEX_RE.match(value):
        return None
    return f"#{value.upper()}"


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    value = hex_color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgb_to_hex(red: float, green: float, blue: float) -> str:
    channels = (int(round(_clamp(c, 0, 255))) for c in (red, green, blue))
    return "#" + "".join(f"{c:02X}" for c in channels)


def hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    """Hue in degrees, saturation and lightness in 0..1."""
    red, green, blue = hex_to_rgb(hex_color)
    hue, lightness, saturation = colorsys.rgb_to_hls(red / 255, green / 255, blue / 255)
    return hue * 360.0, saturation, lightness


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    red, green, blue = colorsys.hls_to_rgb(
        (hue % 360.0) / 360.0, _clamp(lightness), _clamp(saturation)
    )
    return rgb_to_hex(red * 255, green * 255, blue * 255)


def with_alpha(hex_color: str, opacity: float) -> str:
    """Append an alpha byte: ``#RRGGBB`` with 0.5 becomes ``#RRGGBB80``."""
    return f"{hex_color}{round(_clamp(opacity) * 255):02X}"
