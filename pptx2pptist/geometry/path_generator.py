"""
Preset geometry to SVG path strings.

Paths are expressed in the shape's own box (0,0)-(width,height) using
``M``/``L``/``A``/``Z`` commands only, with every vertex written as a fraction
of the box so one formula serves every size. Unknown presets render as a
plain rectangle.
"""

from __future__ import annotations

import math
from typing import Callable

# Adjustment values are in 1/100000 of the reference length
ADJ_SCALE = 100000
DEFAULT_ROUND_RECT_ADJ = 16667
MAX_ROUND_RECT_ADJ = 50000
DEFAULT_STAR5_ADJ = 19098

PathBuilder = Callable[[float, float, "int | None"], str]


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _polygon(points: list[tuple[float, float]]) -> str:
    head, *rest = points
    commands = [f"M {_fmt(head[0])} {_fmt(head[1])}"]
    commands.extend(f"L {_fmt(x)} {_fmt(y)}" for x, y in rest)
    commands.append("Z")
    return " ".join(commands)


def _fractions(w: float, h: float, points: list[tuple[float, float]]) -> str:
    return _polygon([(fx * w, fy * h) for fx, fy in points])


def rect_path(w: float, h: float, adj: int | None = None) -> str:
    return _fractions(w, h, [(0, 0), (1, 0), (1, 1), (0, 1)])


def round_rect_radius(w: float, h: float, adj: int | None = None) -> float:
    """Corner radius: ``adj`` of min(w, h), never more than half of it."""
    if adj is None:
        adj = DEFAULT_ROUND_RECT_ADJ
    shortest = min(w, h)
    radius = shortest * max(adj, 0) / ADJ_SCALE
    return min(radius, shortest / 2)


def round_rect_path(w: float, h: float, adj: int | None = None) -> str:
    r = round_rect_radius(w, h, adj)
    if r <= 0:
        return rect_path(w, h)
    arc = f"A {_fmt(r)} {_fmt(r)} 0 0 1"
    return " ".join(
        [
            f"M {_fmt(r)} 0",
            f"L {_fmt(w - r)} 0",
            f"{arc} {_fmt(w)} {_fmt(r)}",
            f"L {_fmt(w)} {_fmt(h - r)}",
            f"{arc} {_fmt(w - r)} {_fmt(h)}",
            f"L {_fmt(r)} {_fmt(h)}",
            f"{arc} 0 {_fmt(h - r)}",
            f"L 0 {_fmt(r)}",
            f"{arc} {_fmt(r)} 0",
            "Z",
        ]
    )


def ellipse_path(w: float, h: float, adj: int | None = None) -> str:
    rx, ry = w / 2, h / 2
    arc = f"A {_fmt(rx)} {_fmt(ry)} 0 1 0"
    return f"M 0 {_fmt(ry)} {arc} {_fmt(w)} {_fmt(ry)} {arc} 0 {_fmt(ry)} Z"


def triangle_path(w: float, h: float, adj: int | None = None) -> str:
    apex = (adj if adj is not None else 50000) / ADJ_SCALE
    return _fractions(w, h, [(apex, 0), (1, 1), (0, 1)])


def right_triangle_path(w: float, h: float, adj: int | None = None) -> str:
    return _fractions(w, h, [(0, 0), (1, 1), (0, 1)])


def diamond_path(w: float, h: float, adj: int | None = None) -> str:
    return _fractions(w, h, [(0.5, 0), (1, 0.5), (0.5, 1), (0, 0.5)])


def parallelogram_path(w: float, h: float, adj: int | None = None) -> str:
    offset = min(w, h) * (adj if adj is not None else 25000) / ADJ_SCALE
    return _polygon([(offset, 0), (w, 0), (w - offset, h), (0, h)])


def trapezoid_path(w: float, h: float, adj: int | None = None) -> str:
    offset = min(w, h) * (adj if adj is not None else 25000) / ADJ_SCALE
    return _polygon([(offset, 0), (w - offset, 0), (w, h), (0, h)])


def _regular_polygon(sides: int, rotation: float = -math.pi / 2) -> Callable:
    def build(w: float, h: float, adj: int | None = None) -> str:
        points = []
        for i in range(sides):
            angle = rotation + 2 * math.pi * i / sides
            points.append((0.5 + 0.5 * math.cos(angle), 0.5 + 0.5 * math.sin(angle)))
        return _fractions(w, h, points)

    return build


def _star(points_count: int, default_adj: int) -> Callable:
    def build(w: float, h: float, adj: int | None = None) -> str:
        # adj is the inner radius as a fraction of half the outer radius
        inner = (adj if adj is not None else default_adj) / (ADJ_SCALE / 2)
        inner = min(max(inner, 0.0), 1.0)
        vertices = []
        for i in range(points_count * 2):
            radius = 0.5 if i % 2 == 0 else 0.5 * inner
            angle = -math.pi / 2 + math.pi * i / points_count
            vertices.append((0.5 + radius * math.cos(angle), 0.5 + radius * math.sin(angle)))
        return _fractions(w, h, vertices)

    return build


def right_arrow_path(w: float, h: float, adj: int | None = None) -> str:
    head = min(w, h) * 0.5
    return _polygon(
        [
            (0, h * 0.25),
            (w - head, h * 0.25),
            (w - head, 0),
            (w, h / 2),
            (w - head, h),
            (w - head, h * 0.75),
            (0, h * 0.75),
        ]
    )


def left_arrow_path(w: float, h: float, adj: int | None = None) -> str:
    head = min(w, h) * 0.5
    return _polygon(
        [
            (w, h * 0.25),
            (head, h * 0.25),
            (head, 0),
            (0, h / 2),
            (head, h),
            (head, h * 0.75),
            (w, h * 0.75),
        ]
    )


def up_arrow_path(w: float, h: float, adj: int | None = None) -> str:
    head = min(w, h) * 0.5
    return _polygon(
        [
            (w * 0.25, h),
            (w * 0.25, head),
            (0, head),
            (w / 2, 0),
            (w, head),
            (w * 0.75, head),
            (w * 0.75, h),
        ]
    )


def down_arrow_path(w: float, h: float, adj: int | None = None) -> str:
    head = min(w, h) * 0.5
    return _polygon(
        [
            (w * 0.25, 0),
            (w * 0.75, 0),
            (w * 0.75, h - head),
            (w, h - head),
            (w / 2, h),
            (0, h - head),
            (w * 0.25, h - head),
        ]
    )


def home_plate_path(w: float, h: float, adj: int | None = None) -> str:
    tip = min(w, h) * (adj if adj is not None else 50000) / ADJ_SCALE
    return _polygon([(0, 0), (w - tip, 0), (w, h / 2), (w - tip, h), (0, h)])


def chevron_path(w: float, h: float, adj: int | None = None) -> str:
    tip = min(w, h) * (adj if adj is not None else 50000) / ADJ_SCALE
    return _polygon(
        [(0, 0), (w - tip, 0), (w, h / 2), (w - tip, h), (0, h), (tip, h / 2)]
    )


def plus_path(w: float, h: float, adj: int | None = None) -> str:
    arm = min(w, h) * (adj if adj is not None else 25000) / ADJ_SCALE
    return _polygon(
        [
            (arm, 0),
            (w - arm, 0),
            (w - arm, arm),
            (w, arm),
            (w, h - arm),
            (w - arm, h - arm),
            (w - arm, h),
            (arm, h),
            (arm, h - arm),
            (0, h - arm),
            (0, arm),
            (arm, arm),
        ]
    )


def line_path(w: float, h: float, adj: int | None = None) -> str:
    return f"M 0 0 L {_fmt(w)} {_fmt(h)}"


PRESET_PATHS: dict[str, PathBuilder] = {
    "rect": rect_path,
    "roundRect": round_rect_path,
    "ellipse": ellipse_path,
    "triangle": triangle_path,
    "rtTriangle": right_triangle_path,
    "diamond": diamond_path,
    "parallelogram": parallelogram_path,
    "trapezoid": trapezoid_path,
    "pentagon": _regular_polygon(5),
    "hexagon": _regular_polygon(6, rotation=0.0),
    "heptagon": _regular_polygon(7),
    "octagon": _regular_polygon(8, rotation=math.pi / 8),
    "star4": _star(4, 12500),
    "star5": _star(5, DEFAULT_STAR5_ADJ),
    "star6": _star(6, 28868),
    "star8": _star(8, 37500),
    "rightArrow": right_arrow_path,
    "leftArrow": left_arrow_path,
    "upArrow": up_arrow_path,
    "downArrow": down_arrow_path,
    "homePlate": home_plate_path,
    "chevron": chevron_path,
    "plus": plus_path,
    "line": line_path,
    "straightConnector1": line_path,
}


def generate_path(
    preset: str | None, width: float, height: float, adjustment: int | None = None
) -> str:
    """SVG path for a preset geometry in a ``width`` x ``height`` box."""
    builder = PRESET_PATHS.get(preset or "rect", rect_path)
    return builder(width, height, adjustment)


def is_supported_preset(preset: str | None) -> bool:
    return (preset or "rect") in PRESET_PATHS
