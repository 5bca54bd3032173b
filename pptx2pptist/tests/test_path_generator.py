import unittest

from pptx2pptist.geometry.path_generator import (
    generate_path,
    rect_path,
    round_rect_radius,
)

tc = unittest.TestCase()

RECT_200x100 = "M 0 0 L 200 0 L 200 100 L 0 100 Z"
PILL_200x100 = (
    "M 50 0 L 150 0 A 50 50 0 0 1 200 50 L 200 50 A 50 50 0 0 1 150 100 "
    "L 50 100 A 50 50 0 0 1 0 50 L 0 50 A 50 50 0 0 1 50 0 Z"
)


def test_rect() -> None:
    tc.assertEqual(RECT_200x100, generate_path("rect", 200, 100))
    tc.assertEqual(RECT_200x100, rect_path(200, 100))


def test_round_rect_without_adjustment_is_plain_rectangle() -> None:
    tc.assertEqual(RECT_200x100, generate_path("roundRect", 200, 100, 0))


def test_round_rect_at_maximum_adjustment_is_a_pill() -> None:
    tc.assertEqual(PILL_200x100, generate_path("roundRect", 200, 100, 50000))


def test_round_rect_radius_is_clamped_to_half_the_short_side() -> None:
    tc.assertEqual(50, round_rect_radius(200, 100, 100000))
    tc.assertEqual(PILL_200x100, generate_path("roundRect", 200, 100, 100000))


def test_round_rect_radius_is_proportional_to_adjustment() -> None:
    tc.assertEqual(25, round_rect_radius(200, 100, 25000))
    tc.assertEqual(10, round_rect_radius(200, 100, 10000))
    path = generate_path("roundRect", 200, 100, 25000)
    tc.assertTrue(path.startswith("M 25 0 L 175 0 A 25 25 0 0 1 200 25"))


def test_round_rect_default_adjustment() -> None:
    tc.assertAlmostEqual(16.667, round_rect_radius(200, 100), places=3)


def test_ellipse_uses_arcs() -> None:
    tc.assertEqual(
        "M 0 50 A 100 50 0 1 0 200 50 A 100 50 0 1 0 0 50 Z",
        generate_path("ellipse", 200, 100),
    )


def test_triangle_scales_with_box() -> None:
    tc.assertEqual("M 50 0 L 100 100 L 0 100 Z", generate_path("triangle", 100, 100))
    tc.assertEqual("M 100 0 L 200 50 L 0 50 Z", generate_path("triangle", 200, 50))


def test_star5_has_ten_vertices() -> None:
    path = generate_path("star5", 100, 100)
    tc.assertEqual(1, path.count("M "))
    tc.assertEqual(9, path.count("L "))
    tc.assertTrue(path.startswith("M 50 0 "))


def test_unknown_preset_falls_back_to_rect() -> None:
    tc.assertEqual(RECT_200x100, generate_path("cloudCallout", 200, 100))
    tc.assertEqual(RECT_200x100, generate_path(None, 200, 100))


def test_generate_path_is_deterministic() -> None:
    tc.assertEqual(
        generate_path("rightArrow", 120.5, 60.25),
        generate_path("rightArrow", 120.5, 60.25),
    )
