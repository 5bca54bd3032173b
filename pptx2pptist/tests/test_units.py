import unittest

import pytest

from pptx2pptist.geometry.units import (
    ScaleFactors,
    detect_target_size,
    emu_to_pixels,
    emu_to_points,
    points_to_emu,
    points_to_pixels,
)

tc = unittest.TestCase()


@pytest.mark.parametrize("emu", [0, 1, 12700, 914400, 1828800, 6858000, 123456789])
def test_emu_points_round_trip(emu: int) -> None:
    tc.assertAlmostEqual(emu / 12700, emu_to_points(emu))
    tc.assertAlmostEqual(emu, points_to_emu(emu_to_points(emu)), places=6)


def test_emu_to_pixels_at_96_dpi() -> None:
    tc.assertEqual(96, emu_to_pixels(914400))
    tc.assertEqual(24, points_to_pixels(18))


def test_detect_target_size_standard_ratios() -> None:
    tc.assertEqual((1280, 720), detect_target_size(12192000, 6858000))
    tc.assertEqual((960, 720), detect_target_size(9144000, 6858000))
    tc.assertEqual((1152, 720), detect_target_size(10972800, 6858000))


def test_detect_target_size_custom_ratio() -> None:
    # 2:1
    tc.assertEqual((1280, 640), detect_target_size(13716000, 6858000))


def test_scale_factors_map_4_3_slide_onto_its_canvas() -> None:
    scale = ScaleFactors.for_slide_size(9144000, 6858000)
    tc.assertEqual(960, scale.target_width)
    tc.assertEqual(720, scale.target_height)
    tc.assertEqual(960, scale.px_x(9144000))
    tc.assertEqual(720, scale.px_y(6858000))


def test_scale_factors_shrink_oversized_slides() -> None:
    # 16:9 at twice the usual size
    scale = ScaleFactors.for_slide_size(24384000, 13716000)
    tc.assertAlmostEqual(0.5, scale.x)
    tc.assertEqual(96, scale.px_x(1828800))
