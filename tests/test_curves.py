from __future__ import annotations

import unittest

import numpy as np

from timeseries_chart.curves import CURVES, contiguous_true_runs, line_path
from timeseries_chart.path import PathData, format_number


def _path(points: list[tuple[float, float]], curve: str, defined: list[bool] | None = None) -> str:
    xs = np.asarray([p[0] for p in points], dtype=np.float64)
    ys = np.asarray([p[1] for p in points], dtype=np.float64)
    mask = np.ones(len(points), dtype=bool) if defined is None else np.asarray(defined, dtype=bool)
    return line_path(xs, ys, mask, curve)


class PathDataTests(unittest.TestCase):
    def test_numbers_are_rounded_and_trimmed(self) -> None:
        self.assertEqual(format_number(1.0), "1")
        self.assertEqual(format_number(1 / 3), "0.333")
        self.assertEqual(format_number(-0.0001), "0")
        self.assertEqual(format_number(40.5), "40.5")

    def test_commands_concatenate(self) -> None:
        path = PathData()
        self.assertFalse(path)
        path.move_to(0, 0)
        path.line_to(10.25, 5)
        path.bezier_curve_to(1, 2, 3, 4, 5, 6)
        path.close_path()
        self.assertEqual(str(path), "M0,0L10.25,5C1,2,3,4,5,6Z")


class RunTests(unittest.TestCase):
    def test_contiguous_true_runs(self) -> None:
        mask = np.asarray([True, True, False, True, False, False, True, True, True])
        self.assertEqual(contiguous_true_runs(mask), [(0, 2), (3, 4), (6, 9)])
        self.assertEqual(contiguous_true_runs(np.zeros(3, dtype=bool)), [])


class LinePathTests(unittest.TestCase):
    def test_linear(self) -> None:
        self.assertEqual(_path([(0, 0), (10, 10), (20, 5)], "linear"), "M0,0L10,10L20,5")

    def test_undefined_points_break_the_line(self) -> None:
        points = [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
        out = _path(points, "linear", [True, True, False, True, False])
        self.assertEqual(out, "M0,0L1,1M3,3Z")

    def test_nothing_defined_gives_empty_path(self) -> None:
        self.assertEqual(_path([(0, 0), (1, 1)], "linear", [False, False]), "")

    def test_isolated_point_is_closed_for_every_curve(self) -> None:
        for name in CURVES:
            with self.subTest(curve=name):
                self.assertEqual(_path([(5, 5)], name), "M5,5Z")

    def test_step_variants(self) -> None:
        points = [(0, 0), (10, 10)]
        self.assertEqual(_path(points, "step"), "M0,0L5,0L5,10L10,10")
        self.assertEqual(_path(points, "step-before"), "M0,0L0,10L10,10")
        self.assertEqual(_path(points, "step-after"), "M0,0L10,0L10,10")

    def test_basis(self) -> None:
        out = _path([(0, 0), (6, 6), (12, 0)], "basis")
        self.assertEqual(out, "M0,0L1,1C2,2,4,4,6,4C8,4,10,2,11,1L12,0")

    def test_cardinal(self) -> None:
        out = _path([(0, 0), (1, 1), (2, 0)], "cardinal")
        self.assertEqual(out, "M0,0C0,0,0.667,1,1,1C1.333,1,2,0,2,0")

    def test_monotone_x_on_collinear_points_stays_straight(self) -> None:
        out = _path([(0, 0), (1, 1), (2, 2)], "monotone-x")
        self.assertEqual(out, "M0,0C0.333,0.333,0.667,0.667,1,1C1.333,1.333,1.667,1.667,2,2")

    def test_monotone_x_skips_coincident_points(self) -> None:
        self.assertEqual(_path([(0, 0), (0, 0), (3, 3)], "monotone-x"), "M0,0L3,3")

    def test_natural_passes_through_every_point(self) -> None:
        out = _path([(0, 0), (1, 2), (2, 0), (3, 2)], "natural")
        self.assertTrue(out.startswith("M0,0C"))
        self.assertEqual(out.count("C"), 3)
        self.assertTrue(out.endswith(",3,2"))

    def test_two_points_draw_a_segment_for_smooth_curves(self) -> None:
        for name in ("basis", "cardinal", "natural", "monotone-x"):
            with self.subTest(curve=name):
                self.assertEqual(_path([(0, 0), (4, 2)], name), "M0,0L4,2")

    def test_rejects_unknown_curve_and_shape_mismatch(self) -> None:
        with self.assertRaises(ValueError):
            _path([(0, 0), (1, 1)], "bundle")
        with self.assertRaises(ValueError):
            line_path(np.zeros(2), np.zeros(3), np.ones(2, dtype=bool))


if __name__ == "__main__":
    unittest.main()
