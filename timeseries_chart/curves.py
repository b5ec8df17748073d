from __future__ import annotations

import math
from typing import Callable, Sequence

import numpy as np

from timeseries_chart.path import PathData


Point = tuple[float, float]
Curve = Callable[[PathData, Sequence[Point]], None]


def contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def line_path(xs: np.ndarray, ys: np.ndarray, defined: np.ndarray, curve: str = "linear", *, digits: int = 3) -> str:
    """Build path data for one series, starting a new subpath after every undefined point."""
    if xs.shape != ys.shape or xs.shape != defined.shape:
        raise ValueError(f"xs, ys and defined must share a shape: {xs.shape}, {ys.shape}, {defined.shape}")
    draw = CURVES.get(curve)
    if draw is None:
        raise ValueError(f"unsupported curve: {curve}")
    path = PathData(digits=digits)
    for start, stop in contiguous_true_runs(defined):
        points = [(float(xs[i]), float(ys[i])) for i in range(start, stop)]
        if len(points) == 1:
            path.move_to(*points[0])
            path.close_path()
            continue
        draw(path, points)
    return str(path)


def _linear(path: PathData, points: Sequence[Point]) -> None:
    path.move_to(*points[0])
    for x, y in points[1:]:
        path.line_to(x, y)


def _step_curve(t: float) -> Curve:
    def draw(path: PathData, points: Sequence[Point]) -> None:
        px, py = points[0]
        path.move_to(px, py)
        for x, y in points[1:]:
            if t <= 0:
                path.line_to(px, y)
                path.line_to(x, y)
            else:
                x1 = px * (1 - t) + x * t
                path.line_to(x1, py)
                path.line_to(x1, y)
            px, py = x, y
        if 0 < t < 1:
            path.line_to(px, py)

    return draw


def _basis(path: PathData, points: Sequence[Point]) -> None:
    (x0, y0), (x1, y1) = points[0], points[1]
    path.move_to(x0, y0)
    if len(points) == 2:
        path.line_to(x1, y1)
        return
    path.line_to((5 * x0 + x1) / 6, (5 * y0 + y1) / 6)
    for x, y in [*points[2:], points[-1]]:
        path.bezier_curve_to(
            (2 * x0 + x1) / 3,
            (2 * y0 + y1) / 3,
            (x0 + 2 * x1) / 3,
            (y0 + 2 * y1) / 3,
            (x0 + 4 * x1 + x) / 6,
            (y0 + 4 * y1 + y) / 6,
        )
        x0, y0, x1, y1 = x1, y1, x, y
    path.line_to(x1, y1)


def _cardinal(tension: float) -> Curve:
    k = (1 - tension) / 6

    def draw(path: PathData, points: Sequence[Point]) -> None:
        n = len(points)
        path.move_to(*points[0])
        if n == 2:
            path.line_to(*points[1])
            return
        for i in range(1, n):
            (ax, ay) = points[i - 2] if i >= 2 else points[i]
            (bx, by) = points[i - 1]
            (cx, cy) = points[i]
            (dx, dy) = points[i + 1] if i + 1 < n else points[i - 1]
            path.bezier_curve_to(bx + k * (cx - ax), by + k * (cy - ay), cx + k * (bx - dx), cy + k * (by - dy), cx, cy)

    return draw


def _natural_control_points(values: Sequence[float]) -> tuple[list[float], list[float]]:
    n = len(values) - 1
    a = [0.0] * n
    b = [0.0] * n
    r = [0.0] * n
    a[0], b[0], r[0] = 0.0, 2.0, values[0] + 2 * values[1]
    for i in range(1, n - 1):
        a[i], b[i], r[i] = 1.0, 4.0, 4 * values[i] + 2 * values[i + 1]
    a[n - 1], b[n - 1], r[n - 1] = 2.0, 7.0, 8 * values[n - 1] + values[n]
    for i in range(1, n):
        m = a[i] / b[i - 1]
        b[i] -= m
        r[i] -= m * r[i - 1]
    a[n - 1] = r[n - 1] / b[n - 1]
    for i in range(n - 2, -1, -1):
        a[i] = (r[i] - a[i + 1]) / b[i]
    b[n - 1] = (values[n] + a[n - 1]) / 2
    for i in range(n - 1):
        b[i] = 2 * values[i + 1] - a[i + 1]
    return a, b


def _natural(path: PathData, points: Sequence[Point]) -> None:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    path.move_to(xs[0], ys[0])
    if len(points) == 2:
        path.line_to(xs[1], ys[1])
        return
    px = _natural_control_points(xs)
    py = _natural_control_points(ys)
    for i in range(len(points) - 1):
        path.bezier_curve_to(px[0][i], py[0][i], px[1][i], py[1][i], xs[i + 1], ys[i + 1])


def _sign(value: float) -> int:
    return -1 if value < 0 else 1


def _divide(num: float, den: float) -> float:
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _monotone_slope3(x0: float, y0: float, x1: float, y1: float, x2: float, y2: float) -> float:
    h0 = x1 - x0
    h1 = x2 - x1
    s0 = _divide(y1 - y0, h0 if h0 else (-0.0 if h1 < 0 else 0.0))
    s1 = _divide(y2 - y1, h1 if h1 else (-0.0 if h0 < 0 else 0.0))
    p = _divide(s0 * h1 + s1 * h0, h0 + h1)
    candidates = (abs(s0), abs(s1), 0.5 * abs(p))
    if any(math.isnan(c) for c in candidates):
        return 0.0
    out = (_sign(s0) + _sign(s1)) * min(candidates)
    return 0.0 if math.isnan(out) else out


def _monotone_slope2(x0: float, y0: float, x1: float, y1: float, t: float) -> float:
    h = x1 - x0
    return (3 * (y1 - y0) / h - t) / 2 if h else t


def _monotone_x(path: PathData, points: Sequence[Point]) -> None:
    pts: list[Point] = []
    for point in points:
        # coincident consecutive points carry no tangent information
        if pts and pts[-1] == point:
            continue
        pts.append(point)
    path.move_to(*pts[0])
    if len(pts) == 1:
        path.close_path()
        return
    if len(pts) == 2:
        path.line_to(*pts[1])
        return

    def segment(p0: Point, p1: Point, t0: float, t1: float) -> None:
        (x0, y0), (x1, y1) = p0, p1
        dx = (x1 - x0) / 3
        path.bezier_curve_to(x0 + dx, y0 + dx * t0, x1 - dx, y1 - dx * t1, x1, y1)

    t0 = 0.0
    for i in range(2, len(pts)):
        (x0, y0), (x1, y1), (x2, y2) = pts[i - 2], pts[i - 1], pts[i]
        t1 = _monotone_slope3(x0, y0, x1, y1, x2, y2)
        if i == 2:
            segment(pts[0], pts[1], _monotone_slope2(x0, y0, x1, y1, t1), t1)
        else:
            segment(pts[i - 2], pts[i - 1], t0, t1)
        t0 = t1
    (x0, y0), (x1, y1) = pts[-2], pts[-1]
    segment(pts[-2], pts[-1], t0, _monotone_slope2(x0, y0, x1, y1, t0))


CURVES: dict[str, Curve] = {
    "linear": _linear,
    "step": _step_curve(0.5),
    "step-before": _step_curve(0.0),
    "step-after": _step_curve(1.0),
    "basis": _basis,
    "cardinal": _cardinal(0.0),
    "natural": _natural,
    "monotone-x": _monotone_x,
}
