from __future__ import annotations

import math


def format_number(value: float, digits: int = 3) -> str:
    if not math.isfinite(value):
        return str(value)
    out = f"{round(value, digits):.{digits}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


class PathData:
    """Accumulates SVG path commands with a fixed coordinate precision."""

    def __init__(self, digits: int = 3) -> None:
        if digits < 0:
            raise ValueError("digits must be >= 0")
        self._digits = digits
        self._parts: list[str] = []

    def _pair(self, x: float, y: float) -> str:
        return f"{format_number(x, self._digits)},{format_number(y, self._digits)}"

    def move_to(self, x: float, y: float) -> None:
        self._parts.append(f"M{self._pair(x, y)}")

    def line_to(self, x: float, y: float) -> None:
        self._parts.append(f"L{self._pair(x, y)}")

    def bezier_curve_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        self._parts.append(f"C{self._pair(x1, y1)},{self._pair(x2, y2)},{self._pair(x, y)}")

    def close_path(self) -> None:
        self._parts.append("Z")

    def __bool__(self) -> bool:
        return bool(self._parts)

    def __str__(self) -> str:
        return "".join(self._parts)
