from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Hashable

from timeseries_chart.curves import CURVES
from timeseries_chart.scales import X_SCALE_TYPES, Y_SCALE_TYPES


Accessor = Callable[[Any], Any]

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 400
# d3.schemeTableau10
TABLEAU10: tuple[str, ...] = (
    "#4e79a7",
    "#f28e2c",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc949",
    "#af7aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ab",
)


@dataclass(frozen=True)
class ChartOptions:
    get_x: Accessor
    get_y: Accessor
    y_label: str
    get_z: Accessor | None = None
    curve: str = "linear"
    margin_top: float = 20
    margin_right: float = 30
    margin_bottom: float = 30
    margin_left: float = 40
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    x_type: str = "utc"
    x_range: tuple[float, float] | None = None
    y_type: str = "linear"
    y_range: tuple[float, float] | None = None
    y_zero: bool = True
    color: str = "currentColor"
    colors: tuple[str, ...] = TABLEAU10
    stroke_linecap: str = "round"
    stroke_linejoin: str = "round"
    stroke_width: float = 1.5
    stroke_opacity: float = 1.0
    x_ticks: int | None = None
    y_ticks: int | None = None
    label_series: bool = True

    def __post_init__(self) -> None:
        for name in ("get_x", "get_y"):
            if not callable(getattr(self, name)):
                raise ValueError(f"{name} must be callable")
        if self.get_z is not None and not callable(self.get_z):
            raise ValueError("get_z must be callable or None")
        if not isinstance(self.y_label, str):
            raise ValueError("y_label must be a string")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width/height must be > 0")
        if self.margin_left + self.margin_right >= self.width:
            raise ValueError("horizontal margins leave no plot area")
        if self.margin_top + self.margin_bottom >= self.height:
            raise ValueError("vertical margins leave no plot area")
        if self.curve not in CURVES:
            raise ValueError(f"unsupported curve: {self.curve}")
        if self.x_type not in X_SCALE_TYPES:
            raise ValueError(f"unsupported x_type: {self.x_type}")
        if self.y_type not in Y_SCALE_TYPES:
            raise ValueError(f"unsupported y_type: {self.y_type}")
        if not self.colors:
            raise ValueError("colors must contain at least one entry")
        if self.stroke_width < 0:
            raise ValueError("stroke_width must be >= 0")
        for name in ("x_ticks", "y_ticks"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be > 0")

    @property
    def multi_series(self) -> bool:
        return self.get_z is not None

    @property
    def resolved_x_range(self) -> tuple[float, float]:
        if self.x_range is not None:
            return (float(self.x_range[0]), float(self.x_range[1]))
        return (float(self.margin_left), float(self.width - self.margin_right))

    @property
    def resolved_y_range(self) -> tuple[float, float]:
        if self.y_range is not None:
            return (float(self.y_range[0]), float(self.y_range[1]))
        return (float(self.height - self.margin_bottom), float(self.margin_top))

    @property
    def x_tick_count(self) -> float:
        return float(self.x_ticks) if self.x_ticks is not None else self.width / 80

    @property
    def y_tick_count(self) -> float:
        return float(self.y_ticks) if self.y_ticks is not None else self.height / 40

    def series_color(self, position: int) -> str:
        if not self.multi_series:
            return self.color
        return self.colors[position % len(self.colors)]

    def replace(self, **changes: Any) -> "ChartOptions":
        return replace(self, **changes)


def series_label(key: Hashable | None) -> str:
    return "" if key is None else str(key)
