from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Hashable, Sequence

import numpy as np

from timeseries_chart.ticks import format_ticks_for_axis, linear_ticks
from timeseries_chart.time_ticks import format_utc_tick, utc_ticks


X_SCALE_TYPES = ("utc", "linear", "sqrt", "point")
Y_SCALE_TYPES = ("linear", "sqrt")


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def _transform(self, value: Any) -> Any:
        return value

    def __call__(self, value: float) -> float:
        return float(self.map(np.asarray([value], dtype=np.float64))[0])

    def map(self, values: np.ndarray) -> np.ndarray:
        d0 = self._transform(float(self.domain[0]))
        d1 = self._transform(float(self.domain[1]))
        r0, r1 = self.range
        v = self._transform(np.asarray(values, dtype=np.float64))
        if d0 == d1:
            t = np.where(np.isnan(v), np.nan, 0.5)
        else:
            t = (v - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def ticks(self, count: float) -> list[float]:
        return linear_ticks(float(self.domain[0]), float(self.domain[1]), count)

    def tick_labels(self, ticks: Sequence[float]) -> list[str]:
        return format_ticks_for_axis(np.asarray(ticks, dtype=np.float64))


@dataclass(frozen=True)
class SqrtScale(LinearScale):
    def _transform(self, value: Any) -> Any:
        return np.sign(value) * np.sqrt(np.abs(value))


@dataclass(frozen=True)
class UtcScale(LinearScale):
    def ticks(self, count: float) -> list[float]:
        return utc_ticks(float(self.domain[0]), float(self.domain[1]), count)

    def tick_labels(self, ticks: Sequence[float]) -> list[str]:
        return [format_utc_tick(t) for t in ticks]


@dataclass(frozen=True)
class PointScale:
    domain: tuple[Hashable, ...]
    range: tuple[float, float]

    @property
    def step(self) -> float:
        r0, r1 = self.range
        return (r1 - r0) / max(1, len(self.domain) - 1)

    def __call__(self, value: Hashable) -> float:
        r0, r1 = self.range
        try:
            index = self.domain.index(value)
        except ValueError:
            return math.nan
        if len(self.domain) == 1:
            return (r0 + r1) / 2
        return r0 + index * self.step

    def map(self, values: np.ndarray) -> np.ndarray:
        return np.asarray([self(v) if v is not None else math.nan for v in values], dtype=np.float64)

    def ticks(self, count: float) -> list[Hashable]:
        return list(self.domain)

    def tick_labels(self, ticks: Sequence[Hashable]) -> list[str]:
        return [str(t) for t in ticks]


Scale = LinearScale | PointScale


def build_scale(kind: str, domain: Sequence[Any], range_: tuple[float, float]) -> Scale:
    if kind == "point":
        return PointScale(domain=tuple(domain), range=range_)
    d0, d1 = float(domain[0]), float(domain[1])
    if kind == "linear":
        return LinearScale(domain=(d0, d1), range=range_)
    if kind == "sqrt":
        return SqrtScale(domain=(d0, d1), range=range_)
    if kind == "utc":
        return UtcScale(domain=(d0, d1), range=range_)
    raise ValueError(f"unsupported scale type: {kind}")
