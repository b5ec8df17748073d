from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal
import math
from typing import Any

import numpy as np

from timeseries_chart.errors import ChartDataError
from timeseries_chart.options import ChartOptions
from timeseries_chart.series import ChartValues, SeriesData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def extract_values(data: Any, options: ChartOptions) -> ChartValues:
    records = _as_records(data)
    if not records:
        raise ChartDataError("empty series")

    raw_x = [options.get_x(record) for record in records]
    raw_y = [options.get_y(record) for record in records]

    if options.x_type == "point":
        x_arr = _coerce_labels(raw_x)
        x_defined = np.asarray([label is not None for label in x_arr.tolist()], dtype=bool)
    else:
        x_arr = _coerce_x_numeric(raw_x)
        x_defined = np.isfinite(x_arr)
    y_arr = _coerce_y(raw_y)

    z_arr: np.ndarray | None = None
    if options.get_z is not None:
        z_arr = np.empty(len(records), dtype=object)
        for i, record in enumerate(records):
            z_arr[i] = _normalize_missing(options.get_z(record))

    mask = x_defined & np.isfinite(y_arr)
    if not np.any(mask):
        raise ChartDataError("series contains no finite points")

    return ChartValues(x=x_arr, y=y_arr, mask=mask, z=z_arr)


def group_series(values: ChartValues) -> tuple[SeriesData, ...]:
    n = len(values)
    if values.z is None:
        indices = np.arange(n, dtype=np.intp)
        return (
            SeriesData(
                key=None,
                indices=indices,
                values=values.y.copy(),
                aligned=values.y.copy(),
                defined=values.mask.copy(),
            ),
        )

    groups: dict[Any, list[int]] = {}
    for i, key in enumerate(values.z.tolist()):
        groups.setdefault(key, []).append(i)

    out: list[SeriesData] = []
    for key, members in groups.items():
        indices = np.asarray(members, dtype=np.intp)
        aligned = np.full(n, np.nan, dtype=np.float64)
        aligned[indices] = values.y[indices]
        out.append(
            SeriesData(
                key=key,
                indices=indices,
                values=values.y[indices],
                aligned=aligned,
                defined=values.mask[indices],
            )
        )
    return tuple(out)


def to_utc_millis(value: Any) -> float:
    if value is None or (pd is not None and value is pd.NaT):
        return math.nan
    if isinstance(value, (bool, np.bool_)):
        return math.nan
    if isinstance(value, (int, float, Decimal, np.integer, np.floating)):
        return float(value)
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return math.nan
        return float(value.astype("datetime64[ms]").astype(np.int64))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000.0
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc).timestamp() * 1000.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            pass
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ChartDataError(f"x value is neither numeric nor ISO-8601: {value!r}") from exc
        return to_utc_millis(parsed)
    raise ChartDataError(f"unsupported x value type: {type(value)!r}")


def _as_records(data: Any) -> Sequence[Any]:
    if pd is not None and isinstance(data, pd.DataFrame):
        return data.to_dict(orient="records")
    if data is None:
        raise ChartDataError("data is required")
    if isinstance(data, (str, bytes, bytearray, Mapping)):
        raise ChartDataError(f"data must be a sequence of records, not {type(data).__name__}")
    if isinstance(data, Sequence):
        return data
    if isinstance(data, Iterable):
        return list(data)
    raise ChartDataError(f"unsupported data type: {type(data)!r}")


def _coerce_x_numeric(raw: list[Any]) -> np.ndarray:
    out = np.empty(len(raw), dtype=np.float64)
    for i, value in enumerate(raw):
        try:
            out[i] = to_utc_millis(value)
        except ChartDataError as exc:
            raise ChartDataError(f"x contains unsupported value at index {i}: {value!r}") from exc
    return out


def _coerce_labels(raw: list[Any]) -> np.ndarray:
    out = np.empty(len(raw), dtype=object)
    for i, value in enumerate(raw):
        label = _normalize_missing(value)
        if label is None or isinstance(label, (bool, np.bool_)) or (isinstance(label, str) and not label):
            out[i] = None
        else:
            out[i] = label
    return out


def _normalize_missing(value: Any) -> Any:
    # None, NaN, pd.NA and NaT all mean "missing".
    if value is None:
        return None
    if pd is not None and (value is pd.NA or value is pd.NaT):
        return None
    if isinstance(value, (float, np.floating)) and math.isnan(value):
        return None
    return value


def _coerce_y(raw: list[Any]) -> np.ndarray:
    out = np.empty(len(raw), dtype=np.float64)
    for i, value in enumerate(raw):
        if value is None:
            out[i] = np.nan
            continue
        if isinstance(value, Decimal):
            out[i] = float(value)
            continue
        try:
            out[i] = float(value)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"y contains non-numeric value at index {i}: {value!r}") from exc
    return out
