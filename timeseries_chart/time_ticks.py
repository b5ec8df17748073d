"""Calendar-aware tick generation for UTC time axes.

Times are plain floats holding milliseconds since the Unix epoch. The axis
picks the calendar interval whose duration is closest to ``span / count`` and
labels every tick with the coarsest field that changed at that instant.
"""

from __future__ import annotations

from bisect import bisect_right
from datetime import datetime, timedelta, timezone
import math
from typing import Callable, Iterator

from timeseries_chart.ticks import tick_step


DURATION_SECOND = 1_000
DURATION_MINUTE = DURATION_SECOND * 60
DURATION_HOUR = DURATION_MINUTE * 60
DURATION_DAY = DURATION_HOUR * 24
DURATION_WEEK = DURATION_DAY * 7
DURATION_MONTH = DURATION_DAY * 30
DURATION_YEAR = DURATION_DAY * 365

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# (unit, step, approximate duration in ms)
TICK_INTERVALS: tuple[tuple[str, int, int], ...] = (
    ("second", 1, DURATION_SECOND),
    ("second", 5, 5 * DURATION_SECOND),
    ("second", 15, 15 * DURATION_SECOND),
    ("second", 30, 30 * DURATION_SECOND),
    ("minute", 1, DURATION_MINUTE),
    ("minute", 5, 5 * DURATION_MINUTE),
    ("minute", 15, 15 * DURATION_MINUTE),
    ("minute", 30, 30 * DURATION_MINUTE),
    ("hour", 1, DURATION_HOUR),
    ("hour", 3, 3 * DURATION_HOUR),
    ("hour", 6, 6 * DURATION_HOUR),
    ("hour", 12, 12 * DURATION_HOUR),
    ("day", 1, DURATION_DAY),
    ("day", 2, 2 * DURATION_DAY),
    ("week", 1, DURATION_WEEK),
    ("month", 1, DURATION_MONTH),
    ("month", 3, 3 * DURATION_MONTH),
    ("year", 1, DURATION_YEAR),
)
_DURATIONS = [duration for _, _, duration in TICK_INTERVALS]

_FIXED_UNITS = {
    "millisecond": 1,
    "second": DURATION_SECOND,
    "minute": DURATION_MINUTE,
    "hour": DURATION_HOUR,
}


def to_datetime(ms: float) -> datetime:
    return EPOCH + timedelta(milliseconds=ms)


def to_millis(moment: datetime) -> float:
    return (moment - EPOCH) / timedelta(milliseconds=1)


def tick_interval(start: float, stop: float, count: float) -> tuple[str, int]:
    target = abs(stop - start) / count
    i = bisect_right(_DURATIONS, target)
    if i == len(TICK_INTERVALS):
        years = tick_step(start / DURATION_YEAR, stop / DURATION_YEAR, count)
        return ("year", max(1, int(math.floor(abs(years)))))
    if i == 0:
        return ("millisecond", max(1, int(math.floor(abs(tick_step(start, stop, count))))))
    before = TICK_INTERVALS[i - 1]
    after = TICK_INTERVALS[i]
    unit, step, _ = before if target / before[2] < after[2] / target else after
    return (unit, step)


def utc_ticks(start: float, stop: float, count: float) -> list[float]:
    if not count > 0 or not (math.isfinite(start) and math.isfinite(stop)):
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    unit, step = tick_interval(lo, hi, count)
    ticks = list(_iter_interval(unit, step, lo, hi))
    if reverse:
        ticks.reverse()
    return ticks


def _iter_interval(unit: str, step: int, start: float, stop: float) -> Iterator[float]:
    if unit in _FIXED_UNITS:
        size = _FIXED_UNITS[unit] * step
        t = math.ceil(start / size) * size
        while t <= stop:
            yield float(t)
            t += size
        return

    floor, advance, field = _CALENDAR[unit]
    moment = floor(to_datetime(start))
    if to_millis(moment) < start:
        moment = advance(moment)
    while to_millis(moment) <= stop:
        if field(moment) % step == 0:
            yield to_millis(moment)
        moment = advance(moment)


def _floor_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _floor_week(moment: datetime) -> datetime:
    day = _floor_day(moment)
    # weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _floor_month(moment: datetime) -> datetime:
    return _floor_day(moment).replace(day=1)


def _floor_year(moment: datetime) -> datetime:
    return _floor_month(moment).replace(month=1)


def _next_month(moment: datetime) -> datetime:
    if moment.month == 12:
        return moment.replace(year=moment.year + 1, month=1)
    return moment.replace(month=moment.month + 1)


_CALENDAR: dict[str, tuple[Callable[[datetime], datetime], Callable[[datetime], datetime], Callable[[datetime], int]]] = {
    "day": (_floor_day, lambda m: m + timedelta(days=1), lambda m: m.day - 1),
    "week": (_floor_week, lambda m: m + timedelta(days=7), lambda m: 0),
    "month": (_floor_month, _next_month, lambda m: m.month - 1),
    "year": (_floor_year, lambda m: m.replace(year=m.year + 1), lambda m: m.year),
}


def format_utc_tick(ms: float) -> str:
    if not math.isfinite(ms):
        return str(ms)
    moment = to_datetime(ms)
    if moment.microsecond:
        return f".{moment.microsecond // 1000:03d}"
    if moment.second:
        return moment.strftime(":%S")
    if moment.minute:
        return moment.strftime("%I:%M")
    if moment.hour:
        return moment.strftime("%I %p")
    if moment.day != 1:
        # Sunday ticks mark week boundaries
        return moment.strftime("%b %d") if moment.weekday() == 6 else moment.strftime("%a %d")
    if moment.month != 1:
        return moment.strftime("%B")
    return moment.strftime("%Y")
