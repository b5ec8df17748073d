from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

from timeseries_chart import ChartDataError, ChartOptions, write_svg
from timeseries_chart.adapters import to_utc_millis
from timeseries_chart.chart import render_line_chart
from timeseries_chart.curves import CURVES


LOGGER = logging.getLogger("timeseries_chart.cli")


def load_readings(path: Path) -> list[dict[str, float]]:
    """Map sensor readings (``valuedatetime``/``datavalue``) to ``{time, value}`` records."""
    rows = _read_json_array(path)
    records: list[dict[str, float]] = []
    for row in rows:
        records.append(
            {
                "time": to_utc_millis(row.get("valuedatetime")),
                "value": _to_float(row.get("datavalue")),
            }
        )
    return records


def load_food_series(path: Path, *, scale: float = 1.0) -> list[dict[str, Any]]:
    """Map ``{year, value, food}`` rows, multiplying values by ``scale``."""
    rows = _read_json_array(path)
    return [
        {"year": row.get("year"), "value": _to_float(row.get("value")) * scale, "food": row.get("food")}
        for row in rows
    ]


def _read_json_array(path: Path) -> list[dict[str, Any]]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ChartDataError(f"{path} must contain a JSON array of records")
    return payload


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return float("nan")
    return float(value)


def build_options(args: argparse.Namespace) -> ChartOptions:
    common: dict[str, Any] = {
        "width": args.width,
        "height": args.height,
        "curve": args.curve,
        "y_zero": not args.no_zero,
    }
    if args.kind == "multi":
        return ChartOptions(
            get_x=lambda d: d["year"],
            get_y=lambda d: d["value"],
            get_z=lambda d: d["food"],
            y_label=args.y_label or "value",
            x_type="point",
            **common,
        )
    return ChartOptions(
        get_x=lambda d: d["time"],
        get_y=lambda d: d["value"],
        y_label=args.y_label or "temperature",
        color=args.color,
        **common,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="timeseries-chart")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a JSON array of records to an SVG line chart.")
    render.add_argument("input", type=Path)
    render.add_argument("--out", type=Path, required=True)
    render.add_argument(
        "--kind",
        choices=["single", "multi"],
        default="single",
        help="single: valuedatetime/datavalue readings; multi: year/value/food rows.",
    )
    render.add_argument("--width", type=float, default=640)
    render.add_argument("--height", type=float, default=500)
    render.add_argument("--color", default="steelblue")
    render.add_argument("--y-label", default=None)
    render.add_argument("--curve", choices=sorted(CURVES), default="linear")
    render.add_argument("--scale", type=float, default=1.0, help="Multiply multi-series values by this factor.")
    render.add_argument("--no-zero", action="store_true", help="Fit the y-axis to the data instead of starting at 0.")
    render.add_argument("--verbose", action="store_true")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.kind == "multi":
            records: list[dict[str, Any]] = load_food_series(args.input, scale=args.scale)
        else:
            records = load_readings(args.input)
        chart = render_line_chart(records, build_options(args))
    except ChartDataError as exc:
        print(f"cannot render {args.input}: {exc}", file=sys.stderr)
        return 2
    out = write_svg(chart, args.out)
    LOGGER.info("wrote %s (%d records)", out, len(records))
    print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
