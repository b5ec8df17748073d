from __future__ import annotations

import argparse
from pathlib import Path
import xml.etree.ElementTree as ET

from main import load_food_series, load_readings
from timeseries_chart import line_chart, write_svg


DATA_DIR = Path(__file__).resolve().parent


def build_temperature_chart(width: float = 640) -> ET.Element:
    return line_chart(
        load_readings(DATA_DIR / "timeseries.json"),
        get_x=lambda d: d["time"],
        get_y=lambda d: d["value"],
        y_label="temperature",
        width=width,
        height=500,
        color="steelblue",
    )


def build_food_chart() -> ET.Element:
    return line_chart(
        load_food_series(DATA_DIR / "food.json"),
        get_x=lambda d: d["year"],
        get_y=lambda d: d["value"],
        get_z=lambda d: d["food"],
        y_label="kg per capita",
        x_type="point",
        curve="monotone-x",
        margin_right=60,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the bundled sample charts as SVG files.")
    parser.add_argument("--out-dir", type=Path, default=DATA_DIR / "out")
    args = parser.parse_args()
    for name, chart in (("temperature", build_temperature_chart()), ("food", build_food_chart())):
        print(write_svg(chart, args.out_dir / f"{name}.svg"))


if __name__ == "__main__":
    main()
