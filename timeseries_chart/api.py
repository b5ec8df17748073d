from __future__ import annotations

from typing import Any
import xml.etree.ElementTree as ET

from timeseries_chart.chart import render_line_chart
from timeseries_chart.options import Accessor, ChartOptions


def line_chart(
    data: Any,
    *,
    get_x: Accessor,
    get_y: Accessor,
    y_label: str,
    get_z: Accessor | None = None,
    **options: Any,
) -> ET.Element:
    if "colors" in options and options["colors"] is not None:
        options["colors"] = tuple(options["colors"])
    for name in ("x_range", "y_range"):
        if options.get(name) is not None:
            options[name] = tuple(options[name])
    config = ChartOptions(get_x=get_x, get_y=get_y, y_label=y_label, get_z=get_z, **options)
    return render_line_chart(data, config)
