from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any
import xml.etree.ElementTree as ET

import numpy as np

from timeseries_chart.adapters import extract_values, group_series
from timeseries_chart.axes import AxisStyle, add_gridlines, render_axis
from timeseries_chart.curves import line_path
from timeseries_chart.errors import ChartDataError
from timeseries_chart.options import ChartOptions, series_label
from timeseries_chart.path import format_number
from timeseries_chart.scales import Scale, build_scale
from timeseries_chart.series import ChartValues, SeriesData
from timeseries_chart.svg import SVG_NS


LOGGER = logging.getLogger(__name__)

SVG_STYLE = "max-width: 100%; height: auto; height: intrinsic;"


@dataclass(frozen=True)
class ChartModel:
    values: ChartValues
    series: tuple[SeriesData, ...]
    x_scale: Scale
    y_scale: Scale
    paths: tuple[str, ...]

    @property
    def series_keys(self) -> tuple[Any, ...]:
        return tuple(s.key for s in self.series)


def build_x_scale(values: ChartValues, options: ChartOptions) -> Scale:
    x_range = options.resolved_x_range
    if options.x_type == "point":
        labels = [label for label in values.x.tolist() if label is not None]
        return build_scale("point", list(dict.fromkeys(labels)), x_range)
    finite = values.x[np.isfinite(values.x)]
    return build_scale(options.x_type, (float(np.min(finite)), float(np.max(finite))), x_range)


def build_y_scale(values: ChartValues, options: ChartOptions) -> Scale:
    finite = values.y[np.isfinite(values.y)]
    if options.y_type == "sqrt" and np.any(finite < 0):
        raise ChartDataError("sqrt y scale requires non-negative values")
    ymax = float(np.max(finite))
    ymin = 0.0 if options.y_zero else float(np.min(finite))
    return build_scale(options.y_type, (ymin, ymax), options.resolved_y_range)


def build_chart_model(data: Any, options: ChartOptions) -> ChartModel:
    values = extract_values(data, options)
    series = group_series(values)
    x_scale = build_x_scale(values, options)
    y_scale = build_y_scale(values, options)

    px = x_scale.map(values.x)
    py = y_scale.map(values.y)
    paths = tuple(
        line_path(px[s.indices], py[s.indices], s.defined, options.curve)
        for s in series
    )
    LOGGER.debug(
        "built line chart: %d records, %d series, %d gaps, x=%s y=%s",
        len(values),
        len(series),
        values.gap_count,
        x_scale.domain,
        y_scale.domain,
    )
    return ChartModel(values=values, series=series, x_scale=x_scale, y_scale=y_scale, paths=paths)


def render_chart(model: ChartModel, options: ChartOptions) -> ET.Element:
    width = format_number(options.width)
    height = format_number(options.height)
    svg = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": width,
            "height": height,
            "viewBox": f"0 0 {width} {height}",
            "style": SVG_STYLE,
        },
    )

    x_axis = render_axis("bottom", model.x_scale, tick_count=options.x_tick_count, style=AxisStyle(tick_size_outer=0))
    x_axis.set("transform", f"translate(0,{format_number(options.height - options.margin_bottom)})")
    svg.append(x_axis)

    y_axis = render_axis("left", model.y_scale, tick_count=options.y_tick_count, style=AxisStyle(show_domain=False))
    y_axis.set("transform", f"translate({format_number(options.margin_left)},0)")
    add_gridlines(y_axis, length=options.width - options.margin_left - options.margin_right)
    caption = ET.SubElement(
        y_axis,
        "text",
        {
            "x": format_number(-options.margin_left),
            "y": "10",
            "fill": "currentColor",
            "text-anchor": "start",
        },
    )
    caption.text = options.y_label
    svg.append(y_axis)

    for position, (series, d) in enumerate(zip(model.series, model.paths, strict=True)):
        attrs = {
            "fill": "none",
            "stroke": options.series_color(position),
            "stroke-width": format_number(options.stroke_width),
            "stroke-linecap": options.stroke_linecap,
            "stroke-linejoin": options.stroke_linejoin,
            "stroke-opacity": format_number(options.stroke_opacity),
        }
        if d:
            attrs["d"] = d
        ET.SubElement(svg, "path", attrs)

    if options.multi_series and options.label_series:
        _render_series_labels(svg, model, options)
    return svg


def _render_series_labels(svg: ET.Element, model: ChartModel, options: ChartOptions) -> None:
    x_edge = options.resolved_x_range[1]
    for position, series in enumerate(model.series):
        index = series.last_valid_index
        if index is None:
            LOGGER.warning("series %r has no valid points; skipping its label", series.key)
            continue
        y = model.y_scale(float(series.aligned[index]))
        label = ET.SubElement(
            svg,
            "text",
            {
                "x": format_number(x_edge),
                "y": format_number(y),
                "dx": "3",
                "dy": "0.35em",
                "fill": options.series_color(position),
                "font-size": "10",
                "font-family": "sans-serif",
                "text-anchor": "start",
            },
        )
        label.text = series_label(series.key)


def render_line_chart(data: Any, options: ChartOptions) -> ET.Element:
    """Render ``data`` as a detached ``<svg>`` element.

    Records are read only through the accessors in ``options``. Records whose
    x is undefined or whose y is not finite break the line instead of being
    dropped, so every series keeps its position on the shared x grid. With a
    ``get_z`` accessor one path is drawn per distinct key, in first-seen order,
    over a y-scale shared by all series.

    Raises ``ChartDataError`` when ``data`` is empty or holds no valid point.
    """
    return render_chart(build_chart_model(data, options), options)
