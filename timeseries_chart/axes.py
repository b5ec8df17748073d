from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
import xml.etree.ElementTree as ET

from timeseries_chart.path import format_number
from timeseries_chart.scales import Scale


Orientation = Literal["bottom", "left"]

# Crisp 1px strokes on standard-density displays.
DEFAULT_OFFSET = 0.5


@dataclass(frozen=True)
class AxisStyle:
    tick_size_inner: float = 6
    tick_size_outer: float = 6
    tick_padding: float = 3
    offset: float = DEFAULT_OFFSET
    font_size: int = 10
    font_family: str = "sans-serif"
    show_domain: bool = True


def render_axis(
    orientation: Orientation,
    scale: Scale,
    *,
    tick_count: float,
    style: AxisStyle = AxisStyle(),
) -> ET.Element:
    horizontal = orientation == "bottom"
    k = 1 if horizontal else -1
    spacing = max(style.tick_size_inner, 0) + style.tick_padding
    offset = style.offset

    group = ET.Element(
        "g",
        {
            "fill": "none",
            "font-size": str(style.font_size),
            "font-family": style.font_family,
            "text-anchor": "middle" if horizontal else "end",
        },
    )

    if style.show_domain:
        r0 = format_number(scale.range[0] + offset)
        r1 = format_number(scale.range[-1] + offset)
        outer = format_number(k * style.tick_size_outer)
        off = format_number(offset)
        if horizontal:
            d = f"M{r0},{outer}V{off}H{r1}V{outer}"
        else:
            d = f"M{outer},{r0}H{off}V{r1}H{outer}"
        ET.SubElement(group, "path", {"class": "domain", "stroke": "currentColor", "d": d})

    ticks = scale.ticks(tick_count)
    labels = scale.tick_labels(ticks)
    for value, label in zip(ticks, labels, strict=True):
        position = format_number(scale(value) + offset)
        transform = f"translate({position},0)" if horizontal else f"translate(0,{position})"
        tick = ET.SubElement(group, "g", {"class": "tick", "opacity": "1", "transform": transform})
        if horizontal:
            ET.SubElement(tick, "line", {"stroke": "currentColor", "y2": format_number(k * style.tick_size_inner)})
            text = ET.SubElement(
                tick,
                "text",
                {"fill": "currentColor", "y": format_number(k * spacing), "dy": "0.71em"},
            )
        else:
            ET.SubElement(tick, "line", {"stroke": "currentColor", "x2": format_number(k * style.tick_size_inner)})
            text = ET.SubElement(
                tick,
                "text",
                {"fill": "currentColor", "x": format_number(k * spacing), "dy": "0.32em"},
            )
        text.text = label
    return group


def add_gridlines(axis: ET.Element, *, length: float, opacity: float = 0.1) -> None:
    """Clone every tick line of a left axis into a gridline spanning the plot."""
    for tick in axis.iter("g"):
        if tick.get("class") != "tick":
            continue
        children = list(tick)
        for position, child in enumerate(children):
            if child.tag != "line":
                continue
            grid = ET.Element(
                "line",
                {"stroke": "currentColor", "x2": format_number(length), "stroke-opacity": format_number(opacity)},
            )
            tick.insert(position + 1, grid)
            break
