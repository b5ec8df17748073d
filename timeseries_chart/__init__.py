from timeseries_chart.api import line_chart
from timeseries_chart.chart import ChartModel, build_chart_model, render_chart, render_line_chart
from timeseries_chart.errors import ChartDataError
from timeseries_chart.options import ChartOptions
from timeseries_chart.scales import LinearScale, PointScale, SqrtScale, UtcScale
from timeseries_chart.series import ChartValues, SeriesData
from timeseries_chart.svg import to_markup, write_svg

__all__ = [
    "ChartDataError",
    "ChartModel",
    "ChartOptions",
    "ChartValues",
    "LinearScale",
    "PointScale",
    "SeriesData",
    "SqrtScale",
    "UtcScale",
    "build_chart_model",
    "line_chart",
    "render_chart",
    "render_line_chart",
    "to_markup",
    "write_svg",
]
