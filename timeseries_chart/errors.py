from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when the records handed to the chart builder cannot produce a chart."""
