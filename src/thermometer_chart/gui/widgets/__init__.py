"""
Chart widgets.

- charts.thermometer: ThermometerChart, the matplotlib adapter
- chart_frame: ThermometerChartFrame, the customtkinter host (lazy import)
"""

__all__ = [
    "ThermometerChart",
    "ThermometerChartFrame",
]


def __getattr__(name):
    """Lazy import so customtkinter is only loaded for the viewer."""
    if name == "ThermometerChart":
        from thermometer_chart.gui.widgets.charts.thermometer import ThermometerChart
        globals()["ThermometerChart"] = ThermometerChart
        return ThermometerChart
    if name == "ThermometerChartFrame":
        from thermometer_chart.gui.widgets.chart_frame import ThermometerChartFrame
        globals()["ThermometerChartFrame"] = ThermometerChartFrame
        return ThermometerChartFrame
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
