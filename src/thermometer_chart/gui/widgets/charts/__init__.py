"""
Chart implementations.

Usage:
    from thermometer_chart.gui.widgets.charts import ThermometerChart
"""

from thermometer_chart.gui.widgets.charts.thermometer import ThermometerChart, thermometer_chart

__all__ = [
    'ThermometerChart',
    'thermometer_chart',
]
