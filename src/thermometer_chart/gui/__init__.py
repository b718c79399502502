"""
GUI components for the thermometer chart.

NOTE: the customtkinter viewer is not imported here so that the chart can be
used headlessly. Import it directly when needed:
    from thermometer_chart.gui.widgets.chart_frame import ThermometerChartFrame
"""
