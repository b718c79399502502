"""
Core functionality for the thermometer chart: properties, layout and configuration.
"""

from thermometer_chart.core.exceptions import (
    ChartArgumentError,
    ChartValidationError,
    ConfigurationError,
    InvalidLimitsError,
    LabelMismatchError,
    RenderError,
    ThermometerChartError,
)

__all__ = [
    'ChartArgumentError',
    'ChartValidationError',
    'ConfigurationError',
    'InvalidLimitsError',
    'LabelMismatchError',
    'RenderError',
    'ThermometerChartError',
]
