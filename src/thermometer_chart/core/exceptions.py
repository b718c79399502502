# src/thermometer_chart/core/exceptions.py
"""
Custom exceptions for the thermometer chart.

These exceptions provide specific error handling for the property,
layout and rendering stages of the chart.
"""


class ThermometerChartError(Exception):
    """Base exception for all thermometer chart errors."""
    pass


class ChartValidationError(ThermometerChartError, ValueError):
    """Raised when a chart property or property combination is invalid."""
    pass


class InvalidLimitsError(ChartValidationError):
    """Raised when limits are not two increasing values."""

    def __init__(self, message: str = "Specify limits as two increasing values.",
                 limits=None):
        super().__init__(message)
        self.limits = limits


class LabelMismatchError(ChartValidationError):
    """Raised when a label vector does not match its data vector."""

    def __init__(self, message: str, data_name: str, expected: int, actual: int):
        super().__init__(message)
        self.data_name = data_name
        self.expected = expected
        self.actual = actual


class ChartArgumentError(ThermometerChartError, TypeError):
    """Raised when constructor arguments are malformed."""
    pass


class ConfigurationError(ThermometerChartError):
    """Raised when configuration is invalid."""
    pass


class RenderError(ThermometerChartError):
    """Raised when a chart cannot be exported."""
    pass
