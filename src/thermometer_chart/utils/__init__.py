"""
Utility modules for the thermometer chart.
"""

from thermometer_chart.utils.logging_utils import setup_logging, log_exception

__all__ = [
    'setup_logging',
    'log_exception',
]
