"""
Thermometer Chart

A matplotlib chart for progress toward quantitative goals: a bulb-and-stem
thermometer whose stem is filled with stacked, colored areas, with optional
area brackets/labels and goal markers.
"""

__version__ = "1.0.0"
__author__ = "Thermometer Chart Developers"

from .core.config import get_config, Config
from .core.constants import APP_NAME
from .core.layout import compute_layout
from .core.models import ChartProperties, GoalLocation, ThermometerLayout
from .gui.widgets.charts.thermometer import ThermometerChart, thermometer_chart

__all__ = [
    'get_config',
    'Config',
    'APP_NAME',
    'compute_layout',
    'ChartProperties',
    'GoalLocation',
    'ThermometerLayout',
    'ThermometerChart',
    'thermometer_chart',
]
