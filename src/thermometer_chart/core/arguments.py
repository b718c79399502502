# src/thermometer_chart/core/arguments.py
"""
Constructor argument parsing for the thermometer chart.

Supported call forms::

    ThermometerChart()                                  # name/value only
    ThermometerChart(area_data, max)                    # limits [0, max]
    ThermometerChart(area_data, [min, max])
    ThermometerChart(parent, area_data, max, "GoalData", [10, 18], ...)
    ThermometerChart(area_data, max, goal_data=[10, 18])
"""

import logging
from numbers import Number
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from thermometer_chart.core.constants import PROPERTY_NAMES
from thermometer_chart.core.exceptions import ChartArgumentError

logger = logging.getLogger(__name__)

_LOOKUP = {}
for _camel, _snake in PROPERTY_NAMES.items():
    _LOOKUP[_camel.lower()] = _snake
    _LOOKUP[_snake] = _snake
    _LOOKUP[_snake.replace("_", "")] = _snake


def normalize_property_name(name: Any) -> str:
    """
    Map a property name to its attribute name.

    Matching is case-insensitive and accepts both ``GoalData`` and ``goal_data``.

    Raises:
        ChartArgumentError: If the name is not a chart property
    """
    if not isinstance(name, str):
        raise ChartArgumentError(f"Property names must be strings, got {name!r}")
    key = name.strip().lower()
    if key not in _LOOKUP:
        valid = ", ".join(PROPERTY_NAMES)
        raise ChartArgumentError(f"Unrecognized property '{name}'. Valid properties: {valid}")
    return _LOOKUP[key]


def is_numeric(value: Any) -> bool:
    """True for numbers and non-empty or empty numeric sequences/arrays."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Number):
        return True
    if isinstance(value, (str, bytes)):
        return False
    try:
        array = np.asarray(value)
    except (TypeError, ValueError):
        return False
    return array.dtype.kind in "iuf"


def _is_parent(value: Any) -> bool:
    return isinstance(value, (Axes, Figure))


def _pairs_to_dict(pairs: Sequence[Any]) -> Dict[str, Any]:
    if len(pairs) % 2 != 0:
        raise ChartArgumentError("Name/value arguments must be given in pairs.")
    properties: Dict[str, Any] = {}
    for name, value in zip(pairs[0::2], pairs[1::2]):
        properties[normalize_property_name(name)] = value
    return properties


def parse_chart_arguments(
        args: Sequence[Any],
        kwargs: Optional[Dict[str, Any]] = None
) -> Tuple[Optional[Any], Dict[str, Any]]:
    """
    Split constructor arguments into a parent and chart properties.

    Args:
        args: Positional arguments as passed to the constructor
        kwargs: Keyword arguments (property names, plus an optional ``parent``)

    Returns:
        (parent or None, dict of attribute name -> value)

    Raises:
        ChartArgumentError: For a wrong argument count, a malformed second
            positional argument or an unknown property name
    """
    args = list(args)
    kwargs = dict(kwargs or {})
    parent = kwargs.pop("parent", None)

    # thermometer_chart(parent, ___)
    if args and _is_parent(args[0]):
        if parent is not None:
            raise ChartArgumentError("Parent given both positionally and by keyword.")
        parent = args.pop(0)

    properties: Dict[str, Any] = {}

    if args and is_numeric(args[0]):
        if len(args) < 2 or len(args) % 2 != 0:
            raise ChartArgumentError("Invalid number of arguments for thermometerChart.")

        area_data, limit_arg = args[0], args[1]
        if isinstance(limit_arg, Number) and not isinstance(limit_arg, bool):
            # thermometer_chart(area_data, max, ___)
            limits = [0, limit_arg]
        elif is_numeric(limit_arg) and np.size(limit_arg) == 1:
            limits = [0, np.asarray(limit_arg).ravel()[0].item()]
        elif is_numeric(limit_arg) and np.size(limit_arg) == 2:
            # thermometer_chart(area_data, [min, max], ___)
            limits = np.asarray(limit_arg).ravel().tolist()
        else:
            raise ChartArgumentError("Limits must be a 1x2 numeric vector or scalar.")

        properties["area_data"] = area_data
        properties["limits"] = limits
        args = args[2:]

    properties.update(_pairs_to_dict(args))

    for name, value in kwargs.items():
        properties[normalize_property_name(name)] = value

    logger.debug(f"Parsed chart arguments: parent={type(parent).__name__}, "
                 f"properties={sorted(properties)}")
    return parent, properties
