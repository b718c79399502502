# src/thermometer_chart/core/constants.py
"""
Geometry constants for the thermometer chart.

These are values that don't change and aren't configurable.
Sizes that users may want to tune (stem width, palette, fonts) live in
``thermometer_chart.core.config`` instead.
"""

from typing import Final


# Application info
APP_NAME: Final[str] = "Thermometer Chart"
APP_AUTHOR: Final[str] = "Thermometer Chart Developers"

# Stem
STEM_WIDTH: Final[float] = 0.8

# Bulb height as a proportion of the stem length (applied twice: diameter)
BULB_HEIGHT_FACTOR: Final[float] = 1 / 20
# Portion of the bulb's half height that the stem and first segment reach down into
BULB_OFFSET_FACTOR: Final[float] = 0.2
# Plot box aspect (height / width) of the stem axes
STEM_BOX_ASPECT: Final[float] = 20.0

# Area label bracket placement, as multiples of the stem width beyond the stem
BRACKET_INNER_FACTOR: Final[float] = 0.5
BRACKET_OUTER_FACTOR: Final[float] = 0.7
BRACKET_TEXT_FACTOR: Final[float] = 0.8
AREA_LABEL_ROTATION: Final[float] = -90.0
AREA_LABEL_FONT_SIZE: Final[int] = 10

# Goal tick/text placement in data units (not scaled by stem width)
GOAL_LEFT_TICK_X: Final[tuple[float, float]] = (0.0, -0.4)
GOAL_LEFT_TEXT_X: Final[float] = -1.2
GOAL_RIGHT_TICK_X: Final[tuple[float, float]] = (1.0, 1.7)
GOAL_RIGHT_TEXT_X: Final[float] = 1.8
GOAL_MARKER: Final[str] = "D"
GOAL_MARKER_SIZE: Final[int] = 5
GOAL_LINE_STYLE: Final[str] = ":"

# Default limits when only area data is given
DEFAULT_LIMITS: Final[tuple[float, float]] = (0.0, 1.0)

# Colors
OUTLINE_COLOR: Final[str] = "k"
EMPTY_BULB_COLOR: Final[str] = "white"

# matplotlib's default "tab10" property cycle
DEFAULT_PALETTE: Final[tuple[str, ...]] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)

# Property names as accepted by the constructor (CamelCase -> attribute)
PROPERTY_NAMES: Final[dict[str, str]] = {
    "AreaData": "area_data",
    "AreaLabels": "area_labels",
    "GoalData": "goal_data",
    "GoalLabels": "goal_labels",
    "GoalLocation": "goal_location",
    "Limits": "limits",
    "TitleText": "title_text",
}

# Plot export
EXPORT_FORMATS: Final[tuple[str, ...]] = (".png", ".svg", ".pdf")
EXPORT_DPI: Final[int] = 150
