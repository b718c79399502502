# src/thermometer_chart/core/layout.py
"""
Geometry layout for the thermometer chart.

Converts chart properties into shape descriptors:

- Bulb: fully rounded rectangle straddling a point just below the lower limit
- Segments: stacked quads filling the stem, clipped at the upper limit
- Brackets: right-facing polylines with a value/label text per area
- Goals: tick, dotted line with diamond markers and an optional side label
- Stem: outline from the bulb offset to the upper limit

The layout is a pure function of its inputs; the matplotlib adapter in
``thermometer_chart.gui.widgets.charts.thermometer`` applies the result.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from thermometer_chart.core.constants import (
    BRACKET_INNER_FACTOR,
    BRACKET_OUTER_FACTOR,
    BRACKET_TEXT_FACTOR,
    AREA_LABEL_ROTATION,
    BULB_HEIGHT_FACTOR,
    BULB_OFFSET_FACTOR,
    DEFAULT_PALETTE,
    GOAL_LEFT_TEXT_X,
    GOAL_LEFT_TICK_X,
    GOAL_RIGHT_TEXT_X,
    GOAL_RIGHT_TICK_X,
    STEM_WIDTH,
)
from thermometer_chart.core.exceptions import ChartValidationError, LabelMismatchError
from thermometer_chart.core.models import (
    AreaSegment,
    BulbShape,
    ChartProperties,
    GoalLocation,
    Polyline,
    ShapeKind,
    TextAnchor,
    ThermometerLayout,
)

logger = logging.getLogger(__name__)


def validate_label_lengths(props: ChartProperties) -> None:
    """
    Check that label vectors match their data vectors.

    Empty label vectors are always accepted.

    Raises:
        LabelMismatchError: If a non-empty label vector has a different length
    """
    if props.area_labels and len(props.area_data) != len(props.area_labels):
        raise LabelMismatchError(
            "AreaData and AreaLabels must have the same size.",
            data_name="AreaData",
            expected=len(props.area_data),
            actual=len(props.area_labels),
        )

    if props.goal_labels and len(props.goal_data) != len(props.goal_labels):
        raise LabelMismatchError(
            "GoalData and GoalLabels must have the same size.",
            data_name="GoalData",
            expected=len(props.goal_data),
            actual=len(props.goal_labels),
        )


def format_magnitude(value: float) -> str:
    """
    Format an area magnitude for its bracket label.

    Whole numbers print without decimals; anything else keeps at least five
    significant digits, more for values of 10 and above.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    if float(value).is_integer():
        return str(int(value))

    digits = max(int(math.floor(math.log10(abs(value)))) + 5, 5)
    return f"{value:.{digits}g}"


def goal_label_location(location: GoalLocation) -> Tuple[Tuple[float, float], float, str]:
    """
    Placement of goal ticks and labels for one side of the stem.

    Returns:
        (tick x data, text x position, text horizontal alignment)
    """
    if GoalLocation(location) is GoalLocation.RIGHT:
        return GOAL_RIGHT_TICK_X, GOAL_RIGHT_TEXT_X, "left"
    return GOAL_LEFT_TICK_X, GOAL_LEFT_TEXT_X, "right"


def valid_goal_mask(goal_data: Sequence[float], limits: Tuple[float, float]) -> List[bool]:
    """Flag the goals that lie within the limits (inclusive)."""
    lower, upper = limits
    return [lower <= goal <= upper for goal in goal_data]


def area_label_geometry(
        stem_width: float,
        y_start: float,
        y_end: float,
        y_max: float,
        label_text: str
) -> Optional[Tuple[Polyline, TextAnchor]]:
    """
    Bracket and text for one area label on the right of the stem.

    The long vertical part of the bracket sits further from the stem than
    its short horizontal ends, and the text sits just beyond it.

    Args:
        stem_width: Width of the thermometer stem
        y_start: Bottom of the area on the value axis
        y_end: Top of the area on the value axis
        y_max: Upper limit of the stem
        label_text: Caller supplied label (may be empty)

    Returns:
        (bracket, text) or None when the area starts at or above y_max
    """
    if y_start >= y_max:
        return None

    x_right = stem_width
    inner = x_right + BRACKET_INNER_FACTOR * stem_width
    outer = x_right + BRACKET_OUTER_FACTOR * stem_width
    text_x = x_right + BRACKET_TEXT_FACTOR * stem_width

    if y_end >= y_max:
        # Partially within the limits: drop the top arm
        y_end = y_max
        xdata = (inner, outer, outer)
        ydata = (y_start, y_start, y_end)
    else:
        xdata = (inner, outer, outer, inner)
        ydata = (y_start, y_start, y_end, y_end)

    # Empty labels still take a line so all labels align
    if not label_text:
        label_text = " "
    full_label = f"{format_magnitude(y_end - y_start)}\n{label_text}"

    bracket = Polyline(xdata=xdata, ydata=ydata, kind=ShapeKind.BRACKET)
    text = TextAnchor(
        x=text_x,
        y=(y_start + y_end) / 2,
        text=full_label,
        horizontal_alignment="center",
        vertical_alignment="bottom",
        rotation=AREA_LABEL_ROTATION,
        kind=ShapeKind.AREA_LABEL,
    )
    return bracket, text


def _stack_segments(
        props: ChartProperties,
        stem_width: float,
        bulb_height: float,
        palette: Sequence[str]
) -> List[AreaSegment]:
    lower, upper = props.limits
    area_data = props.area_data
    segments: List[AreaSegment] = []

    # First area reaches down over the bulb outline
    bottom = lower - (bulb_height / 2) * BULB_OFFSET_FACTOR
    nominal_bottom = lower
    top = lower + area_data[0]

    for i in range(len(area_data)):
        if bottom >= upper:
            logger.debug(f"Areas {i}..{len(area_data) - 1} start above the upper limit, skipped")
            break

        if top > upper:
            top = upper

        segments.append(AreaSegment(
            index=i,
            left=0.0,
            right=stem_width,
            bottom=bottom,
            top=top,
            nominal_bottom=nominal_bottom,
            color=palette[i % len(palette)],
        ))

        bottom = top
        nominal_bottom = top
        if i + 1 < len(area_data):
            top = bottom + area_data[i + 1]

    return segments


def _area_label_shapes(
        props: ChartProperties,
        stem_width: float
) -> Tuple[List[Polyline], List[TextAnchor]]:
    brackets: List[Polyline] = []
    texts: List[TextAnchor] = []

    bottom = props.lower
    for magnitude, label in zip(props.area_data, props.area_labels):
        top = bottom + magnitude
        shapes = area_label_geometry(stem_width, bottom, top, props.upper, label)
        if shapes is not None:
            brackets.append(shapes[0])
            texts.append(shapes[1])
        bottom = top

    return brackets, texts


def _goal_shapes(
        props: ChartProperties,
        stem_width: float
) -> Tuple[List[Polyline], List[Polyline], List[TextAnchor]]:
    mask = valid_goal_mask(props.goal_data, props.limits)
    valid_goals = [goal for goal, keep in zip(props.goal_data, mask) if keep]
    valid_labels = [label for label, keep in zip(props.goal_labels, mask) if keep]

    dropped = len(props.goal_data) - len(valid_goals)
    if dropped:
        logger.debug(f"{dropped} goal(s) outside limits {props.limits} not drawn")

    tick_x, text_x, alignment = goal_label_location(props.goal_location)

    ticks = [
        Polyline(xdata=tick_x, ydata=(goal, goal), kind=ShapeKind.GOAL_TICK)
        for goal in valid_goals
    ]
    lines = [
        Polyline(xdata=(0.0, stem_width), ydata=(goal, goal), kind=ShapeKind.GOAL_LINE)
        for goal in valid_goals
    ]
    texts = [
        TextAnchor(
            x=text_x,
            y=goal,
            text=label,
            horizontal_alignment=alignment,
            vertical_alignment="middle",
            kind=ShapeKind.GOAL_LABEL,
        )
        for goal, label in zip(valid_goals, valid_labels)
    ]
    return ticks, lines, texts


def compute_layout(
        props: ChartProperties,
        stem_width: float = STEM_WIDTH,
        palette: Sequence[str] = DEFAULT_PALETTE,
        bulb_height_factor: float = BULB_HEIGHT_FACTOR
) -> ThermometerLayout:
    """
    Compute every shape of the thermometer chart.

    Args:
        props: Chart properties
        stem_width: Width of the stem in data units
        palette: Colors cycled through by the areas
        bulb_height_factor: Bulb radius as a proportion of the stem length

    Returns:
        ThermometerLayout with all shape descriptors

    Raises:
        LabelMismatchError: If label and data vectors differ in length
        ChartValidationError: If the palette is empty or stem width not positive
    """
    validate_label_lengths(props)

    if not palette:
        raise ChartValidationError("Palette must contain at least one color.")
    if stem_width <= 0:
        raise ChartValidationError(f"Stem width must be positive, got {stem_width}")

    lower, upper = props.limits

    bulb_height = (upper - lower) * 2 * bulb_height_factor
    bulb_width = 2 * stem_width

    center_x = stem_width / 2
    center_y = lower - bulb_height / 2
    bulb = BulbShape(
        x=center_x - bulb_width / 2,
        y=center_y - bulb_height / 2,
        width=bulb_width,
        height=bulb_height,
        face_color=palette[0] if props.has_area_data else None,
    )

    segments: List[AreaSegment] = []
    brackets: List[Polyline] = []
    area_texts: List[TextAnchor] = []
    if props.has_area_data:
        segments = _stack_segments(props, stem_width, bulb_height, palette)
        if props.area_labels:
            brackets, area_texts = _area_label_shapes(props, stem_width)

    goal_ticks, goal_lines, goal_texts = _goal_shapes(props, stem_width)

    stem = Polyline(
        xdata=(0.0, 0.0, stem_width, stem_width),
        ydata=(lower - (bulb_height / 2) * BULB_OFFSET_FACTOR, upper,
               upper, lower - (bulb_height / 2) * BULB_OFFSET_FACTOR),
        kind=ShapeKind.STEM,
    )

    logger.debug(
        f"Layout: {len(segments)}/{len(props.area_data)} areas, "
        f"{len(brackets)} brackets, {len(goal_lines)}/{len(props.goal_data)} goals"
    )

    return ThermometerLayout(
        bulb=bulb,
        segments=tuple(segments),
        brackets=tuple(brackets),
        area_texts=tuple(area_texts),
        goal_ticks=tuple(goal_ticks),
        goal_lines=tuple(goal_lines),
        goal_texts=tuple(goal_texts),
        stem=stem,
        xlim=(0.0, stem_width),
        ylim=(lower - (bulb_height / 2) * BULB_OFFSET_FACTOR, upper),
        title=props.title_text,
    )
