# src/thermometer_chart/core/models.py
"""
Pydantic data models for the thermometer chart.

``ChartProperties`` is the public property bag of a chart. The remaining
models are the shape descriptors produced by the layout computation and
consumed by the matplotlib adapter (or dumped as JSON by the CLI).
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from thermometer_chart.core.constants import DEFAULT_LIMITS
from thermometer_chart.core.exceptions import ChartValidationError, InvalidLimitsError


class GoalLocation(str, Enum):
    """Side of the stem that goal ticks and labels are drawn on."""
    LEFT = "left"
    RIGHT = "right"


class ShapeKind(str, Enum):
    """Role of a polyline or text anchor in the chart."""
    STEM = "stem"
    BRACKET = "bracket"
    GOAL_TICK = "goal_tick"
    GOAL_LINE = "goal_line"
    AREA_LABEL = "area_label"
    GOAL_LABEL = "goal_label"


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, np.ndarray):
        return value.ravel().tolist()
    if isinstance(value, (str, bytes)) or np.isscalar(value):
        return [value]
    return list(value)


class ChartProperties(BaseModel):
    """Public properties of a thermometer chart, validated on every assignment."""
    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=False,
        use_enum_values=False,
    )

    area_data: List[float] = Field(default_factory=list, description="Cumulative area magnitudes")
    area_labels: List[str] = Field(default_factory=list, description="Label per area")
    goal_data: List[float] = Field(default_factory=list, description="Goal values on the stem")
    goal_labels: List[str] = Field(default_factory=list, description="Label per goal")
    goal_location: GoalLocation = Field(default=GoalLocation.LEFT, description="Side for goal marks")
    limits: Tuple[float, float] = Field(default=DEFAULT_LIMITS, description="[min, max] of the stem")
    title_text: str = Field(default="", description="Chart title")

    @field_validator('area_data', 'goal_data', mode='before')
    @classmethod
    def coerce_numeric_vector(cls, v: Any) -> List[Any]:
        """Accept scalars, sequences and numpy arrays."""
        values = _as_list(v)
        for item in values:
            if isinstance(item, (str, bytes)) or isinstance(item, bool):
                raise ValueError(f"Value must be numeric, got {item!r}")
        return values

    @field_validator('area_data')
    @classmethod
    def validate_non_negative(cls, v: List[float]) -> List[float]:
        """Area magnitudes stack upwards, so they cannot be negative."""
        if any(value < 0 for value in v):
            raise ChartValidationError("AreaData values must be non-negative.")
        return v

    @field_validator('area_labels', 'goal_labels', mode='before')
    @classmethod
    def coerce_label_vector(cls, v: Any) -> List[str]:
        """Accept a single string or any sequence of label-like values."""
        return ["" if item is None else str(item) for item in _as_list(v)]

    @field_validator('goal_location', mode='before')
    @classmethod
    def normalize_goal_location(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('title_text', mode='before')
    @classmethod
    def coerce_title(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return "\n".join(str(line) for line in v)
        return str(v)

    @field_validator('limits', mode='before')
    @classmethod
    def coerce_limits(cls, v: Any) -> Any:
        values = _as_list(v)
        if len(values) != 2:
            raise InvalidLimitsError("Limits must be a 1x2 numeric vector.", limits=v)
        return tuple(values)

    @field_validator('limits')
    @classmethod
    def validate_increasing(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        """Limits must be two finite, increasing values."""
        if not all(math.isfinite(value) for value in v) or v[1] <= v[0]:
            raise InvalidLimitsError(limits=v)
        return v

    @property
    def lower(self) -> float:
        return self.limits[0]

    @property
    def upper(self) -> float:
        return self.limits[1]

    @property
    def has_area_data(self) -> bool:
        """True when there is at least one non-zero area."""
        return any(value != 0 for value in self.area_data)


def raise_chart_error(exc: ValidationError) -> None:
    """
    Re-raise a pydantic ValidationError as a chart error.

    The original chart exception is preserved when a validator raised one.
    """
    for error in exc.errors():
        original = (error.get('ctx') or {}).get('error')
        if isinstance(original, ChartValidationError):
            raise original from exc
    raise ChartValidationError(str(exc)) from exc


def build_properties(**values: Any) -> ChartProperties:
    """Create ChartProperties, translating validation failures to chart errors."""
    try:
        return ChartProperties(**values)
    except ValidationError as e:
        raise_chart_error(e)


# Shape descriptors

class ShapeModel(BaseModel):
    """Base model for immutable shape descriptors."""
    model_config = ConfigDict(frozen=True)


class BulbShape(ShapeModel):
    """Fully rounded rectangle (ellipse) at the bottom of the stem."""
    x: float
    y: float
    width: float
    height: float
    face_color: Optional[str] = None

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


class AreaSegment(ShapeModel):
    """One stacked quad filling the stem."""
    index: int
    left: float
    right: float
    bottom: float
    top: float
    nominal_bottom: float = Field(..., description="Bottom on the value axis (min for the first area)")
    color: str

    @property
    def height(self) -> float:
        """Height on the value axis, excluding the part covering the bulb."""
        return self.top - self.nominal_bottom


class Polyline(ShapeModel):
    """Open polyline (stem outline, brackets, goal ticks and lines)."""
    xdata: Tuple[float, ...]
    ydata: Tuple[float, ...]
    kind: ShapeKind


class TextAnchor(ShapeModel):
    """Positioned text with alignment and rotation."""
    x: float
    y: float
    text: str
    horizontal_alignment: str = "center"
    vertical_alignment: str = "middle"
    rotation: float = 0.0
    kind: ShapeKind


class ThermometerLayout(ShapeModel):
    """Complete set of shapes for one render pass."""
    bulb: BulbShape
    segments: Tuple[AreaSegment, ...] = ()
    brackets: Tuple[Polyline, ...] = ()
    area_texts: Tuple[TextAnchor, ...] = ()
    goal_ticks: Tuple[Polyline, ...] = ()
    goal_lines: Tuple[Polyline, ...] = ()
    goal_texts: Tuple[TextAnchor, ...] = ()
    stem: Polyline
    xlim: Tuple[float, float]
    ylim: Tuple[float, float]
    title: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation."""
        return self.model_dump(mode='json')
