# src/thermometer_chart/gui/widgets/charts/thermometer.py
"""
ThermometerChart - matplotlib adapter for the thermometer layout.

This module provides the chart object with:
- Argument parsing for the positional and name/value call forms
- One-time axes setup (bulb, area group, stem outline)
- Full rebuild of generated artists on every property change
- Batched updates and export
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple, Union

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Ellipse, Rectangle
from matplotlib.text import Text
from pydantic import ValidationError

from thermometer_chart.core.arguments import normalize_property_name, parse_chart_arguments
from thermometer_chart.core.config import ChartConfig, get_config
from thermometer_chart.core.constants import (
    EMPTY_BULB_COLOR,
    EXPORT_DPI,
    EXPORT_FORMATS,
    GOAL_LINE_STYLE,
    GOAL_MARKER,
    OUTLINE_COLOR,
    STEM_BOX_ASPECT,
)
from thermometer_chart.core.exceptions import ChartArgumentError, ChartValidationError, RenderError
from thermometer_chart.core.layout import compute_layout
from thermometer_chart.core.models import (
    ChartProperties,
    TextAnchor,
    ThermometerLayout,
    build_properties,
    raise_chart_error,
)

logger = logging.getLogger(__name__)

# Text anchors use top/middle/bottom; matplotlib calls the middle "center"
_VERTICAL_ALIGNMENT = {"top": "top", "middle": "center", "bottom": "bottom"}


def _chart_property(name: str, doc: str) -> property:
    def getter(self):
        value = getattr(self._props, name)
        return list(value) if isinstance(value, list) else value

    def setter(self, value):
        self._set_property(name, value)

    return property(getter, setter, doc=doc)


class ThermometerChart:
    """
    Thermometer chart drawn on a matplotlib axes.

    The stem is divided into stacked, colored areas representing cumulative
    quantities, with optional brackets/labels per area and goal markers.

    Call forms:
        ThermometerChart(area_data, max)
        ThermometerChart(area_data, [min, max])
        ThermometerChart()                      # properties by name only
        ThermometerChart(parent, ___)           # parent is a Figure or Axes
        ThermometerChart(___, "GoalData", [10, 18], goal_labels=[...])

    Every property change triggers a full update unless made inside
    ``batch_update()``.
    """

    area_data = _chart_property('area_data', "Magnitudes filling the stem, stacked bottom-up")
    area_labels = _chart_property('area_labels', "Text label for each area")
    goal_data = _chart_property('goal_data', "Goal values marked on the stem")
    goal_labels = _chart_property('goal_labels', "Text label for each goal")
    goal_location = _chart_property('goal_location', "Side of the goal marks ('left'/'right')")
    limits = _chart_property('limits', "[min, max] of the stem")
    title_text = _chart_property('title_text', "Chart title")

    def __init__(self, *args: Any, config: Optional[ChartConfig] = None, **kwargs: Any):
        """
        Initialize ThermometerChart.

        Args:
            *args: Optional parent, area data and max/limits, then name/value pairs
            config: Drawing configuration (defaults to the application config)
            **kwargs: Properties by name (``goal_data=...`` or ``GoalData=...``)

        Raises:
            ChartArgumentError: For malformed positional arguments
            ChartValidationError: For invalid properties (e.g. non-increasing limits)
        """
        parent, properties = parse_chart_arguments(args, kwargs)

        self.config = config or get_config().chart
        self._props: ChartProperties = build_properties(**properties)
        self._layout: Optional[ThermometerLayout] = None
        self._batch_depth = 0
        self._pending_update = False

        # Generated artists, rebuilt on every update
        self.areas: List[Rectangle] = []
        self.area_label_lines: List[Line2D] = []
        self.area_label_text: List[Text] = []
        self.goal_label_lines: List[Line2D] = []
        self.goal_label_text: List[Text] = []

        self.figure, self.ax = self._resolve_parent(parent)

        self.setup()
        self.update()

    def __repr__(self) -> str:
        return (f"ThermometerChart(area_data={self._props.area_data}, "
                f"limits={list(self._props.limits)}, goal_data={self._props.goal_data})")

    def _resolve_parent(self, parent: Optional[Union[Figure, Axes]]) -> Tuple[Figure, Axes]:
        if parent is None:
            figure = Figure(figsize=self.config.figsize, dpi=self.config.dpi)
            figure.subplots_adjust(left=0.35, right=0.65, bottom=0.08, top=0.92)
            return figure, figure.add_subplot(111)
        if isinstance(parent, Axes):
            return parent.figure, parent
        if isinstance(parent, Figure):
            return parent, parent.add_subplot(111)
        raise ChartArgumentError(f"Parent must be a matplotlib Figure or Axes, got {type(parent).__name__}")

    # Lifecycle

    def setup(self) -> None:
        """Prepare the axes and create the persistent bulb and stem artists."""
        ax = self.ax

        ax.set_box_aspect(STEM_BOX_ASPECT)
        ax.tick_params(axis='y', direction='out')
        ax.xaxis.set_visible(False)
        for side in ('top', 'right', 'bottom'):
            ax.spines[side].set_visible(False)
        ax.set_axisbelow(True)
        ax.yaxis.grid(True)

        # No zoom/pan on the stem axes
        ax.set_navigate(False)

        # Bulb at the bottom of the thermometer
        self.bulb = Ellipse(
            (0.0, 0.0), 1.0, 1.0,
            edgecolor=OUTLINE_COLOR,
            facecolor=EMPTY_BULB_COLOR,
            linewidth=1,
            clip_on=False,
        )
        ax.add_patch(self.bulb)

        # Thermometer stem (3 segment line)
        self.stem = Line2D([1, 1, 0, 0], [0, 1, 1, 0], color=OUTLINE_COLOR, linewidth=1)
        ax.add_line(self.stem)

        logger.debug("Thermometer chart axes set up")

    def update(self) -> None:
        """
        Rebuild every generated artist from the current properties.

        Raises:
            ChartValidationError: If label and data lengths differ; the chart
                is left unchanged
        """
        self._pending_update = False

        try:
            layout = compute_layout(
                self._props,
                stem_width=self.config.stem_width,
                palette=self.config.palette,
                bulb_height_factor=self.config.bulb_height_factor,
            )
        except ChartValidationError as e:
            logger.error(f"Thermometer chart update failed: {e}")
            raise

        self._remove_generated()
        self._apply_layout(layout)
        self._layout = layout

        self.draw_idle()

    def _remove_generated(self) -> None:
        for group in (self.areas, self.area_label_lines, self.area_label_text,
                      self.goal_label_lines, self.goal_label_text):
            for artist in group:
                artist.remove()
            group.clear()

    def _apply_layout(self, layout: ThermometerLayout) -> None:
        ax = self.ax
        ax.set_xlim(*layout.xlim)
        ax.set_ylim(*layout.ylim)

        bulb = layout.bulb
        self.bulb.set_center(bulb.center)
        self.bulb.set_width(bulb.width)
        self.bulb.set_height(bulb.height)
        self.bulb.set_facecolor(bulb.face_color or EMPTY_BULB_COLOR)

        for segment in layout.segments:
            patch = Rectangle(
                (segment.left, segment.bottom),
                segment.right - segment.left,
                segment.top - segment.bottom,
                facecolor=segment.color,
                edgecolor='none',
            )
            ax.add_patch(patch)
            self.areas.append(patch)

        for bracket in layout.brackets:
            line = Line2D(bracket.xdata, bracket.ydata, color=OUTLINE_COLOR, clip_on=False)
            ax.add_line(line)
            self.area_label_lines.append(line)

        for anchor in layout.area_texts:
            self.area_label_text.append(
                self._add_text(anchor, fontsize=self.config.area_label_font_size)
            )

        for tick, goal_line in zip(layout.goal_ticks, layout.goal_lines):
            tick_line = Line2D(tick.xdata, tick.ydata, color=OUTLINE_COLOR, clip_on=False)
            marked_line = Line2D(
                goal_line.xdata, goal_line.ydata,
                color=OUTLINE_COLOR,
                marker=GOAL_MARKER,
                markersize=self.config.goal_marker_size,
                markerfacecolor=OUTLINE_COLOR,
                linestyle=GOAL_LINE_STYLE,
                clip_on=False,
            )
            ax.add_line(tick_line)
            ax.add_line(marked_line)
            self.goal_label_lines.extend([tick_line, marked_line])

        for anchor in layout.goal_texts:
            self.goal_label_text.append(self._add_text(anchor))

        self.stem.set_data(layout.stem.xdata, layout.stem.ydata)
        ax.set_title(layout.title)

    def _add_text(self, anchor: TextAnchor, **kwargs: Any) -> Text:
        return self.ax.text(
            anchor.x, anchor.y, anchor.text,
            rotation=anchor.rotation,
            rotation_mode='anchor',
            horizontalalignment=anchor.horizontal_alignment,
            verticalalignment=_VERTICAL_ALIGNMENT[anchor.vertical_alignment],
            clip_on=False,
            **kwargs
        )

    # Properties

    def _set_property(self, name: str, value: Any) -> None:
        try:
            setattr(self._props, name, value)
        except ValidationError as e:
            raise_chart_error(e)
        self._request_update()

    def _request_update(self) -> None:
        if self._batch_depth > 0:
            self._pending_update = True
        else:
            self.update()

    @contextmanager
    def batch_update(self) -> Iterator["ThermometerChart"]:
        """
        Coalesce several property changes into a single update.

        Label/data length checks run once, when the outermost block exits.
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0 and self._pending_update:
            self.update()

    def set(self, **properties: Any) -> None:
        """Set several properties at once with a single update."""
        values = self._props.model_dump()
        for name, value in properties.items():
            values[normalize_property_name(name)] = value
        self._props = build_properties(**values)
        self._request_update()

    def get_properties(self) -> ChartProperties:
        """Copy of the current property values."""
        return self._props.model_copy(deep=True)

    def title(self, text: Optional[str] = None) -> str:
        """Set the title when text is given; return the current title."""
        if text is not None:
            self.title_text = text
        return self._props.title_text

    @property
    def layout(self) -> Optional[ThermometerLayout]:
        """Shapes computed by the last successful update."""
        return self._layout

    # Rendering

    def draw_idle(self) -> None:
        """Request a redraw from the figure canvas, if any."""
        canvas = getattr(self.figure, 'canvas', None)
        if canvas is not None:
            canvas.draw_idle()

    def savefig(self, path: Union[str, Path], dpi: int = EXPORT_DPI, **kwargs: Any) -> Path:
        """
        Export the owning figure.

        Raises:
            RenderError: If the format is unsupported or the file can't be written
        """
        path = Path(path)
        if path.suffix.lower() not in EXPORT_FORMATS:
            raise RenderError(f"Unsupported export format '{path.suffix}'. "
                              f"Use one of: {', '.join(EXPORT_FORMATS)}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.figure.savefig(path, dpi=dpi, bbox_inches='tight', **kwargs)
        except (OSError, ValueError) as e:
            raise RenderError(f"Failed to export chart to {path}: {e}") from e
        logger.info(f"Chart exported to {path}")
        return path


def thermometer_chart(*args: Any, **kwargs: Any) -> ThermometerChart:
    """Create a thermometer chart; see ``ThermometerChart`` for call forms."""
    return ThermometerChart(*args, **kwargs)
