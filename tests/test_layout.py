"""
Tests for the thermometer layout: bulb, stacked areas, brackets, goals and stem.
"""
import pytest

from thermometer_chart.core.constants import DEFAULT_PALETTE, STEM_WIDTH
from thermometer_chart.core.exceptions import ChartValidationError, LabelMismatchError
from thermometer_chart.core.layout import (
    area_label_geometry,
    compute_layout,
    format_magnitude,
    goal_label_location,
    valid_goal_mask,
    validate_label_lengths,
)
from thermometer_chart.core.models import GoalLocation, ShapeKind, build_properties


class TestExampleChart:
    """Areas [5, 4, 7] on a 0-20 stem with goals at 10 and 18."""

    def test_segments(self, example_props):
        layout = compute_layout(example_props)

        nominal = [(s.nominal_bottom, s.top) for s in layout.segments]
        assert nominal == [(0, 5), (5, 9), (9, 16)]

    def test_bulb(self, example_props):
        layout = compute_layout(example_props)
        bulb = layout.bulb

        # 2 * (1/20) * (20 - 0)
        assert bulb.height == pytest.approx(2.0)
        assert bulb.width == pytest.approx(2 * STEM_WIDTH)
        assert bulb.center == pytest.approx((STEM_WIDTH / 2, -1.0))
        assert bulb.x == pytest.approx(-0.4)
        assert bulb.y == pytest.approx(-2.0)
        assert bulb.face_color == DEFAULT_PALETTE[0]

    def test_first_segment_covers_bulb_outline(self, example_props):
        layout = compute_layout(example_props)

        # Limits.min - (bulb height / 2) * 0.2
        assert layout.segments[0].bottom == pytest.approx(-0.2)
        assert layout.ylim == pytest.approx((-0.2, 20))
        assert layout.xlim == pytest.approx((0, STEM_WIDTH))

    def test_goals(self, example_props):
        layout = compute_layout(example_props)

        assert [line.ydata for line in layout.goal_lines] == [(10, 10), (18, 18)]
        assert [tick.ydata for tick in layout.goal_ticks] == [(10, 10), (18, 18)]
        assert all(line.xdata == (0, STEM_WIDTH) for line in layout.goal_lines)
        assert [text.text for text in layout.goal_texts] == ['Phase 1', 'Phase 2']

    def test_stem_outline(self, example_props):
        layout = compute_layout(example_props)

        assert layout.stem.kind == ShapeKind.STEM
        assert layout.stem.xdata == pytest.approx((0, 0, STEM_WIDTH, STEM_WIDTH))
        assert layout.stem.ydata == pytest.approx((-0.2, 20, 20, -0.2))

    def test_colors_follow_palette(self, example_props):
        layout = compute_layout(example_props)
        assert [s.color for s in layout.segments] == list(DEFAULT_PALETTE[:3])


class TestStacking:
    """Stacking continuity and clipping at the upper limit."""

    def test_continuity(self, data_vectors):
        for area_data, limits in data_vectors:
            layout = compute_layout(build_properties(area_data=area_data, limits=limits))
            segments = layout.segments
            for lower, upper in zip(segments, segments[1:]):
                assert upper.bottom == lower.top

    def test_total_height(self, data_vectors):
        for area_data, limits in data_vectors:
            layout = compute_layout(build_properties(area_data=area_data, limits=limits))
            total = sum(segment.height for segment in layout.segments)
            expected = min(sum(area_data), limits[1] - limits[0])
            assert total == pytest.approx(expected), f"{area_data} on {limits}"

    def test_top_is_clamped(self):
        layout = compute_layout(build_properties(area_data=[10, 8, 7], limits=[0, 20]))
        assert [s.top for s in layout.segments] == [10, 18, 20]

    def test_segments_above_limit_are_skipped(self):
        layout = compute_layout(build_properties(area_data=[15, 10, 5], limits=[0, 20]))
        assert len(layout.segments) == 2
        assert layout.segments[-1].top == 20

    def test_palette_cycles(self):
        palette = ['red', 'green']
        layout = compute_layout(
            build_properties(area_data=[1, 1, 1, 1, 1], limits=[0, 10]),
            palette=palette,
        )
        assert [s.color for s in layout.segments] == ['red', 'green', 'red', 'green', 'red']

    def test_default_palette_wraps(self):
        layout = compute_layout(build_properties(area_data=[1] * 12, limits=[0, 100]))
        assert layout.segments[10].color == DEFAULT_PALETTE[0]
        assert layout.segments[11].color == DEFAULT_PALETTE[1]

    def test_no_data_leaves_bulb_empty(self):
        layout = compute_layout(build_properties(area_data=[0, 0], area_labels=['a', 'b'],
                                                 limits=[0, 10]))
        assert layout.segments == ()
        assert layout.brackets == ()
        assert layout.area_texts == ()
        assert layout.bulb.face_color is None

    def test_nonzero_lower_limit(self):
        layout = compute_layout(build_properties(area_data=[2, 3], limits=[5, 15]))
        # bulb height = 2 * (1/20) * 10 = 1
        assert layout.bulb.height == pytest.approx(1.0)
        assert layout.segments[0].bottom == pytest.approx(5 - 0.1)
        assert [s.top for s in layout.segments] == [7, 10]

    def test_stem_width_scales_geometry(self, example_props):
        layout = compute_layout(example_props, stem_width=2.0)
        assert layout.bulb.width == 4.0
        assert layout.segments[0].right == 2.0
        assert layout.xlim == (0, 2.0)


class TestAreaLabels:
    """Brackets and labels to the right of the stem."""

    def test_full_brackets(self, example_props):
        layout = compute_layout(example_props)

        assert len(layout.brackets) == 3
        first = layout.brackets[0]
        assert first.kind == ShapeKind.BRACKET
        assert first.xdata == pytest.approx((1.2, 1.36, 1.36, 1.2))
        assert first.ydata == pytest.approx((0, 0, 5, 5))

    def test_bracket_text(self, example_props):
        layout = compute_layout(example_props)
        text = layout.area_texts[1]

        assert text.text == "4\nGrants"
        assert text.x == pytest.approx(1.44)
        assert text.y == pytest.approx(7)
        assert text.rotation == -90
        assert text.horizontal_alignment == "center"
        assert text.vertical_alignment == "bottom"

    def test_brackets_start_at_lower_limit(self, example_props):
        layout = compute_layout(example_props)
        assert layout.brackets[0].ydata[0] == 0
        assert layout.segments[0].bottom < 0

    def test_partial_bracket(self):
        props = build_properties(area_data=[15, 10], area_labels=['a', 'b'], limits=[0, 20])
        layout = compute_layout(props)

        partial = layout.brackets[1]
        assert len(partial.xdata) == 3
        assert partial.ydata == (15, 15, 20)
        assert layout.area_texts[1].text == "5\nb"
        assert layout.area_texts[1].y == pytest.approx(17.5)

    def test_bracket_reaching_limit_is_partial(self):
        props = build_properties(area_data=[20], area_labels=['x'], limits=[0, 20])
        layout = compute_layout(props)
        assert layout.brackets[0].ydata == (0, 0, 20)

    def test_bracket_above_limit_is_not_drawn(self):
        props = build_properties(area_data=[15, 10, 5], area_labels=['a', 'b', 'c'],
                                 limits=[0, 20])
        layout = compute_layout(props)
        assert len(layout.brackets) == 2
        assert len(layout.area_texts) == 2

    def test_empty_label_keeps_alignment(self):
        props = build_properties(area_data=[5, 4], area_labels=['', 'b'], limits=[0, 20])
        layout = compute_layout(props)
        assert layout.area_texts[0].text == "5\n "

    def test_no_labels_no_brackets(self):
        layout = compute_layout(build_properties(area_data=[5, 4], limits=[0, 20]))
        assert layout.brackets == ()
        assert layout.area_texts == ()

    def test_geometry_helper_outside(self):
        assert area_label_geometry(0.8, 20, 25, 20, "x") is None


class TestGoals:
    """Goal filtering and side placement."""

    def test_goals_outside_limits_are_dropped(self):
        props = build_properties(
            goal_data=[-1, 0, 10, 20, 21],
            goal_labels=['a', 'b', 'c', 'd', 'e'],
            limits=[0, 20],
        )
        layout = compute_layout(props)

        assert [line.ydata[0] for line in layout.goal_lines] == [0, 10, 20]
        assert [text.text for text in layout.goal_texts] == ['b', 'c', 'd']
        assert [text.y for text in layout.goal_texts] == [0, 10, 20]

    def test_all_goals_outside(self):
        layout = compute_layout(build_properties(goal_data=[-5, 25], limits=[0, 20]))
        assert layout.goal_ticks == ()
        assert layout.goal_lines == ()
        assert layout.goal_texts == ()

    def test_left_placement(self, example_props):
        layout = compute_layout(example_props)

        assert layout.goal_ticks[0].xdata == (0, -0.4)
        assert layout.goal_texts[0].x == -1.2
        assert layout.goal_texts[0].horizontal_alignment == "right"
        assert layout.goal_texts[0].vertical_alignment == "middle"

    def test_right_placement(self, example_values):
        example_values['goal_location'] = 'right'
        layout = compute_layout(build_properties(**example_values))

        assert layout.goal_ticks[0].xdata == (1, 1.7)
        assert layout.goal_texts[0].x == 1.8
        assert layout.goal_texts[0].horizontal_alignment == "left"

    def test_goals_without_labels(self):
        layout = compute_layout(build_properties(goal_data=[5], limits=[0, 10]))
        assert len(layout.goal_ticks) == 1
        assert len(layout.goal_lines) == 1
        assert layout.goal_texts == ()

    def test_goal_label_location(self):
        assert goal_label_location(GoalLocation.LEFT) == ((0, -0.4), -1.2, "right")
        assert goal_label_location("right") == ((1, 1.7), 1.8, "left")

    def test_valid_goal_mask_is_inclusive(self):
        assert valid_goal_mask([0, 5, 10, 11], (0, 10)) == [True, True, True, False]


class TestValidation:
    """Label/data length checks run before any geometry."""

    def test_area_label_mismatch(self):
        props = build_properties(area_data=[5, 4, 7], area_labels=['a', 'b'], limits=[0, 20])
        with pytest.raises(LabelMismatchError, match="AreaData and AreaLabels"):
            compute_layout(props)

    def test_goal_label_mismatch(self):
        props = build_properties(goal_data=[10, 18], goal_labels=['a'], limits=[0, 20])
        with pytest.raises(LabelMismatchError, match="GoalData and GoalLabels") as exc_info:
            validate_label_lengths(props)
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1

    def test_empty_labels_are_accepted(self):
        validate_label_lengths(build_properties(area_data=[1, 2], goal_data=[0.5]))

    def test_goal_labels_checked_against_all_goals(self):
        # Lengths are compared before goals outside the limits are filtered
        props = build_properties(goal_data=[10, 30], goal_labels=['in', 'out'], limits=[0, 20])
        layout = compute_layout(props)
        assert [text.text for text in layout.goal_texts] == ['in']

    def test_empty_palette(self, example_props):
        with pytest.raises(ChartValidationError):
            compute_layout(example_props, palette=[])

    def test_stem_width_must_be_positive(self, example_props):
        with pytest.raises(ChartValidationError):
            compute_layout(example_props, stem_width=0)


class TestFormatMagnitude:
    """Numbers in bracket labels."""

    @pytest.mark.parametrize("value, expected", [
        (5, "5"),
        (5.0, "5"),
        (2.5, "2.5"),
        (3.14159265, "3.1416"),
        (123.456, "123.456"),
        (0.001234567, "0.0012346"),
        (0.30000000000000004 - 0.1, "0.2"),
        (float('nan'), "NaN"),
        (float('inf'), "Inf"),
    ])
    def test_format(self, value, expected):
        assert format_magnitude(value) == expected


def test_layout_to_dict(example_props):
    data = compute_layout(example_props).to_dict()

    assert data['bulb']['height'] == pytest.approx(2.0)
    assert len(data['segments']) == 3
    assert data['goal_lines'][0]['kind'] == 'goal_line'
