import pytest

from drawing_ir.dimensions import (
    DimensionStyle,
    arrowhead,
    arrowhead_path,
    break_gap_width,
    circle_dimension,
    line_dimension,
    point_to_line_dimension,
    point_to_line_distance,
    radius_dimension,
)


def _approx_segments(segments):
    return [tuple(pytest.approx(point) for point in segment) for segment in segments]


def test_line_dimension_below_horizontal_line():
    dim = line_dimension((0, 0), (10, 0), (5, -5), "100")

    assert dim.offset == pytest.approx(-5)
    assert dim.label_rotation == 0
    assert dim.label_anchor == pytest.approx((5, -5))
    first, second = dim.extension_lines
    assert first[0] == pytest.approx((0, -0.8))
    assert first[1] == pytest.approx((0, -6.2))
    assert second[1] == pytest.approx((10, -6.2))
    assert dim.dimension_line.segments == _approx_segments(
        [((0, -5), (1.655, -5)), ((8.345, -5), (10, -5))]
    )


def test_line_dimension_arrowheads_point_at_the_ends():
    dim = line_dimension((0, 0), (10, 0), (5, -5), "100")

    start_arrow, end_arrow = dim.dimension_line.arrowheads
    tip, left, right = start_arrow
    assert tip == pytest.approx((0, -5))
    assert left == pytest.approx((1.2, -4.79))
    assert right == pytest.approx((1.2, -5.21))
    assert end_arrow[0] == pytest.approx((10, -5))
    assert end_arrow[1][0] == pytest.approx(8.8)


def test_vertical_line_label_is_rotated():
    dim = line_dimension((0, 0), (0, 10), (-4, 5), "100")

    assert dim.label_rotation == -90
    assert dim.dimension_line.start == pytest.approx((-4, 0))


def test_label_on_the_line_uses_minimum_offset():
    dim = line_dimension((0, 0), (10, 0), (5, 0), "1")

    assert dim.offset == pytest.approx(DimensionStyle().text_offset)


def test_short_dimension_line_is_continuous():
    dim = line_dimension((0, 0), (2, 0), (1, -3), "20")

    assert len(dim.dimension_line.segments) == 1


def test_label_past_the_end_leaves_line_unbroken():
    dim = line_dimension((0, 0), (10, 0), (20, -5), "100")

    assert dim.dimension_line.segments == _approx_segments([((0, -5), (10, -5))])


def test_small_circle_gets_crosshair_and_leader():
    dim = circle_dimension((0, 0), 1, (2, 0), "⌀20")

    assert dim.is_small
    assert dim.diameter_line is None
    assert dim.crosshair == [((-0.5, 0), (0.5, 0)), ((0, -0.5), (0, 0.5))]
    assert dim.leader_line[1] == pytest.approx((4.14, 0))
    assert dim.label_anchor == pytest.approx((4.6, 0))


def test_large_circle_gets_broken_diameter_line():
    dim = circle_dimension((0, 0), 10, (3, 0), "⌀200")

    assert not dim.is_small
    assert dim.crosshair == []
    assert dim.diameter_line.segments == _approx_segments(
        [((-10, 0), (-1.06, 0)), ((7.06, 0), (10, 0))]
    )
    assert dim.label_anchor == pytest.approx((3, 0))


def test_circle_label_at_center_defaults_to_horizontal():
    dim = circle_dimension((5, 5), 10, (5, 5), "⌀200")

    assert dim.diameter_line.start == pytest.approx((-5, 5))
    assert dim.diameter_line.end == pytest.approx((15, 5))


def test_radius_dimension():
    dim = radius_dimension((0, 0), 10, (20, 0), "R100")

    assert dim.leader_line == ((0, 0), pytest.approx((20, 0)))
    assert dim.arrowhead[0] == pytest.approx((10, 0))
    assert dim.arrowhead[1][0] == pytest.approx(8.8)


@pytest.mark.parametrize(
    "point, start, end, foot, orientation",
    [
        ((5, 5), (0, 0), (10, 0), (5, 0), 'horizontal'),
        ((3, 4), (0, 0), (0, 10), (0, 4), 'vertical'),
        ((-3, 4), (0, 10), (0, 0), (0, 4), 'vertical'),
    ],
)
def test_point_to_line_dimension(point, start, end, foot, orientation):
    dim = point_to_line_dimension(point, start, end, (0, 0), "50")

    assert dim.foot == foot
    assert dim.orientation == orientation
    assert dim.distance == pytest.approx(point_to_line_distance(point, start, end))


def test_point_to_line_rejects_diagonal_lines(caplog):
    with caplog.at_level("INFO"):
        assert point_to_line_dimension((5, 0), (0, 0), (10, 10), (0, 0), "1") is None
    assert point_to_line_distance((5, 0), (0, 0), (10, 10)) is None
    assert "horizontal or vertical" in caplog.text


def test_scaled_style_only_changes_stroke_and_font():
    style = DimensionStyle().scaled(2)

    assert style.stroke_width == pytest.approx(0.075)
    assert style.font_size == pytest.approx(1.1)
    assert style.arrow_size == DimensionStyle().arrow_size
    assert break_gap_width("100", style) < break_gap_width("100", DimensionStyle())


def test_scaled_style_rejects_non_positive_scale():
    with pytest.raises(ValueError):
        DimensionStyle().scaled(0)


def test_arrowhead_path():
    triangle = arrowhead((0, 0), (1, 0), DimensionStyle())

    assert arrowhead_path(triangle) == "M0 0L1.2 0.21 1.2 -0.21Z"
