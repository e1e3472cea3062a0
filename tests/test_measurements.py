import pytest

from drawing_ir.dimensions import CircleDimension, LineDimension, PointToLineDimension, RadiusDimension
from drawing_ir.measurements import (
    Measurement,
    MeasurementKind,
    create_circle_measurement,
    create_line_measurement,
    create_point_to_line_measurement,
    create_radius_measurement,
    display_text,
    format_value,
    measurement_geometry,
    view_id_from_path_id,
)
from drawing_ir.model import MeasurementError
from drawing_ir.normalize import normalize_paths

RECORDS = {
    record.id: record
    for record in normalize_paths(
        ["M0 0 L10 0", "M15 10 A5 5 0 1 0 25 10 A5 5 0 1 0 15 10", "M0 0 L10 10", "M0 0 Q5 5 10 0"],
        "std_front_visible",
    )
}
LINE = RECORDS["std_front_visible_0_0"]
CIRCLE = RECORDS["std_front_visible_1_circle"]
DIAGONAL = RECORDS["std_front_visible_2_0"]
CURVE = RECORDS["std_front_visible_3_0"]


def test_line_measurement():
    measurement = create_line_measurement(LINE)

    assert measurement.id == LINE.id
    assert measurement.kind == MeasurementKind.LINE
    assert measurement.path_ids == [LINE.id]
    assert measurement.value == pytest.approx(100)
    assert measurement.text_position == (5, -5)
    assert measurement.view_instance_id == "std_front"
    assert display_text(measurement) == "100"


def test_circle_and_radius_measurements():
    diameter = create_circle_measurement(CIRCLE)
    radius = create_radius_measurement(CIRCLE)

    assert diameter.value == pytest.approx(100)
    assert diameter.text_position == pytest.approx((20, 10))
    assert display_text(diameter) == "⌀100"
    assert radius.id == f"{CIRCLE.id}_radius"
    assert display_text(radius) == "R50"


def test_unit_factor_can_be_overridden():
    assert create_line_measurement(LINE, unit_factor=1).value == pytest.approx(10)


def test_wrong_record_types_are_rejected():
    with pytest.raises(MeasurementError):
        create_line_measurement(CIRCLE)
    with pytest.raises(MeasurementError):
        create_circle_measurement(LINE)


def test_point_to_line_measurement():
    measurement = create_point_to_line_measurement("snap_1", (5, 5), LINE, "std_front")

    assert measurement.kind == MeasurementKind.POINT_TO_LINE
    assert measurement.value == pytest.approx(50)
    assert measurement.text_position == (5, 2.5)
    assert measurement.anchor_point == (5, 5)


@pytest.mark.parametrize("record", [DIAGONAL, CURVE])
def test_point_to_line_needs_axis_aligned_line(record):
    with pytest.raises(MeasurementError):
        create_point_to_line_measurement("snap_1", (5, 5), record, "std_front")


@pytest.mark.parametrize(
    "value, expected",
    [(12.5, "12.5"), (3.0, "3"), (0.004, "0"), (1.0066, "1.01"), (-0.001, "0"), (400, "400")],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_override_replaces_text_unless_blank():
    measurement = create_circle_measurement(CIRCLE)

    measurement.override_value = "   "
    assert display_text(measurement) == "⌀100"
    measurement.override_value = "approx. 10 cm"
    assert display_text(measurement) == "approx. 10 cm"


@pytest.mark.parametrize(
    "path_id, expected",
    [
        ("standard_front_visible_0_1", "standard_front"),
        ("Base_Plate_left_hidden_2_circle", "Base_Plate_left"),
        ("front_3_circle", "front"),
    ],
)
def test_view_id_from_path_id(path_id, expected):
    assert view_id_from_path_id(path_id) == expected


def test_view_id_from_unrecognised_path_id(caplog):
    with caplog.at_level("WARNING"):
        assert view_id_from_path_id("loose") == "loose"
    assert "Could not derive a view id" in caplog.text


def test_measurement_geometry_for_each_kind():
    line = measurement_geometry(create_line_measurement(LINE), RECORDS)
    circle = measurement_geometry(create_circle_measurement(CIRCLE), RECORDS)
    radius = measurement_geometry(create_radius_measurement(CIRCLE), RECORDS)
    p2l = measurement_geometry(create_point_to_line_measurement("snap_1", (5, 5), LINE, "std_front"), RECORDS)

    assert isinstance(line, LineDimension)
    assert line.label_anchor == pytest.approx((5, -5))
    assert isinstance(circle, CircleDimension) and not circle.is_small
    assert isinstance(radius, RadiusDimension)
    assert isinstance(p2l, PointToLineDimension)
    assert p2l.foot == (5, 0)


def test_measurement_geometry_follows_current_records():
    measurement = create_line_measurement(LINE)
    moved = {
        record.id: record
        for record in normalize_paths(["M0 0 L10 0"], "std_front_visible", tx=0, ty=100)
    }

    dim = measurement_geometry(measurement, moved)

    assert dim.dimension_line.start[1] == pytest.approx(-5)
    assert dim.offset == pytest.approx(-105)


def test_measurement_geometry_with_missing_record(caplog):
    measurement = Measurement("gone", MeasurementKind.LINE, ["gone"], 1.0, (0, 0), "v")

    with caplog.at_level("WARNING"):
        assert measurement_geometry(measurement, RECORDS) is None
    assert "missing path" in caplog.text


def test_measurement_geometry_at_export_scale():
    measurement = create_line_measurement(LINE)

    plain = measurement_geometry(measurement, RECORDS)
    scaled = measurement_geometry(measurement, RECORDS, scale=4)

    assert plain.dimension_line.start == scaled.dimension_line.start
    assert len(scaled.dimension_line.segments) == 2
    assert scaled.dimension_line.segments[0][1][0] > plain.dimension_line.segments[0][1][0]
