"""Measurement records and their live re-derived dimension geometry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Union

from .config import get_engine_config
from .dimensions import (
    CircleDimension,
    DimensionStyle,
    LineDimension,
    PointToLineDimension,
    RadiusDimension,
    circle_dimension,
    line_dimension,
    point_to_line_dimension,
    point_to_line_foot,
    radius_dimension,
)
from .geometry import _midpoint2, distance
from .model import Circle, MeasurementError, PathRecord, Point, SegmentGeometry

logger = logging.getLogger(__name__)

MeasurementGeometry = Union[LineDimension, CircleDimension, RadiusDimension, PointToLineDimension]


class MeasurementKind(str, Enum):
    LINE = 'line'
    CIRCLE = 'circle'
    RADIUS = 'radius'
    POINT_TO_LINE = 'pointToLine'


@dataclass
class Measurement:
    id: str
    kind: MeasurementKind
    path_ids: List[str]
    value: float
    text_position: Point
    view_instance_id: str
    override_value: Optional[str] = None
    is_manually_positioned: bool = False
    anchor_point: Optional[Point] = None  # snapped point of a point-to-line measurement


def format_value(value: float) -> str:
    rendered = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if rendered in ("-0", "") else rendered


def display_text(measurement: Measurement) -> str:
    override = measurement.override_value
    if override is not None and override.strip():
        return override
    text = format_value(measurement.value)
    if measurement.kind == MeasurementKind.CIRCLE:
        return f"⌀{text}"
    if measurement.kind == MeasurementKind.RADIUS:
        return f"R{text}"
    return text


def view_id_from_path_id(path_id: str) -> str:
    """``standard_front_visible_0_1`` -> ``standard_front``."""
    for marker in ('_visible_', '_hidden_'):
        idx = path_id.rfind(marker)
        if idx != -1:
            return path_id[:idx]
    if path_id.endswith('_circle'):
        parts = path_id.split('_')
        if len(parts) > 2:
            return '_'.join(parts[:-2])
    logger.warning("Could not derive a view id from path id %s", path_id)
    return path_id


def _line_geometry(record: Optional[PathRecord]) -> Optional[SegmentGeometry]:
    if record is None or record.type != 'line' or not isinstance(record.geometry, SegmentGeometry):
        return None
    return record.geometry


def _circle_geometry(record: Optional[PathRecord]) -> Optional[Circle]:
    if record is None or not isinstance(record.geometry, Circle):
        return None
    return record.geometry


def _unit_factor(unit_factor: Optional[float]) -> float:
    return get_engine_config().unit_factor if unit_factor is None else unit_factor


def create_line_measurement(record: PathRecord, *, unit_factor: Optional[float] = None) -> Measurement:
    geometry = _line_geometry(record)
    if geometry is None:
        raise MeasurementError(f"path {record.id} is not a line")
    start, end = geometry.endpoints
    mid = _midpoint2(start, end)
    return Measurement(
        id=record.id,
        kind=MeasurementKind.LINE,
        path_ids=[record.id],
        value=float(geometry.length or 0.0) * _unit_factor(unit_factor),
        text_position=(mid[0], mid[1] - 5.0),
        view_instance_id=view_id_from_path_id(record.id),
    )


def create_circle_measurement(record: PathRecord, *, unit_factor: Optional[float] = None) -> Measurement:
    circle = _circle_geometry(record)
    if circle is None:
        raise MeasurementError(f"path {record.id} is not a circle")
    return Measurement(
        id=record.id,
        kind=MeasurementKind.CIRCLE,
        path_ids=[record.id],
        value=circle.diameter * _unit_factor(unit_factor),
        text_position=circle.center,
        view_instance_id=view_id_from_path_id(record.id),
    )


def create_radius_measurement(record: PathRecord, *, unit_factor: Optional[float] = None) -> Measurement:
    circle = _circle_geometry(record)
    if circle is None:
        raise MeasurementError(f"path {record.id} is not a circle")
    return Measurement(
        id=f'{record.id}_radius',
        kind=MeasurementKind.RADIUS,
        path_ids=[record.id],
        value=circle.radius * _unit_factor(unit_factor),
        text_position=(circle.center[0] + circle.radius, circle.center[1] - circle.radius),
        view_instance_id=view_id_from_path_id(record.id),
    )


def create_point_to_line_measurement(
    measurement_id: str,
    point: Point,
    record: PathRecord,
    view_instance_id: str,
    *,
    unit_factor: Optional[float] = None,
) -> Measurement:
    geometry = _line_geometry(record)
    if geometry is None:
        raise MeasurementError(f"path {record.id} is not a line")
    start, end = geometry.endpoints
    resolved = point_to_line_foot(point, start, end)
    if resolved is None:
        raise MeasurementError(f"path {record.id} is neither horizontal nor vertical")
    foot = resolved[0]
    return Measurement(
        id=measurement_id,
        kind=MeasurementKind.POINT_TO_LINE,
        path_ids=[record.id],
        value=distance(point, foot) * _unit_factor(unit_factor),
        text_position=_midpoint2(point, foot),
        view_instance_id=view_instance_id,
        anchor_point=point,
    )


def measurement_geometry(
    measurement: Measurement,
    records_by_id: Mapping[str, PathRecord],
    style: Optional[DimensionStyle] = None,
    scale: float = 1.0,
) -> Optional[MeasurementGeometry]:
    """Re-derive the dimension geometry of ``measurement`` from the current records."""
    style = style or DimensionStyle()
    if scale != 1.0:
        style = style.scaled(scale)
    record = records_by_id.get(measurement.path_ids[0]) if measurement.path_ids else None
    if record is None:
        logger.warning("Measurement %s references missing path(s) %s", measurement.id, measurement.path_ids)
        return None
    label = display_text(measurement)

    if measurement.kind == MeasurementKind.LINE:
        line = _line_geometry(record)
        if line is None:
            return None
        return line_dimension(line.endpoints[0], line.endpoints[1], measurement.text_position, label, style)
    if measurement.kind in (MeasurementKind.CIRCLE, MeasurementKind.RADIUS):
        circle = _circle_geometry(record)
        if circle is None:
            return None
        builder = circle_dimension if measurement.kind == MeasurementKind.CIRCLE else radius_dimension
        return builder(circle.center, circle.radius, measurement.text_position, label, style)
    if measurement.kind == MeasurementKind.POINT_TO_LINE:
        line = _line_geometry(record)
        if line is None or measurement.anchor_point is None:
            return None
        return point_to_line_dimension(
            measurement.anchor_point,
            line.endpoints[0],
            line.endpoints[1],
            measurement.text_position,
            label,
            style,
        )
    return None
