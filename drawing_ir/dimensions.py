"""Annotated dimension geometry for line, circle and point-to-line measurements.

All functions are pure: they take the current geometry plus the label
position and return the pieces a renderer needs (dimension line, extension
lines, arrowheads, label anchor). Stroke width and font size live on
:class:`DimensionStyle`; use :meth:`DimensionStyle.scaled` to keep them
visually constant when exporting at another output scale.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .geometry import TOLERANCE, _add_scaled, _dot2, _midpoint2, _rotate90, _vec2, distance, unit_vector
from .logging_utils import apply_debug_logging
from .model import PathCommand, Point
from .printer import serialize_path_data

logger = logging.getLogger(__name__)

LineSegment = Tuple[Point, Point]
Triangle = Tuple[Point, Point, Point]


@dataclass(frozen=True)
class DimensionStyle:
    stroke_width: float = 0.15
    font_size: float = 2.2
    arrow_size: float = 1.2
    text_offset: float = 1.2
    extension_gap: float = 0.8
    extension_overhang: float = 1.2
    char_width_factor: float = 0.65
    arrow_width_ratio: float = 0.35

    def scaled(self, scale: float) -> "DimensionStyle":
        """Style for output drawn at ``scale`` output units per drawing unit."""
        if scale <= 0:
            raise ValueError(f"export scale must be positive, got {scale}")
        return replace(self, stroke_width=self.stroke_width / scale, font_size=self.font_size / scale)


def estimate_label_width(text: str, style: DimensionStyle) -> float:
    return len(text) * style.font_size * style.char_width_factor


def break_gap_width(text: str, style: DimensionStyle) -> float:
    return estimate_label_width(text, style) + 2.0 * style.text_offset


def arrowhead(tip: Point, direction: Tuple[float, float], style: DimensionStyle) -> Triangle:
    """Filled triangle with its tip at ``tip``, opening along ``direction``."""
    normal = _rotate90(direction)
    base = _add_scaled(tip, direction, style.arrow_size)
    half_width = style.arrow_size * style.arrow_width_ratio / 2.0
    return tip, _add_scaled(base, normal, half_width), _add_scaled(base, normal, -half_width)


def arrowhead_path(triangle: Triangle) -> str:
    tip, left, right = triangle
    return serialize_path_data(
        [
            PathCommand('M', [tip[0], tip[1]]),
            PathCommand('L', [left[0], left[1], right[0], right[1]]),
            PathCommand('Z', []),
        ]
    )


@dataclass
class BrokenLine:
    """A dimension line with a label gap and arrowheads at both ends."""

    start: Point
    end: Point
    segments: List[LineSegment] = field(default_factory=list)
    arrowheads: List[Triangle] = field(default_factory=list)
    label_anchor: Point = (0.0, 0.0)


def broken_dimension_line(
    start: Point,
    end: Point,
    label_position: Point,
    label: str,
    style: DimensionStyle,
) -> BrokenLine:
    direction = unit_vector(start, end) or (1.0, 0.0)
    length = distance(start, end)
    label_proj = _dot2(_vec2(start, label_position), direction)
    half_gap = break_gap_width(label, style) / 2.0

    lo = style.arrow_size
    hi = length - style.arrow_size
    segments: List[LineSegment] = []
    if hi <= lo:
        segments.append((start, end))
    else:
        break_start = min(max(label_proj - half_gap, lo), hi)
        break_end = min(max(label_proj + half_gap, lo), hi)
        if break_end - break_start <= 1e-6:
            segments.append((start, end))
        else:
            if break_start > lo + 1e-6:
                segments.append((start, _add_scaled(start, direction, break_start)))
            if break_end < hi - 1e-6:
                segments.append((_add_scaled(start, direction, break_end), end))

    arrows = [
        arrowhead(start, direction, style),
        arrowhead(end, (-direction[0], -direction[1]), style),
    ]
    anchor = _add_scaled(start, direction, label_proj)
    return BrokenLine(start, end, segments, arrows, anchor)


@dataclass
class LineDimension:
    dimension_line: BrokenLine
    extension_lines: Tuple[LineSegment, LineSegment]
    offset: float
    label_rotation: float

    @property
    def label_anchor(self) -> Point:
        return self.dimension_line.label_anchor


def _label_rotation(p1: Point, p2: Point) -> float:
    angle = math.degrees(math.atan2(p2[1] - p1[1], p2[0] - p1[0]))
    return -90.0 if 45.0 < abs(angle) < 135.0 else 0.0


def line_dimension(
    p1: Point,
    p2: Point,
    label_position: Point,
    label: str,
    style: Optional[DimensionStyle] = None,
) -> LineDimension:
    style = style or DimensionStyle()
    direction = unit_vector(p1, p2) or (1.0, 0.0)
    normal = _rotate90(direction)

    offset = _dot2(_vec2(_midpoint2(p1, p2), label_position), normal)
    if abs(offset) < style.text_offset:
        offset = math.copysign(style.text_offset, offset) if offset != 0 else style.text_offset
    side = 1.0 if offset > 0 else -1.0

    dim_p1 = _add_scaled(p1, normal, offset)
    dim_p2 = _add_scaled(p2, normal, offset)
    extension_lines = (
        (_add_scaled(p1, normal, side * style.extension_gap), _add_scaled(dim_p1, normal, side * style.extension_overhang)),
        (_add_scaled(p2, normal, side * style.extension_gap), _add_scaled(dim_p2, normal, side * style.extension_overhang)),
    )
    line = broken_dimension_line(dim_p1, dim_p2, label_position, label, style)
    return LineDimension(line, extension_lines, offset, _label_rotation(p1, p2))


@dataclass
class CircleDimension:
    center: Point
    radius: float
    is_small: bool
    label_anchor: Point
    crosshair: List[LineSegment] = field(default_factory=list)
    leader_line: Optional[LineSegment] = None
    diameter_line: Optional[BrokenLine] = None


def _label_direction(center: Point, label_position: Point) -> Tuple[Tuple[float, float], float]:
    vx, vy = _vec2(center, label_position)
    dist_sq = vx * vx + vy * vy
    angle = 0.0 if dist_sq < 1e-9 else math.atan2(vy, vx)
    return (math.cos(angle), math.sin(angle)), math.sqrt(dist_sq)


def circle_dimension(
    center: Point,
    radius: float,
    label_position: Point,
    label: str,
    style: Optional[DimensionStyle] = None,
) -> CircleDimension:
    style = style or DimensionStyle()
    direction, label_distance = _label_direction(center, label_position)
    is_small = 2.0 * radius < estimate_label_width(label, style) * 1.5

    if is_small:
        size = min(radius * 0.5, 1.0)
        crosshair = [
            ((center[0] - size, center[1]), (center[0] + size, center[1])),
            ((center[0], center[1] - size), (center[0], center[1] + size)),
        ]
        reach = max(label_distance, radius + style.text_offset * 3.0)
        leader = (center, _add_scaled(center, direction, reach * 0.9))
        anchor = _add_scaled(center, direction, reach)
        return CircleDimension(center, radius, True, anchor, crosshair=crosshair, leader_line=leader)

    start = _add_scaled(center, direction, -radius)
    end = _add_scaled(center, direction, radius)
    line = broken_dimension_line(start, end, label_position, label, style)
    return CircleDimension(center, radius, False, line.label_anchor, diameter_line=line)


@dataclass
class RadiusDimension:
    center: Point
    radius: float
    leader_line: LineSegment
    arrowhead: Triangle
    label_anchor: Point


def radius_dimension(
    center: Point,
    radius: float,
    label_position: Point,
    label: str,
    style: Optional[DimensionStyle] = None,
) -> RadiusDimension:
    """Leader from the center through the circumference towards the label."""
    style = style or DimensionStyle()
    direction, label_distance = _label_direction(center, label_position)
    rim = _add_scaled(center, direction, radius)
    reach = max(label_distance, radius + style.text_offset)
    anchor = _add_scaled(center, direction, reach)
    tip_back = (-direction[0], -direction[1])
    return RadiusDimension(center, radius, (center, anchor), arrowhead(rim, tip_back, style), anchor)


@dataclass
class PointToLineDimension:
    point: Point
    foot: Point
    distance: float
    orientation: str  # 'horizontal' or 'vertical' reference line
    dimension_line: BrokenLine


def _axis_orientation(start: Point, end: Point, tol: float = TOLERANCE) -> Optional[str]:
    if distance(start, end) < tol:
        return None
    if abs(start[1] - end[1]) < tol:
        return 'horizontal'
    if abs(start[0] - end[0]) < tol:
        return 'vertical'
    return None


def point_to_line_foot(point: Point, start: Point, end: Point) -> Optional[Tuple[Point, str]]:
    orientation = _axis_orientation(start, end)
    if orientation == 'horizontal':
        return (point[0], start[1]), orientation
    if orientation == 'vertical':
        return (start[0], point[1]), orientation
    return None


def point_to_line_distance(point: Point, start: Point, end: Point) -> Optional[float]:
    """Perpendicular distance to an axis-aligned line, ``None`` for any other line."""
    resolved = point_to_line_foot(point, start, end)
    if resolved is None:
        return None
    return distance(point, resolved[0])


def point_to_line_dimension(
    point: Point,
    line_start: Point,
    line_end: Point,
    label_position: Point,
    label: str,
    style: Optional[DimensionStyle] = None,
) -> Optional[PointToLineDimension]:
    style = style or DimensionStyle()
    resolved = point_to_line_foot(point, line_start, line_end)
    if resolved is None:
        logger.info("Point-to-line measurement needs a horizontal or vertical line")
        return None
    foot, orientation = resolved
    line = broken_dimension_line(point, foot, label_position, label, style)
    return PointToLineDimension(point, foot, distance(point, foot), orientation, line)


apply_debug_logging(globals(), logger=logger)
