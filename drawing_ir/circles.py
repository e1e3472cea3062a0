"""Detection of full circles encoded as chains of SVG arcs."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .geometry import TOLERANCE, points_close
from .logging_utils import apply_debug_logging
from .model import Circle, PathCommand, Point
from .parser import parse_path_data

logger = logging.getLogger(__name__)


def arc_center(
    start: Point,
    rx: float,
    ry: float,
    phi_deg: float,
    large_arc: float,
    sweep: float,
    end: Point,
) -> Optional[Tuple[Point, float, float]]:
    """Convert an SVG endpoint-parameterised arc to its center form.

    Returns ``(center, rx, ry)`` with the radii scaled up when they are too
    small to span the endpoints, or ``None`` for a degenerate arc.
    """
    rx = abs(rx)
    ry = abs(ry)
    if rx < TOLERANCE or ry < TOLERANCE or points_close(start, end):
        return None

    phi = math.radians(phi_deg)
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)
    x1, y1 = start
    x2, y2 = end

    dx2 = (x1 - x2) / 2.0
    dy2 = (y1 - y2) / 2.0
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    radii_check = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if radii_check > 1.0:
        factor = math.sqrt(radii_check)
        rx *= factor
        ry *= factor

    num = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    den = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    sq = max(0.0, num / den) if den > 0 else 0.0
    sign = -1.0 if bool(large_arc) == bool(sweep) else 1.0
    coef = sign * math.sqrt(sq)
    cxp = coef * (rx * y1p / ry)
    cyp = coef * -(ry * x1p / rx)

    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2.0
    return (cx, cy), rx, ry


def _advance(cmd: PathCommand, params: Sequence[float], current: Point) -> Point:
    upper = cmd.command.upper()
    relative = cmd.command.islower()
    if upper == 'H':
        return (current[0] + params[0] if relative else float(params[0])), current[1]
    if upper == 'V':
        return current[0], (current[1] + params[0] if relative else float(params[0]))
    x, y = float(params[-2]), float(params[-1])
    if relative:
        return current[0] + x, current[1] + y
    return x, y


def _walk_arcs(commands: Sequence[PathCommand]) -> Tuple[Optional[Point], Point, List[Tuple[Point, List[float]]]]:
    """Return the first ``M`` point, the final pen position and each arc with its start."""
    first: Optional[Point] = None
    current: Point = (0.0, 0.0)
    arcs: List[Tuple[Point, List[float]]] = []
    for cmd in commands:
        if cmd.command.upper() == 'Z':
            # a closing Z is a straight line, not part of the arc chain
            continue
        for params in cmd.tuples():
            target = _advance(cmd, params, current)
            if cmd.command.upper() == 'A':
                arc = list(params)
                arc[5], arc[6] = target
                arcs.append((current, arc))
            if first is None and cmd.command.upper() == 'M':
                first = target
            current = target
    return first, current, arcs


def detect_circle(d: str) -> Optional[Circle]:
    """Return the circle drawn by ``d`` or ``None`` when it is not a full circle."""
    commands = parse_path_data(d)
    start, final, arcs = _walk_arcs(commands)
    if start is None or not arcs:
        return None

    first_rx = abs(arcs[0][1][0])
    first_ry = abs(arcs[0][1][1])
    scale = max(first_rx, first_ry)
    if first_rx < TOLERANCE or abs(first_rx - first_ry) > TOLERANCE * scale:
        return None
    for _, arc in arcs[1:]:
        if abs(abs(arc[0]) - first_rx) > TOLERANCE * scale or abs(abs(arc[1]) - first_ry) > TOLERANCE * scale:
            return None

    if len(arcs) < 2 or not points_close(final, start):
        return None

    arc_start, arc = arcs[0]
    resolved = arc_center(arc_start, arc[0], arc[1], arc[2], arc[3], arc[4], (arc[5], arc[6]))
    if resolved is None:
        return None
    center, radius, _ = resolved
    logger.debug("Detected circle at (%.4f, %.4f) r=%.4f", center[0], center[1], radius)
    return Circle(center, radius)


def arc_segment_center(path_data: str) -> Optional[Point]:
    """Center of the first arc in a segment path such as ``M x y A ...``."""
    _, _, arcs = _walk_arcs(parse_path_data(path_data))
    if not arcs:
        return None
    arc_start, arc = arcs[0]
    resolved = arc_center(arc_start, arc[0], arc[1], arc[2], arc[3], arc[4], (arc[5], arc[6]))
    return resolved[0] if resolved is not None else None


apply_debug_logging(globals(), logger=logger)
