"""Shared vector and tolerance helpers."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .model import Point

TOLERANCE = 1e-6


def _vec2(a: Point, b: Point) -> Tuple[float, float]:
    return b[0] - a[0], b[1] - a[1]


def _dot2(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return a[0] * b[0] + a[1] * b[1]


def _cross2(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return a[0] * b[1] - a[1] * b[0]


def _norm2(v: Tuple[float, float]) -> float:
    return math.hypot(v[0], v[1])


def _midpoint2(a: Point, b: Point) -> Point:
    return (a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5


def _rotate90(v: Tuple[float, float]) -> Tuple[float, float]:
    return -v[1], v[0]


def _add_scaled(p: Point, v: Tuple[float, float], scale: float) -> Point:
    return p[0] + v[0] * scale, p[1] + v[1] * scale


def distance(a: Point, b: Point) -> float:
    return _norm2(_vec2(a, b))


def unit_vector(a: Point, b: Point) -> Optional[Tuple[float, float]]:
    dx, dy = _vec2(a, b)
    length = math.hypot(dx, dy)
    if length < TOLERANCE:
        return None
    return dx / length, dy / length


def points_close(a: Point, b: Point, tol: float = TOLERANCE) -> bool:
    return distance(a, b) < tol


def are_collinear(p1: Point, p2: Point, p3: Point, tol: float = TOLERANCE) -> bool:
    """Return True when ``p3`` lies on the line through ``p1`` and ``p2``."""
    if abs(p1[0] - p2[0]) < tol and abs(p2[0] - p3[0]) < tol:
        return True
    if abs(p1[1] - p2[1]) < tol and abs(p2[1] - p3[1]) < tol:
        return True
    area = abs(_cross2(_vec2(p1, p2), _vec2(p1, p3)))
    base_sq = _dot2(_vec2(p1, p3), _vec2(p1, p3))
    if base_sq < tol * tol:
        return True
    return area / math.sqrt(base_sq) < tol


def distances_to(point: Point, points: Sequence[Point]) -> np.ndarray:
    """Euclidean distances from ``point`` to each entry of ``points``."""
    if not points:
        return np.zeros(0, dtype=float)
    arr = np.asarray(points, dtype=float).reshape(-1, 2)
    origin = np.asarray(point, dtype=float)
    return np.linalg.norm(arr - origin, axis=1)
