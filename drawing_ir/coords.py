"""Mapping between screen (pointer) coordinates and SVG user space."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .model import Point

logger = logging.getLogger(__name__)

_MAX_CONDITION = 1e12


@dataclass(frozen=True)
class ScreenTransform:
    """Affine screen transform in SVG ``matrix(a b c d e f)`` order.

    ``screen_x = a*x + c*y + e`` and ``screen_y = b*x + d*y + f``.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "ScreenTransform":
        return cls()

    @classmethod
    def from_pan_zoom(cls, zoom: float, pan_x: float = 0.0, pan_y: float = 0.0) -> "ScreenTransform":
        return cls(zoom, 0.0, 0.0, zoom, pan_x, pan_y)

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "ScreenTransform":
        m = np.asarray(matrix, dtype=float)
        return cls(m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])

    def as_matrix(self) -> np.ndarray:
        return np.array(
            [[self.a, self.c, self.e], [self.b, self.d, self.f], [0.0, 0.0, 1.0]],
            dtype=float,
        )

    def compose(self, other: "ScreenTransform") -> "ScreenTransform":
        """Transform that applies ``other`` first, then ``self``."""
        return ScreenTransform.from_matrix(self.as_matrix() @ other.as_matrix())

    def apply(self, x: float, y: float) -> Point:
        return self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f

    def is_invertible(self) -> bool:
        m = self.as_matrix()
        if not np.all(np.isfinite(m)):
            return False
        with np.errstate(divide='ignore', invalid='ignore'):
            condition = float(np.linalg.cond(m[:2, :2]))
        return math.isfinite(condition) and condition < _MAX_CONDITION

    def inverse(self) -> Optional["ScreenTransform"]:
        if not self.is_invertible():
            return None
        try:
            inv = np.linalg.inv(self.as_matrix())
        except np.linalg.LinAlgError:
            return None
        if not np.all(np.isfinite(inv)):
            return None
        return ScreenTransform.from_matrix(inv)


def screen_to_svg(screen_x: float, screen_y: float, transform: ScreenTransform) -> Optional[Point]:
    inverse = transform.inverse()
    if inverse is None:
        logger.warning("Screen transform %s is not invertible; cannot map pointer", transform)
        return None
    x, y = inverse.apply(screen_x, screen_y)
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return float(x), float(y)


def screen_delta_to_svg(dx: float, dy: float, transform: ScreenTransform) -> Optional[Point]:
    """Map a pointer movement to SVG space, ignoring the translation part."""
    inverse = transform.inverse()
    if inverse is None:
        logger.warning("Screen transform %s is not invertible; cannot map drag delta", transform)
        return None
    return float(inverse.a * dx + inverse.c * dy), float(inverse.b * dx + inverse.d * dy)
