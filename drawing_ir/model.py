"""Core data structures shared by the drawing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

Point = Tuple[float, float]

ARITY: Dict[str, int] = {
    'M': 2,
    'L': 2,
    'T': 2,
    'H': 1,
    'V': 1,
    'C': 6,
    'S': 4,
    'Q': 4,
    'A': 7,
    'Z': 0,
}


def arity(command: str) -> int:
    return ARITY[command.upper()]


class DrawingError(Exception):
    """Base class for drawing engine errors."""


class PathDataError(DrawingError, ValueError):
    """Raised when a path command span cannot be parsed."""


class MeasurementError(DrawingError, ValueError):
    """Raised when a measurement cannot be built from the given geometry."""


@dataclass
class PathCommand:
    command: str
    values: List[float] = field(default_factory=list)

    @property
    def is_absolute(self) -> bool:
        return self.command.isupper()

    def tuples(self) -> List[List[float]]:
        """Split ``values`` into operand tuples of the command's arity."""
        size = arity(self.command)
        if size == 0:
            return []
        return [self.values[i:i + size] for i in range(0, len(self.values), size)]


@dataclass
class Segment:
    type: str  # 'line', 'curve', 'arc'
    path_data: str
    endpoints: Tuple[Point, Point]
    length: float


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    @property
    def diameter(self) -> float:
        return 2.0 * self.radius


@dataclass(frozen=True)
class SegmentGeometry:
    type: str
    endpoints: Tuple[Point, Point]
    length: Optional[float] = None


@dataclass(frozen=True)
class PathRecord:
    id: str
    group_id: str
    data: str
    type: str  # 'line', 'circle', 'curve', 'arc', 'unknown'
    geometry: Optional[Union[SegmentGeometry, Circle]] = None
    view: Optional[str] = None


@dataclass(frozen=True)
class ViewBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 1e-6 or self.height <= 1e-6

    def contains(self, other: "ViewBox", tol: float = 1e-9) -> bool:
        return (
            other.x >= self.x - tol
            and other.y >= self.y - tol
            and other.right <= self.right + tol
            and other.bottom <= self.bottom + tol
        )

    def translated(self, tx: float, ty: float) -> "ViewBox":
        return ViewBox(self.x + tx, self.y + ty, self.width, self.height)

    def __str__(self) -> str:
        return ' '.join(_format_coord(v) for v in (self.x, self.y, self.width, self.height))


def _format_coord(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass
class ViewPlacement:
    view_name: str
    translate: Tuple[float, float]
    view_box: ViewBox

    @property
    def placed_view_box(self) -> ViewBox:
        """The view box moved into the combined layout space."""
        return self.view_box.translated(*self.translate)


class SnapKind(str, Enum):
    ENDPOINT = 'endpoint'
    MIDPOINT = 'midpoint'
    CENTER = 'center'


@dataclass(frozen=True)
class SnapPoint:
    kind: SnapKind
    coordinates: Point
    view_instance_id: str
