"""Interactive session state driven by discrete input events.

The geometry engine is stateless; everything a user builds up while working
on a drawing (measurements, custom lines, free text, the current interaction
mode and any half-finished two-click sequence) lives on a
:class:`DrawingSession`.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .config import get_engine_config
from .geometry import _vec2, distance, points_close
from .measurements import (
    Measurement,
    MeasurementGeometry,
    create_circle_measurement,
    create_line_measurement,
    create_point_to_line_measurement,
    measurement_geometry,
    view_id_from_path_id,
)
from .model import MeasurementError, PathRecord, Point, SnapPoint
from .snapping import collect_snap_points, find_endpoint_near, find_nearest_snap_point

logger = logging.getLogger(__name__)


class SnapSubtype(str, Enum):
    POINT_TO_POINT = 'point-to-point'
    POINT_TO_LINE = 'point-to-line'


@dataclass(frozen=True)
class Measuring:
    pass


@dataclass(frozen=True)
class Snapping:
    subtype: SnapSubtype = SnapSubtype.POINT_TO_POINT
    first_point: Optional[SnapPoint] = None


@dataclass(frozen=True)
class DrawingCustomLine:
    first_point: Optional[Point] = None
    view_instance_id: Optional[str] = None


@dataclass(frozen=True)
class PlacingText:
    pass


@dataclass(frozen=True)
class DeletingLine:
    pass


InteractionMode = Union[Measuring, Snapping, DrawingCustomLine, PlacingText, DeletingLine]


@dataclass
class CustomLine:
    id: str
    start: Point
    end: Point
    view_instance_id: str

    @property
    def length(self) -> float:
        return distance(self.start, self.end)


@dataclass
class UserText:
    id: str
    text: str
    position: Point
    view_instance_id: str


@dataclass
class _Drag:
    kind: str  # 'measurement', 'text' or 'endpoint'
    target_id: str
    pointer_origin: Point
    item_origin: Point
    end: Optional[str] = None  # 'start' or 'end' for endpoint drags


def _offset(origin: Point, pointer_origin: Point, pointer: Point) -> Point:
    dx, dy = _vec2(pointer_origin, pointer)
    return origin[0] + dx, origin[1] + dy


@dataclass
class DrawingSession:
    records: Dict[str, PathRecord] = field(default_factory=dict)
    mode: InteractionMode = field(default_factory=Measuring)
    zoom_level: float = 1.0
    measurements: Dict[str, Measurement] = field(default_factory=dict)
    custom_lines: Dict[str, CustomLine] = field(default_factory=dict)
    user_texts: Dict[str, UserText] = field(default_factory=dict)
    _drag: Optional[_Drag] = field(default=None, repr=False)
    _ids: "itertools.count[int]" = field(default_factory=lambda: itertools.count(1), repr=False)
    _view_ids: Dict[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._index_views()

    @classmethod
    def from_records(cls, records: Iterable[PathRecord]) -> "DrawingSession":
        session = cls()
        session.records_changed(records)
        return session

    def _next_id(self, prefix: str) -> str:
        return f'{prefix}_{next(self._ids)}'

    # -- state updates -------------------------------------------------

    def records_changed(self, records: Iterable[PathRecord]) -> None:
        """Replace the path records after a new normalization pass."""
        self.records = {record.id: record for record in records}
        self._index_views()
        orphaned = [
            m.id for m in self.measurements.values() if any(pid not in self.records for pid in m.path_ids)
        ]
        if orphaned:
            logger.info("%d measurement(s) reference paths that no longer exist: %s", len(orphaned), orphaned)

    def _index_views(self) -> None:
        # view_id_from_path_id warns on ids it cannot split; resolve each id once
        self._view_ids = {path_id: view_id_from_path_id(path_id) for path_id in self.records}

    def set_mode(self, mode: InteractionMode) -> None:
        self._drag = None
        self.mode = mode
        logger.debug("Interaction mode set to %s", mode)

    def set_zoom(self, zoom_level: float) -> float:
        cfg = get_engine_config()
        self.zoom_level = min(max(zoom_level, cfg.min_zoom), cfg.max_zoom)
        return self.zoom_level

    def escape(self) -> None:
        """Abort whatever is in progress; with nothing pending, go back to measuring."""
        if self._drag is not None:
            self.cancel_drag()
            return
        mode = self.mode
        if isinstance(mode, Snapping) and mode.first_point is not None:
            self.mode = replace(mode, first_point=None)
        elif isinstance(mode, DrawingCustomLine) and mode.first_point is not None:
            self.mode = DrawingCustomLine()
        else:
            self.mode = Measuring()

    # -- pointer events ------------------------------------------------

    def snap(self, pointer: Point, view_instance_id: str) -> Optional[SnapPoint]:
        in_view = [r for r in self.records.values() if self._view_ids.get(r.id) == view_instance_id]
        candidates = collect_snap_points(in_view, view_instance_id, self.measurements.values())
        return find_nearest_snap_point(pointer, candidates, zoom_level=self.zoom_level)

    def click_path(self, path_id: str) -> Optional[Measurement]:
        """Handle a click on a drawn path; returns the measurement it created, if any."""
        record = self.records.get(path_id)
        mode = self.mode
        if isinstance(mode, DeletingLine):
            if path_id in self.custom_lines:
                del self.custom_lines[path_id]
                self._drop_drag('endpoint', path_id)
                logger.info("Deleted custom line %s", path_id)
            return None
        if record is None:
            logger.warning("Click on unknown path %s", path_id)
            return None
        if isinstance(mode, Measuring):
            return self._toggle_measurement(record)
        if isinstance(mode, Snapping) and mode.subtype == SnapSubtype.POINT_TO_LINE and mode.first_point is not None:
            try:
                measurement = create_point_to_line_measurement(
                    self._next_id('snap'),
                    mode.first_point.coordinates,
                    record,
                    mode.first_point.view_instance_id,
                )
            except MeasurementError as exc:
                logger.info("No point-to-line measurement created: %s", exc)
                return None
            self.measurements[measurement.id] = measurement
            self.mode = replace(mode, first_point=None)
            return measurement
        return None

    def _toggle_measurement(self, record: PathRecord) -> Optional[Measurement]:
        if record.id in self.measurements:
            del self.measurements[record.id]
            self._drop_drag('measurement', record.id)
            logger.info("Removed measurement %s", record.id)
            return None
        if record.type == 'line':
            measurement = create_line_measurement(record)
        elif record.type == 'circle':
            measurement = create_circle_measurement(record)
        else:
            logger.info("Path %s of type %s cannot be measured", record.id, record.type)
            return None
        self.measurements[measurement.id] = measurement
        logger.info("Added %s measurement %s", measurement.kind.value, measurement.id)
        return measurement

    def click_point(self, pointer: Point, view_instance_id: str) -> Optional[SnapPoint]:
        """Handle a click on empty canvas at ``pointer`` (SVG space).

        Returns the snap point used, if the click snapped to one.
        """
        mode = self.mode
        if isinstance(mode, Snapping):
            snapped = self.snap(pointer, view_instance_id)
            if snapped is None:
                logger.debug("Click at %s did not hit a snap point", pointer)
                return None
            if mode.first_point is None or mode.subtype == SnapSubtype.POINT_TO_LINE:
                self.mode = replace(mode, first_point=snapped)
            elif not points_close(mode.first_point.coordinates, snapped.coordinates):
                self._add_custom_line(mode.first_point.coordinates, snapped.coordinates, view_instance_id)
                self.mode = replace(mode, first_point=None)
            return snapped
        if isinstance(mode, DrawingCustomLine):
            snapped = self.snap(pointer, view_instance_id)
            point = snapped.coordinates if snapped is not None else pointer
            if mode.first_point is None or mode.view_instance_id != view_instance_id:
                self.mode = DrawingCustomLine(point, view_instance_id)
            elif not points_close(mode.first_point, point):
                self._add_custom_line(mode.first_point, point, view_instance_id)
                self.mode = DrawingCustomLine()
            return snapped
        if isinstance(mode, PlacingText):
            self.place_text(pointer, view_instance_id)
        return None

    def _add_custom_line(self, start: Point, end: Point, view_instance_id: str) -> CustomLine:
        line = CustomLine(self._next_id('customLine'), start, end, view_instance_id)
        self.custom_lines[line.id] = line
        logger.info("Added custom line %s (length %.4f)", line.id, line.length)
        return line

    def place_text(self, position: Point, view_instance_id: str, text: str = 'Text') -> UserText:
        item = UserText(self._next_id('text'), text, position, view_instance_id)
        self.user_texts[item.id] = item
        return item

    # -- drags ---------------------------------------------------------

    def start_drag(self, target_id: str, pointer: Point) -> bool:
        """Begin dragging a measurement label or a user text item."""
        if target_id in self.measurements:
            origin = self.measurements[target_id].text_position
            self._drag = _Drag('measurement', target_id, pointer, origin)
        elif target_id in self.user_texts:
            origin = self.user_texts[target_id].position
            self._drag = _Drag('text', target_id, pointer, origin)
        else:
            logger.warning("Cannot drag unknown item %s", target_id)
            return False
        return True

    def start_endpoint_drag(self, pointer: Point, view_instance_id: str) -> bool:
        lines = [
            (line.id, line.start, line.end)
            for line in self.custom_lines.values()
            if line.view_instance_id == view_instance_id
        ]
        hit = find_endpoint_near(pointer, lines, self.zoom_level)
        if hit is None:
            return False
        line_id, end, origin = hit
        self._drag = _Drag('endpoint', line_id, pointer, origin, end)
        return True

    def move_drag(self, pointer: Point) -> None:
        drag = self._drag
        if drag is None:
            return
        self._set_drag_position(drag, _offset(drag.item_origin, drag.pointer_origin, pointer))
        if drag.kind == 'measurement' and drag.target_id in self.measurements:
            self.measurements[drag.target_id].is_manually_positioned = True

    def end_drag(self) -> None:
        self._drag = None

    def cancel_drag(self) -> None:
        drag = self._drag
        if drag is None:
            return
        self._set_drag_position(drag, drag.item_origin)
        self._drag = None

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def _drop_drag(self, kind: str, target_id: str) -> None:
        drag = self._drag
        if drag is not None and drag.kind == kind and drag.target_id == target_id:
            self._drag = None

    def _set_drag_position(self, drag: _Drag, position: Point) -> None:
        if drag.kind == 'measurement' and drag.target_id in self.measurements:
            self.measurements[drag.target_id].text_position = position
        elif drag.kind == 'text' and drag.target_id in self.user_texts:
            self.user_texts[drag.target_id].position = position
        elif drag.kind == 'endpoint' and drag.target_id in self.custom_lines:
            line = self.custom_lines[drag.target_id]
            if drag.end == 'start':
                line.start = position
            else:
                line.end = position

    # -- edits ---------------------------------------------------------

    def set_override(self, measurement_id: str, value: Optional[str]) -> None:
        measurement = self.measurements.get(measurement_id)
        if measurement is None:
            logger.warning("Cannot override unknown measurement %s", measurement_id)
            return
        measurement.override_value = value if value and value.strip() else None

    def delete_measurement(self, measurement_id: str) -> bool:
        removed = self.measurements.pop(measurement_id, None) is not None
        if removed:
            self._drop_drag('measurement', measurement_id)
        return removed

    def geometry(self, measurement_id: str, scale: float = 1.0) -> Optional[MeasurementGeometry]:
        measurement = self.measurements.get(measurement_id)
        if measurement is None:
            return None
        return measurement_geometry(measurement, self.records, scale=scale)

    def measurements_in_view(self, view_instance_id: str) -> List[Measurement]:
        return [m for m in self.measurements.values() if m.view_instance_id == view_instance_id]
