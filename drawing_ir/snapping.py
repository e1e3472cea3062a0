"""Snap candidate collection and nearest-candidate lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .circles import arc_segment_center
from .config import get_engine_config
from .geometry import _midpoint2, distances_to, points_close
from .model import Circle, PathRecord, Point, SegmentGeometry, SnapKind, SnapPoint

if TYPE_CHECKING:  # pragma: no cover
    from .measurements import Measurement

logger = logging.getLogger(__name__)


def record_center(record: PathRecord) -> Optional[Point]:
    if isinstance(record.geometry, Circle):
        return record.geometry.center
    if record.type == 'arc':
        return arc_segment_center(record.data)
    return None


def collect_snap_points(
    records: Iterable[PathRecord],
    view_instance_id: str,
    measurements: Optional[Iterable["Measurement"]] = None,
) -> List[SnapPoint]:
    """Enumerate snap candidates in a stable order: records first, then measurements."""
    records = list(records)
    candidates: List[SnapPoint] = []
    for record in records:
        geometry = record.geometry
        if record.type == 'line' and isinstance(geometry, SegmentGeometry):
            start, end = geometry.endpoints
            candidates.append(SnapPoint(SnapKind.ENDPOINT, start, view_instance_id))
            candidates.append(SnapPoint(SnapKind.ENDPOINT, end, view_instance_id))
            candidates.append(SnapPoint(SnapKind.MIDPOINT, _midpoint2(start, end), view_instance_id))
            continue
        center = record_center(record)
        if center is not None:
            candidates.append(SnapPoint(SnapKind.CENTER, center, view_instance_id))

    if measurements:
        by_id: Mapping[str, PathRecord] = {record.id: record for record in records}
        centers = [c.coordinates for c in candidates if c.kind == SnapKind.CENTER]
        for measurement in measurements:
            if measurement.kind.value not in ('circle', 'radius'):
                continue
            if measurement.view_instance_id != view_instance_id:
                continue
            record = by_id.get(measurement.path_ids[0]) if measurement.path_ids else None
            center = record_center(record) if record is not None else None
            if center is None or any(points_close(center, seen) for seen in centers):
                continue
            centers.append(center)
            candidates.append(SnapPoint(SnapKind.CENTER, center, view_instance_id))
    return candidates


def effective_threshold(threshold_base: float, zoom_level: float) -> Optional[float]:
    if zoom_level <= 0:
        logger.warning("Zoom level must be positive, got %s", zoom_level)
        return None
    return threshold_base / zoom_level


def find_nearest_snap_point(
    pointer: Point,
    candidates: Sequence[SnapPoint],
    threshold_base: Optional[float] = None,
    zoom_level: float = 1.0,
) -> Optional[SnapPoint]:
    """Closest candidate strictly inside ``threshold_base / zoom_level``.

    Ties resolve to the earliest candidate in ``candidates``.
    """
    if threshold_base is None:
        threshold_base = get_engine_config().snap_threshold
    threshold = effective_threshold(threshold_base, zoom_level)
    if threshold is None or not candidates:
        return None
    dists = distances_to(pointer, [c.coordinates for c in candidates])
    best = int(np.argmin(dists))
    if dists[best] < threshold:
        return candidates[best]
    return None


def find_endpoint_near(
    pointer: Point,
    lines: Iterable[Tuple[str, Point, Point]],
    zoom_level: float = 1.0,
    threshold_base: Optional[float] = None,
) -> Optional[Tuple[str, str, Point]]:
    """Return ``(line_id, 'start' | 'end', point)`` for the first grabbable endpoint."""
    if threshold_base is None:
        threshold_base = get_engine_config().endpoint_grab_threshold
    threshold = effective_threshold(threshold_base, zoom_level)
    if threshold is None:
        return None
    for line_id, start, end in lines:
        ends = distances_to(pointer, [start, end])
        if ends[0] <= threshold:
            return line_id, 'start', start
        if ends[1] <= threshold:
            return line_id, 'end', end
    return None
