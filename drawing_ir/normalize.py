"""Normalization of raw projection paths into addressable path records."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .circles import detect_circle
from .merge import merge_collinear_segments
from .model import PathRecord, Segment, SegmentGeometry
from .segments import decompose_path
from .transform import translate_path_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawPath:
    d: str


def coerce_raw_path(value: Any) -> Optional[RawPath]:
    """Convert the shapes a projection kernel hands back into a ``RawPath``.

    Accepted: a plain string, a list/tuple whose first element is a string,
    a mapping with a string ``d`` entry, or an object with a ``d`` attribute.
    """
    if isinstance(value, RawPath):
        return value if value.d.strip() else None
    d: Any = None
    if isinstance(value, str):
        d = value
    elif isinstance(value, (list, tuple)):
        if value and isinstance(value[0], str):
            d = value[0]
    elif isinstance(value, Mapping):
        d = value.get('d')
    else:
        d = getattr(value, 'd', None)
    if not isinstance(d, str) or not d.strip():
        return None
    return RawPath(d.strip())


def _segment_geometry(segment: Segment) -> SegmentGeometry:
    if segment.type == 'line':
        return SegmentGeometry('line', segment.endpoints, segment.length)
    return SegmentGeometry(segment.type, segment.endpoints)


def normalize_paths(
    raw_paths: Iterable[Any],
    id_prefix: str = 'path',
    tx: float = 0.0,
    ty: float = 0.0,
    view: Optional[str] = None,
) -> List[PathRecord]:
    records: List[PathRecord] = []
    index = 0
    for position, raw in enumerate(raw_paths or []):
        raw_path = coerce_raw_path(raw)
        if raw_path is None:
            logger.warning(
                "Skipping path %d with prefix %s: unsupported or empty path format (%s)",
                position,
                id_prefix,
                type(raw).__name__,
            )
            continue

        data = translate_path_data(raw_path.d, tx, ty)
        base_id = f'{id_prefix}_{index}'
        index += 1

        circle = detect_circle(data)
        if circle is not None:
            rid = f'{base_id}_circle'
            records.append(PathRecord(rid, rid, data, 'circle', circle, view))
            continue

        segments = merge_collinear_segments(decompose_path(data))
        if not segments:
            rid = f'{base_id}_unknown'
            logger.warning("Path %s produced no segments; keeping it as an unknown record", base_id)
            records.append(PathRecord(rid, rid, data, 'unknown', None, view))
            continue

        for j, segment in enumerate(segments):
            rid = f'{base_id}_{j}'
            records.append(PathRecord(rid, rid, segment.path_data, segment.type, _segment_geometry(segment), view))

    counts = Counter(record.type for record in records)
    logger.info(
        "Normalized %d path(s) with prefix %s into %d record(s): %s",
        index,
        id_prefix,
        len(records),
        ", ".join(f"{kind}={count}" for kind, count in sorted(counts.items())) or "none",
    )
    return records
