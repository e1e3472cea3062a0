"""Greedy merging of consecutive collinear line segments."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .geometry import TOLERANCE, are_collinear, points_close
from .logging_utils import apply_debug_logging
from .model import Point, Segment
from .segments import line_segment

logger = logging.getLogger(__name__)


def _merged_endpoints(a: Segment, b: Segment, tol: float) -> Optional[Tuple[Point, Point]]:
    a0, a1 = a.endpoints
    b0, b1 = b.endpoints
    if points_close(a1, b0, tol):
        return a0, b1
    if points_close(a0, b1, tol):
        return b0, a1
    if points_close(a0, b0, tol):
        return a1, b1
    if points_close(a1, b1, tol):
        return a0, b0
    return None


def try_merge(a: Segment, b: Segment, tol: float = TOLERANCE) -> Optional[Segment]:
    """Merge two touching collinear lines, or return ``None``."""
    if a.type != 'line' or b.type != 'line':
        return None
    endpoints = _merged_endpoints(a, b, tol)
    if endpoints is None:
        return None
    a0, a1 = a.endpoints
    if not (are_collinear(a0, a1, b.endpoints[0], tol) and are_collinear(a0, a1, b.endpoints[1], tol)):
        return None
    merged = line_segment(*endpoints)
    # lengths are summed rather than recomputed from the new endpoints
    merged.length = a.length + b.length
    return merged


def merge_collinear_segments(segments: Sequence[Segment], tol: float = TOLERANCE) -> List[Segment]:
    if not segments:
        return []
    merged: List[Segment] = []
    current = segments[0]
    for nxt in segments[1:]:
        combined = try_merge(current, nxt, tol)
        if combined is not None:
            current = combined
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    if len(merged) != len(segments):
        logger.debug("Merged %d segment(s) into %d", len(segments), len(merged))
    return merged


apply_debug_logging(globals(), logger=logger)
