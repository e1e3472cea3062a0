"""Parsing and arithmetic for SVG viewBox rectangles."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Optional, Union

from .model import ViewBox

logger = logging.getLogger(__name__)

_split_re = re.compile(r'[\s,]+')


def parse_view_box(text: Union[str, ViewBox, None]) -> Optional[ViewBox]:
    if isinstance(text, ViewBox):
        return text
    if not isinstance(text, str) or not text.strip():
        if text is not None:
            logger.warning("Invalid viewBox value: %r", text)
        return None
    parts = _split_re.split(text.strip())
    if len(parts) != 4:
        logger.warning("Invalid viewBox string %r: expected 4 numbers, got %d", text, len(parts))
        return None
    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError:
        logger.warning("Invalid viewBox string %r: non-numeric component", text)
        return None
    if not all(math.isfinite(v) for v in (x, y, width, height)):
        logger.warning("Invalid viewBox string %r: non-finite component", text)
        return None
    return ViewBox(x, y, max(0.0, width), max(0.0, height))


def format_view_box(vb: ViewBox) -> str:
    return str(vb)


def bounding_view_box(boxes: Iterable[Optional[ViewBox]]) -> Optional[ViewBox]:
    present = [vb for vb in boxes if vb is not None]
    if not present:
        return None
    min_x = min(vb.x for vb in present)
    min_y = min(vb.y for vb in present)
    max_x = max(vb.right for vb in present)
    max_y = max(vb.bottom for vb in present)
    return ViewBox(min_x, min_y, max_x - min_x, max_y - min_y)


def combine_view_boxes(
    a: Union[str, ViewBox, None], b: Union[str, ViewBox, None]
) -> Optional[ViewBox]:
    """Smallest view box enclosing both inputs; either may be missing."""
    return bounding_view_box([parse_view_box(a), parse_view_box(b)])


def normalized_view_box(
    vb: ViewBox,
    max_width: float,
    max_height: float,
    margin_factor: float = 1.3,
    default_extent: float = 100.0,
) -> ViewBox:
    """Center-preserving box sized to the largest view of a set, plus margin."""
    if margin_factor <= 0:
        raise ValueError(f"margin factor must be positive, got {margin_factor}")
    base_width = max_width if max_width > 0 else default_extent
    base_height = max_height if max_height > 0 else default_extent
    width = base_width * margin_factor
    height = base_height * margin_factor
    cx = vb.x + vb.width / 2.0
    cy = vb.y + vb.height / 2.0
    return ViewBox(cx - width / 2.0, cy - height / 2.0, width, height)
