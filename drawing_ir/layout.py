"""Arrangement of orthographic views into one combined drawing space."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .config import get_engine_config
from .logging_utils import apply_debug_logging
from .model import PathRecord, Point, ViewBox, ViewPlacement
from .normalize import normalize_paths
from .viewbox import bounding_view_box, combine_view_boxes, normalized_view_box, parse_view_box

logger = logging.getLogger(__name__)

ViewBoxLike = Union[str, ViewBox, None]


class LayoutMode(str, Enum):
    STANDARD = 'standard'
    PART = 'part'


DEFAULT_VIEWS: Dict[LayoutMode, Tuple[str, str, str]] = {
    LayoutMode.STANDARD: ('front', 'top', 'right'),
    LayoutMode.PART: ('front', 'bottom', 'left'),
}


@dataclass
class Layout:
    placements: List[ViewPlacement] = field(default_factory=list)
    view_box: Optional[ViewBox] = None

    @property
    def view_box_string(self) -> Optional[str]:
        return str(self.view_box) if self.view_box is not None else None

    def placement(self, view_name: str) -> Optional[ViewPlacement]:
        for placement in self.placements:
            if placement.view_name == view_name:
                return placement
        return None


@dataclass
class ViewInput:
    visible_paths: List[Any] = field(default_factory=list)
    hidden_paths: List[Any] = field(default_factory=list)
    view_box: ViewBoxLike = None
    hidden_view_box: ViewBoxLike = None

    @property
    def combined_view_box(self) -> Optional[ViewBox]:
        return combine_view_boxes(self.view_box, self.hidden_view_box)


@dataclass
class Drawing:
    view_box: Optional[ViewBox]
    placements: List[ViewPlacement]
    paths: List[PathRecord]

    def records_by_id(self) -> Dict[str, PathRecord]:
        return {record.id: record for record in self.paths}


def _usable_boxes(view_boxes: Mapping[str, ViewBoxLike], names: Sequence[str]) -> Dict[str, ViewBox]:
    boxes: Dict[str, ViewBox] = {}
    for name in names:
        raw = view_boxes.get(name)
        if raw is None:
            logger.debug("View %s has no viewBox; skipping", name)
            continue
        vb = parse_view_box(raw)
        if vb is None or vb.is_degenerate:
            logger.warning("View %s has an unusable viewBox %r; skipping", name, raw)
            continue
        boxes[name] = vb
    return boxes


def compute_layout(
    view_boxes: Mapping[str, ViewBoxLike],
    mode: LayoutMode = LayoutMode.STANDARD,
    *,
    views: Optional[Sequence[str]] = None,
    gap: Optional[float] = None,
    normalize: bool = True,
) -> Layout:
    """Place the primary, secondary and tertiary views of a three-view drawing.

    The secondary view is centered under the primary view and the tertiary view
    is vertically centered to its right, both ``gap`` away. ``STANDARD`` keeps
    the first placed view at its own origin; ``PART`` moves it to ``(0, 0)``.
    Each placement's ``translate`` is the offset to add to that view's own
    coordinates.
    """
    cfg = get_engine_config()
    primary, secondary, tertiary = tuple(views) if views is not None else DEFAULT_VIEWS[mode]
    if gap is None:
        gap = cfg.standard_gap if mode == LayoutMode.STANDARD else cfg.part_gap
    if gap < 0:
        raise ValueError(f"view gap must be non-negative, got {gap}")

    boxes = _usable_boxes(view_boxes, (primary, secondary, tertiary))
    if not boxes:
        logger.warning("No usable views for %s layout", mode.value)
        return Layout()

    if normalize:
        max_width = max(vb.width for vb in boxes.values())
        max_height = max(vb.height for vb in boxes.values())
        boxes = {
            name: normalized_view_box(vb, max_width, max_height, cfg.margin_factor, cfg.default_extent)
            for name, vb in boxes.items()
        }

    first = next(name for name in (primary, secondary, tertiary) if name in boxes)
    anchor: Point = (boxes[first].x, boxes[first].y) if mode == LayoutMode.STANDARD else (0.0, 0.0)

    positions: Dict[str, Point] = {}
    if primary in boxes:
        positions[primary] = anchor
    if secondary in boxes:
        if primary in boxes:
            p, pv = positions[primary], boxes[primary]
            sv = boxes[secondary]
            positions[secondary] = (p[0] + (pv.width - sv.width) / 2.0, p[1] + pv.height + gap)
        else:
            positions[secondary] = anchor
    if tertiary in boxes:
        tv = boxes[tertiary]
        if primary in boxes:
            p, pv = positions[primary], boxes[primary]
            positions[tertiary] = (p[0] + pv.width + gap, p[1] + (pv.height - tv.height) / 2.0)
        elif secondary in boxes:
            s, sv = positions[secondary], boxes[secondary]
            positions[tertiary] = (s[0] + sv.width + gap, s[1])
        else:
            positions[tertiary] = anchor

    placements = []
    for name in (primary, secondary, tertiary):
        if name not in positions:
            continue
        vb = boxes[name]
        pos = positions[name]
        placements.append(ViewPlacement(name, (pos[0] - vb.x, pos[1] - vb.y), vb))

    combined = bounding_view_box(placement.placed_view_box for placement in placements)
    logger.info(
        "Laid out %d view(s) in %s mode; combined viewBox %s",
        len(placements),
        mode.value,
        combined,
    )
    return Layout(placements, combined)


def build_drawing(
    views: Mapping[str, ViewInput],
    mode: LayoutMode = LayoutMode.STANDARD,
    *,
    id_prefix: Optional[str] = None,
    view_names: Optional[Sequence[str]] = None,
    gap: Optional[float] = None,
    normalize: bool = True,
) -> Drawing:
    """Lay out the views and normalize their paths into the combined space."""
    prefix = id_prefix or mode.value
    view_boxes = {name: view.combined_view_box for name, view in views.items()}
    layout = compute_layout(view_boxes, mode, views=view_names, gap=gap, normalize=normalize)

    records: List[PathRecord] = []
    for placement in layout.placements:
        view = views[placement.view_name]
        tx, ty = placement.translate
        base = f'{prefix}_{placement.view_name}'
        records.extend(normalize_paths(view.visible_paths, f'{base}_visible', tx, ty, view=placement.view_name))
        records.extend(normalize_paths(view.hidden_paths, f'{base}_hidden', tx, ty, view=placement.view_name))
    return Drawing(layout.view_box, layout.placements, records)


def part_prefix(part_name: str) -> str:
    return re.sub(r'\s+', '_', part_name.strip())


def build_part_drawings(
    parts: Mapping[str, Mapping[str, ViewInput]],
    *,
    gap: Optional[float] = None,
    normalize: bool = True,
) -> Dict[str, Drawing]:
    drawings: Dict[str, Drawing] = {}
    for name, views in parts.items():
        drawing = build_drawing(views, LayoutMode.PART, id_prefix=part_prefix(name), gap=gap, normalize=normalize)
        if not drawing.placements:
            logger.warning("Part %s has no usable views; skipping", name)
            continue
        drawings[name] = drawing
    return drawings


apply_debug_logging(globals(), logger=logger)
