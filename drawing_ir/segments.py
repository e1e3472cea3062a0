"""Decomposition of path command streams into atomic segments."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .geometry import TOLERANCE, distance, points_close
from .logging_utils import apply_debug_logging
from .model import PathCommand, Point, Segment
from .parser import parse_path_data
from .printer import serialize_path_data

logger = logging.getLogger(__name__)

_CURVE_TYPES = {'C': 'curve', 'S': 'curve', 'Q': 'curve', 'T': 'curve', 'A': 'arc'}


def line_segment(start: Point, end: Point) -> Segment:
    data = serialize_path_data([PathCommand('M', [start[0], start[1]]), PathCommand('L', [end[0], end[1]])])
    return Segment('line', data, (start, end), distance(start, end))


def _curve_segment(letter: str, params: Sequence[float], start: Point, end: Point) -> Segment:
    data = serialize_path_data([PathCommand('M', [start[0], start[1]]), PathCommand(letter, list(params))])
    return Segment(_CURVE_TYPES[letter.upper()], data, (start, end), distance(start, end))


def _tuple_endpoint(letter: str, params: Sequence[float], current: Point) -> Point:
    x, y = float(params[-2]), float(params[-1])
    if letter.islower():
        return current[0] + x, current[1] + y
    return x, y


def decompose_commands(commands: Sequence[PathCommand]) -> List[Segment]:
    segments: List[Segment] = []
    current: Point = (0.0, 0.0)
    start: Point = (0.0, 0.0)

    def emit_line(a: Point, b: Point) -> None:
        if points_close(a, b, TOLERANCE):
            return
        segments.append(line_segment(a, b))

    for cmd in commands:
        letter = cmd.command
        upper = letter.upper()
        relative = letter.islower()
        if upper == 'Z':
            if not points_close(current, start, TOLERANCE):
                segments.append(line_segment(current, start))
            current = start
            continue
        for idx, params in enumerate(cmd.tuples()):
            if upper == 'M':
                target = _tuple_endpoint(letter, params, current)
                if idx == 0:
                    current = start = target
                else:
                    emit_line(current, target)
                    current = target
            elif upper == 'L':
                target = _tuple_endpoint(letter, params, current)
                emit_line(current, target)
                current = target
            elif upper == 'H':
                x = current[0] + params[0] if relative else float(params[0])
                target = (x, current[1])
                emit_line(current, target)
                current = target
            elif upper == 'V':
                y = current[1] + params[0] if relative else float(params[0])
                target = (current[0], y)
                emit_line(current, target)
                current = target
            elif upper in _CURVE_TYPES:
                target = _tuple_endpoint(letter, params, current)
                segments.append(_curve_segment(letter, params, current, target))
                current = target
            else:  # pragma: no cover - parser only yields known letters
                logger.warning("Unsupported path command '%s'", letter)
    return segments


def decompose_path(d: str) -> List[Segment]:
    return decompose_commands(parse_path_data(d))


apply_debug_logging(globals(), logger=logger)
