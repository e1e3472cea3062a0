"""Translation of parsed path commands into a shared layout space."""

from __future__ import annotations

from typing import Iterable, List

from .model import PathCommand
from .parser import parse_path_data
from .printer import serialize_path_data

_PAIRED = {'M', 'L', 'T', 'C', 'S', 'Q'}


def _translate_values(command: str, values: List[float], tx: float, ty: float) -> List[float]:
    if command in _PAIRED:
        return [v + (tx if i % 2 == 0 else ty) for i, v in enumerate(values)]
    if command == 'H':
        return [v + tx for v in values]
    if command == 'V':
        return [v + ty for v in values]
    if command == 'A':
        out = list(values)
        for base in range(0, len(out) - 6, 7):
            out[base + 5] += tx
            out[base + 6] += ty
        return out
    return list(values)


def translate_commands(commands: Iterable[PathCommand], tx: float, ty: float) -> List[PathCommand]:
    """Return copies of ``commands`` with absolute coordinates shifted by (tx, ty).

    Relative commands and ``Z`` are copied unchanged: they are anchored to a
    point that has already moved.
    """
    out: List[PathCommand] = []
    for cmd in commands:
        if cmd.is_absolute and cmd.command != 'Z':
            out.append(PathCommand(cmd.command, _translate_values(cmd.command, cmd.values, tx, ty)))
        else:
            out.append(PathCommand(cmd.command, list(cmd.values)))
    return out


def translate_path_data(d: str, tx: float, ty: float) -> str:
    if tx == 0 and ty == 0:
        return d
    return serialize_path_data(translate_commands(parse_path_data(d), tx, ty))
