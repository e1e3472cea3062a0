import logging
import math
from typing import List

from .lexer import split_numbers, tokenize_path
from .model import PathCommand, PathDataError, arity

logger = logging.getLogger(__name__)


def parse_operands(span: str) -> List[float]:
    numbers, leftover = split_numbers(span)
    if leftover:
        raise PathDataError(f'non-numeric operand text {leftover!r} in {span.strip()!r}')
    values = [float(tok) for tok in numbers]
    for value in values:
        if not math.isfinite(value):
            raise PathDataError(f'non-finite operand in {span.strip()!r}')
    return values


def parse_path_data(d: str) -> List[PathCommand]:
    if not isinstance(d, str):
        logger.warning("Expected path data string, got %s", type(d).__name__)
        return []
    commands: List[PathCommand] = []
    for letter, span, offset in tokenize_path(d):
        try:
            values = parse_operands(span)
        except PathDataError as exc:
            logger.warning("Skipping '%s' command at offset %d: %s", letter, offset, exc)
            continue
        size = arity(letter)
        if size == 0:
            if values:
                logger.warning("Ignoring %d operand(s) after '%s' at offset %d", len(values), letter, offset)
            commands.append(PathCommand(letter, []))
            continue
        extra = len(values) % size
        if extra:
            logger.warning(
                "Dropping %d trailing operand(s) of '%s' at offset %d (arity %d)",
                extra,
                letter,
                offset,
                size,
            )
            values = values[:len(values) - extra]
        if not values:
            logger.warning("Skipping '%s' command at offset %d: no complete operand tuple", letter, offset)
            continue
        commands.append(PathCommand(letter, values))
    return commands
