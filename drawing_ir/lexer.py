import logging
import re
from typing import List, Tuple

logger = logging.getLogger(__name__)

Token = Tuple[str, str, int]  # (command, operand span, offset)

_command_re = re.compile(r'([MLHVCSQTAZ])([^MLHVCSQTAZ]*)', re.IGNORECASE)
_num_re = re.compile(r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?')
_separator_re = re.compile(r'[\s,]+')


def tokenize_path(d: str) -> List[Token]:
    tokens: List[Token] = []
    first = _command_re.search(d)
    if first is None:
        if d.strip():
            logger.warning("Path data contains no drawing commands: %r", d[:80])
        return tokens
    if d[:first.start()].strip():
        logger.warning("Ignoring text before the first path command: %r", d[:first.start()])
    for m in _command_re.finditer(d, first.start()):
        tokens.append((m.group(1), m.group(2), m.start()))
    return tokens


def split_numbers(span: str) -> Tuple[List[str], str]:
    """Return the numeric tokens of ``span`` and whatever text was left over."""
    numbers = _num_re.findall(span)
    leftover = _separator_re.sub('', _num_re.sub(' ', span))
    return numbers, leftover
