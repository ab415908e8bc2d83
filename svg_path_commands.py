"""
Lexer for the SVG path mini-language.

``tokenize_path_d`` splits the ``d`` attribute into command letters and
numbers. ``parse_path_commands`` groups them into one ``PathCommand`` per
argument group, so ``L 0 0 10 0 10 10`` becomes three LineTo commands.

Only the commands the contour builder understands are recognized:
M, L, H, V, C, Q, A and Z in both cases. Any other letter (S/T smooth
shorthands, stray characters) starts a group that is skipped together with
its numbers. This is passthrough, not an error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple


logger = logging.getLogger(__name__)

MOVE_TO = "MoveTo"
LINE_TO = "LineTo"
HORIZONTAL_LINE_TO = "HorizontalLineTo"
VERTICAL_LINE_TO = "VerticalLineTo"
CUBIC_CURVE_TO = "CubicCurveTo"
QUADRATIC_CURVE_TO = "QuadraticCurveTo"
ARC_TO = "ArcTo"
CLOSE_PATH = "ClosePath"

COMMAND_KINDS = {
    "M": MOVE_TO,
    "L": LINE_TO,
    "H": HORIZONTAL_LINE_TO,
    "V": VERTICAL_LINE_TO,
    "C": CUBIC_CURVE_TO,
    "Q": QUADRATIC_CURVE_TO,
    "A": ARC_TO,
    "Z": CLOSE_PATH,
}

ARITY = {
    MOVE_TO: 2,
    LINE_TO: 2,
    HORIZONTAL_LINE_TO: 1,
    VERTICAL_LINE_TO: 1,
    CUBIC_CURVE_TO: 6,
    QUADRATIC_CURVE_TO: 4,
    ARC_TO: 7,
    CLOSE_PATH: 0,
}

# Numbers first so exponents ("1e-3") are not split at the "e".
TOKEN_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?|[A-Za-z]")


@dataclass(frozen=True)
class PathCommand:
    kind: str
    relative: bool
    args: Tuple[float, ...] = ()


def is_command(tok: str) -> bool:
    return len(tok) == 1 and tok.isalpha()


def tokenize_path_d(d: str) -> List[str]:
    return TOKEN_RE.findall(d or "")


def group_tokens(tokens: List[str]) -> List[Tuple[str, List[float]]]:
    """Pair every command letter with the numbers that follow it."""
    groups: List[Tuple[str, List[float]]] = []
    for tok in tokens:
        if is_command(tok):
            groups.append((tok, []))
        elif groups:
            groups[-1][1].append(float(tok))
        # numbers before the first letter have no command to belong to
    return groups


def expand_group(letter: str, values: List[float]) -> List[PathCommand]:
    kind = COMMAND_KINDS.get(letter.upper())
    if kind is None:
        logger.debug("Skipping unsupported path command %r (%d numbers)", letter, len(values))
        return []
    relative = letter.islower()
    arity = ARITY[kind]
    if arity == 0:
        return [PathCommand(kind, relative)]

    out: List[PathCommand] = []
    usable = len(values) - len(values) % arity
    if usable != len(values):
        logger.debug("Dropping %d trailing numbers after %r", len(values) - usable, letter)
    for i in range(0, usable, arity):
        group_kind = kind
        if kind == MOVE_TO and i > 0:
            group_kind = LINE_TO
        out.append(PathCommand(group_kind, relative, tuple(values[i:i + arity])))
    return out


def parse_path_commands(d: str) -> List[PathCommand]:
    commands: List[PathCommand] = []
    for letter, values in group_tokens(tokenize_path_d(d)):
        commands.extend(expand_group(letter, values))
    return commands
