from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union
import logging
import re

logger = logging.getLogger(__name__)

_COMMAND_RE = re.compile(
    r"([MmLlHhVvCcSsQqTtAaZz])"
    r"((?:\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?\s*,?\s*)*)"
)
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class ArcTo:
    rx: float
    ry: float
    x_axis_rotation: float
    large_arc_flag: int
    sweep_flag: int
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, ArcTo, ClosePath]

_GROUP_SIZE = {"M": 2, "L": 2, "A": 7}


def _flag(value: float) -> int:
    return 0 if value == 0 else 1


def parse_path_data(path_data: str) -> List[PathCommand]:
    """Tokenize a path ``d`` string into absolute M/L/A/Z commands.

    Relative (lowercase) commands and H/V/C/S/Q/T are matched but produce
    nothing. M and L repeat per coordinate pair, A per group of seven values;
    an incomplete trailing group is dropped.
    """
    commands: List[PathCommand] = []
    for match in _COMMAND_RE.finditer(path_data or ""):
        letter = match.group(1)

        if letter == "Z":
            commands.append(ClosePath())
            continue

        size = _GROUP_SIZE.get(letter)
        if size is None:
            if letter.upper() != "Z":
                logger.debug("Skipping unsupported path command %s", letter, extra={"command": letter})
            continue

        values = [float(v) for v in _NUMBER_RE.findall(match.group(2))]
        usable = len(values) - len(values) % size
        if usable != len(values):
            logger.debug(
                "Dropping incomplete %s parameters %s",
                letter,
                values[usable:],
                extra={"command": letter},
            )

        for i in range(0, usable, size):
            group = values[i:i + size]
            if letter == "M":
                commands.append(MoveTo(group[0], group[1]))
            elif letter == "L":
                commands.append(LineTo(group[0], group[1]))
            else:
                commands.append(ArcTo(
                    rx=group[0],
                    ry=group[1],
                    x_axis_rotation=group[2],
                    large_arc_flag=_flag(group[3]),
                    sweep_flag=_flag(group[4]),
                    x=group[5],
                    y=group[6],
                ))

    return commands
