#!/usr/bin/env python3
"""
Read-only views of the simulation handed to the viewport once per frame.
"""
from dataclasses import dataclass
from typing import List, Tuple

from . import constants as C
from .forces import Connection
from .vector_utils import clamp


@dataclass(frozen=True)
class BodySnapshot:
    position: Tuple[float, float]
    radius: float
    color: Tuple[int, int, int]
    selected: bool
    hovered: bool


@dataclass(frozen=True)
class Frame:
    bodies: List[BodySnapshot]
    connections: List[Connection]
    state: str
    gravity: bool


def line_width(connection: Connection, gravity: bool) -> int:
    """Connection thickness: scaled gravity magnitude, 1..10 pixels."""
    if not gravity:
        return C.MIN_LINE_WIDTH
    w = connection.force_magnitude * C.LINE_WIDTH_SCALE
    return int(clamp(w, C.MIN_LINE_WIDTH, C.MAX_LINE_WIDTH))
