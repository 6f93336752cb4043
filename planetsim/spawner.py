#!/usr/bin/env python3
"""
Fresh body collections for start-up and for body-count changes.
"""
import colorsys
import random
from typing import List, Optional

from . import constants as C
from .data_models import Body
from .params import SimulationParameters


def hue_color(hue: float) -> tuple:
    """RGB tuple (0..255) for a hue in [0, 1) at the shared saturation/lightness."""
    r, g, b = colorsys.hls_to_rgb(hue % 1.0, C.BODY_LIGHTNESS, C.BODY_SATURATION)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def spawn_bodies(count: int, params: SimulationParameters, rng: Optional[random.Random] = None) -> List[Body]:
    """
    Create count bodies scattered over the simulation area.

    Positions are uniform over [0, width) x [0, height), velocity components
    uniform over [-1, 1). Hues are evenly spaced from a random offset so no
    two bodies share a color.
    """
    rng = rng or random.Random()
    offset = rng.random()
    bodies = []
    for i in range(max(0, int(count))):
        x = rng.random() * params.width
        y = rng.random() * params.height
        vx = rng.random() * 2 * C.MAX_INITIAL_SPEED - C.MAX_INITIAL_SPEED
        vy = rng.random() * 2 * C.MAX_INITIAL_SPEED - C.MAX_INITIAL_SPEED
        color = hue_color(offset + i / count)
        bodies.append(Body.with_radius((x, y), (vx, vy), params.body_radius, color))
    return bodies
