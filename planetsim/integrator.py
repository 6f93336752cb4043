#!/usr/bin/env python3
"""
Explicit per-tick integrator.

The update order is fixed and matters for reproducibility:
1. damping: v *= (1 - damping)
2. impulse: v += F / m
3. optional speed limit (params.max_speed)
4. drift: x += v * speed_factor
5. boundary reflection: flip vx if the body's edge is past the left or right
   edge of the area, flip vy likewise for top and bottom.

Reflection does not clamp the position; a body may stay past the edge for a
tick. Extreme forces may push values towards infinity; nothing here raises.
"""
from dataclasses import replace
from typing import Tuple

from .data_models import Body
from .params import SimulationParameters
from .vector_utils import limit_length, vec_add, vec_scale


def integrate_body(body: Body, net_force: Tuple[float, float], params: SimulationParameters) -> Body:
    """Advance one body by one tick and return the updated copy."""
    velocity = vec_scale(body.velocity, 1.0 - params.damping)
    velocity = vec_add(velocity, vec_scale(net_force, 1.0 / body.mass))
    velocity = limit_length(velocity, params.max_speed)

    position = vec_add(body.position, vec_scale(velocity, params.speed_factor))

    vx, vy = velocity
    x, y = position
    r = body.radius
    if x - r < 0 or x + r > params.width:
        vx = -vx
    if y - r < 0 or y + r > params.height:
        vy = -vy

    return replace(body, position=position, velocity=(vx, vy))
