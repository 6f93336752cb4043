#!/usr/bin/env python3
"""
Collision handling for Planet Playground.

Two bodies collide when the distance between their centers is smaller than
the sum of their radii and collisions are enabled. What happens next depends
on the merge flag:
- merging on: both bodies are replaced by one body carrying the summed mass,
  the mass-weighted average position and velocity, the current shared radius
  and the color of the first body.
- merging off: nothing. Overlapping bodies pass through each other; no
  separating impulse is applied.

Merge detection never mutates the body list. find_merges() returns the merge
events for a generation and the step applies them when building the next one.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from .data_models import Body
from .params import SimulationParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeEvent:
    """Bodies at indices first and second were replaced by body."""
    first: int
    second: int
    body: Body


def overlapping(a: Body, b: Body) -> bool:
    dx = b.position[0] - a.position[0]
    dy = b.position[1] - a.position[1]
    return math.hypot(dx, dy) < a.radius + b.radius


def merge_bodies(a: Body, b: Body, radius: float) -> Body:
    """Combine two bodies, conserving mass and momentum."""
    m_total = a.mass + b.mass

    new_pos = ((a.position[0] * a.mass + b.position[0] * b.mass) / m_total,
               (a.position[1] * a.mass + b.position[1] * b.mass) / m_total)
    new_vel = ((a.velocity[0] * a.mass + b.velocity[0] * b.mass) / m_total,
               (a.velocity[1] * a.mass + b.velocity[1] * b.mass) / m_total)

    # Radius is reset to the shared radius; mass keeps the sum
    return Body(
        position=new_pos,
        velocity=new_vel,
        radius=radius,
        mass=m_total,
        color=a.color,
    )


def resolve_collision(a: Body, b: Body, params: SimulationParameters) -> Optional[Body]:
    """
    Return the merged body if a and b collide and merging is enabled, else None.
    """
    if not params.collide or not overlapping(a, b):
        return None
    if not params.merging:
        return None
    return merge_bodies(a, b, params.body_radius)


def find_merges(bodies: Sequence[Body], params: SimulationParameters) -> List[MergeEvent]:
    """
    Detect merges for one generation.

    Bodies are scanned in order; each body takes part in at most one merge.
    Once an index is consumed it is skipped both as the scanning body and as
    a partner.
    """
    if not params.collide or not params.merging or len(bodies) < 2:
        return []

    events: List[MergeEvent] = []
    consumed: Set[int] = set()

    n = len(bodies)
    for i in range(n):
        if i in consumed:
            continue
        bi = bodies[i]
        for j in range(n):
            if j == i or j in consumed:
                continue
            merged = resolve_collision(bi, bodies[j], params)
            if merged is None:
                continue
            consumed.add(i)
            consumed.add(j)
            events.append(MergeEvent(first=i, second=j, body=merged))
            logger.debug("Merged bodies %d + %d (mass %.3g)", i, j, merged.mass)
            break

    return events
