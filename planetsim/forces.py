#!/usr/bin/env python3
"""
Force model for Planet Playground.

Responsibilities
- Compute the gravitational and spring force between two bodies.
- Run the force pass for a whole generation: every ordered pair (i, j), i != j,
  is evaluated once against the same (previous-tick) positions.
- Describe the pairwise connections the viewport draws.

Conventions
- Gravity: F = G * m_a * m_b / d^2, pointing from a towards b. It is zero when
  gravity is disabled or the bodies coincide (d == 0).
- Spring: F = k * (d - rest_length) along the same line. Positive means the
  bodies pull together, negative pushes them apart. It is always active.
- The connecting direction is taken from atan2(dy, dx), so coincident bodies
  get the direction (1, 0).

Application
- Spring forces are impulses: for each evaluated pair, +F/m_a goes straight to
  a's velocity and -F/m_b to b's. Since every unordered pair is visited in both
  orders, each pair receives its spring impulse twice per tick.
- Gravity is summed per body and handed to the integrator as the net force.

Complexity is O(N^2) per tick (direct summation).
"""
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .data_models import Body
from .params import SimulationParameters
from .vector_utils import direction, vec_add, vec_scale, vec_sub

Vector2 = Tuple[float, float]
ZERO: Vector2 = (0.0, 0.0)


@dataclass(frozen=True)
class PairForces:
    """Forces acting on the first body of a pair (the second gets the negation)."""
    gravity: Vector2
    spring: Vector2
    gravity_magnitude: float
    distance: float


@dataclass
class ForceAccumulation:
    """
    Result of one force pass.

    net_gravity[i] is the summed gravitational force on body i.
    spring_dv[i] is the velocity change body i received from spring impulses.
    """
    net_gravity: List[Vector2]
    spring_dv: List[Vector2]


@dataclass(frozen=True)
class Connection:
    """Line between two bodies, as consumed by the viewport."""
    start: Vector2
    end: Vector2
    force_magnitude: float
    opacity: float


def gravity_magnitude(a: Body, b: Body, distance: float, params: SimulationParameters) -> float:
    if not params.gravity or distance <= 0:
        return 0.0
    return params.gravitational_constant * a.mass * b.mass / (distance * distance)


def pairwise_forces(a: Body, b: Body, params: SimulationParameters) -> PairForces:
    """
    Compute gravity and spring force on a due to b.

    The force on b due to a is the exact negation of both components.
    """
    offset = vec_sub(b.position, a.position)
    distance = math.hypot(offset[0], offset[1])
    unit = direction(offset)

    g_mag = gravity_magnitude(a, b, distance, params)
    spring_mag = params.spring_constant * (distance - params.rest_length)

    return PairForces(
        gravity=vec_scale(unit, g_mag),
        spring=vec_scale(unit, spring_mag),
        gravity_magnitude=g_mag,
        distance=distance,
    )


def accumulate_forces(bodies: Sequence[Body], params: SimulationParameters) -> ForceAccumulation:
    """
    Evaluate every ordered pair of the given generation.

    Reads positions only; the bodies are not modified.
    """
    n = len(bodies)
    net_gravity: List[Vector2] = [ZERO] * n
    spring_dv: List[Vector2] = [ZERO] * n

    for i in range(n):
        bi = bodies[i]
        for j in range(n):
            if i == j:
                continue  # Skip self-interaction
            bj = bodies[j]
            forces = pairwise_forces(bi, bj, params)

            # Newton's third law for the spring, applied as impulses
            spring_dv[i] = vec_add(spring_dv[i], vec_scale(forces.spring, 1.0 / bi.mass))
            spring_dv[j] = vec_sub(spring_dv[j], vec_scale(forces.spring, 1.0 / bj.mass))

            # Body j's share of gravity is picked up when j is the outer body
            if forces.distance > 0:
                net_gravity[i] = vec_add(net_gravity[i], forces.gravity)

    return ForceAccumulation(net_gravity=net_gravity, spring_dv=spring_dv)


def connections(bodies: Sequence[Body], params: SimulationParameters) -> List[Connection]:
    """One connection per unordered pair, carrying the raw gravity magnitude."""
    lines: List[Connection] = []
    n = len(bodies)
    for i in range(n):
        bi = bodies[i]
        for j in range(i + 1, n):
            bj = bodies[j]
            distance = math.hypot(bj.position[0] - bi.position[0], bj.position[1] - bi.position[1])
            lines.append(Connection(
                start=bi.position,
                end=bj.position,
                force_magnitude=gravity_magnitude(bi, bj, distance, params),
                opacity=params.line_opacity,
            ))
    return lines
