#!/usr/bin/env python3
"""
One simulation tick over a whole generation of bodies.

The tick reads the previous generation and builds the next one; the input
list is never modified.

1. Force pass: gravity and spring for every ordered pair (forces.accumulate_forces).
2. Merge pass: overlapping pairs when collisions and merging are on
   (collisions.find_merges).
3. Integration: every body not consumed by a merge gets its spring impulses,
   then is integrated with its net gravity force. Pinned bodies (held by the
   pointer) keep their position and velocity.
4. Next generation: surviving bodies in their original order, then the merged
   bodies in the order they were created. Merged bodies are not integrated in
   the tick that creates them.
"""
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence

from .collisions import MergeEvent, find_merges
from .data_models import Body
from .forces import ForceAccumulation, accumulate_forces
from .integrator import integrate_body
from .params import SimulationParameters
from .vector_utils import vec_add


@dataclass
class StepResult:
    bodies: List[Body]
    merges: List[MergeEvent]
    forces: ForceAccumulation


def simulation_step(
    bodies: Sequence[Body],
    params: SimulationParameters,
    pinned: Iterable[int] = (),
) -> StepResult:
    """Advance the generation by one tick."""
    pinned = frozenset(pinned)
    forces = accumulate_forces(bodies, params)
    merges = find_merges(bodies, params)

    consumed = set()
    for event in merges:
        consumed.add(event.first)
        consumed.add(event.second)

    next_gen: List[Body] = []
    for i, body in enumerate(bodies):
        if i in consumed:
            continue
        if i in pinned:
            next_gen.append(replace(body))
            continue
        kicked = replace(body, velocity=vec_add(body.velocity, forces.spring_dv[i]))
        next_gen.append(integrate_body(kicked, forces.net_gravity[i], params))

    next_gen.extend(event.body for event in merges)
    return StepResult(bodies=next_gen, merges=merges, forces=forces)
