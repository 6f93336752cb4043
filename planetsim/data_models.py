#!/usr/bin/env python3
"""
Data models for Planet Playground.

This module defines the Body dataclass shared between the physics step,
the controller, and the viewport.

Units and usage
- position and radius are in pixels, velocity in pixels per tick (before the
  speed factor is applied).
- mass is derived from the radius: pi * r^3.
- selected/hovered are written by input commands only; physics never reads them.
- Bodies have no stable id. A body is addressed by its index in the current
  generation, and the physics step returns new Body objects instead of
  mutating the ones it was given.
"""
import math
from dataclasses import dataclass, replace
from typing import Tuple


def body_mass(radius: float) -> float:
    """Mass of a body with the given radius (proportional to volume)."""
    return math.pi * radius ** 3


@dataclass
class Body:
    """
    Represents one planet in the simulation.

    Fields:
    - position: 2D position (x, y) in pixels
    - velocity: 2D velocity (vx, vy) in pixels per tick
    - radius: Collision/visual radius in pixels
    - mass: Mass, pi * radius^3 unless produced by a merge
    - color: RGB tuple used for rendering
    - selected: Chosen by pointer-down; draws highlighted
    - hovered: Under the pointer
    """
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    radius: float
    mass: float
    color: Tuple[int, int, int] = (200, 200, 255)
    selected: bool = False
    hovered: bool = False

    @classmethod
    def with_radius(cls, position, velocity, radius: float, color=(200, 200, 255)) -> "Body":
        """Create a body whose mass follows from its radius."""
        return cls(
            position=(float(position[0]), float(position[1])),
            velocity=(float(velocity[0]), float(velocity[1])),
            radius=float(radius),
            mass=body_mass(radius),
            color=color,
        )

    def resized(self, radius: float) -> "Body":
        """Copy with a new radius and the matching mass."""
        return replace(self, radius=radius, mass=body_mass(radius))

    def contains(self, point: Tuple[float, float]) -> bool:
        """Hit test: True if point lies within the body's radius."""
        return self.distance_to_point(point) <= self.radius

    def distance_to_point(self, point: Tuple[float, float]) -> float:
        return math.hypot(point[0] - self.position[0], point[1] - self.position[1])
