#!/usr/bin/env python3
"""
Simulation-wide parameters.

One SimulationParameters instance is owned by the SimulationController and
passed explicitly into every force, collision and integration call. Nothing in
the physics modules reads module-level state.

Values coming from the control panel are coerced and clamped by
SimulationParameters.set(); out-of-range numbers never raise.
"""
import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Optional

from . import constants as C
from .vector_utils import clamp

logger = logging.getLogger(__name__)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _to_float(value: Any) -> float:
    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f"{value!r} is not a finite parameter value")
    return v


@dataclass
class SimulationParameters:
    """
    Container for simulation settings.

    gravitational_constant is fixed; every other field may be changed through
    set() (normally via SimulationController.set_parameter).
    """
    gravitational_constant: float = C.G
    speed_factor: float = C.DEFAULT_SPEED_FACTOR
    spring_constant: float = C.DEFAULT_SPRING_CONSTANT
    rest_length: float = C.DEFAULT_REST_LENGTH
    damping: float = C.DEFAULT_DAMPING
    line_opacity: float = C.DEFAULT_LINE_OPACITY
    body_count: int = C.DEFAULT_BODY_COUNT
    body_radius: float = C.DEFAULT_BODY_RADIUS
    gravity: bool = True
    collide: bool = True
    merging: bool = False
    width: float = float(C.VIEW_WIDTH)
    height: float = float(C.VIEW_HEIGHT)
    max_speed: Optional[float] = None

    FIXED = ("gravitational_constant",)

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls) if f.name not in cls.FIXED]

    def set(self, name: str, value: Any) -> Any:
        """
        Coerce, clamp and store a parameter. Returns the value actually stored.

        Raises KeyError for unknown or fixed names and ValueError for values
        that cannot be converted to a finite number.
        """
        if name not in self.names():
            raise KeyError(f"Unknown simulation parameter: {name!r}")

        if name in ("gravity", "collide", "merging"):
            stored = _to_bool(value)
        elif name == "body_count":
            requested = _to_float(value)
            stored = int(clamp(requested, 0, C.MAX_BODY_COUNT))
        elif name == "max_speed":
            if value is None:
                stored = None
            else:
                requested = _to_float(value)
                stored = None if requested <= 0 else requested
        else:
            requested = _to_float(value)
            if name == "body_radius":
                stored = max(C.MIN_BODY_RADIUS, requested)
            elif name == "damping":
                stored = clamp(requested, 0.0, C.MAX_DAMPING)
            elif name == "line_opacity":
                stored = clamp(requested, 0.0, 1.0)
            elif name in ("speed_factor", "rest_length", "width", "height"):
                stored = max(0.0, requested)
            else:
                stored = requested

        if name not in ("gravity", "collide", "merging", "max_speed") and stored != requested:
            logger.warning("Clamped %s from %r to %r", name, value, stored)

        setattr(self, name, stored)
        return stored
