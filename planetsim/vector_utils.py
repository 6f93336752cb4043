#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
"""
import math
from typing import Optional, Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Tuple[float, float], s: float) -> Tuple[float, float]:
    return (a[0] * s, a[1] * s)


def vec_len(a: Tuple[float, float]) -> float:
    return math.hypot(a[0], a[1])


def direction(a: Tuple[float, float]) -> Tuple[float, float]:
    """
    Unit vector along a, taken through its polar angle.

    The zero vector has angle atan2(0, 0) == 0, so it maps to (1, 0) rather
    than to (0, 0).
    """
    angle = math.atan2(a[1], a[0])
    return (math.cos(angle), math.sin(angle))


def limit_length(a: Tuple[float, float], max_len: Optional[float]) -> Tuple[float, float]:
    """Scale a down so its length does not exceed max_len (None means no limit)."""
    if max_len is None:
        return a
    l = vec_len(a)
    if l <= max_len or l == 0:
        return a
    return vec_scale(a, max_len / l)


def is_finite(a: Tuple[float, float]) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1])
