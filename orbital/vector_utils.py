#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, pure functions over (x, y) tuples used throughout the
simulator. None of them mutate their inputs.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]

ZERO: Vec2 = (0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_len_sq(a: Vec2) -> float:
    """Squared length; avoids the sqrt where only r^2 is needed."""
    return a[0] * a[0] + a[1] * a[1]


def vec_dist(a: Vec2, b: Vec2) -> float:
    return vec_len(vec_sub(a, b))


def vec_norm(a: Vec2) -> Vec2:
    """Unit vector along a, or the zero vector when a has zero length."""
    l = vec_len(a)
    if l == 0:
        return ZERO
    return (a[0] / l, a[1] / l)


def vec_set_len(a: Vec2, length: float) -> Vec2:
    return vec_scale(vec_norm(a), length)


def vec_dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def vec_cross(a: Vec2, b: Vec2) -> float:
    """z component of the 3D cross product of two in-plane vectors."""
    return a[0] * b[1] - a[1] * b[0]


def vec_rotate(a: Vec2, theta: float) -> Vec2:
    """Rotate a counter-clockwise by theta radians."""
    c = math.cos(theta)
    s = math.sin(theta)
    return (a[0] * c - a[1] * s, a[0] * s + a[1] * c)


def vec_heading(a: Vec2) -> float:
    return math.atan2(a[1], a[0])
