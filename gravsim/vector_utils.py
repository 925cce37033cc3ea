#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vectors are plain (x, y) tuples; these helpers are shared by orbit seeding,
the camera and the renderer.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_cross(a: Vec2, b: Vec2) -> float:
    """z component of the 3D cross product of two planar vectors."""
    return a[0] * b[1] - a[1] * b[0]


def vec_from_polar(length: float, angle: float) -> Vec2:
    """Vector of the given length pointing at `angle` radians from +x."""
    return (length * math.cos(angle), length * math.sin(angle))
