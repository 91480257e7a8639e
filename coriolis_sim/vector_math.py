"""Lightweight vector helpers for the 2D rotating-frame simulation."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

Vector = np.ndarray


def to_vector(value: Iterable[float] | Vector) -> Vector:
    """Convert any iterable to a float64 numpy vector."""
    return np.asarray(list(value), dtype=np.float64)


def magnitude(vec: Vector) -> float:
    return float(np.linalg.norm(vec))


def normalize(vec: Vector) -> Vector:
    norm = magnitude(vec)
    if norm == 0:
        raise ValueError("Cannot normalize the zero vector")
    return vec / norm


def rotate(vec: Vector, angle: float) -> Vector:
    """Rotate a 2D vector counter-clockwise by angle radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    x, y = float(vec[0]), float(vec[1])
    return np.array([x * cos_a - y * sin_a, x * sin_a + y * cos_a], dtype=np.float64)


def polar_offset(center: Vector, radius: float, angle: float) -> Vector:
    """Point at distance radius from center along the given bearing."""
    return center + radius * np.array([math.cos(angle), math.sin(angle)], dtype=np.float64)
