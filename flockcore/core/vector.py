from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector. Every operation returns a new value.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value) -> "Vector3":
        """Coerce a Vector3, numpy array or any length-3 sequence."""
        if isinstance(value, Vector3):
            return value
        x, y, z = (float(c) for c in value)
        return cls(x, y, z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vector3") -> "Vector3":
        return add(self, other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return subtract(self, other)

    def __mul__(self, s: float) -> "Vector3":
        return scale(self, s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)


ZERO = Vector3(0.0, 0.0, 0.0)


def magnitude(v: Vector3) -> float:
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def normalize(v: Vector3) -> Vector3:
    # zero-length input maps to the zero vector
    mag = magnitude(v)
    if mag > 0.0:
        return Vector3(v.x / mag, v.y / mag, v.z / mag)
    return ZERO


def limit(v: Vector3, max_mag: float) -> Vector3:
    mag = magnitude(v)
    if mag > max_mag:
        s = max_mag / mag
        return Vector3(v.x * s, v.y * s, v.z * s)
    return v


def add(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def scale(v: Vector3, s: float) -> Vector3:
    return Vector3(v.x * s, v.y * s, v.z * s)


def distance_to(a: Vector3, b: Vector3) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def mean(vectors: Sequence[Vector3] | Iterable[Vector3]) -> Vector3:
    """Component-wise average; the zero vector for an empty input."""
    total = ZERO
    count = 0
    for v in vectors:
        total = add(total, v)
        count += 1
    if count == 0:
        return ZERO
    return scale(total, 1.0 / count)
