from __future__ import annotations

from dataclasses import dataclass

from .vector import Vector3


@dataclass(frozen=True)
class Obstacle:
    center: Vector3
    radius: float

    def __post_init__(self):
        object.__setattr__(self, "center", Vector3.of(self.center))
        object.__setattr__(self, "radius", float(self.radius))

    @classmethod
    def of(cls, value) -> "Obstacle":
        """Accept an Obstacle, a (center, radius) pair or an (x, y, z, radius) tuple."""
        if isinstance(value, Obstacle):
            return value
        if len(value) == 2:
            center, radius = value
            return cls(center, radius)
        x, y, z, radius = value
        return cls(Vector3(float(x), float(y), float(z)), radius)


@dataclass(frozen=True)
class WorldBounds:
    """
    Box of extents (x, y, z): x and y are centred on the origin, z runs from
    the ground (0) up to the ceiling.
    """
    x: float = 1000.0
    y: float = 1000.0
    z: float = 500.0
    margin: float = 50.0

    @classmethod
    def of(cls, value, margin: float | None = None) -> "WorldBounds":
        if isinstance(value, WorldBounds):
            if margin is None or margin == value.margin:
                return value
            return cls(value.x, value.y, value.z, float(margin))
        x, y, z = value
        if margin is None:
            return cls(float(x), float(y), float(z))
        return cls(float(x), float(y), float(z), float(margin))

    @property
    def extents(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def contains(self, p: Vector3) -> bool:
        return (
            -self.x / 2.0 <= p.x <= self.x / 2.0
            and -self.y / 2.0 <= p.y <= self.y / 2.0
            and 0.0 <= p.z <= self.z
        )

    def clamp(self, p: Vector3) -> Vector3:
        """Hard clamp into the box."""
        return Vector3(
            max(-self.x / 2.0, min(self.x / 2.0, p.x)),
            max(-self.y / 2.0, min(self.y / 2.0, p.y)),
            max(0.0, min(self.z, p.z)),
        )
