from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class FlockingParams:
    """
    Tuning for the boids rules. Values are taken as given: the engine never
    validates them, and separation_radius <= neighbor_radius is assumed.
    """
    neighbor_radius: float = 100.0
    separation_radius: float = 50.0
    max_speed: float = 50.0
    max_force: float = 10.0
    separation_weight: float = 2.0
    alignment_weight: float = 1.0
    cohesion_weight: float = 1.0
    obstacle_avoidance_weight: float = 3.0

    @classmethod
    def from_dict(cls, d: dict | None) -> "FlockingParams":
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in (d or {}).items() if k in known})

    def replace(self, **changes) -> "FlockingParams":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
