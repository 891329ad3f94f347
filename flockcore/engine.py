"""
Stateless entry points of the flocking engine.

Every function is pure: inputs are snapshots supplied by the caller, nothing
is cached between calls, and degenerate numeric cases resolve to defined
outputs (normally the zero vector) instead of raising. Vectors may be passed
as Vector3 values or as any length-3 numeric sequence, agents as AgentState
values or plain mappings, and obstacles as Obstacle values, (center, radius)
pairs or (x, y, z, radius) tuples; results are Vector3.
"""
from __future__ import annotations

from typing import Iterable

from .core.env import Obstacle, WorldBounds
from .core.integrator import integrate as _integrate
from .core.params import FlockingParams
from .core.state import AgentState
from .core.vector import Vector3
from .forces.boundary import compute_boundary_force as _boundary
from .forces.flocking import compute_steering_force as _steering
from .forces.obstacles import compute_obstacle_avoidance_force as _avoidance

__all__ = [
    "compute_steering_force",
    "compute_boundary_force",
    "compute_obstacle_avoidance_force",
    "integrate",
]


def compute_steering_force(agent: AgentState, neighbor_snapshot: Iterable[AgentState], params: FlockingParams) -> Vector3:
    return _steering(AgentState.of(agent), [AgentState.of(n) for n in neighbor_snapshot], params)


def compute_boundary_force(position, bounds, margin: float) -> Vector3:
    return _boundary(Vector3.of(position), WorldBounds.of(bounds), margin)


def compute_obstacle_avoidance_force(position, obstacles: Iterable, avoidance_distance: float) -> Vector3:
    return _avoidance(Vector3.of(position), [Obstacle.of(o) for o in obstacles], avoidance_distance)


def integrate(position, velocity, acceleration, dt: float, max_speed: float) -> tuple[Vector3, Vector3]:
    return _integrate(Vector3.of(position), Vector3.of(velocity), Vector3.of(acceleration), dt, max_speed)
