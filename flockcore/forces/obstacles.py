from __future__ import annotations

from typing import Iterable

from ..core.env import Obstacle
from ..core.vector import Vector3, ZERO, add, distance_to, normalize, scale, subtract

MAX_STRENGTH = 2.0


def avoidance_strength(distance: float, danger_distance: float) -> float:
    """Linear ramp: 0 at the danger boundary, MAX_STRENGTH at the obstacle center."""
    return MAX_STRENGTH * (danger_distance - distance) / danger_distance


def compute_obstacle_avoidance_force(position: Vector3, obstacles: Iterable, avoidance_distance: float) -> Vector3:
    """
    Sum of repulsions from every obstacle whose danger distance
    (radius + avoidance_distance) contains the agent. No cap is applied;
    simultaneous threats add up.
    """
    force = ZERO
    for obs in obstacles:
        obs = Obstacle.of(obs)
        dist = distance_to(position, obs.center)
        danger = obs.radius + avoidance_distance
        if 0.0 < dist < danger:
            away = normalize(subtract(position, obs.center))
            force = add(force, scale(away, avoidance_strength(dist, danger)))
    return force
