"""
Boids rules: separation, alignment and cohesion, combined with a single
terminal clamp to max_force.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from ..core.neighbors import filter_neighbors
from ..core.params import FlockingParams
from ..core.state import AgentState
from ..core.vector import (
    Vector3,
    ZERO,
    add,
    distance_to,
    limit,
    magnitude,
    mean,
    normalize,
    scale,
    subtract,
)


class SteeringComponents(NamedTuple):
    separation: Vector3
    alignment: Vector3
    cohesion: Vector3


def separation(position: Vector3, neighbors: Sequence[AgentState], separation_radius: float) -> Vector3:
    force = ZERO
    count = 0
    for n in neighbors:
        dist = distance_to(position, n.position)
        if 0.0 < dist < separation_radius:
            # away from the neighbor, stronger when closer
            away = normalize(subtract(position, n.position))
            force = add(force, scale(away, 1.0 / dist))
            count += 1
    if count == 0:
        return ZERO
    return normalize(scale(force, 1.0 / count))


def alignment(velocity: Vector3, neighbors: Sequence[AgentState]) -> Vector3:
    if not neighbors:
        return ZERO
    desired = normalize(mean(n.velocity for n in neighbors))
    return subtract(desired, normalize(velocity))


def cohesion(position: Vector3, neighbors: Sequence[AgentState]) -> Vector3:
    if not neighbors:
        return ZERO
    center = mean(n.position for n in neighbors)
    desired = subtract(center, position)
    if magnitude(desired) > 0.0:
        return normalize(desired)
    return ZERO


def steering_components(agent: AgentState, neighbor_snapshot: Sequence[AgentState], params: FlockingParams) -> SteeringComponents:
    neighbors = filter_neighbors(agent.position, neighbor_snapshot, params.neighbor_radius)
    return SteeringComponents(
        separation=separation(agent.position, neighbors, params.separation_radius),
        alignment=alignment(agent.velocity, neighbors),
        cohesion=cohesion(agent.position, neighbors),
    )


def compute_steering_force(agent: AgentState, neighbor_snapshot: Sequence[AgentState], params: FlockingParams) -> Vector3:
    """
    Weighted sum of the three rules, clamped once to params.max_force.

    neighbor_snapshot must already exclude the agent itself.
    """
    sep, align, coh = steering_components(agent, neighbor_snapshot, params)
    total = add(
        add(scale(sep, params.separation_weight), scale(align, params.alignment_weight)),
        scale(coh, params.cohesion_weight),
    )
    return limit(total, params.max_force)
