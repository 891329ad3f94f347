from __future__ import annotations

import logging
from dataclasses import fields

from ..core.env import Obstacle, WorldBounds
from ..core.neighbors import exclude_self, filter_neighbors
from ..core.params import FlockingParams
from ..core.state import AgentState, SwarmState
from ..core.vector import Vector3, add, scale
from ..forces.boundary import compute_boundary_force
from ..forces.flocking import compute_steering_force
from ..forces.obstacles import compute_obstacle_avoidance_force
from .base import Policy

logger = logging.getLogger(__name__)


class BoidsPolicy(Policy):
    """
    Flocking + obstacle avoidance + containment. The steering force is already
    clamped to max_force; the avoidance and boundary terms are added on top
    without a further clamp.
    """

    def __init__(
        self,
        params: FlockingParams | None = None,
        bounds: WorldBounds | None = None,
        obstacles: list[Obstacle] | None = None,
        avoidance_distance: float = 20.0,
    ):
        self.params = params or FlockingParams()
        self.bounds = bounds
        self.obstacles = obstacles or []
        self.avoidance_distance = avoidance_distance

    def act(self, agent: AgentState, snapshot: SwarmState) -> Vector3:
        # one read of params per call, so a concurrent update never mixes two sets
        params = self.params
        others = exclude_self(agent.id, snapshot.agents.values())
        acc = compute_steering_force(agent, others, params)

        if self.obstacles:
            avoid = compute_obstacle_avoidance_force(agent.position, self.obstacles, self.avoidance_distance)
            acc = add(acc, scale(avoid, params.obstacle_avoidance_weight))

        if self.bounds is not None:
            acc = add(acc, compute_boundary_force(agent.position, self.bounds, self.bounds.margin))
        return acc

    def neighbor_ids(self, agent: AgentState, snapshot: SwarmState) -> list[str]:
        others = exclude_self(agent.id, snapshot.agents.values())
        return [n.id for n in filter_neighbors(agent.position, others, self.params.neighbor_radius)]

    def get_parameters(self) -> dict:
        return self.params.to_dict()

    def update_parameters(self, changes: dict) -> FlockingParams:
        """
        Merge changes into the current flocking parameters. Unknown keys are
        ignored; the new set replaces the old one as a whole.
        """
        names = {f.name for f in fields(FlockingParams)}
        known = {k: v for k, v in changes.items() if k in names}
        ignored = sorted(set(changes) - set(known))
        if ignored:
            logger.warning("Ignoring unknown flocking parameters: %s", ", ".join(ignored))
        self.params = self.params.replace(**{k: float(v) for k, v in known.items()})
        logger.info("Flocking parameters updated: %s", known)
        return self.params
