import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import numpy as np

from .env import WorldBounds
from .integrator import step_agent
from .metrics import MetricsCollector
from .params import FlockingParams
from .state import SwarmState, AgentState
from .vector import Vector3, ZERO
from ..policies.base import Policy

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGENTS = 50


class SwarmLimitError(RuntimeError):
    """Raised when adding agents would exceed the simulator's max_agents."""


def spawn_swarm(count: int, bounds: WorldBounds, rng=None, id_prefix: str = "drone_") -> list[AgentState]:
    """
    Scatter count agents uniformly inside bounds, at rest.
    """
    rng = rng or np.random.default_rng()
    lo = [-bounds.x / 2.0, -bounds.y / 2.0, 0.0]
    hi = [bounds.x / 2.0, bounds.y / 2.0, bounds.z]
    positions = rng.uniform(lo, hi, size=(count, 3))
    return [
        AgentState(id=f"{id_prefix}{i}", position=Vector3.of(p), velocity=ZERO, timestamp=0)
        for i, p in enumerate(positions)
    ]


class Simulator:
    """
    Ticks a swarm forward under a policy. Membership and parameter changes
    take the same lock as step(), so they land between ticks, never inside
    one.
    """

    def __init__(
        self,
        agents: list[AgentState],
        policy: Policy,
        dt: float = 0.1,
        max_speed: float | None = None,
        bounds: WorldBounds | None = None,
        clamp_to_bounds: bool = True,
        workers: int = 1,
        max_agents: int | None = DEFAULT_MAX_AGENTS,
        metrics: MetricsCollector | None = None,
        metrics_every: int = 1,
    ):
        if max_agents is not None and len(agents) > max_agents:
            raise SwarmLimitError(f"{len(agents)} initial agents exceed max_agents={max_agents}")
        self.state = SwarmState(agents={a.id: a for a in agents}, t=0.0)
        self.policy = policy
        self.dt = dt
        self._max_speed = max_speed
        self.bounds = bounds
        self.clamp_to_bounds = clamp_to_bounds
        self.workers = max(1, int(workers))
        self.max_agents = max_agents
        self.metrics = metrics
        self.metrics_every = max(1, int(metrics_every))
        self.step_count = 0
        self._next_index = len(agents)
        self._lock = threading.Lock()
        logger.info(
            "Simulator initialized with %d agents (dt=%s, max_speed=%s, workers=%d)",
            len(agents), dt, self.max_speed, self.workers,
        )

    @property
    def max_speed(self) -> float:
        # an explicit value wins; otherwise follow the policy's live params
        if self._max_speed is not None:
            return self._max_speed
        params = getattr(self.policy, "params", None)
        return params.max_speed if params is not None else FlockingParams().max_speed

    @property
    def agent_count(self) -> int:
        return len(self.state.agents)

    # --- membership -------------------------------------------------------

    def add_agent(self, agent: AgentState) -> AgentState:
        agent = AgentState.of(agent)
        with self._lock:
            if agent.id in self.state.agents:
                raise ValueError(f"agent {agent.id!r} already exists")
            if self.max_agents is not None and len(self.state.agents) >= self.max_agents:
                raise SwarmLimitError(f"swarm is full ({self.max_agents} agents)")
            self._publish({**self.state.agents, agent.id: agent})
        logger.info("Added agent %s", agent.id)
        return agent

    def spawn(self, count: int, rng=None, id_prefix: str = "drone_") -> list[AgentState]:
        """
        Spawn up to count agents inside bounds, fewer if max_agents leaves
        less room. Raises SwarmLimitError when there is no room at all.
        """
        if self.bounds is None:
            raise ValueError("spawn() needs world bounds")
        if count <= 0:
            return []
        with self._lock:
            room = count if self.max_agents is None else min(count, self.max_agents - len(self.state.agents))
            if room <= 0:
                logger.warning("Cannot spawn drones: limit of %s reached", self.max_agents)
                raise SwarmLimitError(f"swarm is full ({self.max_agents} agents)")
            taken = set(self.state.agents)
            new = []
            for agent in spawn_swarm(room, self.bounds, rng=rng, id_prefix=id_prefix):
                agent_id = f"{id_prefix}{self._next_index}"
                while agent_id in taken:
                    self._next_index += 1
                    agent_id = f"{id_prefix}{self._next_index}"
                self._next_index += 1
                taken.add(agent_id)
                new.append(replace(agent, id=agent_id))
            self._publish({**self.state.agents, **{a.id: a for a in new}})
        logger.info("Spawned %d drones (requested: %d)", len(new), count)
        return new

    def remove_agent(self, agent_id: str) -> AgentState:
        """Remove and return the agent; KeyError if it is unknown."""
        with self._lock:
            agents = dict(self.state.agents)
            try:
                removed = agents.pop(agent_id)
            except KeyError:
                logger.warning("Attempted to remove unknown agent %s", agent_id)
                raise
            self._publish(agents)
        logger.info("Removed agent %s", agent_id)
        return removed

    def clear(self) -> int:
        with self._lock:
            n = len(self.state.agents)
            self._publish({})
        logger.info("Removed all %d agents", n)
        return n

    def _publish(self, agents: dict[str, AgentState]) -> None:
        self.state = SwarmState(agents=agents, t=self.state.t)

    # --- parameters -------------------------------------------------------

    def get_parameters(self) -> dict:
        return self.policy.get_parameters()

    def update_parameters(self, changes: dict) -> FlockingParams:
        with self._lock:
            return self.policy.update_parameters(changes)

    # --- ticking ----------------------------------------------------------

    def step(self, return_logs: bool = False):
        with self._lock:
            result = self._step(return_logs)
        if self.metrics is not None and self.step_count % self.metrics_every == 0:
            self.metrics.record(self.state)
        return result

    def _step(self, return_logs: bool):
        # every agent reads the same frozen snapshot; nothing is published
        # until all accelerations are known
        snapshot = self.state
        agent_ids = list(snapshot.agents.keys())
        max_speed = self.max_speed
        if self.workers > 1 and len(agent_ids) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                accels = list(pool.map(lambda i: self.policy.act(snapshot.agents[i], snapshot), agent_ids))
        else:
            accels = [self.policy.act(snapshot.agents[i], snapshot) for i in agent_ids]

        new_agents = {}
        clamped = {}
        for aid, acc in zip(agent_ids, accels):
            st = step_agent(snapshot.agents[aid], acc, self.dt, max_speed)
            hit = False
            if self.clamp_to_bounds and self.bounds is not None and not self.bounds.contains(st.position):
                st = st.evolve(self.bounds.clamp(st.position), st.velocity)
                hit = True
            new_agents[aid] = st
            clamped[aid] = hit

        self.state = SwarmState(agents=new_agents, t=snapshot.t + self.dt)
        self.step_count += 1
        n_clamped = sum(clamped.values())
        if n_clamped:
            logger.debug("step %d: %d agent(s) clamped to world bounds", self.step_count, n_clamped)

        if return_logs:
            logs = {
                aid: {
                    "acceleration": acc,
                    "boundary_hit": clamped[aid],
                    "neighbors": self.policy.neighbor_ids(snapshot.agents[aid], snapshot),
                }
                for aid, acc in zip(agent_ids, accels)
            }
            return self.state, logs
        return self.state

    def run(self, steps: int, callback=None) -> SwarmState:
        for _ in range(steps):
            state = self.step()
            if callback is not None:
                callback(self.step_count, state)
        return self.state
