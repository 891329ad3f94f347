from collections import deque

import numpy as np

from .state import SwarmState


def _positions(state: SwarmState) -> np.ndarray:
    return np.array([a.position.as_array() for a in state.agents.values()]).reshape(-1, 3)


def _velocities(state: SwarmState) -> np.ndarray:
    return np.array([a.velocity.as_array() for a in state.agents.values()]).reshape(-1, 3)


def center_of_mass(state: SwarmState) -> np.ndarray:
    positions = _positions(state)
    if len(positions) == 0:
        return np.zeros(3)
    return positions.mean(axis=0)


def average_velocity(state: SwarmState) -> dict:
    velocities = _velocities(state)
    if len(velocities) == 0:
        return {"vector": np.zeros(3), "magnitude": 0.0}
    avg = velocities.mean(axis=0)
    return {"vector": avg, "magnitude": float(np.linalg.norm(avg))}


def swarm_spread(state: SwarmState) -> dict:
    """
    Distances of each agent from the center of mass: max, mean and std-dev.
    """
    positions = _positions(state)
    if len(positions) < 2:
        return {"max_distance": 0.0, "avg_distance": 0.0, "std_deviation": 0.0}
    d = np.linalg.norm(positions - positions.mean(axis=0), axis=1)
    return {
        "max_distance": float(d.max()),
        "avg_distance": float(d.mean()),
        "std_deviation": float(d.std()),
    }



def _pairwise(positions: np.ndarray) -> np.ndarray:
    return np.linalg.norm(positions[:, None, :] - positions[None, :, :], axis=-1)


def _pair_distances(positions: np.ndarray) -> np.ndarray:
    # each unordered pair once
    upper = np.triu_indices(len(positions), k=1)
    return _pairwise(positions)[upper]


def coverage_extent(state: SwarmState) -> float:
    """
    Airspace occupied by the swarm, as the volume (m^3) of the axis-aligned
    box spanned by the drones. A swarm flying in a single horizontal layer
    covers zero volume.
    """
    positions = _positions(state)
    if len(positions) == 0:
        return 0.0
    return float(np.prod(np.ptp(positions, axis=0)))


def mean_pairwise_distance(state: SwarmState) -> float:
    """Average drone-to-drone separation; 0.0 below two drones."""
    positions = _positions(state)
    if len(positions) < 2:
        return 0.0
    return float(_pair_distances(positions).mean())


def collision_count(state: SwarmState, threshold: float = 1.0) -> int:
    """
    Number of drone pairs whose 3D separation is strictly below threshold
    metres. Each pair counts once.
    """
    positions = _positions(state)
    if len(positions) < 2:
        return 0
    return int(np.count_nonzero(_pair_distances(positions) < threshold))


def neighbor_counts(state: SwarmState, radius: float) -> dict[str, int]:
    ids = list(state.agents.keys())
    positions = _positions(state)
    if len(positions) == 0:
        return {}
    within = _pairwise(positions) <= radius
    np.fill_diagonal(within, False)
    return {aid: int(n) for aid, n in zip(ids, within.sum(axis=1))}


def collect_metrics(state: SwarmState, collision_threshold: float = 1.0) -> dict:
    avg_vel = average_velocity(state)
    return {
        "t": state.t,
        "drone_count": len(state.agents),
        "center_of_mass": center_of_mass(state).tolist(),
        "average_velocity": avg_vel["vector"].tolist(),
        "average_speed": avg_vel["magnitude"],
        "swarm_spread": swarm_spread(state),
        "mean_pairwise_distance": mean_pairwise_distance(state),
        "coverage_extent": coverage_extent(state),
        "collisions": collision_count(state, collision_threshold),
    }


class MetricsCollector:
    """
    Bounded history of swarm metrics, oldest first. Once max_history_size
    entries are held, recording a new tick drops the oldest one.
    """

    def __init__(self, max_history_size: int = 300, collision_threshold: float = 1.0):
        if max_history_size < 1:
            raise ValueError(f"max_history_size must be positive, got {max_history_size}")
        self.max_history_size = int(max_history_size)
        self.collision_threshold = collision_threshold
        self._history: deque[dict] = deque(maxlen=self.max_history_size)

    def __len__(self) -> int:
        return len(self._history)

    def record(self, state: SwarmState) -> dict:
        metrics = collect_metrics(state, self.collision_threshold)
        self._history.append(metrics)
        return metrics

    @property
    def latest(self) -> dict | None:
        return self._history[-1] if self._history else None

    def history(self, duration: float | None = None) -> list[dict]:
        """
        Recorded metrics, oldest first. With duration, only the entries whose
        simulation time lies within duration seconds of the newest entry.
        """
        if duration is None or not self._history:
            return list(self._history)
        cutoff = self._history[-1]["t"] - duration
        return [m for m in self._history if m["t"] >= cutoff]

    def clear(self) -> None:
        self._history.clear()
