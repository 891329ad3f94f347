from __future__ import annotations

from typing import Iterable

from .state import AgentState
from .vector import Vector3, distance_to


def filter_neighbors(position: Vector3, candidates: Iterable[AgentState], neighbor_radius: float) -> list[AgentState]:
    """
    Return candidates within neighbor_radius of position (inclusive).

    The candidate list must not contain the querying agent; a self entry
    would bias the alignment and cohesion averages.
    """
    return [st for st in candidates if distance_to(position, st.position) <= neighbor_radius]


def exclude_self(agent_id: str, states: Iterable[AgentState]) -> list[AgentState]:
    return [st for st in states if st.id != agent_id]
