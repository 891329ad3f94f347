from __future__ import annotations

from dataclasses import dataclass, field, replace

from .vector import Vector3, ZERO


@dataclass(frozen=True)
class AgentState:
    id: str
    position: Vector3 = ZERO
    velocity: Vector3 = ZERO
    timestamp: int = 0   # milliseconds

    def __post_init__(self):
        object.__setattr__(self, "position", Vector3.of(self.position))
        object.__setattr__(self, "velocity", Vector3.of(self.velocity))

    @classmethod
    def of(cls, value) -> "AgentState":
        """Accept an AgentState or a mapping with id, position, velocity and timestamp."""
        if isinstance(value, AgentState):
            return value
        return cls(
            id=str(value["id"]),
            position=value.get("position", ZERO),
            velocity=value.get("velocity", ZERO),
            timestamp=int(value.get("timestamp", 0)),
        )

    def evolve(self, position: Vector3, velocity: Vector3, timestamp: int | None = None) -> "AgentState":
        return replace(
            self,
            position=position,
            velocity=velocity,
            timestamp=self.timestamp if timestamp is None else timestamp,
        )


@dataclass(frozen=True)
class SwarmState:
    agents: dict[str, AgentState] = field(default_factory=dict)
    t: float = 0.0
