from abc import ABC, abstractmethod


class Policy(ABC):
    @abstractmethod
    def act(self, agent, snapshot):
        """Return the acceleration (Vector3) for agent given the tick snapshot."""
        ...

    def neighbor_ids(self, agent, snapshot) -> list[str]:
        """Ids of the agents this policy treats as neighbors of agent."""
        return []

    def get_parameters(self) -> dict:
        return {}

    def update_parameters(self, changes: dict):
        raise NotImplementedError(f"{type(self).__name__} has no tunable parameters")
