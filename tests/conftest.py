"""
Pytest configuration and shared fixtures for flockcore tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests"""
    return np.random.default_rng(42)


@pytest.fixture
def params():
    """Default flocking parameters"""
    from flockcore.core.params import FlockingParams
    return FlockingParams()


@pytest.fixture
def bounds():
    """Default world bounds (1000 x 1000 x 500, margin 50)"""
    from flockcore.core.env import WorldBounds
    return WorldBounds()


@pytest.fixture
def make_agent():
    """Factory for agent states from plain tuples"""
    from flockcore.core.state import AgentState
    from flockcore.core.vector import Vector3

    def _make(agent_id, position=(0.0, 0.0, 0.0), velocity=(0.0, 0.0, 0.0)):
        return AgentState(id=agent_id, position=Vector3.of(position), velocity=Vector3.of(velocity))

    return _make


@pytest.fixture
def random_vector(rng):
    """Draw a Vector3 with components uniform in [-scale, scale]"""
    from flockcore.core.vector import Vector3

    def _draw(scale=100.0):
        return Vector3.of(rng.uniform(-scale, scale, size=3))

    return _draw
