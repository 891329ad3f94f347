from __future__ import annotations

from .state import AgentState
from .vector import Vector3, add, limit, scale


def integrate(position: Vector3, velocity: Vector3, acceleration: Vector3, dt: float, max_speed: float):
    """
    Semi-implicit Euler step. Velocity is updated and clamped first, then used
    to advance position, so one step never moves further than max_speed * dt.

    Returns (new_position, new_velocity).
    """
    new_vel = limit(add(velocity, scale(acceleration, dt)), max_speed)
    new_pos = add(position, scale(new_vel, dt))
    return new_pos, new_vel


def step_agent(state: AgentState, acceleration: Vector3, dt: float, max_speed: float) -> AgentState:
    pos, vel = integrate(state.position, state.velocity, acceleration, dt, max_speed)
    return state.evolve(pos, vel, state.timestamp + int(round(dt * 1000)))
