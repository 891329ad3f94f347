"""
Unit tests for flockcore/core/integrator.py
"""

import pytest

from flockcore.core.integrator import integrate, step_agent
from flockcore.core.vector import Vector3, ZERO, magnitude, distance_to


class TestIntegrate:
    """Tests for integrate()"""

    def test_velocity_clamped_before_position(self):
        pos, vel = integrate(ZERO, ZERO, Vector3(10.0, 0.0, 0.0), 1.0, 5.0)
        assert vel == Vector3(5.0, 0.0, 0.0)
        assert magnitude(vel) == 5.0
        assert pos == vel

    def test_under_max_speed(self):
        pos, vel = integrate(Vector3(1.0, 1.0, 1.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 2.0, 0.0), 0.5, 50.0)
        assert vel == Vector3(1.0, 1.0, 0.0)
        assert pos == Vector3(1.5, 1.5, 1.0)

    def test_zero_dt(self):
        p, v = Vector3(1.0, 2.0, 3.0), Vector3(4.0, 0.0, 0.0)
        assert integrate(p, v, Vector3(100.0, 0.0, 0.0), 0.0, 50.0) == (p, v)

    def test_displacement_bounded(self, random_vector, rng):
        for _ in range(200):
            p = random_vector(500.0)
            v = random_vector(100.0)
            a = random_vector(1000.0)
            dt = float(rng.uniform(0.001, 1.0))
            max_speed = float(rng.uniform(0.1, 60.0))
            new_p, new_v = integrate(p, v, a, dt, max_speed)
            assert magnitude(new_v) <= max_speed * (1 + 1e-12)
            assert distance_to(new_p, p) <= max_speed * dt + 1e-9


class TestStepAgent:
    """Tests for step_agent()"""

    def test_returns_new_state(self, make_agent):
        st = make_agent("a", (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        out = step_agent(st, ZERO, 0.1, 50.0)
        assert out is not st
        assert out.id == "a"
        assert st.position == ZERO
        assert tuple(out.position) == pytest.approx((0.1, 0.0, 0.0))

    def test_timestamp_advances_in_ms(self, make_agent):
        st = make_agent("a")
        assert step_agent(st, ZERO, 0.016, 50.0).timestamp == 16
        assert step_agent(step_agent(st, ZERO, 0.1, 50.0), ZERO, 0.1, 50.0).timestamp == 200
