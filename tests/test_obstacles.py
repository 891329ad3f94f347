"""
Unit tests for flockcore/forces/obstacles.py
"""

import pytest

from flockcore.core.env import Obstacle
from flockcore.core.vector import Vector3, ZERO, magnitude
from flockcore.forces.obstacles import compute_obstacle_avoidance_force, avoidance_strength

AVOID = 20.0


@pytest.fixture
def rock():
    """Obstacle at the origin, radius 10: danger distance 30"""
    return Obstacle(center=Vector3(0.0, 0.0, 0.0), radius=10.0)


class TestAvoidanceStrength:
    """Tests for the linear ramp"""

    def test_zero_at_danger_boundary(self):
        assert avoidance_strength(30.0, 30.0) == 0.0

    def test_two_at_center(self):
        assert avoidance_strength(0.0, 30.0) == 2.0

    def test_linear(self):
        assert avoidance_strength(15.0, 30.0) == pytest.approx(1.0)
        assert avoidance_strength(7.5, 30.0) == pytest.approx(1.5)


class TestObstacleAvoidance:
    """Tests for compute_obstacle_avoidance_force()"""

    def test_no_obstacles(self):
        assert compute_obstacle_avoidance_force(Vector3(1.0, 2.0, 3.0), [], AVOID) == ZERO

    def test_outside_danger_distance(self, rock):
        assert compute_obstacle_avoidance_force(Vector3(31.0, 0.0, 0.0), [rock], AVOID) == ZERO

    def test_zero_on_danger_boundary(self, rock):
        assert compute_obstacle_avoidance_force(Vector3(30.0, 0.0, 0.0), [rock], AVOID) == ZERO

    def test_points_away_from_center(self, rock):
        f = compute_obstacle_avoidance_force(Vector3(0.0, -15.0, 0.0), [rock], AVOID)
        assert tuple(f) == pytest.approx((0.0, -1.0, 0.0))

    def test_approaches_two_near_center(self, rock):
        f = compute_obstacle_avoidance_force(Vector3(1e-9, 0.0, 0.0), [rock], AVOID)
        assert magnitude(f) == pytest.approx(2.0, abs=1e-6)

    def test_strictly_inside_ramp(self, rock):
        for d in (0.5, 5.0, 10.0, 20.0, 29.9):
            m = magnitude(compute_obstacle_avoidance_force(Vector3(d, 0.0, 0.0), [rock], AVOID))
            assert 0.0 < m < 2.0
            assert m == pytest.approx(2.0 * (30.0 - d) / 30.0)

    def test_at_center_is_zero(self, rock):
        assert compute_obstacle_avoidance_force(Vector3(0.0, 0.0, 0.0), [rock], AVOID) == ZERO

    def test_multiple_obstacles_compound_without_cap(self):
        a = Obstacle(Vector3(-1.0, 0.0, 0.0), 10.0)
        b = Obstacle(Vector3(-1.0, 0.0, 0.0), 10.0)
        c = Obstacle(Vector3(-1.0, 0.0, 0.0), 10.0)
        f = compute_obstacle_avoidance_force(Vector3(0.0, 0.0, 0.0), [a, b, c], AVOID)
        assert f.x == pytest.approx(3 * 2.0 * (30.0 - 1.0) / 30.0)
        assert magnitude(f) > 2.0

    def test_opposite_obstacles_cancel(self):
        left = Obstacle(Vector3(-5.0, 0.0, 0.0), 1.0)
        right = Obstacle(Vector3(5.0, 0.0, 0.0), 1.0)
        f = compute_obstacle_avoidance_force(Vector3(0.0, 0.0, 0.0), [left, right], AVOID)
        assert tuple(f) == pytest.approx((0.0, 0.0, 0.0))

    def test_accepts_tuples(self):
        f = compute_obstacle_avoidance_force(Vector3(15.0, 0.0, 0.0), [(0.0, 0.0, 0.0, 10.0)], AVOID)
        assert tuple(f) == pytest.approx((1.0, 0.0, 0.0))
