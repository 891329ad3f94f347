from __future__ import annotations

from ..core.env import WorldBounds
from ..core.vector import Vector3

WALL_COEFF = 0.1
FLOOR_COEFF = 0.2
CEILING_COEFF = 0.1


def _axis_push(p: float, lo: float, hi: float, lo_coeff: float, hi_coeff: float) -> float:
    if p < lo:
        return (lo - p) * lo_coeff
    if p > hi:
        return -(p - hi) * hi_coeff
    return 0.0


def compute_boundary_force(position: Vector3, bounds, margin: float) -> Vector3:
    """
    Restoring force proportional to how far the agent has pushed into the
    margin band of each face. Axes are independent and the result is not
    clamped.

    The floor threshold is `margin` above z == 0 regardless of the box; it is
    not derived from a lower extent like the other five faces.
    """
    x_ext, y_ext, z_ext = WorldBounds.of(bounds).extents
    fx = _axis_push(position.x, -x_ext / 2.0 + margin, x_ext / 2.0 - margin, WALL_COEFF, WALL_COEFF)
    fy = _axis_push(position.y, -y_ext / 2.0 + margin, y_ext / 2.0 - margin, WALL_COEFF, WALL_COEFF)
    fz = _axis_push(position.z, margin, z_ext - margin, FLOOR_COEFF, CEILING_COEFF)
    return Vector3(fx, fy, fz)
