# submap_bridge/utils/math.py
"""
Common mathematical utility functions.
"""
import math
from typing import Tuple


def wrap_pi(a: float) -> float:
    """Wrap angle to [-pi, pi)."""
    while a <= -math.pi:
        a += 2 * math.pi
    while a > math.pi:
        a -= 2 * math.pi
    return a


def yaw_from_quaternion(qx: float, qy: float, qz: float, qw: float) -> float:
    """Heading (rotation about z) of a unit quaternion."""
    siny = 2.0 * (qw * qz + qx * qy)
    cosy = 1.0 - 2.0 * (qy * qy + qz * qz)
    return math.atan2(siny, cosy)


def quaternion_from_yaw(yaw: float) -> Tuple[float, float, float, float]:
    """(qx, qy, qz, qw) for a pure rotation about z."""
    half = 0.5 * wrap_pi(yaw)
    return 0.0, 0.0, math.sin(half), math.cos(half)
