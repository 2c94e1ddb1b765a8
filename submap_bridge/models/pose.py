# submap_bridge/models/pose.py
"""
Pydantic models for poses crossing the API boundary.
"""
from __future__ import annotations

from pydantic import BaseModel


class Point(BaseModel):
    x: float
    y: float
    z: float


class Quaternion(BaseModel):
    x: float
    y: float
    z: float
    w: float


class PoseModel(BaseModel):
    """geometry_msgs/Pose shape: position + orientation."""
    position: Point
    orientation: Quaternion


class Header(BaseModel):
    """
    - stamp:    wall-clock seconds when the snapshot was assembled
    - frame_id: frame the poses are expressed in
    """
    stamp: float
    frame_id: str
