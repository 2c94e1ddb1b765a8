# submap_bridge/models/submap.py
"""
Pydantic models for submap queries and the submap list.
"""
from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field

from .pose import Header, PoseModel


class SubmapQueryResponse(BaseModel):
    """
    Response for /api/v1/submap: one submap slice exactly as the backend
    rendered it. `cells` are the raw bytes as a list of 0..255 ints.
    """
    submap_version: int
    cells: List[int]
    width: int
    height: int
    resolution: float
    slice_pose: PoseModel


class SubmapEntry(BaseModel):
    submap_index: int
    submap_version: int
    pose: PoseModel


class TrajectorySubmapList(BaseModel):
    trajectory_id: int
    submap: List[SubmapEntry] = Field(default_factory=list)


class SubmapListResponse(BaseModel):
    """
    Response for /api/v1/submap_list (also pushed on /ws/submap_list):
    trajectories in ascending id order, submaps in ascending index order.
    """
    header: Header
    trajectory: List[TrajectorySubmapList]
