# submap_bridge/models/trajectory.py
"""
Pydantic models for trajectory lifecycle requests and status.
"""
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class FinishTrajectoryRequest(BaseModel):
    """Body of POST /api/v1/finish_trajectory: file stem for the assets."""
    stem: str = Field(..., min_length=1)


class FinishTrajectoryResponse(BaseModel):
    ok: bool
    previous_trajectory_id: int
    trajectory_id: int
    node_count: int
    assets_written: bool


class TrajectoryStatus(BaseModel):
    trajectory_id: int
    finished: bool


class StatusResponse(BaseModel):
    state: str
    current_trajectory_id: Optional[int] = None  # None once shut down
    trajectories: List[TrajectoryStatus]
