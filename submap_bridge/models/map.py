# submap_bridge/models/map.py
"""
Pydantic models for occupancy-grid API responses.
"""
from __future__ import annotations

from typing import List
from pydantic import BaseModel, ConfigDict

from .pose import Header, PoseModel


class MapMeta(BaseModel):
    """Metadata for an occupancy grid map (nav_msgs/MapMetaData shape)."""
    model_config = ConfigDict(extra="forbid")

    width: int
    height: int
    resolution: float
    origin: PoseModel


class OccupancyGridResponse(BaseModel):
    """
    Response for /api/v1/occupancy_grid:
    - header: stamp + map frame
    - info:   MapMeta
    - data:   flattened int8 cells (row-major, row 0 at the map's min y);
              -1 unknown, 0 free, 100 occupied
    """
    header: Header
    info: MapMeta
    data: List[int]
