from __future__ import annotations
from typing import Optional

import numpy as np

from ..core import MapBuilderBridge
from ..models import MapMeta, OccupancyGridResponse
from .pose_service import header_model, pose_to_model


def occupancy_grid_service(bridge: MapBuilderBridge) -> Optional[OccupancyGridResponse]:
    """
    Occupancy grid over every trajectory node, or None before any node exists.
    """
    grid = bridge.build_occupancy_grid()
    if grid is None:
        return None

    meta = MapMeta(
        width=int(grid.width),
        height=int(grid.height),
        resolution=float(grid.resolution),
        origin=pose_to_model(grid.origin),
    )
    data = grid.data.flatten(order="C").astype(np.int8).tolist()
    return OccupancyGridResponse(
        header=header_model(grid.stamp, grid.frame_id),
        info=meta,
        data=data,
    )
