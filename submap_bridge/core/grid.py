# submap_bridge/core/grid.py
"""
Occupancy-grid rasterization from a trajectory-node snapshot.

Pure function of (nodes, options): every scan point marks its cell occupied,
cells sampled along the ray from the node position to the point are marked
free, everything else stays unknown. Values follow nav_msgs/OccupancyGrid:
-1 unknown, 0 free, 100 occupied; row 0 is the bottom (min y) of the map.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .. import config as C
from .backend import Pose, TrajectoryNode
from .options import Options

UNKNOWN = -1
FREE = 0
OCCUPIED = 100


@dataclass(frozen=True)
class OccupancyGrid:
    stamp: float
    frame_id: str
    resolution: float
    width: int
    height: int
    origin: Pose
    data: np.ndarray  # int8 [H, W]


def _node_rays(node: TrajectoryNode):
    origin = np.array([node.pose.x, node.pose.y], dtype=np.float64)
    hits = node.pose.apply_2d(node.points) if len(node.points) else np.zeros((0, 2))
    return origin, hits


def build_occupancy_grid(nodes: Sequence[TrajectoryNode], options: Options) -> OccupancyGrid:
    if not nodes:
        raise ValueError("cannot build an occupancy grid without trajectory nodes")

    res = float(options.grid_resolution)
    rays = [_node_rays(n) for n in nodes]

    all_xy = np.vstack([np.vstack([o[None, :], h]) for o, h in rays])
    pad = C.GRID_PADDING_CELLS * res
    lo = np.floor((all_xy.min(axis=0) - pad) / res) * res
    hi = np.ceil((all_xy.max(axis=0) + pad) / res) * res
    W = max(1, int(round((hi[0] - lo[0]) / res)))
    H = max(1, int(round((hi[1] - lo[1]) / res)))

    def to_cells(xy: np.ndarray) -> np.ndarray:
        ij = np.floor((xy - lo) / res).astype(np.int64)
        ij[:, 0] = np.clip(ij[:, 0], 0, W - 1)
        ij[:, 1] = np.clip(ij[:, 1], 0, H - 1)
        return ij

    grid = np.full((H, W), UNKNOWN, dtype=np.int8)
    free_cells: List[np.ndarray] = []
    hit_cells: List[np.ndarray] = []

    for origin, hits in rays:
        free_cells.append(to_cells(origin[None, :]))
        if not len(hits):
            continue
        delta = hits - origin
        longest = float(np.max(np.hypot(delta[:, 0], delta[:, 1])))
        steps = max(1, int(np.ceil(longest / (0.5 * res))))
        u = np.arange(steps, dtype=np.float64) / steps          # [0, 1)
        samples = origin + delta[:, None, :] * u[None, :, None]  # (N, S, 2)
        free_cells.append(to_cells(samples.reshape(-1, 2)))
        hit_cells.append(to_cells(hits))

    for ij in free_cells:
        grid[ij[:, 1], ij[:, 0]] = FREE
    # occupied wins over free
    for ij in hit_cells:
        grid[ij[:, 1], ij[:, 0]] = OCCUPIED

    return OccupancyGrid(
        stamp=time.time(),
        frame_id=options.map_frame,
        resolution=res,
        width=W,
        height=H,
        origin=Pose(x=float(lo[0]), y=float(lo[1])),
        data=grid,
    )
