# submap_bridge/core/snapshot.py
"""
Snapshot assembly over a backend that keeps mutating underneath us.

Each trajectory is read as: submap count, then transforms. The two calls are
not atomic on the backend side, so the lengths are compared before anything
is built; a mismatch is a ConsistencyViolation, never a silently short list.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from ..errors import ConsistencyViolation
from .backend import Pose, SlamBackend, TrajectoryNode
from .grid import OccupancyGrid, build_occupancy_grid
from .options import Options
from .registry import TrajectoryRegistry

logger = logging.getLogger(__name__)

GridBuilder = Callable[[Sequence[TrajectoryNode], Options], OccupancyGrid]


@dataclass(frozen=True)
class SubmapEntry:
    submap_index: int
    version: int
    pose: Pose


@dataclass(frozen=True)
class TrajectorySubmapList:
    trajectory_id: int
    submaps: Tuple[SubmapEntry, ...]


@dataclass(frozen=True)
class SubmapListSnapshot:
    stamp: float
    frame_id: str
    trajectories: Tuple[TrajectorySubmapList, ...]


class SnapshotAssembler:
    def __init__(
        self,
        backend: SlamBackend,
        registry: TrajectoryRegistry,
        options: Options,
        grid_builder: Optional[GridBuilder] = None,
    ):
        self._backend = backend
        self._registry = registry
        self._options = options
        self._grid_builder = grid_builder or build_occupancy_grid

    def _trajectory_submaps(self, trajectory_id: int) -> TrajectorySubmapList:
        count = int(self._backend.get_submap_count(trajectory_id))
        transforms = list(self._backend.get_submap_transforms(trajectory_id))
        if len(transforms) != count:
            logger.critical(
                "Submap transforms out of sync for trajectory %d: %d transforms, %d submaps",
                trajectory_id, len(transforms), count,
            )
            raise ConsistencyViolation(trajectory_id, count, len(transforms))

        entries = tuple(
            SubmapEntry(
                submap_index=i,
                version=int(self._backend.get_submap_version(trajectory_id, i)),
                pose=transforms[i],
            )
            for i in range(count)
        )
        return TrajectorySubmapList(trajectory_id=trajectory_id, submaps=entries)

    def build_submap_list(self) -> SubmapListSnapshot:
        # every trajectory ever registered, finished ones included
        trajectories = tuple(
            self._trajectory_submaps(tid) for tid in self._registry.known_ids()
        )
        return SubmapListSnapshot(
            stamp=time.time(),
            frame_id=self._options.map_frame,
            trajectories=trajectories,
        )

    def build_occupancy_grid(self) -> Optional[OccupancyGrid]:
        nodes = list(self._backend.get_all_trajectory_nodes())
        if not nodes:
            return None
        return self._grid_builder(nodes, self._options)
