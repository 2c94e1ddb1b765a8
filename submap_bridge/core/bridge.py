# submap_bridge/core/bridge.py
"""
MapBuilderBridge: the one object the transport layer talks to.

Sensor callbacks push into it, FastAPI reads from it. It starts with one
trajectory for the expected sensor ids and finishes the current trajectory
on shutdown.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from .backend import SlamBackend, SubmapRaster
from .grid import OccupancyGrid
from .ingestion import IngestionRebinder
from .lifecycle import AssetWriter, FinishResult, TrajectoryLifecycleController
from .options import Options
from .query import SubmapQueryService
from .registry import TrajectoryRegistry
from .snapshot import GridBuilder, SnapshotAssembler, SubmapListSnapshot

logger = logging.getLogger(__name__)


class MapBuilderBridge:
    def __init__(
        self,
        backend: SlamBackend,
        options: Options,
        expected_sensor_ids: Iterable[str],
        grid_builder: Optional[GridBuilder] = None,
        asset_writer: Optional[AssetWriter] = None,
    ):
        self.backend = backend
        self.options = options

        self.registry = TrajectoryRegistry(
            backend, IngestionRebinder(backend), expected_sensor_ids
        )
        self.assembler = SnapshotAssembler(backend, self.registry, options, grid_builder)
        self.query_service = SubmapQueryService(backend)
        self.lifecycle = TrajectoryLifecycleController(
            backend, self.registry, options, asset_writer
        )

        first_id = self.registry.register()
        logger.info("Bridge started on trajectory %d", first_id)

    # ----------------- requests -----------------
    def handle_submap_query(self, trajectory_id: int, submap_index: int) -> SubmapRaster:
        return self.query_service.query_submap(trajectory_id, submap_index)

    def handle_finish_trajectory(self, stem: str) -> FinishResult:
        return self.lifecycle.finish_trajectory(stem)

    def get_submap_list(self) -> SubmapListSnapshot:
        return self.assembler.build_submap_list()

    def build_occupancy_grid(self) -> Optional[OccupancyGrid]:
        return self.assembler.build_occupancy_grid()

    # ----------------- sensors -----------------
    def handle_sensor_data(self, sensor_id: str, message: Any) -> int:
        return self.registry.handle_sensor_data(sensor_id, message)

    # ----------------- UTIL -----------------
    def status(self) -> Dict[str, Any]:
        snap = self.registry.snapshot()
        return {
            "state": self.lifecycle.state.value,
            "current_trajectory_id": snap.current_id,
            "trajectories": [
                {"trajectory_id": tid, "finished": tid in snap.finished_ids}
                for tid in snap.known_ids
            ],
        }

    def shutdown(self):
        logger.info("Shutting down bridge, finishing current trajectory")
        self.registry.close()
