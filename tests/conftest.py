import threading
from typing import Dict, List

import numpy as np
import pytest

from submap_bridge.core import (
    IngestionAdapter,
    MapBuilderBridge,
    Options,
    Pose,
    SlamBackend,
    SubmapRaster,
    TrajectoryHandle,
    TrajectoryNode,
)


class FakeAdapter(IngestionAdapter):
    def __init__(self, backend: "FakeBackend", trajectory_id: int):
        self.backend = backend
        self.trajectory_id = trajectory_id

    def add_sensor_data(self, sensor_id, message):
        with self.backend.lock:
            if self.trajectory_id in self.backend.retired:
                self.backend.late_deliveries.append((self.trajectory_id, message))
            self.backend.received.append((self.trajectory_id, sensor_id, message))


class FakeBackend(SlamBackend):
    """In-memory SLAM engine double with knobs for failure injection."""

    def __init__(self):
        self.lock = threading.Lock()
        self._next_id = 0
        self.sensor_ids: Dict[int, frozenset] = {}
        self.retired: List[int] = []
        self.submaps: Dict[int, List[tuple]] = {}
        self.nodes: List[TrajectoryNode] = []
        self.received: List[tuple] = []
        self.late_deliveries: List[tuple] = []
        self.optimizations = 0

        self.fail_allocation = False
        self.fail_optimization = False
        self.grow_during_transform_fetch = False
        self.retire_failures = 0

    # ---- helpers for tests ----
    def add_submap(self, trajectory_id: int, version: int, pose: Pose = None):
        self.submaps.setdefault(trajectory_id, []).append((version, pose or Pose()))

    def add_node(self, trajectory_id: int, x: float, y: float, points=None):
        pts = np.asarray(points if points is not None else [[1.0, 0.0]], dtype=float)
        self.nodes.append(
            TrajectoryNode(trajectory_id=trajectory_id, time=float(len(self.nodes)), pose=Pose(x=x, y=y), points=pts)
        )

    # ---- SlamBackend ----
    def allocate_trajectory(self, sensor_ids):
        if self.fail_allocation:
            raise RuntimeError("out of trajectory builders")
        with self.lock:
            tid = self._next_id
            self._next_id += 1
            self.sensor_ids[tid] = frozenset(sensor_ids)
            self.submaps.setdefault(tid, [])
        return TrajectoryHandle(trajectory_id=tid)

    def get_ingestion_adapter(self, handle):
        return FakeAdapter(self, handle.trajectory_id)

    def retire_trajectory(self, handle):
        with self.lock:
            if self.retire_failures:
                self.retire_failures -= 1
                raise RuntimeError(f"trajectory builder {handle.trajectory_id} busy")
            self.retired.append(handle.trajectory_id)

    def submap_to_raster(self, trajectory_id, submap_index):
        if trajectory_id not in self.submaps:
            return "unknown trajectory"
        submaps = self.submaps[trajectory_id]
        if not 0 <= submap_index < len(submaps):
            return (
                f"Requested submap {submap_index} from trajectory {trajectory_id} "
                f"but there are only {len(submaps)} submaps."
            )
        version, pose = submaps[submap_index]
        return SubmapRaster(
            submap_version=version,
            cells=bytes([0, 64, 128, 255]),
            width=2,
            height=2,
            resolution=0.05,
            slice_pose=pose,
        )

    def run_final_optimization(self):
        if self.fail_optimization:
            raise RuntimeError("solver diverged")
        self.optimizations += 1

    def get_all_trajectory_nodes(self):
        return list(self.nodes)

    def get_submap_count(self, trajectory_id):
        return len(self.submaps.get(trajectory_id, []))

    def get_submap_transforms(self, trajectory_id):
        if self.grow_during_transform_fetch:
            # the backend finished another submap between the two calls
            self.add_submap(trajectory_id, 1)
        return [pose for _, pose in self.submaps.get(trajectory_id, [])]

    def get_submap_version(self, trajectory_id, submap_index):
        return self.submaps[trajectory_id][submap_index][0]


class RecordingWriter:
    def __init__(self):
        self.calls = []

    def __call__(self, nodes, options, stem):
        self.calls.append((list(nodes), options, stem))


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def options(tmp_path):
    return Options(map_frame="map", tracking_frame="base_link", asset_dir=str(tmp_path), grid_resolution=0.5)


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def bridge(backend, options, writer):
    b = MapBuilderBridge(backend, options, ["lidar"], asset_writer=writer)
    yield b
    b.shutdown()
