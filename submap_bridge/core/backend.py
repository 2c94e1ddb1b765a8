# submap_bridge/core/backend.py
"""
What the bridge consumes from the SLAM engine.

The engine (scan matching, submap building, pose-graph optimization) lives
elsewhere and mutates its state on its own threads. The bridge only sees it
through SlamBackend plus the plain value types below.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Sequence, Union

import numpy as np

from ..utils.math import yaw_from_quaternion


@dataclass(frozen=True)
class Pose:
    """Rigid transform: translation (x, y, z) + unit quaternion (qx, qy, qz, qw)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    qx: float = 0.0
    qy: float = 0.0
    qz: float = 0.0
    qw: float = 1.0

    @property
    def yaw(self) -> float:
        return yaw_from_quaternion(self.qx, self.qy, self.qz, self.qw)

    def apply_2d(self, points: np.ndarray) -> np.ndarray:
        """Planar transform of (N, >=2) points; returns (N, 2)."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))[:, :2]
        c, s = np.cos(self.yaw), np.sin(self.yaw)
        rot = np.array([[c, -s], [s, c]])
        return pts @ rot.T + np.array([self.x, self.y])


@dataclass(frozen=True)
class TrajectoryHandle:
    """Backend reference to one trajectory builder."""
    trajectory_id: int
    ref: Any = None


@dataclass(frozen=True)
class TrajectoryNode:
    """One optimized pose plus the scan points (tracking frame) taken there."""
    trajectory_id: int
    time: float
    pose: Pose
    points: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))


@dataclass(frozen=True)
class SubmapRaster:
    """Backend rendering of one submap slice."""
    submap_version: int
    cells: bytes
    width: int
    height: int
    resolution: float
    slice_pose: Pose


class IngestionAdapter(ABC):
    """Per-trajectory sink for sensor data, handed out by the backend."""

    @abstractmethod
    def add_sensor_data(self, sensor_id: str, message: Any) -> None:
        ...


class SlamBackend(ABC):
    """Opaque SLAM engine as seen by the bridge."""

    @abstractmethod
    def allocate_trajectory(self, sensor_ids: FrozenSet[str]) -> TrajectoryHandle:
        """Start tracking a new trajectory. Ids are monotonic, never reused."""

    @abstractmethod
    def get_ingestion_adapter(self, handle: TrajectoryHandle) -> IngestionAdapter:
        ...

    @abstractmethod
    def retire_trajectory(self, handle: TrajectoryHandle) -> None:
        """Stop accepting data for a trajectory; it stays in history."""

    @abstractmethod
    def submap_to_raster(self, trajectory_id: int, submap_index: int) -> Union[SubmapRaster, str]:
        """Raster of one submap, or a human-readable error message."""

    @abstractmethod
    def run_final_optimization(self) -> None:
        ...

    @abstractmethod
    def get_all_trajectory_nodes(self) -> Sequence[TrajectoryNode]:
        ...

    @abstractmethod
    def get_submap_count(self, trajectory_id: int) -> int:
        ...

    @abstractmethod
    def get_submap_transforms(self, trajectory_id: int) -> Sequence[Pose]:
        """Global poses of the trajectory's submaps, ordered by submap index."""

    @abstractmethod
    def get_submap_version(self, trajectory_id: int, submap_index: int) -> int:
        """How much sensor data has been folded into the submap so far."""
