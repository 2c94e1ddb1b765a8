# submap_bridge/core/registry.py
"""
Trajectory registry: id -> Trajectory, plus the single "current" cell.

The current trajectory and its binding change together inside `self.lock`;
nobody outside gets a reference that can observe a half-done swap.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..errors import BridgeShutdown, TransitionFailure
from .backend import SlamBackend, TrajectoryHandle
from .ingestion import IngestionBinding, IngestionRebinder

logger = logging.getLogger(__name__)


@dataclass
class Trajectory:
    id: int
    handle: TrajectoryHandle
    sensor_ids: FrozenSet[str]
    binding: IngestionBinding
    finished: bool = False
    retiring: bool = False


@dataclass(frozen=True)
class RegistrySnapshot:
    """current id, known ids and finished ids read in one critical section."""
    current_id: Optional[int]
    known_ids: Tuple[int, ...]
    finished_ids: FrozenSet[int]


class TrajectoryRegistry:
    def __init__(
        self,
        backend: SlamBackend,
        rebinder: IngestionRebinder,
        expected_sensor_ids: Iterable[str],
    ):
        self._backend = backend
        self._rebinder = rebinder
        self.expected_sensor_ids: FrozenSet[str] = frozenset(expected_sensor_ids)

        self._trajectories: Dict[int, Trajectory] = {}
        self._current: Optional[Trajectory] = None
        self._closed = False

        # concurrency
        self.lock = threading.Lock()

    # ----------------- READ -----------------
    def current_id(self) -> int:
        with self.lock:
            if self._current is None:
                raise BridgeShutdown("no current trajectory")
            return self._current.id

    def known_ids(self) -> List[int]:
        with self.lock:
            return sorted(self._trajectories)

    def finished_ids(self) -> List[int]:
        with self.lock:
            return sorted(t.id for t in self._trajectories.values() if t.finished)

    def sensor_ids(self, trajectory_id: int) -> FrozenSet[str]:
        with self.lock:
            return self._trajectories[trajectory_id].sensor_ids

    def snapshot(self) -> RegistrySnapshot:
        with self.lock:
            return RegistrySnapshot(
                current_id=self._current.id if self._current is not None else None,
                known_ids=tuple(sorted(self._trajectories)),
                finished_ids=frozenset(
                    t.id for t in self._trajectories.values() if t.finished
                ),
            )

    # ----------------- WRITE -----------------
    def register(self, sensor_ids: Optional[Iterable[str]] = None) -> int:
        """
        Allocate a new trajectory, bind ingestion to it and make it current.
        The previous trajectory's binding stops accepting new messages at the
        same instant; it is drained and finished later by retire().
        """
        ids = frozenset(sensor_ids) if sensor_ids is not None else self.expected_sensor_ids
        try:
            handle = self._backend.allocate_trajectory(ids)
            binding = self._rebinder.rebind(handle)
        except Exception as exc:
            raise TransitionFailure(f"could not start a new trajectory: {exc}") from exc

        trajectory = Trajectory(id=handle.trajectory_id, handle=handle, sensor_ids=ids, binding=binding)
        with self.lock:
            if self._closed:
                raise BridgeShutdown("registry is closed")
            if trajectory.id in self._trajectories:
                raise TransitionFailure(f"backend reused trajectory id {trajectory.id}")
            self._trajectories[trajectory.id] = trajectory
            self._current = trajectory

        logger.info("Trajectory %d registered with sensors %s", trajectory.id, sorted(ids))
        return trajectory.id

    def retire(self, trajectory_id: int):
        """
        Finish a non-current trajectory in the backend, exactly once.
        The trajectory only counts as finished once the backend call returns;
        if it raises, a later retire() may try again.
        """
        with self.lock:
            trajectory = self._trajectories.get(trajectory_id)
            if trajectory is None:
                raise TransitionFailure(f"unknown trajectory {trajectory_id}")
            if trajectory is self._current:
                raise TransitionFailure(f"trajectory {trajectory_id} is still current")
            if trajectory.finished:
                raise TransitionFailure(f"trajectory {trajectory_id} already retired")
            if trajectory.retiring:
                raise TransitionFailure(f"trajectory {trajectory_id} is being retired")
            trajectory.retiring = True

        try:
            # out of the lock: waits for deliveries already accepted
            trajectory.binding.close()
            self._backend.retire_trajectory(trajectory.handle)
        except Exception:
            with self.lock:
                trajectory.retiring = False
            logger.error("Retiring trajectory %d failed", trajectory_id)
            raise

        with self.lock:
            trajectory.retiring = False
            trajectory.finished = True
        logger.info("Trajectory %d retired", trajectory_id)

    def close(self):
        """
        Refuse further sensor data and retire every unfinished trajectory,
        the current one included. Safe to call again after a failed retire.
        """
        with self.lock:
            self._closed = True
            self._current = None
            pending = [
                t.id for t in sorted(self._trajectories.values(), key=lambda t: t.id)
                if not t.finished and not t.retiring
            ]
        for tid in pending:
            self.retire(tid)

    # ----------------- INGESTION -----------------
    def handle_sensor_data(self, sensor_id: str, message: Any) -> int:
        """Route one message to the current trajectory; returns its id."""
        with self.lock:
            if self._current is None:
                raise BridgeShutdown("sensor data after shutdown")
            binding = self._current.binding
            binding.accept()
        binding.deliver(sensor_id, message)
        return binding.trajectory_id
