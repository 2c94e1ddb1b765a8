# submap_bridge/core/lifecycle.py
"""
Trajectory lifecycle: RUNNING(id) -> TRANSITIONING -> RUNNING(new id).

finish_trajectory() order matters:
  1. remember the current id
  2. register + rebind a new trajectory (ingestion never has a gap)
  3. retire the previous one (drains its in-flight messages first)
  4. final optimization            } outside the registry lock, may be slow
  5. node snapshot -> asset writer }
Only one transition runs at a time; others wait on `_transition_lock`.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from ..errors import AssetWriteFailure, BridgeError, OptimizationFailure, TransitionFailure
from .assets import write_assets
from .backend import SlamBackend, TrajectoryNode
from .options import Options
from .registry import TrajectoryRegistry

logger = logging.getLogger(__name__)

AssetWriter = Callable[[Sequence[TrajectoryNode], Options, str], object]


class LifecycleState(str, Enum):
    RUNNING = "running"
    TRANSITIONING = "transitioning"


@dataclass(frozen=True)
class FinishResult:
    previous_trajectory_id: int
    trajectory_id: int
    node_count: int
    assets_written: bool


class TrajectoryLifecycleController:
    def __init__(
        self,
        backend: SlamBackend,
        registry: TrajectoryRegistry,
        options: Options,
        asset_writer: Optional[AssetWriter] = None,
    ):
        self._backend = backend
        self._registry = registry
        self._options = options
        self._asset_writer = asset_writer or write_assets

        self._transition_lock = threading.Lock()
        self._state = LifecycleState.RUNNING

    @property
    def state(self) -> LifecycleState:
        return self._state

    def finish_trajectory(self, asset_stem: str) -> FinishResult:
        with self._transition_lock:
            self._state = LifecycleState.TRANSITIONING
            try:
                return self._finish(asset_stem)
            finally:
                self._state = LifecycleState.RUNNING

    def _finish(self, asset_stem: str) -> FinishResult:
        logger.info("Finishing trajectory...")

        previous_id = self._registry.current_id()
        new_id = self._registry.register()
        try:
            self._registry.retire(previous_id)
        except BridgeError:
            raise
        except Exception as exc:
            raise TransitionFailure(f"retiring trajectory {previous_id} failed: {exc}") from exc

        try:
            self._backend.run_final_optimization()
        except Exception as exc:
            raise OptimizationFailure(f"final optimization failed: {exc}") from exc

        nodes = list(self._backend.get_all_trajectory_nodes())
        assets_written = False
        if not nodes:
            logger.warning("No data collected and no assets will be written.")
        else:
            logger.info("Writing assets...")
            try:
                self._asset_writer(nodes, self._options, asset_stem)
            except Exception as exc:
                raise AssetWriteFailure(asset_stem, exc) from exc
            assets_written = True

        logger.info("New trajectory started.")
        return FinishResult(
            previous_trajectory_id=previous_id,
            trajectory_id=new_id,
            node_count=len(nodes),
            assets_written=assets_written,
        )
