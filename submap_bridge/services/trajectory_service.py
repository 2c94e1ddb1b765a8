from __future__ import annotations

from ..core import MapBuilderBridge
from ..models import FinishTrajectoryResponse, StatusResponse, TrajectoryStatus


def finish_trajectory_service(bridge: MapBuilderBridge, stem: str) -> FinishTrajectoryResponse:
    res = bridge.handle_finish_trajectory(stem)
    return FinishTrajectoryResponse(
        ok=True,
        previous_trajectory_id=res.previous_trajectory_id,
        trajectory_id=res.trajectory_id,
        node_count=res.node_count,
        assets_written=res.assets_written,
    )


def status_service(bridge: MapBuilderBridge) -> StatusResponse:
    st = bridge.status()
    return StatusResponse(
        state=st["state"],
        current_trajectory_id=st["current_trajectory_id"],
        trajectories=[TrajectoryStatus(**t) for t in st["trajectories"]],
    )
