from __future__ import annotations

from ..core import MapBuilderBridge, SubmapListSnapshot
from ..models import (
    SubmapEntry,
    SubmapListResponse,
    SubmapQueryResponse,
    TrajectorySubmapList,
)
from .pose_service import header_model, pose_to_model


def submap_query_service(bridge: MapBuilderBridge, trajectory_id: int, submap_index: int) -> SubmapQueryResponse:
    """
    One submap raster. Raises BackendQueryFailure instead of returning a
    partially filled response.
    """
    raster = bridge.handle_submap_query(trajectory_id, submap_index)
    return SubmapQueryResponse(
        submap_version=int(raster.submap_version),
        cells=list(bytes(raster.cells)),
        width=int(raster.width),
        height=int(raster.height),
        resolution=float(raster.resolution),
        slice_pose=pose_to_model(raster.slice_pose),
    )


def snapshot_to_model(snap: SubmapListSnapshot) -> SubmapListResponse:
    return SubmapListResponse(
        header=header_model(snap.stamp, snap.frame_id),
        trajectory=[
            TrajectorySubmapList(
                trajectory_id=t.trajectory_id,
                submap=[
                    SubmapEntry(
                        submap_index=e.submap_index,
                        submap_version=e.version,
                        pose=pose_to_model(e.pose),
                    )
                    for e in t.submaps
                ],
            )
            for t in snap.trajectories
        ],
    )


def submap_list_service(bridge: MapBuilderBridge) -> SubmapListResponse:
    return snapshot_to_model(bridge.get_submap_list())
