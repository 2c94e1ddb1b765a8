from __future__ import annotations

from ..core import Pose
from ..models import Header, Point, PoseModel, Quaternion


def pose_to_model(p: Pose) -> PoseModel:
    return PoseModel(
        position=Point(x=float(p.x), y=float(p.y), z=float(p.z)),
        orientation=Quaternion(x=float(p.qx), y=float(p.qy), z=float(p.qz), w=float(p.qw)),
    )


def header_model(stamp: float, frame_id: str) -> Header:
    return Header(stamp=float(stamp), frame_id=frame_id)
