from .pose import Point, Quaternion, PoseModel, Header
from .map import MapMeta, OccupancyGridResponse
from .submap import SubmapQueryResponse, SubmapEntry, TrajectorySubmapList, SubmapListResponse
from .trajectory import FinishTrajectoryRequest, FinishTrajectoryResponse, TrajectoryStatus, StatusResponse
