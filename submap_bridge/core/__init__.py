from .backend import (
    IngestionAdapter,
    Pose,
    SlamBackend,
    SubmapRaster,
    TrajectoryHandle,
    TrajectoryNode,
)
from .bridge import MapBuilderBridge
from .grid import OccupancyGrid, build_occupancy_grid
from .lifecycle import FinishResult, LifecycleState, TrajectoryLifecycleController
from .options import Options
from .query import SubmapQueryService
from .registry import TrajectoryRegistry
from .snapshot import SnapshotAssembler, SubmapListSnapshot
