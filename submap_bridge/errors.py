# submap_bridge/errors.py
"""
Typed failures raised by the bridge core.

The backend reports problems as plain strings or arbitrary exceptions; the
core translates them into this closed set so callers (the HTTP routes, tests)
can branch on type instead of parsing messages.
"""
from __future__ import annotations


class BridgeError(Exception):
    """Base class of every error the bridge raises on purpose."""


class BackendQueryFailure(BridgeError):
    """The backend rejected a submap query (unknown trajectory, bad index...).

    Recoverable: the caller may retry or ignore it.
    """

    def __init__(self, trajectory_id: int, submap_index: int, message: str):
        self.trajectory_id = trajectory_id
        self.submap_index = submap_index
        self.message = message or "backend returned an empty error"
        super().__init__(
            f"submap query ({trajectory_id}, {submap_index}) failed: {self.message}"
        )


class ConsistencyViolation(BridgeError):
    """Submap count and transform count disagree for one trajectory.

    Means the backend broke its contract; the snapshot is abandoned.
    """

    def __init__(self, trajectory_id: int, submap_count: int, transform_count: int):
        self.trajectory_id = trajectory_id
        self.submap_count = submap_count
        self.transform_count = transform_count
        super().__init__(
            f"trajectory {trajectory_id}: {transform_count} submap transforms "
            f"for {submap_count} submaps"
        )


class TransitionFailure(BridgeError):
    """A new trajectory could not be allocated/bound, or the swap was invalid."""


class OptimizationFailure(BridgeError):
    """The backend's final optimization pass raised."""


class AssetWriteFailure(BridgeError):
    """The asset writer raised while persisting a finished trajectory."""

    def __init__(self, stem: str, cause: BaseException):
        self.stem = stem
        super().__init__(f"writing assets for '{stem}' failed: {cause}")


class BridgeShutdown(BridgeError):
    """Sensor data, or a current-trajectory read, after the bridge was shut down.

    Read-only queries keep working: finished trajectories stay queryable.
    """
