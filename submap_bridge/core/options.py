# submap_bridge/core/options.py
"""
Options: immutable bridge configuration, fixed for the bridge's lifetime.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from .. import config as C


def load_backend_options(path: Optional[str]) -> Mapping[str, Any]:
    """Read the backend configuration blob (YAML mapping); empty if unset."""
    if not path:
        return MappingProxyType({})
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: backend options must be a YAML mapping")
    return MappingProxyType(dict(data))


@dataclass(frozen=True)
class Options:
    map_frame: str = C.MAP_FRAME
    tracking_frame: str = C.TRACKING_FRAME
    lookup_transform_timeout_sec: float = C.LOOKUP_TRANSFORM_TIMEOUT_SEC
    backend_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    grid_resolution: float = C.GRID_RESOLUTION
    asset_dir: str = C.ASSET_DIR

    @classmethod
    def from_config(cls) -> "Options":
        return cls(
            map_frame=C.MAP_FRAME,
            tracking_frame=C.TRACKING_FRAME,
            lookup_transform_timeout_sec=float(C.LOOKUP_TRANSFORM_TIMEOUT_SEC),
            backend_options=load_backend_options(C.BACKEND_OPTIONS_FILE),
            grid_resolution=float(C.GRID_RESOLUTION),
            asset_dir=C.ASSET_DIR,
        )
