# submap_bridge/core/query.py
from __future__ import annotations

import logging

from ..errors import BackendQueryFailure
from .backend import SlamBackend, SubmapRaster

logger = logging.getLogger(__name__)


class SubmapQueryService:
    """Point queries for one submap's raster, passed through unmodified."""

    def __init__(self, backend: SlamBackend):
        self._backend = backend

    def query_submap(self, trajectory_id: int, submap_index: int) -> SubmapRaster:
        result = self._backend.submap_to_raster(trajectory_id, submap_index)
        if isinstance(result, str):
            logger.error(result)
            raise BackendQueryFailure(trajectory_id, submap_index, result)
        return result
