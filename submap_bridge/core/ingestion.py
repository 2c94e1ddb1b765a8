# submap_bridge/core/ingestion.py
"""
Sensor-ingestion bindings.

A binding wraps the backend's IngestionAdapter for one trajectory. Callers
first `accept()` a message while holding the registry lock (so they commit to
a binding atomically with respect to swaps), then `deliver()` it outside the
lock. `close()` stops new acceptances and waits until every accepted message
has been delivered, which is what lets the retiring trajectory receive its
in-flight data before the backend finishes it.
"""
from __future__ import annotations

import logging
import threading
from typing import Any

from .backend import IngestionAdapter, SlamBackend, TrajectoryHandle

logger = logging.getLogger(__name__)


class IngestionBinding:
    def __init__(self, trajectory_id: int, adapter: IngestionAdapter):
        self.trajectory_id = trajectory_id
        self.adapter = adapter

        self._cond = threading.Condition()
        self._in_flight = 0
        self._closed = False
        self.delivered = 0

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def accept(self):
        """Reserve one delivery slot. Must be paired with deliver()."""
        with self._cond:
            if self._closed:
                raise RuntimeError(f"binding for trajectory {self.trajectory_id} is closed")
            self._in_flight += 1

    def deliver(self, sensor_id: str, message: Any):
        try:
            self.adapter.add_sensor_data(sensor_id, message)
        finally:
            with self._cond:
                self._in_flight -= 1
                self.delivered += 1
                if self._in_flight == 0:
                    self._cond.notify_all()

    def close(self):
        """No new messages; block until accepted ones are delivered."""
        with self._cond:
            self._closed = True
            pending = self._in_flight
            self._cond.wait_for(lambda: self._in_flight == 0)
        if pending:
            logger.debug(
                "Drained %d in-flight messages for trajectory %d",
                pending, self.trajectory_id,
            )


class IngestionRebinder:
    """Creates the binding for whichever trajectory becomes current."""

    def __init__(self, backend: SlamBackend):
        self._backend = backend

    def rebind(self, handle: TrajectoryHandle) -> IngestionBinding:
        adapter = self._backend.get_ingestion_adapter(handle)
        return IngestionBinding(handle.trajectory_id, adapter)
