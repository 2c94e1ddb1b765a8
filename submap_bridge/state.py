# submap_bridge/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Optional

from .core import MapBuilderBridge


@dataclass
class SharedState:
    """
    Process-wide container the routes read from.
    The bridge is attached once at startup and detached at shutdown.
    """
    bridge: Optional[MapBuilderBridge] = None

    # Concurrency
    lock: Lock = field(default_factory=Lock)

    def attach(self, bridge: MapBuilderBridge):
        with self.lock:
            self.bridge = bridge

    def detach(self) -> Optional[MapBuilderBridge]:
        with self.lock:
            bridge, self.bridge = self.bridge, None
        return bridge
