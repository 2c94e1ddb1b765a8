# submap_bridge/api/deps.py
"""
Dependency injection for API routes.
"""
from ..core import MapBuilderBridge
from ..state import SharedState

# Global shared state instance
_shared: SharedState = None


def get_shared() -> SharedState:
    """Get the global shared state."""
    global _shared
    if _shared is None:
        _shared = SharedState()
    return _shared


def set_shared(shared: SharedState):
    """Set the global shared state (called during app creation)."""
    global _shared
    _shared = shared


def get_bridge() -> MapBuilderBridge:
    """Get the running bridge from shared state."""
    shared = get_shared()
    with shared.lock:
        bridge = shared.bridge
    if bridge is None:
        raise RuntimeError("bridge is not running")
    return bridge
