# submap_bridge/api/routes/status.py
"""
Status routes.
"""
from fastapi import APIRouter

from ..deps import get_bridge
from ...models import StatusResponse
from ...services.trajectory_service import status_service

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
def status():
    """Lifecycle state, current trajectory and every known trajectory."""
    return status_service(get_bridge())
