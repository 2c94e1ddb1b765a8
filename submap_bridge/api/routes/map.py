# submap_bridge/api/routes/map.py
"""
Map routes.
"""
from fastapi import APIRouter, Response

from ..deps import get_bridge
from ...models import OccupancyGridResponse
from ...services.map_service import occupancy_grid_service

router = APIRouter(tags=["map"])


@router.get("/occupancy_grid", response_model=OccupancyGridResponse)
def occupancy_grid():
    """Occupancy grid over all trajectory nodes; 204 while there are none."""
    result = occupancy_grid_service(get_bridge())
    if result is None:
        return Response(status_code=204)
    return result
