# submap_bridge/api/routes/submap.py
"""
Submap routes.
"""
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ..deps import get_bridge
from ...errors import BackendQueryFailure, ConsistencyViolation
from ...models import SubmapListResponse, SubmapQueryResponse
from ...services.submap_service import submap_list_service, submap_query_service

router = APIRouter(tags=["submap"])


@router.get("/submap", response_model=SubmapQueryResponse)
def submap(
    trajectory_id: int = Query(..., description="Trajectory the submap belongs to"),
    submap_index: int = Query(..., description="Index of the submap within the trajectory"),
):
    """Raster content of one submap."""
    try:
        return submap_query_service(get_bridge(), trajectory_id, submap_index)
    except BackendQueryFailure as e:
        return JSONResponse(status_code=404, content={"error": e.message})


@router.get("/submap_list", response_model=SubmapListResponse)
def submap_list():
    """Submap versions and poses for every trajectory."""
    try:
        return submap_list_service(get_bridge())
    except ConsistencyViolation as e:
        return JSONResponse(status_code=500, content={"error": str(e)})
