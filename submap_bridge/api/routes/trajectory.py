# submap_bridge/api/routes/trajectory.py
"""
Trajectory lifecycle routes.
"""
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..deps import get_bridge
from ...errors import BridgeError
from ...models import FinishTrajectoryRequest, FinishTrajectoryResponse
from ...services.trajectory_service import finish_trajectory_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trajectory"])


@router.post("/finish_trajectory", response_model=FinishTrajectoryResponse)
def finish_trajectory(payload: FinishTrajectoryRequest):
    """
    Finish the current trajectory, run the final optimization, write assets
    under `stem` and continue on a fresh trajectory.
    """
    try:
        return finish_trajectory_service(get_bridge(), payload.stem)
    except BridgeError as e:
        logger.exception("finish_trajectory(%s) failed", payload.stem)
        return JSONResponse(
            status_code=500,
            content={"error": str(e), "kind": type(e).__name__},
        )
