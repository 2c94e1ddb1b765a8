# submap_bridge/api/routes/__init__.py
from fastapi import APIRouter

from .status import router as status_router
from .submap import router as submap_router
from .map import router as map_router
from .trajectory import router as trajectory_router

router = APIRouter(prefix="/api/v1")

router.include_router(status_router)
router.include_router(submap_router)
router.include_router(map_router)
router.include_router(trajectory_router)
