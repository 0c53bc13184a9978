"""V1 API router — health plus the record grids."""

from fastapi import APIRouter

from care_sync.presentation.api.v1.endpoints.grids import router as grids_router
from care_sync.presentation.api.v1.endpoints.health import router as health_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(grids_router)
