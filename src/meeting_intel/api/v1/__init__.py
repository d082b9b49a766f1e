"""
API v1

Combines the versioned routers under /api/v1.
"""

from fastapi import APIRouter

from .action_items import router as action_items_router
from .jobs import router as jobs_router
from .notifications import router as notifications_router

router = APIRouter(prefix="/api/v1")
router.include_router(action_items_router, prefix="/action-items", tags=["action-items"])
router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])
router.include_router(jobs_router, prefix="/jobs", tags=["jobs"])

__all__ = ["router"]
