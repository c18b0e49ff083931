"""Mailhub API Routes Package

This module aggregates all route handlers into a single router
that can be included in the main FastAPI application. Every router here
requires an access token; /api/health lives on the app itself.
"""

from fastapi import APIRouter, Depends

from mailhub.api.dependencies import get_access_token

from .ai import router as ai_router
from .calendar import router as calendar_router
from .docs import router as docs_router
from .drive import router as drive_router
from .forms import router as forms_router
from .gmail import router as gmail_router
from .sheets import router as sheets_router


# Create main API router
api_router = APIRouter(prefix="/api", dependencies=[Depends(get_access_token)])

# Include all sub-routers
api_router.include_router(gmail_router, prefix="/gmail", tags=["gmail"])
api_router.include_router(calendar_router, prefix="/calendar", tags=["calendar"])
api_router.include_router(drive_router, prefix="/drive", tags=["drive"])
api_router.include_router(docs_router, prefix="/docs", tags=["docs"])
api_router.include_router(sheets_router, prefix="/sheets", tags=["sheets"])
api_router.include_router(forms_router, prefix="/forms", tags=["forms"])
api_router.include_router(ai_router, prefix="/ai", tags=["ai"])

__all__ = ["api_router"]
