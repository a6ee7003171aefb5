"""API routes for XtreamTV"""

from fastapi import APIRouter

from .auth import router as auth_router
from .catalog import router as catalog_router
from .health import router as health_router

# Create the main API router
api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router)
api_router.include_router(catalog_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
