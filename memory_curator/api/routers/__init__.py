"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from memory_curator.api.routers.classify import router as classify_router
from memory_curator.api.routers.cleanup import router as cleanup_router
from memory_curator.api.routers.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(classify_router, tags=["classify"])
api_router.include_router(cleanup_router, tags=["cleanup"])
