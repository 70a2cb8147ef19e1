"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from linkvault.api.v1.dependencies.
"""

from fastapi import APIRouter

from linkvault.api.v1.endpoints import auth, categories, health, links

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(links.router, prefix="/links", tags=["links"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
