"""
Top-level router.

Aggregates the endpoint routers.  Routes are not versioned and are
mounted at the application root, so no prefixes are applied here; each
endpoint module declares its full paths.
"""

from fastapi import APIRouter

from .endpoints import health, info, users

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(health.router, tags=["health"])
router.include_router(users.router, tags=["users"])
