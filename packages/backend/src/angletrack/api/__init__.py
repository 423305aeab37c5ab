"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects all routes in each router
without relying on individual handlers. Health and auth routers are
open; /auth/me declares the dependency itself.
"""

from fastapi import APIRouter, Depends

from angletrack.api.angles import router as angles_router
from angletrack.api.auth import router as auth_router
from angletrack.api.goal import router as goal_router
from angletrack.api.health import router as health_router
from angletrack.api.uploads import router as uploads_router
from angletrack.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid bearer token
api_router.include_router(uploads_router, tags=["uploads"], dependencies=_auth)
api_router.include_router(angles_router, tags=["angles"], dependencies=_auth)
api_router.include_router(goal_router, tags=["goal"], dependencies=_auth)
