"""
Top‑level router for the API.

Both domain routers live under ``/users``: the user directory itself
and the per-user exercise routes.  ``main`` mounts this router under
``/api``.
"""

from fastapi import APIRouter

from .endpoints import exercises, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(exercises.router, prefix="/users", tags=["exercises"])
