"""
User endpoints.

Create a user from a urlencoded form and list all users.  Failures are
raised as ``TrackerError`` and rendered as ``{"error": ...}`` by the
application's exception handler.
"""

from typing import List

from fastapi import APIRouter, Depends, Form

from exercise_tracker.app.core.db import Database, get_database
from exercise_tracker.app.schemas.user import UserCreate, UserRead
from exercise_tracker.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserRead)
async def create_user(
    username: str = Form(...),
    db: Database = Depends(get_database),
) -> UserRead:
    """Register a new user and return ``{_id, username}``."""
    return await UserService.create_user(db, UserCreate(username=username))


@router.get("", response_model=List[UserRead])
async def list_users(db: Database = Depends(get_database)) -> List[UserRead]:
    """List every user as ``{_id, username}``."""
    return await UserService.list_users(db)
