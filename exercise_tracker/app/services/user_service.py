"""
Business logic for users.

Users are created with a running exercise ``count`` of
``INITIAL_EXERCISE_COUNT``; the count is only ever changed by
``ExerciseService.log_exercise``.
"""

import logging
import uuid
from typing import List, Optional

from ..core.db import Database
from ..schemas.user import UserCreate, UserRead, UserRecord

logger = logging.getLogger(__name__)

INITIAL_EXERCISE_COUNT = 0


class UserService:
    """Operations on the user directory."""

    @classmethod
    async def create_user(cls, db: Database, data: UserCreate) -> UserRead:
        """Store a new user and return its identifier and username.

        Raises ``PersistenceError`` when the write fails.
        """
        logger.info("Registering user %s", data.username)
        user_id = uuid.uuid4().hex

        def insert() -> None:
            with db.cursor("new user save failed") as cursor:
                cursor.execute(
                    "INSERT INTO users (id, username, count) VALUES (?, ?, ?)",
                    (user_id, data.username, INITIAL_EXERCISE_COUNT),
                )

        await db.run(insert)
        return UserRead(id=user_id, username=data.username)

    @classmethod
    async def list_users(cls, db: Database) -> List[UserRead]:
        """Return all users in creation order, without their counts."""

        def select() -> List[UserRead]:
            with db.cursor("user list failed") as cursor:
                rows = cursor.execute(
                    "SELECT id, username FROM users ORDER BY rowid ASC"
                ).fetchall()
            return [UserRead(id=row["id"], username=row["username"]) for row in rows]

        return await db.run(select)

    @classmethod
    async def get_user(
        cls, db: Database, user_id: str, failure: str = "user lookup failed"
    ) -> Optional[UserRecord]:
        """Retrieve a user by ID, or ``None`` when it does not exist."""

        def select() -> Optional[UserRecord]:
            with db.cursor(failure) as cursor:
                row = cursor.execute(
                    "SELECT id, username, count FROM users WHERE id = ?",
                    (user_id,),
                ).fetchone()
            if row is None:
                return None
            return UserRecord(id=row["id"], username=row["username"], count=row["count"])

        return await db.run(select)
