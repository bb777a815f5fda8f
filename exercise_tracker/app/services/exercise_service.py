"""
Business logic for exercise entries and logs.

Logging an exercise touches both tables: the user is resolved, the
exercise inserted and the user's ``count`` incremented.  All three
steps share one transaction, and an unknown user is rejected before
anything is written, so no exercise can reference a missing user and
``count`` always matches the number of stored exercises.

Fetching a log issues the user lookup and the exercise lookup
concurrently and composes the response only after both have finished.
"""

import asyncio
import datetime
import logging

from ..core.db import Database
from ..core.errors import NotFoundError
from ..schemas.exercise import ExerciseCreate, ExerciseRead, format_calendar_date
from ..schemas.log import LogEntry, LogQuery, LogRead
from .log_query import build_log_query
from .user_service import UserService

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "user not found"


class ExerciseService:
    """Operations on the exercise ledger."""

    @classmethod
    async def log_exercise(cls, db: Database, user_id: str, data: ExerciseCreate) -> ExerciseRead:
        """Record an exercise for a user and bump the user's count.

        Raises ``NotFoundError`` when the user does not exist and
        ``PersistenceError`` when any step fails; in both cases nothing
        is persisted.
        """

        def write() -> ExerciseRead:
            with db.cursor("new exercise record save failed", immediate=True) as cursor:
                user = cursor.execute(
                    "SELECT id, username FROM users WHERE id = ?", (user_id,)
                ).fetchone()
                if user is None:
                    logger.warning("Exercise rejected: user %s not found", user_id)
                    raise NotFoundError(USER_NOT_FOUND)
                cursor.execute(
                    "INSERT INTO exercises (user_id, description, duration, date) VALUES (?, ?, ?, ?)",
                    (user_id, data.description, data.duration, data.date.isoformat()),
                )
                # Increment in place so concurrent logs do not lose updates.
                cursor.execute("UPDATE users SET count = count + 1 WHERE id = ?", (user_id,))
            logger.info("Logged exercise %r for user %s", data.description, user_id)
            return ExerciseRead(
                username=user["username"],
                description=data.description,
                duration=data.duration,
                date=format_calendar_date(data.date),
                id=user["id"],
            )

        return await db.run(write)

    @classmethod
    async def fetch_log(cls, db: Database, query: LogQuery) -> LogRead:
        """Return the user's exercises matching ``query``.

        ``count`` in the result is the stored total for the user, not the
        number of entries returned.  Raises ``NotFoundError`` for an
        unknown user and ``PersistenceError`` if either lookup fails.
        """
        sql, params = build_log_query(query)

        def select_exercises():
            with db.cursor("exercise log lookup failed") as cursor:
                return cursor.execute(sql, params).fetchall()

        user, rows = await asyncio.gather(
            UserService.get_user(db, query.user_id, failure="exercise log lookup failed"),
            db.run(select_exercises),
        )
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        log = [
            LogEntry(
                description=row["description"],
                duration=row["duration"],
                date=format_calendar_date(datetime.date.fromisoformat(row["date"])),
            )
            for row in rows
        ]
        return LogRead(username=user.username, count=user.count, id=user.id, log=log)
