"""
Exercise endpoints.

``POST /users/{_id}/exercises`` logs an exercise from a urlencoded
form; ``GET /users/{_id}/logs`` returns the user's log, optionally
restricted by ``from``/``to`` (YYYY-MM-DD, inclusive) and capped by
``limit``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query

from exercise_tracker.app.core.db import Database, get_database
from exercise_tracker.app.schemas.exercise import ExerciseCreate, ExerciseRead
from exercise_tracker.app.schemas.log import LogQuery, LogRead
from exercise_tracker.app.services.exercise_service import ExerciseService

router = APIRouter()


@router.post("/{_id}/exercises", response_model=ExerciseRead)
async def log_exercise(
    _id: str,
    description: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    db: Database = Depends(get_database),
) -> ExerciseRead:
    """Log an exercise for the user.

    ``duration`` must be an integer.  When ``date`` is omitted the
    current date is used.
    """
    data = ExerciseCreate.from_form(description, duration, date)
    return await ExerciseService.log_exercise(db, _id, data)


@router.get("/{_id}/logs", response_model=LogRead)
async def get_log(
    _id: str,
    from_: Optional[str] = Query(None, alias="from", description="Earliest date (YYYY-MM-DD)"),
    to: Optional[str] = Query(None, description="Latest date (YYYY-MM-DD)"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    db: Database = Depends(get_database),
) -> LogRead:
    """Return the user's exercise log.

    A missing or non-numeric ``limit`` returns every matching entry.
    """
    query = LogQuery.from_params(_id, date_from=from_, date_to=to, limit=limit)
    return await ExerciseService.fetch_log(db, query)
