"""
Pydantic models for the exercise log endpoint.
"""

import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as SchemaValidationError

from ..core.errors import ValidationError
from .exercise import parse_date, parse_limit


class LogQuery(BaseModel):
    """Parameters of a log lookup.

    ``date_from`` and ``date_to`` are inclusive bounds; either may be
    omitted.  ``limit`` is ``None`` for an uncapped lookup.
    """

    user_id: str
    date_from: Optional[datetime.date] = None
    date_to: Optional[datetime.date] = None
    limit: Optional[int] = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _coerce_bound(cls, value: Any) -> Optional[datetime.date]:
        if value is None or isinstance(value, datetime.date):
            return value
        if not str(value).strip():
            return None
        return parse_date(str(value))

    @classmethod
    def from_params(
        cls,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "LogQuery":
        """Build a query from raw query-string values.

        Unreadable dates raise ``ValidationError``; an unreadable limit
        silently means "no cap".
        """
        try:
            return cls(
                user_id=user_id,
                date_from=date_from,
                date_to=date_to,
                limit=parse_limit(limit),
            )
        except SchemaValidationError as exc:
            errors = exc.errors()
            # Report the query-string names rather than the field names.
            for error in errors:
                loc = tuple(error.get("loc") or ())
                if loc == ("date_from",):
                    error["loc"] = ("from",)
                elif loc == ("date_to",):
                    error["loc"] = ("to",)
            raise ValidationError.from_errors(errors) from exc


class LogEntry(BaseModel):
    description: str
    duration: int
    date: str = Field(..., examples=["Thu Jan 05 2023"])


class LogRead(BaseModel):
    """A user's exercise log."""

    username: str
    count: int
    id: str = Field(..., alias="_id")
    log: List[LogEntry]

    model_config = {
        "populate_by_name": True,
    }
