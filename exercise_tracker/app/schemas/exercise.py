"""
Pydantic models and coercion rules for exercise entries.

Form input arrives as strings.  ``ExerciseCreate`` turns it into typed
values and fails closed: a duration that is not an integer or a date
that cannot be read is rejected with a ``ValidationError`` instead of
being stored as an invalid value.

Dates are stored as ISO ``YYYY-MM-DD`` strings and rendered to clients
as calendar strings such as ``Thu Jan 05 2023``.
"""

import datetime
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as SchemaValidationError

from ..core.errors import ValidationError

CALENDAR_FORMAT = "%a %b %d %Y"

# Accepted spellings for a calendar date besides ISO 8601.
DATE_INPUT_FORMATS = (
    CALENDAR_FORMAT,
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
)

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")

# SQLite stores integers as signed 64-bit values.
SQLITE_MAX_INTEGER = 2**63 - 1


def parse_date(value: str) -> datetime.date:
    """Parse a calendar date.

    ISO dates (``2023-01-05``) and ISO datetimes (``2023-01-05T10:00:00``)
    are accepted, as well as the formats in ``DATE_INPUT_FORMATS``.
    Raises ``ValueError`` for anything else.
    """
    text = value.strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"'{value}' is not a valid date")


def format_calendar_date(value: datetime.date) -> str:
    """Render a date as ``Thu Jan 05 2023``; the year is always four digits."""
    return f"{value.strftime('%a %b %d')} {value.year:04d}"


def parse_limit(value: Optional[str]) -> Optional[int]:
    """Read a result cap the way ``parseInt`` reads a number.

    The leading integer of the string is used (``"2"``, ``" 2"`` and
    ``"2abc"`` all give 2).  Missing, non-numeric and non-positive
    values mean "no cap" and return ``None``, as do values too large
    to store.
    """
    if value is None:
        return None
    match = _INTEGER_PREFIX.match(str(value))
    if not match:
        return None
    digits = match.group(1)
    if len(digits.lstrip("+-")) > len(str(SQLITE_MAX_INTEGER)):
        return None
    limit = int(digits)
    return limit if 0 < limit <= SQLITE_MAX_INTEGER else None


class ExerciseCreate(BaseModel):
    """Typed input for logging an exercise."""

    description: str = ""
    duration: int
    date: datetime.date

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("must be an integer")
        if value is None or (not isinstance(value, int) and str(value).strip() == ""):
            raise ValueError("is required")
        try:
            duration = int(str(value).strip())
        except ValueError:
            raise ValueError("must be an integer") from None
        if abs(duration) > SQLITE_MAX_INTEGER:
            raise ValueError("is out of range")
        return duration

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> datetime.date:
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        return parse_date(str(value))

    @classmethod
    def from_form(
        cls,
        description: Optional[str],
        duration: Optional[str],
        date: Optional[str] = None,
        today: Optional[datetime.date] = None,
    ) -> "ExerciseCreate":
        """Build the record from raw form fields.

        An absent or empty ``date`` resolves to ``today`` (the current
        local date unless given).  Coercion failures raise
        ``ValidationError``.
        """
        if date is None or not date.strip():
            resolved_date: Any = today or datetime.date.today()
        else:
            resolved_date = date
        try:
            return cls(description=description, duration=duration, date=resolved_date)
        except SchemaValidationError as exc:
            raise ValidationError.from_errors(exc.errors()) from exc


class ExerciseRead(BaseModel):
    """Response for a freshly logged exercise."""

    username: str
    description: str
    duration: int
    date: str = Field(..., examples=["Thu Jan 05 2023"])
    id: str = Field(..., alias="_id")

    model_config = {
        "populate_by_name": True,
    }
