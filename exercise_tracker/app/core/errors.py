"""
Errors reported to API clients.

Every failure a handler can run into is converted to one of the
``TrackerError`` subclasses below.  The application renders them all the
same way, as ``{"error": <message>}`` with status 200, so clients tell
them apart only by the message text.
"""

from typing import Any, Dict, Sequence


class TrackerError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PersistenceError(TrackerError):
    """A read or write against the store failed."""


class NotFoundError(TrackerError):
    """A referenced user does not exist."""


class ValidationError(TrackerError):
    """Request input could not be coerced to the expected type."""

    @classmethod
    def from_errors(cls, errors: Sequence[Dict[str, Any]]) -> "ValidationError":
        """Build an error from pydantic/FastAPI error dicts.

        Only the first problem is reported, e.g. ``"invalid duration:
        must be an integer"``.
        """
        return cls(describe_errors(errors))


def describe_errors(errors: Sequence[Dict[str, Any]]) -> str:
    if not errors:
        return "invalid input"
    error = errors[0]
    loc = error.get("loc") or ("input",)
    field = loc[-1]
    # Validators raise ValueError; pydantic keeps the original exception
    # under ``ctx`` and prefixes ``msg`` with "Value error, ".
    reason = (error.get("ctx") or {}).get("error") or error.get("msg") or "invalid value"
    return f"invalid {field}: {reason}"
