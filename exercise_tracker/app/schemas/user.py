"""
Pydantic models for user data.

The API exposes the identifier as ``_id``.  Pydantic does not allow
field names with a leading underscore, so the field is called ``id``
and serialised through an alias; FastAPI renders response models by
alias.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user.

    The username is neither checked for emptiness nor for uniqueness.
    """

    username: str = Field(..., examples=["alice"])


class UserRead(BaseModel):
    """Schema for a user as returned by the API (``count`` is never exposed)."""

    id: str = Field(..., alias="_id", examples=["5f0c6b0e8e3f4a2b9c1d2e3f4a5b6c7d"])
    username: str

    model_config = {
        "populate_by_name": True,
    }


class UserRecord(UserRead):
    """Full stored user, including the running exercise count."""

    count: int = 0
