"""
Pydantic schemas for member payloads.

JSON bodies use camelCase keys (``membershipType``, ``joiningDate``)
while Python code and the database use snake_case; the alias generator
translates between the two and both spellings are accepted on input.

The write schemas only describe the *shape* of a request.  Every field
is optional at this level so that an incomplete body reaches the
repository, which reports the offending field with a readable message
instead of the framework's generic 422 response.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from gym_members_api.app.models.member import MembershipType


class MemberCreate(BaseModel):
    """Schema for ``POST /api/members``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    membership_type: Optional[str] = None
    active: Optional[bool] = None
    joining_date: Optional[datetime] = None


class MemberUpdate(BaseModel):
    """Schema for ``PUT /api/members/{id}``.

    Only the keys present in the body are applied; use
    ``model_dump(exclude_unset=True)`` to obtain them.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    membership_type: Optional[str] = None
    active: Optional[bool] = None
    joining_date: Optional[datetime] = None


class MemberRead(BaseModel):
    """Schema for a persisted member returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    name: str
    email: str
    phone: str
    membership_type: MembershipType
    joining_date: datetime
    active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("joining_date", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite drops tzinfo; stored values are always UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
