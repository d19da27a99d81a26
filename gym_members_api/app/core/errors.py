"""
Domain errors raised by the member repository.

The API layer maps each class to an HTTP status: validation and
duplicate‑email failures become 400, a missing record 404 and a storage
failure 500.  All of them carry a human readable message in ``str(exc)``.
"""

from typing import Optional


class MemberError(Exception):
    """Base class for all member record errors."""


class ValidationError(MemberError):
    """A required field is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class DuplicateEmail(MemberError):
    """Another member already uses the given email address."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already registered")
        self.email = email


class NotFound(MemberError):
    """No member exists with the given id."""

    def __init__(self, member_id: int) -> None:
        super().__init__(f"Member with id {member_id} not found")
        self.member_id = member_id


class StorageUnavailable(MemberError):
    """The database could not be reached or rejected the statement."""

    def __init__(self, message: str = "Database unavailable", cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause
