"""
Repository for gym member records.

``MemberRepository`` is the only component that reads or writes the
``members`` table.  It receives a SQLAlchemy ``Session`` from its caller
(one per request) and exposes five operations: ``list_all``,
``get_by_id``, ``create``, ``update`` and ``delete``.

Writes are validated before anything is sent to the database:

* ``name``, ``email`` and ``phone`` must be present and not blank;
* ``email`` must be a syntactically valid address (checked with
  ``email-validator``, without DNS lookups; ``.test`` domains are
  accepted, other special-use names such as ``localhost`` or
  ``.invalid`` are not) and unused by any other member;
* ``membership_type`` must be one of Basic, Standard or Premium;
* ``active`` must be a boolean.

A rejected write raises ``ValidationError`` or ``DuplicateEmail`` and
leaves the table untouched.  Each successful write is a single commit;
if the commit fails the session is rolled back and the failure is
reported as ``StorageUnavailable`` (or ``DuplicateEmail`` when the
unique constraint on ``email`` fired because of a concurrent insert).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gym_members_api.app.core.errors import (
    DuplicateEmail,
    NotFound,
    StorageUnavailable,
    ValidationError,
)
from gym_members_api.app.models.member import Member, MembershipType, utcnow

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = (
    ("name", "Name is required"),
    ("email", "Email is required"),
    ("phone", "Phone number is required"),
)

MEMBERSHIP_TYPE_MESSAGE = "Membership type must be Basic, Standard, or Premium"

# Attributes a caller may set.  ``id``, ``created_at`` and ``updated_at``
# are managed here and silently ignored when supplied.
WRITABLE_FIELDS = ("name", "email", "phone", "membership_type", "active", "joining_date")


class MemberRepository:
    """Create, read, update and delete members through one session."""

    def __init__(self, session: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.session = session
        self._clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_all(self) -> List[Member]:
        """Return every member in primary key order."""
        try:
            return list(self.session.scalars(select(Member).order_by(Member.id)))
        except SQLAlchemyError as exc:
            raise self._storage_failure("list members", exc) from exc

    def get_by_id(self, member_id: int) -> Member:
        """Return the member with ``member_id`` or raise ``NotFound``."""
        try:
            member = self.session.get(Member, member_id)
        except SQLAlchemyError as exc:
            raise self._storage_failure(f"load member {member_id}", exc) from exc
        if member is None:
            raise NotFound(member_id)
        return member

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, fields: Mapping[str, Any]) -> Member:
        """Validate ``fields`` and insert a new member.

        Omitted ``membership_type``, ``active`` and ``joining_date`` fall
        back to Basic, ``True`` and the current time.
        """
        now = self._clock()
        values: Dict[str, Any] = {
            "membership_type": MembershipType.BASIC,
            "active": True,
            "joining_date": now,
        }
        values.update(self._writable(fields))
        values = self._validate(values)
        self._ensure_email_free(values["email"])

        member = Member(**values, created_at=now, updated_at=now)
        self.session.add(member)
        self._commit("create member", email=values["email"])
        self._reload(member, "reload created member")
        logger.info("Created member %s (%s)", member.id, member.email)
        return member

    def update(self, member_id: int, fields: Mapping[str, Any]) -> Member:
        """Apply the supplied ``fields`` to an existing member.

        The merged record is validated with the same rules as
        ``create``.  ``updated_at`` is refreshed; ``id`` and
        ``created_at`` never change.
        """
        member = self.get_by_id(member_id)
        changes = self._writable(fields)
        current = {name: getattr(member, name) for name in WRITABLE_FIELDS}
        values = self._validate({**current, **changes})
        self._ensure_email_free(values["email"], exclude_id=member.id)

        for name, value in values.items():
            setattr(member, name, value)
        member.updated_at = self._clock()
        self._commit(f"update member {member_id}", email=values["email"])
        self._reload(member, f"reload member {member_id}")
        logger.info("Updated member %s (fields: %s)", member_id, ", ".join(sorted(changes)) or "none")
        return member

    def delete(self, member_id: int) -> Dict[str, Any]:
        """Remove a member and return its last known column values."""
        member = self.get_by_id(member_id)
        snapshot = member.to_dict()
        self.session.delete(member)
        self._commit(f"delete member {member_id}")
        logger.info("Deleted member %s (%s)", member_id, snapshot["email"])
        return snapshot

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _writable(fields: Mapping[str, Any]) -> Dict[str, Any]:
        return {name: value for name, value in fields.items() if name in WRITABLE_FIELDS}

    @staticmethod
    def _validate(values: Dict[str, Any]) -> Dict[str, Any]:
        """Return a cleaned copy of ``values`` or raise ``ValidationError``."""
        cleaned = dict(values)
        for field, message in REQUIRED_TEXT_FIELDS:
            value = cleaned.get(field)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(field, message)
            cleaned[field] = value.strip()

        try:
            validate_email(cleaned["email"], check_deliverability=False, test_environment=True)
        except EmailNotValidError as exc:
            raise ValidationError("email", "Please provide a valid email") from exc

        membership_type = cleaned.get("membership_type")
        try:
            cleaned["membership_type"] = MembershipType(membership_type)
        except ValueError as exc:
            raise ValidationError("membership_type", MEMBERSHIP_TYPE_MESSAGE) from exc

        if not isinstance(cleaned.get("active"), bool):
            raise ValidationError("active", "Active must be true or false")
        if not isinstance(cleaned.get("joining_date"), datetime):
            raise ValidationError("joining_date", "Joining date must be a valid date")
        return cleaned

    def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        statement = select(Member.id).where(Member.email == email)
        if exclude_id is not None:
            statement = statement.where(Member.id != exclude_id)
        try:
            taken = self.session.scalars(statement).first()
        except SQLAlchemyError as exc:
            raise self._storage_failure("check email uniqueness", exc) from exc
        if taken is not None:
            logger.warning("Rejected write: email %s already used by member %s", email, taken)
            raise DuplicateEmail(email)

    def _commit(self, action: str, email: Optional[str] = None) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if email is None:
                raise self._storage_failure(action, exc) from exc
            # The only unique constraint besides the primary key is on email.
            logger.warning("Rejected write: email %s already registered (%s)", email, action)
            raise DuplicateEmail(email) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._storage_failure(action, exc) from exc

    def _reload(self, member: Member, action: str) -> None:
        try:
            self.session.refresh(member)
        except SQLAlchemyError as exc:
            raise self._storage_failure(action, exc) from exc

    @staticmethod
    def _storage_failure(action: str, exc: SQLAlchemyError) -> StorageUnavailable:
        logger.exception("Database error while trying to %s", action)
        return StorageUnavailable(cause=exc)
