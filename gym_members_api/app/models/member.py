import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String

from gym_members_api.app.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MembershipType(str, enum.Enum):
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


class Member(Base):
    __tablename__ = "members"

    # sqlite_autoincrement keeps ids of deleted rows from being handed out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(255), nullable=False)
    membership_type = Column(
        Enum(
            MembershipType,
            name="membership_type",
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
        default=MembershipType.BASIC,
    )
    joining_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> dict:
        """Snapshot of the row's column values, keyed by attribute name."""
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}

    def __repr__(self) -> str:
        return f"<Member id={self.id} email={self.email!r}>"
