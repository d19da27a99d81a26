from .member import Member, MembershipType

__all__ = [
    "Member",
    "MembershipType",
]
