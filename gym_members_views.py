"""Screens of the gym member browser client.

Each screen is a function that talks to the API through
:class:`gym_members_client.GymMembersAPI` and returns a
:class:`ViewState` describing what should be drawn: a loading
placeholder, an error message, an empty list, or the data itself.  The
Streamlit page in ``gym_members_web.py`` only renders these states, so
the behaviour of the client can be exercised without a browser.

Screens:

* list – all members, optionally filtered by a search term;
* create form – a blank :class:`MemberForm` that is validated locally
  and posted to the API;
* edit form – the member's current values, validated locally and sent
  with ``PUT``;
* detail – every field of one member.

Nothing is cached between screens: every screen fetches fresh data when
it is shown.

The form checks below are independent of the server's rules.  The
API still validates every write on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from gym_members_client import GymMembersAPI, describe_error

HOME = "home"
LIST = "list"
CREATE = "create"
EDIT = "edit"
DETAIL = "detail"

LOADING = "loading"
READY = "ready"
EMPTY = "empty"
ERROR = "error"

MEMBERSHIP_TYPES = ("Basic", "Standard", "Premium")

# Accepts the same addresses as the browser pattern
# ^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$ without its nested
# quantifiers, so a near miss fails without exponential backtracking.
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$", re.ASCII)


@dataclass
class ViewState:
    """What a screen should display after its data has been loaded.

    Attributes:
        status: One of ``loading``, ``ready``, ``empty`` or ``error``.
        data: The member, member list or form backing the screen.
        message: Error text shown inline above the screen content.
        field_errors: Per‑field form errors keyed by form field name.
        notice: Success text to show after a completed action.
        redirect: Screen to navigate to next, if the action finished.
        caption: Secondary text drawn with the screen (counts, hints).
    """

    status: str = LOADING
    data: Any = None
    message: Optional[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)
    notice: Optional[str] = None
    redirect: Optional[str] = None
    caption: Optional[str] = None


@dataclass
class MemberForm:
    """Values of the create/edit member form."""

    name: str = ""
    email: str = ""
    phone: str = ""
    membership_type: str = "Basic"
    active: bool = True

    @classmethod
    def from_member(cls, member: Dict[str, Any]) -> "MemberForm":
        return cls(
            name=member.get("name") or "",
            email=member.get("email") or "",
            phone=member.get("phone") or "",
            membership_type=member.get("membershipType") or "Basic",
            active=bool(member.get("active", True)),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "membershipType": self.membership_type,
            "active": self.active,
        }


def validate_member_form(form: MemberForm) -> Dict[str, str]:
    """Return form errors keyed by field; an empty dict means valid."""
    errors: Dict[str, str] = {}
    if not form.name.strip():
        errors["name"] = "Name is required"
    email = form.email.strip()
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email address"
    if not form.phone.strip():
        errors["phone"] = "Phone number is required"
    return errors


def filter_members(members: List[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """Case-insensitive match of ``term`` against name, email and membership type."""
    needle = term.strip().lower()
    if not needle:
        return list(members)
    return [
        member
        for member in members
        if needle in (member.get("name") or "").lower()
        or needle in (member.get("email") or "").lower()
        or needle in (member.get("membershipType") or "").lower()
    ]


def format_date(value: Optional[str]) -> str:
    """Format an ISO timestamp from the API as ``January 5, 2025``."""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


# ----------------------------------------------------------------------
# Screens
# ----------------------------------------------------------------------
def list_view(api: GymMembersAPI, search: str = "") -> ViewState:
    members, error = api.list_members()
    if error:
        return ViewState(status=ERROR, message="Failed to fetch members. Please try again later.")
    matches = filter_members(members, search)
    if not matches:
        hint = "Try a different search term or add a new member." if search.strip() else "Add a new member."
        return ViewState(status=EMPTY, data=[], caption=f"No members found. {hint}")
    return ViewState(status=READY, data=matches, caption=f"Showing {len(matches)} members")


def detail_view(api: GymMembersAPI, member_id: Any) -> ViewState:
    member, error = api.get_member(member_id)
    if error:
        return ViewState(status=ERROR, message=f"Failed to load member data. {describe_error(error)}")
    return ViewState(status=READY, data=member)


def create_form_view() -> ViewState:
    return ViewState(status=READY, data=MemberForm())


def submit_create(api: GymMembersAPI, form: MemberForm) -> ViewState:
    """Validate locally, then post the form.  Redirects to the list on success."""
    errors = validate_member_form(form)
    if errors:
        return ViewState(status=READY, data=form, field_errors=errors)
    _, error = api.create_member(form.to_payload())
    if error:
        return ViewState(status=READY, data=form, message=describe_error(error))
    return ViewState(status=READY, notice="Member added successfully!", redirect=LIST)


def edit_form_view(api: GymMembersAPI, member_id: Any) -> ViewState:
    member, error = api.get_member(member_id)
    if error:
        return ViewState(status=ERROR, message=f"Failed to load member data. {describe_error(error)}")
    return ViewState(status=READY, data=MemberForm.from_member(member))


def submit_edit(api: GymMembersAPI, member_id: Any, form: MemberForm) -> ViewState:
    """Validate locally, then send the form with ``PUT``."""
    errors = validate_member_form(form)
    if errors:
        return ViewState(status=READY, data=form, field_errors=errors)
    _, error = api.update_member(member_id, form.to_payload())
    if error:
        return ViewState(status=READY, data=form, message=describe_error(error))
    return ViewState(status=READY, notice="Member updated successfully!", redirect=LIST)


def delete_action(api: GymMembersAPI, member_id: Any) -> ViewState:
    removed, error = api.delete_member(member_id)
    if error:
        return ViewState(status=ERROR, message=f"Failed to delete member. {describe_error(error)}")
    name = removed.get("name") if removed else None
    notice = f"Member {name} deleted successfully" if name else "Member deleted successfully"
    return ViewState(status=READY, data=removed, notice=notice, redirect=LIST)
