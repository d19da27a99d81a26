"""
Tests for the browser client's screens, run against a stub API.
"""

import time

import pytest

from gym_members_views import (
    EMPTY,
    ERROR,
    LIST,
    READY,
    MemberForm,
    create_form_view,
    delete_action,
    detail_view,
    edit_form_view,
    filter_members,
    format_date,
    list_view,
    submit_create,
    submit_edit,
    validate_member_form,
)

JANE = {
    "id": 1,
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "555-1234",
    "membershipType": "Basic",
    "active": True,
    "joiningDate": "2025-01-15T09:00:00Z",
    "createdAt": "2025-01-15T09:00:00Z",
    "updatedAt": "2025-01-15T09:00:00Z",
}
JOHN = {**JANE, "id": 2, "name": "John Roe", "email": "john@gym.org", "membershipType": "Premium"}

NOT_FOUND = {"status_code": 404, "message": "Member with id 9 not found", "error": None}
UNREACHABLE = {"status_code": None, "message": "Could not reach the Gym Management API", "error": "refused"}


class StubAPI:
    """Records calls and answers with canned ``(data, error)`` tuples."""

    def __init__(self, members=None, error=None):
        self.members = list(members or [])
        self.error = error
        self.calls = []

    def list_members(self):
        self.calls.append(("list",))
        if self.error:
            return [], self.error
        return list(self.members), None

    def get_member(self, member_id):
        self.calls.append(("get", member_id))
        if self.error:
            return None, self.error
        return next(m for m in self.members if m["id"] == member_id), None

    def create_member(self, payload):
        self.calls.append(("create", payload))
        if self.error:
            return None, self.error
        return {**JANE, **payload}, None

    def update_member(self, member_id, payload):
        self.calls.append(("update", member_id, payload))
        if self.error:
            return None, self.error
        return {**JANE, **payload, "id": member_id}, None

    def delete_member(self, member_id):
        self.calls.append(("delete", member_id))
        if self.error:
            return None, self.error
        return next(m for m in self.members if m["id"] == member_id), None


def valid_form(**overrides) -> MemberForm:
    values = {"name": "Jane Doe", "email": "jane@example.com", "phone": "555-1234"}
    values.update(overrides)
    return MemberForm(**values)


class TestFormValidation:
    def test_valid_form_has_no_errors(self):
        assert validate_member_form(valid_form()) == {}

    def test_blank_form_reports_every_required_field(self):
        errors = validate_member_form(MemberForm())

        assert errors == {
            "name": "Name is required",
            "email": "Email is required",
            "phone": "Phone number is required",
        }

    @pytest.mark.parametrize("email", ["jane", "jane@", "jane@example", "jane@example.museum", "jané@example.com"])
    def test_malformed_email(self, email):
        assert validate_member_form(valid_form(email=email)) == {"email": "Please enter a valid email address"}

    @pytest.mark.parametrize("email", ["jane.doe@example.com", "j-d@mail.example.org", "jane_doe@gym.io"])
    def test_accepted_email(self, email):
        assert validate_member_form(valid_form(email=email)) == {}

    @pytest.mark.parametrize("email", ["a" * 5000 + "!", "a" * 5000 + "@" + "b" * 5000 + "!", "a-" * 2000 + "@x"])
    def test_long_near_miss_email_is_rejected_quickly(self, email):
        started = time.perf_counter()

        errors = validate_member_form(valid_form(email=email))

        assert errors == {"email": "Please enter a valid email address"}
        assert time.perf_counter() - started < 1.0


class TestHelpers:
    def test_filter_matches_name_email_and_membership(self):
        members = [JANE, JOHN]

        assert filter_members(members, "jane") == [JANE]
        assert filter_members(members, "GYM.ORG") == [JOHN]
        assert filter_members(members, "premium") == [JOHN]
        assert filter_members(members, "  ") == members
        assert filter_members(members, "nobody") == []

    def test_format_date(self):
        assert format_date("2025-01-05T10:00:00Z") == "January 5, 2025"
        assert format_date("2024-12-31T23:59:59+00:00") == "December 31, 2024"
        assert format_date(None) == "N/A"
        assert format_date("") == "N/A"
        assert format_date("someday") == "someday"

    def test_form_round_trips_member_fields(self):
        form = MemberForm.from_member(JOHN)

        assert form == MemberForm("John Roe", "john@gym.org", "555-1234", "Premium", True)
        assert form.to_payload() == {
            "name": "John Roe",
            "email": "john@gym.org",
            "phone": "555-1234",
            "membershipType": "Premium",
            "active": True,
        }


class TestListView:
    def test_ready_with_members(self):
        state = list_view(StubAPI([JANE, JOHN]))

        assert state.status == READY
        assert state.data == [JANE, JOHN]
        assert state.caption == "Showing 2 members"

    def test_empty_when_no_members(self):
        state = list_view(StubAPI([]))

        assert state.status == EMPTY
        assert state.data == []
        assert state.caption == "No members found. Add a new member."

    def test_empty_when_search_matches_nothing(self):
        state = list_view(StubAPI([JANE]), search="zzz")

        assert state.status == EMPTY
        assert state.caption == "No members found. Try a different search term or add a new member."

    def test_search_narrows_list(self):
        state = list_view(StubAPI([JANE, JOHN]), search="john")

        assert state.data == [JOHN]
        assert state.caption == "Showing 1 members"

    def test_error_when_api_fails(self):
        state = list_view(StubAPI(error=UNREACHABLE))

        assert state.status == ERROR
        assert state.message == "Failed to fetch members. Please try again later."


class TestDetailAndEdit:
    def test_detail_shows_member(self):
        api = StubAPI([JANE])

        state = detail_view(api, 1)

        assert state.status == READY
        assert state.data == JANE
        assert api.calls == [("get", 1)]

    def test_detail_error_includes_reason(self):
        state = detail_view(StubAPI(error=NOT_FOUND), 9)

        assert state.status == ERROR
        assert state.message == "Failed to load member data. Member with id 9 not found"

    def test_edit_form_is_prefilled(self):
        state = edit_form_view(StubAPI([JOHN]), 2)

        assert state.status == READY
        assert state.data.name == "John Roe"
        assert state.data.membership_type == "Premium"

    def test_edit_form_load_failure(self):
        state = edit_form_view(StubAPI(error=UNREACHABLE), 2)

        assert state.status == ERROR
        assert state.message.startswith("Failed to load member data.")


class TestSubmit:
    def test_create_form_starts_blank(self):
        state = create_form_view()

        assert state.status == READY
        assert state.data == MemberForm()

    def test_invalid_create_does_not_call_api(self):
        api = StubAPI()

        state = submit_create(api, valid_form(name=""))

        assert state.field_errors == {"name": "Name is required"}
        assert state.redirect is None
        assert api.calls == []

    def test_successful_create_redirects_to_list(self):
        api = StubAPI()

        state = submit_create(api, valid_form(membership_type="Standard"))

        assert state.notice == "Member added successfully!"
        assert state.redirect == LIST
        assert api.calls == [
            (
                "create",
                {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "phone": "555-1234",
                    "membershipType": "Standard",
                    "active": True,
                },
            )
        ]

    def test_server_rejection_is_shown_inline(self):
        duplicate = {
            "status_code": 400,
            "message": "Failed to create member",
            "error": "Email jane@example.com is already registered",
        }

        state = submit_create(StubAPI(error=duplicate), valid_form())

        assert state.redirect is None
        assert state.message == "Failed to create member: Email jane@example.com is already registered"
        assert state.data == valid_form()

    def test_successful_edit_redirects_to_list(self):
        api = StubAPI()

        state = submit_edit(api, 1, valid_form(active=False))

        assert state.notice == "Member updated successfully!"
        assert state.redirect == LIST
        assert api.calls[0][0:2] == ("update", 1)
        assert api.calls[0][2]["active"] is False

    def test_invalid_edit_does_not_call_api(self):
        api = StubAPI()

        state = submit_edit(api, 1, valid_form(email="bad"))

        assert "email" in state.field_errors
        assert api.calls == []


class TestDelete:
    def test_delete_names_removed_member(self):
        state = delete_action(StubAPI([JANE]), 1)

        assert state.notice == "Member Jane Doe deleted successfully"
        assert state.redirect == LIST

    def test_delete_failure(self):
        state = delete_action(StubAPI(error=NOT_FOUND), 9)

        assert state.status == ERROR
        assert state.redirect is None
        assert state.message == "Failed to delete member. Member with id 9 not found"
