"""Single-page browser client for the Gym Management API.

Run with::

    streamlit run gym_members_web.py

The page shows one screen at a time (home, list, create, edit, detail).
Only the current screen name and the selected member id are kept in
``st.session_state``; every screen fetches its data from the API again
when it is displayed.  The API location is read from ``GYM_API_URL``.
"""

import streamlit as st

from gym_members_api.app.core.config import settings
from gym_members_client import GymMembersAPI
from gym_members_views import (
    CREATE,
    DETAIL,
    EDIT,
    EMPTY,
    ERROR,
    HOME,
    LIST,
    MEMBERSHIP_TYPES,
    MemberForm,
    ViewState,
    create_form_view,
    delete_action,
    detail_view,
    edit_form_view,
    format_date,
    list_view,
    submit_create,
    submit_edit,
)

st.set_page_config(page_title="Gym Management System", layout="wide")

if "screen" not in st.session_state:
    st.session_state.screen = HOME
if "member_id" not in st.session_state:
    st.session_state.member_id = None


@st.cache_resource
def get_api() -> GymMembersAPI:
    return GymMembersAPI(base_url=settings.api_url)


def navigate(screen: str, member_id=None) -> None:
    st.session_state.screen = screen
    st.session_state.member_id = member_id
    st.session_state.pop("confirm_delete", None)
    st.rerun()


def follow(state: ViewState) -> None:
    """Show the outcome of an action and move on if it finished."""
    if state.notice:
        st.toast(state.notice)
    if state.message:
        st.error(state.message)
    if state.redirect:
        navigate(state.redirect)


def navbar() -> None:
    col_home, col_list, col_add, _ = st.columns([1, 1, 1, 5])
    if col_home.button("Home", key="nav_home"):
        navigate(HOME)
    if col_list.button("Members", key="nav_list"):
        navigate(LIST)
    if col_add.button("Add Member", key="nav_add"):
        navigate(CREATE)
    st.divider()


def confirm_delete(member_id) -> None:
    """Two-step delete: ask first, delete on the second click."""
    if st.session_state.get("confirm_delete") != member_id:
        return
    st.warning("Are you sure you want to delete this member?")
    col_yes, col_no = st.columns(2)
    if col_yes.button("Yes, delete", key=f"confirm_yes_{member_id}"):
        st.session_state.pop("confirm_delete", None)
        follow(delete_action(get_api(), member_id))
    if col_no.button("Cancel", key=f"confirm_no_{member_id}"):
        st.session_state.pop("confirm_delete", None)
        st.rerun()


# ----------------------------------------------------------------------
# Screens
# ----------------------------------------------------------------------
def show_home() -> None:
    st.title("Gym Management System")
    st.write("Add, view, update and delete gym member records.")
    col_list, col_add = st.columns(2)
    if col_list.button("View All Members", use_container_width=True):
        navigate(LIST)
    if col_add.button("Add New Member", use_container_width=True):
        navigate(CREATE)


def show_list() -> None:
    st.header("Member Management")
    search = st.text_input("Search", placeholder="Search by name, email or membership type")
    with st.spinner("Loading members..."):
        state = list_view(get_api(), search)

    if state.status == ERROR:
        st.error(state.message)
        return
    if state.status == EMPTY:
        st.info(state.caption)
        if st.button("Add New Member", key="empty_add"):
            navigate(CREATE)
        return

    st.caption(state.caption)
    for member in state.data:
        cols = st.columns([3, 3, 2, 2, 1, 1, 1])
        cols[0].write(member["name"])
        cols[1].write(member["email"])
        cols[2].write(member["membershipType"])
        cols[3].write(format_date(member.get("joiningDate")))
        if cols[4].button("View", key=f"view_{member['id']}"):
            navigate(DETAIL, member["id"])
        if cols[5].button("Edit", key=f"edit_{member['id']}"):
            navigate(EDIT, member["id"])
        if cols[6].button("Delete", key=f"delete_{member['id']}"):
            st.session_state.confirm_delete = member["id"]
        confirm_delete(member["id"])


def member_form(form: MemberForm, key: str, field_errors: dict):
    """Draw the member form; return the submitted values or ``None``."""
    with st.form(key):
        name = st.text_input("Full Name", value=form.name)
        if "name" in field_errors:
            st.caption(f":red[{field_errors['name']}]")
        email = st.text_input("Email Address", value=form.email)
        if "email" in field_errors:
            st.caption(f":red[{field_errors['email']}]")
        phone = st.text_input("Phone Number", value=form.phone)
        if "phone" in field_errors:
            st.caption(f":red[{field_errors['phone']}]")
        membership_type = st.selectbox(
            "Membership Type",
            MEMBERSHIP_TYPES,
            index=MEMBERSHIP_TYPES.index(form.membership_type) if form.membership_type in MEMBERSHIP_TYPES else 0,
        )
        active = st.checkbox("Active Member", value=form.active)
        submitted = st.form_submit_button("Save Member")
    if not submitted:
        return None
    return MemberForm(name=name, email=email, phone=phone, membership_type=membership_type, active=active)


def show_create() -> None:
    st.header("Add New Member")
    state = create_form_view()
    errors = st.session_state.pop("form_errors", {})
    submitted = member_form(state.data, "create_member_form", errors)
    if submitted is None:
        return
    with st.spinner("Saving..."):
        result = submit_create(get_api(), submitted)
    if result.field_errors:
        st.session_state.form_errors = result.field_errors
        st.rerun()
    follow(result)


def show_edit(member_id) -> None:
    st.header("Edit Member")
    with st.spinner("Loading member details..."):
        state = edit_form_view(get_api(), member_id)
    if state.status == ERROR:
        st.error(state.message)
        return
    errors = st.session_state.pop("form_errors", {})
    submitted = member_form(state.data, f"edit_member_form_{member_id}", errors)
    if submitted is None:
        return
    with st.spinner("Saving..."):
        result = submit_edit(get_api(), member_id, submitted)
    if result.field_errors:
        st.session_state.form_errors = result.field_errors
        st.rerun()
    follow(result)


def show_detail(member_id) -> None:
    with st.spinner("Loading member details..."):
        state = detail_view(get_api(), member_id)
    if state.status == ERROR:
        st.error(state.message)
        if st.button("Back to Members"):
            navigate(LIST)
        return

    member = state.data
    st.header(member["name"])
    st.write(f"**Email:** {member['email']}")
    st.write(f"**Phone:** {member['phone']}")
    st.write(f"**Membership Type:** {member['membershipType']}")
    st.write(f"**Status:** {'Active' if member['active'] else 'Inactive'}")
    st.write(f"**Joining Date:** {format_date(member.get('joiningDate'))}")
    st.write(f"**Member Since:** {format_date(member.get('createdAt'))}")
    st.write(f"**Last Updated:** {format_date(member.get('updatedAt'))}")

    col_edit, col_delete, col_back = st.columns(3)
    if col_edit.button("Edit"):
        navigate(EDIT, member["id"])
    if col_delete.button("Delete"):
        st.session_state.confirm_delete = member["id"]
    if col_back.button("Back to Members"):
        navigate(LIST)
    confirm_delete(member["id"])


navbar()
screen = st.session_state.screen
if screen == LIST:
    show_list()
elif screen == CREATE:
    show_create()
elif screen == EDIT:
    show_edit(st.session_state.member_id)
elif screen == DETAIL:
    show_detail(st.session_state.member_id)
else:
    show_home()
