"""
Member endpoints.

CRUD routes for gym members mounted under ``/api/members``.  Every
handler returns the uniform envelope: successful calls carry ``data``
(plus ``count`` for the list), failures carry ``success: false``, a
``message`` and an ``error`` detail.

Status mapping:

* ``ValidationError`` / ``DuplicateEmail`` → 400
* ``NotFound`` → 404
* ``StorageUnavailable`` → 500 with a generic error text
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gym_members_api.app.core.db import get_session
from gym_members_api.app.core.errors import (
    DuplicateEmail,
    NotFound,
    StorageUnavailable,
    ValidationError,
)
from gym_members_api.app.schemas.envelope import Envelope, failure
from gym_members_api.app.schemas.member import MemberCreate, MemberRead, MemberUpdate
from gym_members_api.app.services.member_service import MemberRepository

router = APIRouter()


def get_repository(session: Session = Depends(get_session)) -> MemberRepository:
    """Bind a repository to the request's session."""
    return MemberRepository(session)


@router.get("", response_model=Envelope[List[MemberRead]], response_model_exclude_none=True)
def list_members(repo: MemberRepository = Depends(get_repository)):
    """Return all members with their count."""
    try:
        members = repo.list_all()
    except StorageUnavailable as exc:
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch members", str(exc))
    data = [MemberRead.model_validate(member) for member in members]
    return Envelope[List[MemberRead]](data=data, count=len(data))


@router.get("/{member_id}", response_model=Envelope[MemberRead], response_model_exclude_none=True)
def get_member(member_id: int, repo: MemberRepository = Depends(get_repository)):
    """Return a single member or 404."""
    try:
        member = repo.get_by_id(member_id)
    except NotFound as exc:
        return failure(status.HTTP_404_NOT_FOUND, str(exc))
    except StorageUnavailable as exc:
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch member", str(exc))
    return Envelope[MemberRead](data=MemberRead.model_validate(member))


@router.post(
    "",
    response_model=Envelope[MemberRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_member(payload: MemberCreate, repo: MemberRepository = Depends(get_repository)):
    """Create a member from ``{name, email, phone, membershipType?, active?}``."""
    try:
        member = repo.create(payload.model_dump(exclude_unset=True))
    except (ValidationError, DuplicateEmail) as exc:
        return failure(status.HTTP_400_BAD_REQUEST, "Failed to create member", str(exc))
    except StorageUnavailable as exc:
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create member", str(exc))
    return Envelope[MemberRead](
        data=MemberRead.model_validate(member),
        message="Member created successfully",
    )


@router.put("/{member_id}", response_model=Envelope[MemberRead], response_model_exclude_none=True)
def update_member(
    member_id: int,
    payload: MemberUpdate,
    repo: MemberRepository = Depends(get_repository),
):
    """Apply a partial update; only keys present in the body change."""
    try:
        member = repo.update(member_id, payload.model_dump(exclude_unset=True))
    except NotFound as exc:
        return failure(status.HTTP_404_NOT_FOUND, str(exc))
    except (ValidationError, DuplicateEmail) as exc:
        return failure(status.HTTP_400_BAD_REQUEST, "Failed to update member", str(exc))
    except StorageUnavailable as exc:
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update member", str(exc))
    return Envelope[MemberRead](
        data=MemberRead.model_validate(member),
        message="Member updated successfully",
    )


@router.delete("/{member_id}", response_model=Envelope[MemberRead], response_model_exclude_none=True)
def delete_member(member_id: int, repo: MemberRepository = Depends(get_repository)):
    """Delete a member and echo the removed record."""
    try:
        removed = repo.delete(member_id)
    except NotFound as exc:
        return failure(status.HTTP_404_NOT_FOUND, str(exc))
    except StorageUnavailable as exc:
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete member", str(exc))
    return Envelope[MemberRead](
        data=MemberRead.model_validate(removed),
        message="Member deleted successfully",
    )
