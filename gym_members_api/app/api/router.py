"""
Top‑level API router.

Aggregates resource routers under the ``/api`` prefix applied in
``main.create_app``.  New resources are added here with their own
prefix and tag.
"""

from fastapi import APIRouter

from .endpoints import members

router = APIRouter()

router.include_router(members.router, prefix="/members", tags=["members"])
