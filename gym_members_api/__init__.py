"""
Top‑level package for the Gym Management API.

All functionality lives in the ``app`` subpackage; import the ASGI
application as ``gym_members_api.app.main:app``.
"""

__all__ = []
