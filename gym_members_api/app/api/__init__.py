"""
HTTP layer of the Gym Management API.

``router.router`` bundles the resource endpoints; the application mounts
it under ``/api`` so members are served from ``/api/members``.
"""
