"""
Endpoint modules.

Each module in this package defines an ``APIRouter`` for one resource.
The routers are aggregated in ``router.py`` and mounted by the main
application under ``/api``.
"""
