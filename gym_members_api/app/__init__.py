"""
Application package.

Layout:

* ``core`` – settings, logging, database engine and domain errors;
* ``models`` – SQLAlchemy table definitions;
* ``schemas`` – Pydantic request/response shapes;
* ``services`` – repositories that own all database access;
* ``api`` – FastAPI routers.
"""

from .main import app  # noqa: F401
