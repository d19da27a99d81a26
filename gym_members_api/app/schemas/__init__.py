"""
Pydantic schema definitions for API payloads.

Schemas are kept separate from the SQLAlchemy models to decouple the
JSON representation (camelCase keys, response envelope) from the table
layout.
"""
