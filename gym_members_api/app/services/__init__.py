"""
Data access layer.

Repositories own every read and write of their table.  They are built
per request around an injected SQLAlchemy session so that API handlers
never touch the database directly.
"""
