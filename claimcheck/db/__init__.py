"""Database bootstrap utilities.

Exposes engine construction and the SQL migrations runner. The DB layer is
intentionally minimal and does not leak ORM models into route handlers.
"""

from claimcheck.db.base import get_engine, reset_engine
from claimcheck.db.migrations_runner import apply_migrations, schema_ready

__all__ = [
    "get_engine",
    "reset_engine",
    "apply_migrations",
    "schema_ready",
]
