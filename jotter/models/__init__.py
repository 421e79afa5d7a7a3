"""
Jotter Backend — ORM Models
=============================

Importing this package registers every model with `Base.metadata`, which is
what Alembic's env.py and the test fixtures rely on.
"""

from jotter.models.note import Note
from jotter.models.user import AuthProvider, User

__all__ = ["AuthProvider", "Note", "User"]
