"""Generic SQL repository built on SQLAlchemy Core."""

from .mapping import Record, TableMapping, WritePolicy, resolve_table
from .repository import SqlRepository
from .session import SqlSessionManager

__all__ = [
    "Record",
    "TableMapping",
    "WritePolicy",
    "resolve_table",
    "SqlRepository",
    "SqlSessionManager",
]
