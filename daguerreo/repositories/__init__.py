# Repositories module for data access layer

from .base_repository import PagingAndSortingRepository
from .dbs.sql import Record, TableMapping, WritePolicy, resolve_table, SqlRepository, SqlSessionManager
from .book_api_repository import BookApiRepository

__all__ = [
    # Base
    "PagingAndSortingRepository",

    # Relational
    "Record",
    "TableMapping",
    "WritePolicy",
    "resolve_table",
    "SqlRepository",
    "SqlSessionManager",

    # Concrete
    "BookApiRepository",
]
