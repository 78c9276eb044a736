"""Create operations for the SQL repository."""

from typing import Any, List
from sqlalchemy import insert
from daguerreo.core.config import settings
from daguerreo.utils.helpers import logger
from .mapping import Record, TableMapping
from .query_operations import SqlQueryOperations

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_DIALECTS = ("postgresql", "sqlite")

class SqlCreateOperations:
    """Handles insert and upsert statements for one mapped table."""

    def __init__(self, queries: SqlQueryOperations):
        """Initialize with the shared query operations."""
        self.queries = queries
        self.mapping: TableMapping = queries.mapping

    def insert(self, record: Record) -> Any:
        """Insert a record and return its primary key (None without a primary key)."""
        stmt = insert(self.mapping.table).values(**record.insert_values)
        result = self.queries.execute(stmt, "insert")
        if not self.mapping.has_primary_key:
            return None
        return self.mapping.id_from_values(result.inserted_primary_key)

    def dialect_name(self) -> str:
        return self.queries.session_manager.get_session().get_bind().dialect.name

    def supports_bulk_upsert(self) -> bool:
        return (
            settings.BULK_UPSERT_ENABLED
            and self.mapping.has_primary_key
            and self.dialect_name() in UPSERT_DIALECTS
        )

    def bulk_upsert(self, records: List[Record]) -> int:
        """
        Write all records with one INSERT ... ON CONFLICT (pk) DO UPDATE.

        Every record must write the same columns and carry a distinct
        primary key; callers check this before choosing the bulk path.
        """
        if not records:
            return 0

        dialect = self.dialect_name()
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as dialect_insert
        else:
            raise ValueError(f"Bulk upsert is not available for dialect '{dialect}'")

        rows = [record.insert_values for record in records]
        stmt = dialect_insert(self.mapping.table).values(rows)
        index_elements = list(self.mapping.primary_key)
        update_columns = {
            self.mapping.table.c[key]: stmt.excluded[key]
            for key in rows[0] if key not in self.mapping.write_policy.primary_key
        }
        if update_columns:
            stmt = stmt.on_conflict_do_update(index_elements=index_elements, set_=update_columns)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=index_elements)

        result = self.queries.execute(stmt, "upsert")
        logger.debug(f"Bulk upserted {len(rows)} rows into {self.mapping.name}")
        return result.rowcount
