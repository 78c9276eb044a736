"""Update operations for the SQL repository."""

from typing import Any
from sqlalchemy import update
from .mapping import Record, TableMapping
from .query_operations import SqlQueryOperations

class SqlUpdateOperations:
    """Handles update statements for one mapped table."""

    def __init__(self, queries: SqlQueryOperations):
        """Initialize with the shared query operations."""
        self.queries = queries
        self.mapping: TableMapping = queries.mapping

    def update(self, record: Record, entity_id: Any) -> int:
        """Write the record's non-key columns to the row with the given id."""
        condition = self.queries.pk_equals(entity_id)
        if condition is None:
            self.queries.warn_no_primary_key("update")
            return 0

        values = record.update_values
        if not values:
            # Nothing but key columns to write
            return 0

        stmt = update(self.mapping.table).where(condition).values(**values)
        return self.queries.execute(stmt, "update").rowcount
