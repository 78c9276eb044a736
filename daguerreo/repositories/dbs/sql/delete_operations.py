"""Delete operations for the SQL repository."""

from typing import Any, List, Sequence
from sqlalchemy import delete
from .mapping import Record, TableMapping
from .query_operations import SqlQueryOperations

class SqlDeleteOperations:
    """Handles delete statements for one mapped table."""

    def __init__(self, queries: SqlQueryOperations):
        """Initialize with the shared query operations."""
        self.queries = queries
        self.mapping: TableMapping = queries.mapping

    def delete_by_id(self, entity_id: Any) -> int:
        condition = self.queries.pk_equals(entity_id)
        if condition is None:
            self.queries.warn_no_primary_key("delete_by_id")
            return 0
        stmt = delete(self.mapping.table).where(condition)
        return self.queries.execute(stmt, "delete").rowcount

    def delete_by_ids(self, ids: Sequence[Any]) -> int:
        """Delete every row whose key is in ``ids`` with a single statement."""
        if not ids:
            return 0
        condition = self.queries.pk_in(ids)
        if condition is None:
            self.queries.warn_no_primary_key("delete_all_entities")
            return 0
        stmt = delete(self.mapping.table).where(condition)
        return self.queries.execute(stmt, "delete").rowcount

    def delete_in_batch(self, records: List[Record]) -> int:
        """Delete the rows of all records as one executemany batch."""
        condition = self.queries.pk_bound()
        if condition is None:
            self.queries.warn_no_primary_key("delete_in_batch")
            return 0

        params = [
            record.primary_key_params() for record in records
            if all(value is not None for value in record.primary_key_values)
        ]
        if not params:
            return 0

        stmt = delete(self.mapping.table).where(condition)
        return self.queries.execute(stmt, "batch_delete", params=params).rowcount
