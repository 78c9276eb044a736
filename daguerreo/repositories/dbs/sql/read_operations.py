"""Read operations for the SQL repository."""

from typing import Any, List, Optional, Sequence
from sqlalchemy import func, select
from sqlalchemy.engine import Row
from .mapping import TableMapping
from .query_operations import SqlQueryOperations
from daguerreo.models.paging import Sort

class SqlReadOperations:
    """Handles read operations for one mapped table."""

    def __init__(self, queries: SqlQueryOperations):
        """Initialize with the shared query operations."""
        self.queries = queries
        self.mapping: TableMapping = queries.mapping

    def find_all(self, sort: Optional[Sort] = None, offset: Optional[int] = None, limit: Optional[int] = None) -> List[Any]:
        """All rows as entities, optionally ordered and windowed."""
        stmt = select(self.mapping.table).order_by(*self.queries.order_by(sort))
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = self.queries.execute(stmt, "select").fetchall()
        return [self.mapping.to_entity(row) for row in rows]

    def find_all_by_id(self, ids: Sequence[Any]) -> List[Any]:
        condition = self.queries.pk_in(ids)
        if condition is None:
            self.queries.warn_no_primary_key("find_all_by_id")
            return []
        rows = self.queries.execute(select(self.mapping.table).where(condition), "select").fetchall()
        return [self.mapping.to_entity(row) for row in rows]

    def find_row(self, entity_id: Any, for_update: bool = False) -> Optional[Row]:
        """
        Fetch the row with the given id.

        ``for_update`` adds FOR UPDATE so the row stays locked until the
        surrounding transaction ends; dialects without row locks ignore it.
        """
        condition = self.queries.pk_equals(entity_id)
        if condition is None:
            return None
        stmt = select(self.mapping.table).where(condition)
        if for_update:
            stmt = stmt.with_for_update()
        return self.queries.execute(stmt, "select").first()

    def find_one(self, entity_id: Any) -> Optional[Any]:
        row = self.find_row(entity_id)
        if row is None:
            return None
        return self.mapping.to_entity(row)

    def exists(self, entity_id: Any) -> bool:
        condition = self.queries.pk_equals(entity_id)
        if condition is None:
            return False
        stmt = select(func.count()).select_from(self.mapping.table).where(condition)
        return self.queries.execute(stmt, "count").scalar_one() > 0

    def count(self) -> int:
        """Get count of records in table."""
        stmt = select(func.count()).select_from(self.mapping.table)
        return self.queries.execute(stmt, "count").scalar_one()
