"""Query building and execution shared by the SQL operation modules."""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from sqlalchemy import and_, bindparam, tuple_
from sqlalchemy.engine import Result
from sqlalchemy.sql import ClauseElement, ColumnElement, Executable

from daguerreo.core.exceptions import InvalidSortPropertyError
from daguerreo.models.paging import Sort
from daguerreo.utils.helpers import logger, QueryTimer, to_snake_case
from .mapping import TableMapping

class SqlQueryOperations:
    """Builds primary-key conditions and orderings and executes statements."""

    def __init__(self, session_manager, mapping: TableMapping):
        """Initialize with session manager and table mapping."""
        self.session_manager = session_manager
        self.mapping = mapping

    def execute(
        self,
        statement: Executable,
        operation: str,
        params: Optional[Union[Dict[str, Any], List[Dict[str, Any]]]] = None,
    ) -> Result:
        """Execute a statement on the repository's session, timing the round trip."""
        session = self.session_manager.get_session()
        try:
            with QueryTimer(self.mapping.name, operation=operation) as t:
                if isinstance(params, list):
                    # executemany goes through the session's connection
                    result = session.connection().execute(statement, params)
                else:
                    result = session.execute(statement, params)
                t.set_status(rowcount=getattr(result, "rowcount", None))
            return result
        except Exception as e:
            logger.error(f"Error executing {operation} on {self.mapping.name}: {str(e)}")
            raise

    # Primary-key conditions

    def pk_equals(self, entity_id: Any) -> Optional[ColumnElement]:
        """``pk = id``; None when the table has no primary key."""
        if not self.mapping.has_primary_key:
            return None
        values = self.mapping.id_values(entity_id)
        if not self.mapping.is_composite:
            return self.mapping.primary_key[0] == values[0]
        return and_(*(column == value for column, value in zip(self.mapping.primary_key, values)))

    def pk_in(self, ids: Sequence[Any]) -> Optional[ColumnElement]:
        """``pk IN (ids)``, as a row-value comparison for composite keys."""
        if not self.mapping.has_primary_key:
            return None
        if not self.mapping.is_composite:
            return self.mapping.primary_key[0].in_(list(ids))
        return tuple_(*self.mapping.primary_key).in_([self.mapping.id_values(i) for i in ids])

    def pk_bound(self) -> Optional[ColumnElement]:
        """``pk = :pk_<column>`` for executemany statements."""
        if not self.mapping.has_primary_key:
            return None
        return and_(*(column == bindparam(f"pk_{column.key}") for column in self.mapping.primary_key))

    def warn_no_primary_key(self, operation: str):
        logger.warning(f"Table {self.mapping.name} has no primary key; {operation} is a no-op")

    # Ordering

    def order_by(self, sort: Optional[Sort]) -> List[ClauseElement]:
        """
        Translate a Sort into ORDER BY clauses.

        Property names are converted from lowerCamelCase to lower_snake_case
        before the column lookup. An unknown property raises
        InvalidSortPropertyError instead of being dropped.
        """
        clauses = []
        for order in sort or ():
            column = self._resolve_column(order.property)
            clauses.append(column.asc() if order.is_ascending() else column.desc())
        return clauses

    def _resolve_column(self, prop: str):
        columns = self.mapping.table.c
        for name in (to_snake_case(prop), prop):
            if name in columns:
                return columns[name]
        raise InvalidSortPropertyError(prop, self.mapping.name)

    def ids_of(self, entities: Iterable[Any]) -> List[Any]:
        """Non-null ids of the given entities, in order."""
        ids = (self.mapping.identifier(entity) for entity in entities if entity is not None)
        return [entity_id for entity_id in ids if entity_id is not None]
