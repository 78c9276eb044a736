"""
Table/entity mapping for the generic SQL repository.

A TableMapping is resolved once per repository and carries everything the
operation modules need: the table, its primary key, the entity factory and
the per-column write policy derived from schema nullability.
"""

from typing import Any, Callable, Dict, Generic, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import Column, Table

from daguerreo.core.exceptions import RepositoryConfigurationError
from daguerreo.utils.helpers import logger

E = TypeVar("E")


def resolve_table(table_like: Any) -> Table:
    """Accept a Table or a declarative class and return the Table."""
    if isinstance(table_like, Table):
        return table_like
    table = getattr(table_like, "__table__", None)
    if isinstance(table, Table):
        return table
    message = f"Cannot resolve a table from {table_like!r}"
    logger.error(message)
    raise RepositoryConfigurationError(message)


class WritePolicy:
    """
    Decides which columns a statement writes.

    On insert, a None value is skipped when the column is part of the
    primary key or is not nullable, so the store applies its default or
    generates the key. On update, primary-key columns are never written and
    None is skipped for non-nullable columns.
    """

    def __init__(self, table: Table):
        self.primary_key = frozenset(c.key for c in table.primary_key.columns)
        self.write_if_null: Dict[str, bool] = {
            c.key: bool(c.nullable) and c.key not in self.primary_key for c in table.columns
        }

    def insert_values(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            key: value for key, value in values.items()
            if value is not None or self.write_if_null.get(key, False)
        }

    def update_values(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            key: value for key, value in self.insert_values(values).items()
            if key not in self.primary_key
        }


class TableMapping(Generic[E]):
    """Binds a table to an entity class and converts between rows and entities."""

    def __init__(
        self,
        table: Any,
        entity_class: Type[E],
        entity_factory: Optional[Callable[[Dict[str, Any]], E]] = None,
        to_values: Optional[Callable[[E], Mapping[str, Any]]] = None,
    ):
        if entity_class is None:
            message = "An entity class is required to map rows"
            logger.error(message)
            raise RepositoryConfigurationError(message)

        self.table: Table = resolve_table(table)
        self.entity_class = entity_class
        self.entity_factory = entity_factory or self._default_factory(entity_class)
        self._to_values = to_values
        self.primary_key: Tuple[Column, ...] = tuple(self.table.primary_key.columns)
        self.write_policy = WritePolicy(self.table)

    @staticmethod
    def _default_factory(entity_class: Type[E]) -> Callable[[Dict[str, Any]], E]:
        if isinstance(entity_class, type) and issubclass(entity_class, BaseModel):
            return entity_class.model_validate
        return lambda values: entity_class(**values)

    @property
    def name(self) -> str:
        return self.table.name

    @property
    def has_primary_key(self) -> bool:
        return bool(self.primary_key)

    @property
    def is_composite(self) -> bool:
        return len(self.primary_key) > 1

    def row_values(self, row: Any) -> Dict[str, Any]:
        """Column values of a result row, keyed by column key."""
        return {c.key: row._mapping[c] for c in self.table.columns}

    def to_entity(self, row: Any) -> E:
        """Build an entity from a result row or a mapping keyed by column key."""
        values = self.row_values(row) if hasattr(row, "_mapping") else dict(row)
        return self.entity_factory(values)

    def to_values(self, entity: E) -> Dict[str, Any]:
        """Column values of an entity, restricted to the table's columns."""
        if self._to_values is not None:
            values = dict(self._to_values(entity))
        elif isinstance(entity, BaseModel):
            values = entity.model_dump()
        else:
            values = dict(vars(entity))
        return {key: value for key, value in values.items() if key in self.table.c}

    def identifier(self, entity: E) -> Any:
        return getattr(entity, "id", None)

    def id_values(self, entity_id: Any) -> Tuple[Any, ...]:
        """An id as a tuple in primary-key column order."""
        if not self.is_composite:
            return (entity_id,)
        if isinstance(entity_id, Mapping):
            return tuple(entity_id[c.key] for c in self.primary_key)
        return tuple(entity_id)

    def id_from_values(self, values: Any) -> Any:
        """Inverse of id_values: a scalar for single keys, a tuple otherwise."""
        values = tuple(values)
        if not values:
            return None
        return values[0] if not self.is_composite else values


class Record:
    """One row's worth of column values bound to a table mapping."""

    def __init__(self, mapping: TableMapping, values: Mapping[str, Any]):
        self.mapping = mapping
        self.values: Dict[str, Any] = dict(values)

    @classmethod
    def from_entity(cls, mapping: TableMapping, entity: Any) -> "Record":
        return cls(mapping, mapping.to_values(entity))

    @classmethod
    def from_row(cls, mapping: TableMapping, row: Any) -> "Record":
        return cls(mapping, mapping.row_values(row))

    def overlay(self, values: Mapping[str, Any]) -> "Record":
        """Copy the given values over this record's values."""
        self.values.update(values)
        return self

    @property
    def insert_values(self) -> Dict[str, Any]:
        return self.mapping.write_policy.insert_values(self.values)

    @property
    def update_values(self) -> Dict[str, Any]:
        return self.mapping.write_policy.update_values(self.values)

    @property
    def primary_key_values(self) -> Tuple[Any, ...]:
        return tuple(self.values.get(c.key) for c in self.mapping.primary_key)

    def primary_key_params(self) -> Dict[str, Any]:
        """Bind parameters for a ``pk = :pk_<column>`` condition."""
        return {f"pk_{c.key}": self.values.get(c.key) for c in self.mapping.primary_key}

    def to_entity(self) -> Any:
        return self.mapping.to_entity(self.values)

    def __repr__(self) -> str:
        return f"Record({self.mapping.name}, {self.values!r})"
