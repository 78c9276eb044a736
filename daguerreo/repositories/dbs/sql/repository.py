"""Generic SQL repository that composes all operation modules."""

from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from daguerreo.core.exceptions import RepositoryConfigurationError
from daguerreo.models.paging import Page, PageRequest, Sort
from daguerreo.repositories.base_repository import PagingAndSortingRepository, E, ID
from daguerreo.utils.helpers import logger
from .session import SqlSessionManager
from .mapping import Record, TableMapping
from .query_operations import SqlQueryOperations
from .read_operations import SqlReadOperations
from .create_operations import SqlCreateOperations
from .update_operations import SqlUpdateOperations
from .delete_operations import SqlDeleteOperations

class SqlRepository(PagingAndSortingRepository[E, ID]):
    """
    CRUD, paging and sorting over a single table.

    A concrete repository only declares what it maps::

        class BookApiRepository(SqlRepository[BookApi, int]):
            table = book_api
            entity_class = BookApi

    or is handed a ready TableMapping. The mapping is resolved once, here in
    the constructor; a missing or unusable table raises
    RepositoryConfigurationError immediately.

    Tables without a primary key are supported for find_all, find_page,
    count and inserts. Id-keyed reads return empty results and id-keyed
    deletes do nothing; ``has_primary_key`` tells callers which case applies.
    """

    table: ClassVar[Any] = None
    entity_class: ClassVar[Any] = None

    def __init__(self, session: Optional[Session] = None, mapping: Optional[TableMapping] = None):
        """Initialize the repository with all operation modules."""
        self.mapping: TableMapping = mapping or self._resolve_mapping()
        self.table = self.mapping.table
        self.entity_class = self.mapping.entity_class

        # Initialize session manager
        self.session_manager = SqlSessionManager(session)

        # Initialize operation modules
        self.queries = SqlQueryOperations(self.session_manager, self.mapping)
        self.read_ops = SqlReadOperations(self.queries)
        self.create_ops = SqlCreateOperations(self.queries)
        self.update_ops = SqlUpdateOperations(self.queries)
        self.delete_ops = SqlDeleteOperations(self.queries)

    @classmethod
    def _resolve_mapping(cls) -> TableMapping:
        if cls.table is None or cls.entity_class is None:
            message = (
                f"{cls.__name__} must declare 'table' and 'entity_class' "
                f"or be constructed with a TableMapping"
            )
            logger.error(message)
            raise RepositoryConfigurationError(message)
        return TableMapping(cls.table, cls.entity_class)

    @property
    def has_primary_key(self) -> bool:
        return self.mapping.has_primary_key

    @property
    def primary_key(self) -> Tuple[Any, ...]:
        return self.mapping.primary_key

    # Reads

    def find_all(self, sort: Optional[Sort] = None) -> List[E]:
        return self.read_ops.find_all(sort=sort)

    def find_all_by_id(self, ids: Optional[Iterable[ID]]) -> List[E]:
        if ids is None:
            return []
        ids = list(ids)
        if not ids:
            return []
        return self.read_ops.find_all_by_id(ids)

    def find_page(self, pageable: Optional[PageRequest]) -> Page[E]:
        """
        One page of entities.

        Without a PageRequest every row is returned as a single unpaged page.
        The total always comes from a separate count query.
        """
        if pageable is None:
            return Page.unpaged(self.find_all(), total_elements=self.count())
        content = self.read_ops.find_all(sort=pageable.sort, offset=pageable.offset, limit=pageable.size)
        return Page.of(content, pageable, self.count())

    def find_one(self, entity_id: ID) -> Optional[E]:
        if entity_id is None:
            return None
        return self.read_ops.find_one(entity_id)

    def exists(self, entity_id: ID) -> bool:
        if entity_id is None:
            return False
        return self.read_ops.exists(entity_id)

    def count(self) -> int:
        return self.read_ops.count()

    # Writes

    def save(self, entity: E) -> E:
        """
        Insert or update one entity and return it as stored.

        A None id always inserts and lets the store generate the key. A set
        id updates the matching row (locked with FOR UPDATE where the dialect
        supports it) or inserts a new row with that id.
        """
        if entity is None:
            raise ValueError("Entity must not be None")
        with self.session_manager.transaction("save"):
            return self._save(entity)

    def save_all(self, entities: Optional[Iterable[E]]) -> List[E]:
        """
        Save every entity and return them in input order.

        Where the dialect supports INSERT ... ON CONFLICT and the entities
        carrying an id lead the batch, those are written with one upsert
        statement; otherwise each entity goes through save() in turn. All
        writes share one transaction.
        """
        if entities is None:
            return []
        entities = list(entities)
        if not entities:
            return []
        if any(entity is None for entity in entities):
            raise ValueError("Entities must not contain None")

        with self.session_manager.transaction("save_all"):
            records = [Record.from_entity(self.mapping, entity) for entity in entities]
            if self._can_bulk_upsert(entities, records):
                return self._bulk_save(entities, records)
            return [self._save(entity) for entity in entities]

    def delete_by_id(self, entity_id: ID) -> None:
        if entity_id is None:
            return
        with self.session_manager.transaction("delete_by_id"):
            self.delete_ops.delete_by_id(entity_id)

    def delete(self, entity: E) -> None:
        self.delete_all_entities([entity])

    def delete_all_entities(self, entities: Optional[Iterable[E]]) -> None:
        if entities is None:
            return
        ids = self.queries.ids_of(entities)
        if not ids:
            return
        with self.session_manager.transaction("delete_all_entities"):
            self.delete_ops.delete_by_ids(ids)

    def delete_in_batch(self, entities: Optional[Iterable[E]]) -> None:
        if entities is None:
            return
        records = [Record.from_entity(self.mapping, entity) for entity in entities if entity is not None]
        if not records:
            return
        with self.session_manager.transaction("delete_in_batch"):
            self.delete_ops.delete_in_batch(records)

    def close(self):
        self.session_manager.close_session()

    # Internals

    def _save(self, entity: E) -> E:
        record = Record.from_entity(self.mapping, entity)
        entity_id = self.mapping.identifier(entity)
        if entity_id is None:
            return self._insert(record)

        existing = self.read_ops.find_row(entity_id, for_update=True)
        if existing is None:
            return self._insert(record)

        merged = Record.from_row(self.mapping, existing).overlay(record.values)
        self.update_ops.update(merged, entity_id)
        return self.read_ops.find_one(entity_id)

    def _insert(self, record: Record) -> E:
        entity_id = self.create_ops.insert(record)
        if entity_id is None:
            # No primary key to read the row back by
            return record.to_entity()
        return self.read_ops.find_one(entity_id)

    def _can_bulk_upsert(self, entities: List[E], records: List[Record]) -> bool:
        if not self.create_ops.supports_bulk_upsert():
            return False
        keyed = [r for e, r in zip(entities, records) if self.mapping.identifier(e) is not None]
        if not keyed:
            return False
        # Keyed entities are upserted before any insert, so they must lead
        if any(self.mapping.identifier(e) is None for e in entities[:len(keyed)]):
            return False
        keys = [self.mapping.id_values(self.mapping.identifier(e)) for e in entities
                if self.mapping.identifier(e) is not None]
        if len(set(keys)) != len(keys):
            return False
        columns = {frozenset(r.insert_values) for r in keyed}
        return len(columns) == 1

    def _bulk_save(self, entities: List[E], records: List[Record]) -> List[E]:
        ids = [self.mapping.identifier(entity) for entity in entities]
        self.create_ops.bulk_upsert([r for r, entity_id in zip(records, ids) if entity_id is not None])

        saved_ids = []
        for record, entity_id in zip(records, ids):
            if entity_id is None:
                entity_id = self.create_ops.insert(record)
            saved_ids.append(entity_id)

        by_key: Dict[Tuple[Any, ...], E] = {
            self.mapping.id_values(self.mapping.identifier(entity)): entity
            for entity in self.read_ops.find_all_by_id(saved_ids)
        }
        return [by_key[self.mapping.id_values(entity_id)] for entity_id in saved_ids]
