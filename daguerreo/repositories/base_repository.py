"""Base repository interface for data access."""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, TypeVar

from daguerreo.core.exceptions import UnsupportedOperationError
from daguerreo.models.paging import Page, PageRequest, Sort

E = TypeVar('E')
ID = TypeVar('ID')

class PagingAndSortingRepository(ABC, Generic[E, ID]):
    """CRUD plus paging and sorting over one kind of entity."""

    @abstractmethod
    def find_all(self, sort: Optional[Sort] = None) -> List[E]:
        """Return every entity, ordered by ``sort`` when given."""
        pass

    @abstractmethod
    def find_all_by_id(self, ids: Optional[Iterable[ID]]) -> List[E]:
        """Return the entities whose id is in ``ids``."""
        pass

    @abstractmethod
    def find_page(self, pageable: Optional[PageRequest]) -> Page[E]:
        """Return one page of entities."""
        pass

    @abstractmethod
    def find_one(self, entity_id: ID) -> Optional[E]:
        """Return the entity with the given id, or None."""
        pass

    @abstractmethod
    def exists(self, entity_id: ID) -> bool:
        """Whether an entity with the given id exists."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored entities."""
        pass

    @abstractmethod
    def save(self, entity: E) -> E:
        """Insert or update an entity and return it as stored."""
        pass

    @abstractmethod
    def save_all(self, entities: Optional[Iterable[E]]) -> List[E]:
        """Save every entity, returning them in input order."""
        pass

    @abstractmethod
    def delete_by_id(self, entity_id: ID) -> None:
        """Delete the entity with the given id."""
        pass

    @abstractmethod
    def delete(self, entity: E) -> None:
        """Delete the given entity."""
        pass

    @abstractmethod
    def delete_all_entities(self, entities: Optional[Iterable[E]]) -> None:
        """Delete the given entities."""
        pass

    @abstractmethod
    def delete_in_batch(self, entities: Optional[Iterable[E]]) -> None:
        """Delete the given entities with a single batched statement."""
        pass

    def delete_all(self) -> None:
        """Deleting every entity is not supported, to keep tables safe."""
        raise UnsupportedOperationError("delete_all() is not supported.")
