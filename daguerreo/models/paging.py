"""Paging and sorting value types shared by repositories and the HTTP API."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, Field, computed_field

E = TypeVar("E")


class Direction(str, Enum):
    """Sort direction"""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Parse a direction, ignoring case and surrounding whitespace"""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid sort direction '{value}'; expected 'asc' or 'desc'")

    @classmethod
    def is_direction(cls, value: str) -> bool:
        return value.strip().lower() in (cls.ASC.value, cls.DESC.value)


@dataclass(frozen=True)
class Order:
    """A single (property, direction) sort criterion"""
    property: str
    direction: Direction = Direction.ASC

    def __post_init__(self):
        if not self.property or not self.property.strip():
            raise ValueError("Sort property must not be empty")

    def is_ascending(self) -> bool:
        return self.direction is Direction.ASC

    def with_direction(self, direction: Direction) -> "Order":
        return Order(self.property, direction)


@dataclass(frozen=True)
class Sort:
    """An ordered list of sort criteria; an empty Sort means unsorted"""
    orders: Tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> "Sort":
        return cls(tuple(Order(p, direction) for p in properties))

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @classmethod
    def parse(cls, params: Optional[Iterable[str]]) -> "Sort":
        """
        Parse ``property[,property...][,direction]`` query parameters.

        ``["id,desc", "name"]`` sorts by id descending, then name ascending.
        A trailing direction applies to every property in the same parameter.
        """
        orders: List[Order] = []
        for param in params or ():
            tokens = [t.strip() for t in param.split(",") if t.strip()]
            if not tokens:
                continue
            direction = Direction.ASC
            if len(tokens) > 1 and Direction.is_direction(tokens[-1]):
                direction = Direction.from_string(tokens.pop())
            orders.extend(Order(t, direction) for t in tokens)
        return cls(tuple(orders))

    def and_(self, other: Optional["Sort"]) -> "Sort":
        if not other:
            return self
        return Sort(self.orders + other.orders)

    def descending(self) -> "Sort":
        return Sort(tuple(o.with_direction(Direction.DESC) for o in self.orders))

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __len__(self) -> int:
        return len(self.orders)

    def __bool__(self) -> bool:
        return bool(self.orders)


@dataclass(frozen=True)
class PageRequest:
    """A request for the 0-based ``page`` of ``size`` elements, optionally sorted"""
    page: int = 0
    size: int = 20
    sort: Sort = field(default_factory=Sort.unsorted)

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")
        if self.sort is None:
            object.__setattr__(self, "sort", Sort.unsorted())

    @classmethod
    def of(cls, page: int, size: int, *properties: str, direction: Direction = Direction.ASC) -> "PageRequest":
        sort = Sort.by(*properties, direction=direction) if properties else Sort.unsorted()
        return cls(page=page, size=size, sort=sort)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(self.page + 1, self.size, self.sort)

    def previous_or_first(self) -> "PageRequest":
        return PageRequest(self.page - 1, self.size, self.sort) if self.page > 0 else self.first()

    def first(self) -> "PageRequest":
        return PageRequest(0, self.size, self.sort)


class Page(BaseModel, Generic[E]):
    """
    A window over a result set plus its position metadata.

    Everything except ``content``, ``number``, ``size`` and ``total_elements``
    is derived. A ``size`` of 0 marks an unpaged result, which always counts
    as a single page.
    """
    content: List[E] = Field(default_factory=list)
    number: int = 0
    size: int = 0
    total_elements: int = 0

    @classmethod
    def of(cls, content: List[E], pageable: PageRequest, total_elements: int) -> "Page[E]":
        return cls(content=content, number=pageable.page, size=pageable.size, total_elements=total_elements)

    @classmethod
    def unpaged(cls, content: List[E], total_elements: Optional[int] = None) -> "Page[E]":
        total = len(content) if total_elements is None else total_elements
        return cls(content=content, number=0, size=0, total_elements=total)

    @computed_field
    @property
    def total_pages(self) -> int:
        if self.size == 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @computed_field
    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @computed_field
    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @computed_field
    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    def map(self, converter: Callable[[E], Any]) -> "Page[Any]":
        return Page(
            content=[converter(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )
