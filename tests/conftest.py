"""
Pytest configuration and shared fixtures.

Every test runs against a fresh in-memory SQLite database seeded with the
three book_api rows below. Extra tables with a composite primary key and
with no primary key at all live on their own MetaData.
"""

import os

# Set environment BEFORE importing any daguerreo modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_TOKEN"] = ""

from typing import Optional

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, insert, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from daguerreo.core.database import Base
from daguerreo.models.base import Identifiable
from daguerreo.models.book_api import book_api
from daguerreo.repositories import BookApiRepository, SqlRepository

BOOK_API_ROWS = [
    (1, "Amazon Product Advertising API", "https://ecs.amazonaws.jp/onca/xml"),
    (2, "Google Books API", "https://www.googleapis.com/books/v1/volumes"),
    (3, "楽天ブックス書籍検索API", "https://app.rakuten.co.jp/services/api/BooksBook/Search/20130522"),
]

# =============================================================================
# Extra tables
# =============================================================================

extra_metadata = MetaData()

shelf_slot = Table(
    "shelf_slot",
    extra_metadata,
    Column("shelf_id", Integer, primary_key=True, autoincrement=False),
    Column("slot", Integer, primary_key=True, autoincrement=False),
    Column("title", String(255), nullable=False),
    Column("status", String(32), nullable=False, server_default="active"),
    Column("note", String(255), nullable=True),
)

audit_log = Table(
    "audit_log",
    extra_metadata,
    Column("message", String(255), nullable=False),
    Column("level", String(16), nullable=True),
)

# Column key differs from the stored column name
pen_name = Table(
    "pen_name",
    extra_metadata,
    Column("id", Integer, primary_key=True),
    Column("display_name", String(255), key="display", nullable=False),
    Column("real_name", String(255), key="real", nullable=True),
)


class ShelfSlot(Identifiable):
    shelf_id: int
    slot: int
    title: str
    status: Optional[str] = None
    note: Optional[str] = None

    @property
    def id(self):
        return (self.shelf_id, self.slot)


class AuditEntry(Identifiable):
    message: str
    level: Optional[str] = None

    @property
    def id(self):
        return None


class PenName(Identifiable):
    id: Optional[int] = None
    display: str
    real: Optional[str] = None


class ShelfSlotRepository(SqlRepository[ShelfSlot, tuple]):
    table = shelf_slot
    entity_class = ShelfSlot


class AuditLogRepository(SqlRepository[AuditEntry, None]):
    table = audit_log
    entity_class = AuditEntry


class PenNameRepository(SqlRepository[PenName, int]):
    table = pen_name
    entity_class = PenName


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    extra_metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session bound to the test engine, seeded with the book_api rows."""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    session.execute(
        insert(book_api),
        [{"id": i, "name": name, "url": url} for i, name, url in BOOK_API_ROWS],
    )
    session.commit()

    yield session

    session.close()


def table_rows(session, table, order_by=None):
    """All rows of a table as tuples, ordered by the primary key by default."""
    columns = order_by if order_by is not None else list(table.primary_key.columns)
    return [tuple(row) for row in session.execute(select(table).order_by(*columns)).all()]


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def repository(db_session):
    """Provide a BookApiRepository instance."""
    return BookApiRepository(session=db_session)


@pytest.fixture
def shelf_repository(db_session):
    """Provide a repository over the composite-key table."""
    return ShelfSlotRepository(session=db_session)


@pytest.fixture
def audit_repository(db_session):
    """Provide a repository over the table without a primary key."""
    return AuditLogRepository(session=db_session)


@pytest.fixture
def pen_name_repository(db_session):
    """Provide a repository over a table whose column keys differ from their names."""
    return PenNameRepository(session=db_session)
