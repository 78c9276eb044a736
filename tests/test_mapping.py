"""
Tests for table mapping, write policy and records.

Run with: pytest tests/test_mapping.py -v
"""

import pytest
from sqlalchemy import select

from daguerreo.core.config import settings
from daguerreo.core.exceptions import RepositoryConfigurationError
from daguerreo.models.book_api import BookApi, BookApiTable, book_api
from daguerreo.models.paging import Sort
from daguerreo.repositories import Record, TableMapping, WritePolicy, resolve_table

from conftest import AuditEntry, PenName, ShelfSlot, audit_log, pen_name, shelf_slot, table_rows


class TestResolveTable:
    """Tests for resolve_table()"""

    def test_table_passes_through(self):
        assert resolve_table(book_api) is book_api

    def test_declarative_class(self):
        assert resolve_table(BookApiTable) is book_api

    @pytest.mark.parametrize("table_like", [None, "book_api", BookApi])
    def test_unresolvable(self, table_like):
        with pytest.raises(RepositoryConfigurationError):
            resolve_table(table_like)


class TestWritePolicy:
    """Tests for which columns inserts and updates write"""

    def test_nullable_columns(self):
        policy = WritePolicy(shelf_slot)

        assert policy.primary_key == frozenset({"shelf_id", "slot"})
        assert policy.write_if_null == {
            "shelf_id": False,
            "slot": False,
            "title": False,
            "status": False,
            "note": True,
        }

    def test_insert_skips_null_for_non_nullable(self):
        policy = WritePolicy(shelf_slot)

        values = policy.insert_values({"shelf_id": 1, "slot": 2, "title": "t", "status": None, "note": None})

        assert values == {"shelf_id": 1, "slot": 2, "title": "t", "note": None}

    def test_insert_skips_null_primary_key(self):
        values = WritePolicy(book_api).insert_values({"id": None, "name": "n", "url": "u"})

        assert values == {"name": "n", "url": "u"}

    def test_update_never_writes_primary_key(self):
        values = WritePolicy(shelf_slot).update_values({"shelf_id": 1, "slot": 2, "title": "t", "note": None})

        assert values == {"title": "t", "note": None}


class TestTableMapping:
    """Tests for TableMapping"""

    def test_single_key(self):
        mapping = TableMapping(book_api, BookApi)

        assert mapping.name == "book_api"
        assert mapping.has_primary_key is True
        assert mapping.is_composite is False
        assert mapping.id_values(7) == (7,)
        assert mapping.id_from_values([7]) == 7

    def test_composite_key(self):
        mapping = TableMapping(shelf_slot, ShelfSlot)

        assert mapping.is_composite is True
        assert mapping.id_values((1, 2)) == (1, 2)
        assert mapping.id_values({"slot": 2, "shelf_id": 1}) == (1, 2)
        assert mapping.id_from_values([1, 2]) == (1, 2)

    def test_without_primary_key(self):
        mapping = TableMapping(audit_log, AuditEntry)

        assert mapping.has_primary_key is False
        assert mapping.primary_key == ()
        assert mapping.id_from_values([]) is None

    def test_entity_class_required(self):
        with pytest.raises(RepositoryConfigurationError):
            TableMapping(book_api, None)

    def test_to_values_keeps_table_columns_only(self):
        mapping = TableMapping(shelf_slot, ShelfSlot)

        values = mapping.to_values(ShelfSlot(shelf_id=1, slot=2, title="t"))

        assert values == {"shelf_id": 1, "slot": 2, "title": "t", "status": None, "note": None}

    def test_to_entity_from_mapping(self):
        mapping = TableMapping(book_api, BookApi)

        entity = mapping.to_entity({"id": 1, "name": "n", "url": "u"})

        assert entity == BookApi(id=1, name="n", url="u")

    def test_custom_conversion(self):
        class Plain:
            def __init__(self, id=None, name=None, url=None):
                self.id, self.name, self.url = id, name, url

        mapping = TableMapping(
            book_api,
            Plain,
            to_values=lambda p: {"id": p.id, "name": p.name.upper(), "url": p.url, "extra": 1},
        )

        assert mapping.to_values(Plain(1, "n", "u")) == {"id": 1, "name": "N", "url": "u"}
        assert mapping.to_entity({"id": 1, "name": "n", "url": "u"}).name == "n"
        assert mapping.identifier(Plain(5)) == 5


class TestRecord:
    """Tests for Record"""

    def test_from_entity(self):
        mapping = TableMapping(book_api, BookApi)

        record = Record.from_entity(mapping, BookApi(id=3, name="n", url="u"))

        assert record.primary_key_values == (3,)
        assert record.primary_key_params() == {"pk_id": 3}
        assert record.update_values == {"name": "n", "url": "u"}
        assert record.to_entity() == BookApi(id=3, name="n", url="u")

    def test_overlay(self):
        mapping = TableMapping(shelf_slot, ShelfSlot)
        stored = Record(mapping, {"shelf_id": 1, "slot": 1, "title": "old", "status": "archived", "note": "x"})

        stored.overlay({"title": "new", "note": None})

        assert stored.values == {"shelf_id": 1, "slot": 1, "title": "new", "status": "archived", "note": None}
        assert "shelf_slot" in repr(stored)


class TestIdentifiable:
    """Tests for identity comparison between entities"""

    def test_same_identity(self):
        assert BookApi(id=1, name="a", url="u").same_identity(BookApi(id=1, name="b", url="v"))
        assert not BookApi(id=1, name="a", url="u").same_identity(BookApi(id=2, name="a", url="u"))

    def test_unsaved_entities_are_never_the_same(self):
        assert not BookApi(name="a", url="u").same_identity(BookApi(name="a", url="u"))
        assert not BookApi(id=1, name="a", url="u").same_identity(1)


class TestColumnKeys:
    """Columns whose key differs from the stored column name"""

    def test_record_from_row_uses_column_keys(self, db_session):
        db_session.execute(pen_name.insert().values(id=1, display="Boz", real="Charles Dickens"))
        row = db_session.execute(select(pen_name)).first()
        mapping = TableMapping(pen_name, PenName)

        assert Record.from_row(mapping, row).values == {"id": 1, "display": "Boz", "real": "Charles Dickens"}
        assert mapping.to_entity(row) == PenName(id=1, display="Boz", real="Charles Dickens")

    def test_save_and_find(self, pen_name_repository, db_session):
        saved = pen_name_repository.save(PenName(display="Boz", real="Charles Dickens"))

        assert saved == PenName(id=1, display="Boz", real="Charles Dickens")
        assert pen_name_repository.find_all(Sort.by("display")) == [saved]
        assert table_rows(db_session, pen_name) == [(1, "Boz", "Charles Dickens")]

    def test_update_merges_stored_row(self, pen_name_repository, db_session):
        pen_name_repository.save(PenName(display="Boz", real="Charles Dickens"))

        updated = pen_name_repository.save(PenName(id=1, display="Phiz", real=None))

        assert updated == PenName(id=1, display="Phiz", real=None)
        assert table_rows(db_session, pen_name) == [(1, "Phiz", None)]

    @pytest.mark.parametrize("bulk_enabled", [True, False])
    def test_save_all(self, pen_name_repository, db_session, monkeypatch, bulk_enabled):
        monkeypatch.setattr(settings, "BULK_UPSERT_ENABLED", bulk_enabled)
        pen_name_repository.save(PenName(display="Boz", real="Charles Dickens"))

        saved = pen_name_repository.save_all([
            PenName(id=1, display="Boz", real="C. Dickens"),
            PenName(id=2, display="Currer Bell", real="Charlotte Bronte"),
        ])

        assert [p.real for p in saved] == ["C. Dickens", "Charlotte Bronte"]
        assert table_rows(db_session, pen_name) == [
            (1, "Boz", "C. Dickens"),
            (2, "Currer Bell", "Charlotte Bronte"),
        ]
