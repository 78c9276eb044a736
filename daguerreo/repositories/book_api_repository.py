"""Repository for the book_api table."""

from daguerreo.models.book_api import BookApi, book_api
from daguerreo.repositories.dbs.sql import SqlRepository

class BookApiRepository(SqlRepository[BookApi, int]):
    """Paging and sorting repository for book APIs."""
    table = book_api
    entity_class = BookApi
