from typing import List, Optional
from sqlalchemy.orm import Session
from daguerreo.models.book_api import BookApi, BookApiCreate
from daguerreo.models.paging import Page, PageRequest
from daguerreo.repositories.book_api_repository import BookApiRepository
from daguerreo.core.exceptions import BookApiNotFoundError
from daguerreo.utils.helpers import logger

class BookApiService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = BookApiRepository(session=db)

    def get_book_apis(self, pageable: Optional[PageRequest]) -> Page[BookApi]:
        """Get one page of book APIs"""
        return self.repository.find_page(pageable)

    def get_book_api(self, book_api_id: int) -> BookApi:
        """Get a book API by id"""
        book_api = self.repository.find_one(book_api_id)
        if book_api is None:
            raise BookApiNotFoundError(book_api_id)
        return book_api

    def save_book_api(self, book_api_data: BookApiCreate, book_api_id: Optional[int] = None) -> BookApi:
        """Create a book API, or replace it when the id is already taken"""
        saved = self.repository.save(book_api_data.to_entity(book_api_id))
        logger.info(f"Saved book API {saved.id}")
        return saved

    def save_book_apis(self, book_apis_data: List[BookApiCreate]) -> List[BookApi]:
        """Save several book APIs, returning them in request order"""
        return self.repository.save_all([data.to_entity() for data in book_apis_data])

    def delete_book_api(self, book_api_id: int) -> None:
        """Delete a book API by id; unknown ids are ignored"""
        self.repository.delete_by_id(book_api_id)

    def delete_book_apis(self, book_api_ids: List[int]) -> int:
        """Delete the book APIs with the given ids in one batch"""
        book_apis = self.repository.find_all_by_id(book_api_ids)
        self.repository.delete_in_batch(book_apis)
        return len(book_apis)
