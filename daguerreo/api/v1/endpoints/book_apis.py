from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from daguerreo.api.dependencies import get_page_request
from daguerreo.services.book_api_service import BookApiService
from daguerreo.core.database import get_db
from daguerreo.core.exceptions import InvalidPageRequestError, InvalidSortPropertyError
from daguerreo.models.paging import PageRequest
from daguerreo.models.book_api import (
    BookApi,
    BookApiCreate,
    BookApiBatchDelete,
    BookApiResponse,
    BookApiPageResponse
)
from daguerreo.utils.helpers import format_response

router = APIRouter()

@router.get("/", response_model=BookApiPageResponse, tags=["book-apis"])
def get_book_apis(
    pageable: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db)
):
    """Get one page of book APIs"""
    try:
        service = BookApiService(db)
        page = service.get_book_apis(pageable)
    except InvalidSortPropertyError as e:
        raise InvalidPageRequestError(str(e))
    return BookApiPageResponse(
        success=True,
        message="Book APIs retrieved successfully",
        data=page.model_dump()
    )

@router.get("/{book_api_id}", response_model=BookApiResponse, tags=["book-apis"])
def get_book_api(
    book_api_id: int,
    db: Session = Depends(get_db)
):
    """Get a book API by id"""
    service = BookApiService(db)
    return BookApiResponse(
        success=True,
        message="Book API retrieved successfully",
        data=service.get_book_api(book_api_id)
    )

@router.post("/", response_model=BookApiResponse, tags=["book-apis"])
def save_book_api(
    book_api_data: BookApiCreate,
    db: Session = Depends(get_db)
):
    """Create a book API, or replace the one with the same id"""
    service = BookApiService(db)
    return BookApiResponse(
        success=True,
        message="Book API saved successfully",
        data=service.save_book_api(book_api_data)
    )

@router.post("/batch", tags=["book-apis"])
def save_book_apis(
    book_apis_data: List[BookApiCreate],
    db: Session = Depends(get_db)
):
    """Save several book APIs in one request"""
    service = BookApiService(db)
    saved: List[BookApi] = service.save_book_apis(book_apis_data)
    return format_response(
        data=[book_api.model_dump() for book_api in saved],
        message=f"Saved {len(saved)} book APIs"
    )

@router.put("/{book_api_id}", response_model=BookApiResponse, tags=["book-apis"])
def replace_book_api(
    book_api_id: int,
    book_api_data: BookApiCreate,
    db: Session = Depends(get_db)
):
    """Create or replace the book API with the given id"""
    service = BookApiService(db)
    return BookApiResponse(
        success=True,
        message="Book API saved successfully",
        data=service.save_book_api(book_api_data, book_api_id)
    )

@router.delete("/{book_api_id}", response_model=BookApiResponse, tags=["book-apis"])
def delete_book_api(
    book_api_id: int,
    db: Session = Depends(get_db)
):
    """Delete a book API by id"""
    service = BookApiService(db)
    service.delete_book_api(book_api_id)
    return BookApiResponse(
        success=True,
        message="Book API deleted successfully"
    )

@router.post("/delete-batch", tags=["book-apis"])
def delete_book_apis(
    batch: BookApiBatchDelete,
    db: Session = Depends(get_db)
):
    """Delete several book APIs in one batch"""
    service = BookApiService(db)
    deleted = service.delete_book_apis(batch.ids)
    return format_response(
        data={"deleted": deleted},
        message=f"Deleted {deleted} book APIs"
    )
