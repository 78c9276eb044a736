# Pydantic models, SQLAlchemy tables and paging types
from .base import BaseResponse, Identifiable
from .paging import Direction, Order, Sort, PageRequest, Page
from .book_api import BookApiTable, book_api, BookApi, BookApiCreate, BookApiBatchDelete, BookApiResponse, BookApiPageResponse

__all__ = [
    "BaseResponse",
    "Identifiable",
    "Direction",
    "Order",
    "Sort",
    "PageRequest",
    "Page",
    "BookApiTable",
    "book_api",
    "BookApi",
    "BookApiCreate",
    "BookApiBatchDelete",
    "BookApiResponse",
    "BookApiPageResponse"
]
