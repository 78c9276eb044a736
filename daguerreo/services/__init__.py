from .book_api_service import BookApiService

__all__ = ["BookApiService"]
