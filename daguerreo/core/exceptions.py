from fastapi import HTTPException, status


class RepositoryError(Exception):
    """Base exception for repository failures raised by daguerreo itself"""
    pass

class RepositoryConfigurationError(RepositoryError):
    """Raised when a repository cannot resolve its table or entity mapping"""
    pass

class UnsupportedOperationError(RepositoryError, NotImplementedError):
    """Raised by operations that are disabled on purpose"""
    pass

class InvalidSortPropertyError(RepositoryError, ValueError):
    """Raised when a sort property does not resolve to a column"""
    def __init__(self, prop: str, table_name: str):
        self.property = prop
        self.table_name = table_name
        super().__init__(f"No column for sort property '{prop}' in table '{table_name}'")


class DaguerreoException(HTTPException):
    """Base exception for the daguerreo HTTP API"""
    pass

class BookApiNotFoundError(DaguerreoException):
    """Raised when a book API is not found"""
    def __init__(self, book_api_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book API with id {book_api_id} not found"
        )

class InvalidPageRequestError(DaguerreoException):
    """Raised when paging or sorting query parameters cannot be used"""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
