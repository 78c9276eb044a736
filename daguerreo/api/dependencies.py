"""Shared FastAPI dependencies."""

from typing import List, Optional

from fastapi import Query

from daguerreo.core.config import settings
from daguerreo.core.exceptions import InvalidPageRequestError
from daguerreo.models.paging import PageRequest, Sort


def get_page_request(
    page: int = Query(0, ge=0, description="0-based page index"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
    sort: Optional[List[str]] = Query(None, description="Sort criteria as property[,asc|desc]; repeatable"),
) -> PageRequest:
    """Build a PageRequest from ``page``, ``size`` and repeated ``sort`` query parameters."""
    try:
        return PageRequest(page=page, size=size, sort=Sort.parse(sort))
    except ValueError as e:
        raise InvalidPageRequestError(str(e))
