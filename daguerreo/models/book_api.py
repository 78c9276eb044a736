from sqlalchemy import Column, Integer, String
from daguerreo.core.database import Base
from daguerreo.models.base import BaseResponse, Identifiable
from daguerreo.models.paging import Page
from pydantic import BaseModel, Field
from typing import List, Optional

# SQLAlchemy Model
class BookApiTable(Base):
    __tablename__ = "book_api"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)

book_api = BookApiTable.__table__

# Entity
class BookApi(Identifiable):
    """A book search API known to the catalogue"""
    id: Optional[int] = None
    name: str
    url: str

# Pydantic Models for API
class BookApiCreate(BaseModel):
    """Model for creating or replacing a book API"""
    id: Optional[int] = Field(None, description="Explicit id; omitted to let the database generate one")
    name: str = Field(..., min_length=1, max_length=255, description="Display name of the API")
    url: str = Field(..., min_length=1, max_length=2048, description="Endpoint URL of the API")

    def to_entity(self, book_api_id: Optional[int] = None) -> BookApi:
        return BookApi(id=book_api_id if book_api_id is not None else self.id, name=self.name, url=self.url)

class BookApiBatchDelete(BaseModel):
    """Ids of book APIs to delete in one batch"""
    ids: List[int] = Field(default_factory=list)

class BookApiResponse(BaseResponse):
    """Response model for single book API operations"""
    data: Optional[BookApi] = None

class BookApiPageResponse(BaseResponse):
    """Response model for paged book API listings"""
    data: Page[BookApi]
