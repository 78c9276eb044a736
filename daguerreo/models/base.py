from pydantic import BaseModel, ConfigDict, Field
from typing import Any
from datetime import datetime

class BaseResponse(BaseModel):
    """Base response model"""
    success: bool = True
    message: str = "Operation completed successfully"
    timestamp: datetime = Field(default_factory=datetime.utcnow)

class Identifiable(BaseModel):
    """
    Base entity model.

    Subclasses expose an ``id`` (a field or a property) that is None until
    the entity has been persisted. Composite keys are exposed as a tuple in
    primary-key column order.
    """
    model_config = ConfigDict(from_attributes=True)

    def same_identity(self, other: Any) -> bool:
        """Entities are the same when both carry the same non-null id"""
        if not isinstance(other, Identifiable):
            return False
        return self.id is not None and self.id == other.id
