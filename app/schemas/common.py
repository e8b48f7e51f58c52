from pydantic import BaseModel
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

class PageResponse(BaseModel, Generic[T]):
    content: List[T]
    number: int
    size: int
    totalElements: int
    totalPages: int
    first: bool
    last: bool

class ExceptionResponse(BaseModel):
    businessErrorCode: Optional[int] = None
    businessErrorDescription: Optional[str] = None
    error: Optional[str] = None
    validationErrors: Optional[List[str]] = None
    errors: Optional[Dict[str, str]] = None

    def to_body(self) -> dict:
        """Serialize without null or empty fields."""
        return {key: value for key, value in self.model_dump().items() if value not in (None, [], {})}
