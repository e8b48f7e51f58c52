from pydantic import BaseModel
from typing import Optional

class BookRequest(BaseModel):
    id: Optional[int] = None
    title: Optional[str] = None
    authorName: Optional[str] = None
    isbn: Optional[str] = None
    synopsis: Optional[str] = None
    shareable: bool = False

class BookResponse(BaseModel):
    id: int
    title: str
    authorName: str
    isbn: str
    synopsis: str
    owner: str
    cover: Optional[str] = None  # base64 encoded image bytes
    rate: float = 0.0
    archived: bool
    shareable: bool

class BorrowedBookResponse(BaseModel):
    id: int
    title: str
    authorName: str
    isbn: str
    rate: float = 0.0
    returned: bool
    returnApproved: bool
