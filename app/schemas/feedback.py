from pydantic import BaseModel
from typing import Optional

class FeedbackRequest(BaseModel):
    note: Optional[float] = None
    comment: Optional[str] = None
    bookId: Optional[int] = None

class FeedbackResponse(BaseModel):
    note: float
    comment: str
    ownFeedback: bool
