from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.common import PageResponse
from app.schemas.feedback import FeedbackRequest, FeedbackResponse
from app.services import feedback as feedback_service
from app.services.auth import get_current_user
from app.validation import ensure_valid, validate_feedback

router = APIRouter(prefix=f"{settings.api_prefix}/feedbacks", tags=["Feedback"])

@router.post("", response_model=int)
def save_feedback(
    request: FeedbackRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rate and comment a book the current user does not own."""
    return feedback_service.save(db, ensure_valid(request, validate_feedback), current_user)

@router.get("/book/{book_id}", response_model=PageResponse[FeedbackResponse])
def find_all_feedbacks_by_book(
    book_id: int,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return feedback_service.find_all_feedbacks_by_book(db, book_id, page, size, current_user)
