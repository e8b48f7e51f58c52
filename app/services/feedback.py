import logging
from sqlalchemy.orm import Session
from app.exceptions import EntityNotFoundError, OperationNotPermittedError
from app.models.audit import stamp_created
from app.models.feedback import Feedback
from app.models.user import User
from app.repositories import book as book_repository
from app.repositories import feedback as feedback_repository
from app.schemas.common import PageResponse
from app.schemas.feedback import FeedbackRequest, FeedbackResponse
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)


def to_feedback_response(feedback: Feedback, user_id: int) -> FeedbackResponse:
    return FeedbackResponse(
        note=feedback.note,
        comment=feedback.comment,
        ownFeedback=feedback.created_by == user_id,
    )


def save(db: Session, request: FeedbackRequest, user: User) -> int:
    book = book_repository.find_by_id(db, request.bookId)
    if book is None:
        raise EntityNotFoundError(f"No book found with ID:: {request.bookId}")
    if not book.is_available_for_lending():
        raise OperationNotPermittedError("You cannot give a feedback for an archived or not shareable book")
    if book.owner_id == user.user_id:
        raise OperationNotPermittedError("You cannot give feedback to your own book")

    feedback = Feedback(
        note=request.note,
        comment=request.comment,
        book_id=book.book_id
    )
    stamp_created(feedback, user.user_id)
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    logger.info(f"User {user.user_id} left feedback {feedback.feedback_id} on book {book.book_id}")
    return feedback.feedback_id


def find_all_feedbacks_by_book(db: Session, book_id: int, page: int, size: int,
                               user: User) -> PageResponse[FeedbackResponse]:
    query = feedback_repository.feedbacks_by_book(db, book_id)
    return paginate(query, page, size, lambda feedback: to_feedback_response(feedback, user.user_id))
