from sqlalchemy.orm import Query, Session
from app.models.feedback import Feedback


def feedbacks_by_book(db: Session, book_id: int) -> Query:
    return db.query(Feedback).filter(
        Feedback.book_id == book_id
    ).order_by(Feedback.created_at.desc(), Feedback.feedback_id.desc())
