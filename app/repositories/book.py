from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Query, Session
from app.models.book import Book
from app.models.feedback import Feedback


def find_by_id(db: Session, book_id: int) -> Optional[Book]:
    return db.query(Book).filter(Book.book_id == book_id).first()


def displayable_books(db: Session, user_id: int) -> Query:
    """Books other users may discover: shareable, not archived, not owned by the caller."""
    return db.query(Book).filter(
        Book.archived.is_(False),
        Book.shareable.is_(True),
        Book.owner_id != user_id
    ).order_by(Book.created_at.desc(), Book.book_id.desc())


def books_by_owner(db: Session, owner_id: int) -> Query:
    return db.query(Book).filter(
        Book.owner_id == owner_id
    ).order_by(Book.created_at.desc(), Book.book_id.desc())


def average_note(db: Session, book_id: int) -> Optional[float]:
    return db.query(func.avg(Feedback.note)).filter(Feedback.book_id == book_id).scalar()
