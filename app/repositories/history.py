from typing import Optional
from sqlalchemy.orm import Query, Session
from app.models.book import Book
from app.models.history import BookTransactionHistory


def borrowed_by_user(db: Session, user_id: int) -> Query:
    """Every borrow record of the user, newest first."""
    return db.query(BookTransactionHistory, Book).join(
        Book, Book.book_id == BookTransactionHistory.book_id
    ).filter(
        BookTransactionHistory.user_id == user_id
    ).order_by(BookTransactionHistory.created_at.desc(), BookTransactionHistory.history_id.desc())


def borrowed_from_owner(db: Session, owner_id: int) -> Query:
    """Borrow records on books owned by the user, newest first."""
    return db.query(BookTransactionHistory, Book).join(
        Book, Book.book_id == BookTransactionHistory.book_id
    ).filter(
        Book.owner_id == owner_id
    ).order_by(BookTransactionHistory.created_at.desc(), BookTransactionHistory.history_id.desc())


def is_already_borrowed_by_user(db: Session, book_id: int, user_id: int) -> bool:
    return db.query(BookTransactionHistory.history_id).filter(
        BookTransactionHistory.book_id == book_id,
        BookTransactionHistory.user_id == user_id,
        BookTransactionHistory.return_approved.is_(False)
    ).first() is not None


def is_already_borrowed(db: Session, book_id: int) -> bool:
    return db.query(BookTransactionHistory.history_id).filter(
        BookTransactionHistory.book_id == book_id,
        BookTransactionHistory.return_approved.is_(False)
    ).first() is not None


def find_open_loan(db: Session, book_id: int, user_id: int) -> Optional[BookTransactionHistory]:
    """The user's borrow of the book that has not been handed back yet."""
    return db.query(BookTransactionHistory).filter(
        BookTransactionHistory.book_id == book_id,
        BookTransactionHistory.user_id == user_id,
        BookTransactionHistory.returned.is_(False),
        BookTransactionHistory.return_approved.is_(False)
    ).first()


def find_returned_loan(db: Session, book_id: int, owner_id: int) -> Optional[BookTransactionHistory]:
    """A handed-back borrow of the owner's book still waiting for approval."""
    return db.query(BookTransactionHistory).join(
        Book, Book.book_id == BookTransactionHistory.book_id
    ).filter(
        BookTransactionHistory.book_id == book_id,
        Book.owner_id == owner_id,
        BookTransactionHistory.returned.is_(True),
        BookTransactionHistory.return_approved.is_(False)
    ).first()
