"""Book catalogue, visibility toggles and the borrow/return/approve workflow.

Every mutating call receives the resolved caller explicitly and checks it
against the book owner before touching the database.
"""
import base64
import logging
from typing import Optional
from sqlalchemy.orm import Session
from app.exceptions import EntityNotFoundError, OperationNotPermittedError
from app.models.audit import stamp_created, stamp_modified
from app.models.book import Book
from app.models.history import BookTransactionHistory
from app.models.user import User
from app.repositories import book as book_repository
from app.repositories import history as history_repository
from app.repositories import user as user_repository
from app.schemas.book import BookRequest, BookResponse, BorrowedBookResponse
from app.schemas.common import PageResponse
from app.services import file_storage
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)


def book_rate(db: Session, book_id: int) -> float:
    """Average feedback note rounded to one decimal, 0.0 without feedback."""
    average = book_repository.average_note(db, book_id)
    if average is None:
        return 0.0
    return round(float(average) * 10.0) / 10.0


def to_book_response(db: Session, book: Book) -> BookResponse:
    owner = user_repository.find_by_id(db, book.owner_id)
    cover = file_storage.read_file(book.book_cover)
    return BookResponse(
        id=book.book_id,
        title=book.title,
        authorName=book.author_name,
        isbn=book.isbn,
        synopsis=book.synopsis,
        owner=owner.full_name() if owner else "",
        cover=base64.b64encode(cover).decode("ascii") if cover is not None else None,
        rate=book_rate(db, book.book_id),
        archived=book.archived,
        shareable=book.shareable,
    )


def to_borrowed_book_response(db: Session, history: BookTransactionHistory, book: Book) -> BorrowedBookResponse:
    return BorrowedBookResponse(
        id=book.book_id,
        title=book.title,
        authorName=book.author_name,
        isbn=book.isbn,
        rate=book_rate(db, book.book_id),
        returned=history.returned,
        returnApproved=history.return_approved,
    )


def _get_book_or_404(db: Session, book_id: int) -> Book:
    book = book_repository.find_by_id(db, book_id)
    if book is None:
        raise EntityNotFoundError(f"No book found with ID:: {book_id}")
    return book


def _is_owner(book: Book, user: User) -> bool:
    return book.owner_id == user.user_id


# Catalogue

def save(db: Session, request: BookRequest, user: User) -> int:
    book = Book(
        title=request.title,
        author_name=request.authorName,
        isbn=request.isbn,
        synopsis=request.synopsis,
        archived=False,
        shareable=request.shareable,
        owner_id=user.user_id
    )
    stamp_created(book, user.user_id)
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info(f"User {user.user_id} created book {book.book_id}")
    return book.book_id


def find_by_id(db: Session, book_id: int) -> BookResponse:
    return to_book_response(db, _get_book_or_404(db, book_id))


def find_all_books(db: Session, page: int, size: int, user: User) -> PageResponse[BookResponse]:
    query = book_repository.displayable_books(db, user.user_id)
    return paginate(query, page, size, lambda book: to_book_response(db, book))


def find_all_books_by_owner(db: Session, page: int, size: int, user: User) -> PageResponse[BookResponse]:
    query = book_repository.books_by_owner(db, user.user_id)
    return paginate(query, page, size, lambda book: to_book_response(db, book))


def find_all_borrowed_books(db: Session, page: int, size: int, user: User) -> PageResponse[BorrowedBookResponse]:
    query = history_repository.borrowed_by_user(db, user.user_id)
    return paginate(query, page, size, lambda row: to_borrowed_book_response(db, *row))


def find_all_returned_books(db: Session, page: int, size: int, user: User) -> PageResponse[BorrowedBookResponse]:
    query = history_repository.borrowed_from_owner(db, user.user_id)
    return paginate(query, page, size, lambda row: to_borrowed_book_response(db, *row))


def update_shareable_status(db: Session, book_id: int, user: User) -> int:
    book = _get_book_or_404(db, book_id)
    if not _is_owner(book, user):
        raise OperationNotPermittedError("You cannot update others books shareable status")
    book.shareable = not book.shareable
    stamp_modified(book, user.user_id)
    db.commit()
    return book_id


def update_archived_status(db: Session, book_id: int, user: User) -> int:
    book = _get_book_or_404(db, book_id)
    if not _is_owner(book, user):
        raise OperationNotPermittedError("You cannot update others books archived status")
    book.archived = not book.archived
    stamp_modified(book, user.user_id)
    db.commit()
    return book_id


def upload_book_cover(db: Session, content: bytes, filename: Optional[str], user: User, book_id: int) -> str:
    book = _get_book_or_404(db, book_id)
    if not _is_owner(book, user):
        raise OperationNotPermittedError("You cannot upload a cover for others books")
    book.book_cover = file_storage.save_file(content, filename, user.user_id)
    stamp_modified(book, user.user_id)
    db.commit()
    return book.book_cover


# Lending

def borrow_book(db: Session, book_id: int, user: User) -> int:
    book = _get_book_or_404(db, book_id)
    if not book.is_available_for_lending():
        raise OperationNotPermittedError("The requested book cannot be borrowed since it is archived or not shareable")
    if _is_owner(book, user):
        raise OperationNotPermittedError("You cannot borrow your own book")
    if history_repository.is_already_borrowed_by_user(db, book_id, user.user_id):
        raise OperationNotPermittedError(
            "You already borrowed this book and it is still not returned or the return is not approved by the owner"
        )
    if history_repository.is_already_borrowed(db, book_id):
        raise OperationNotPermittedError("The requested book is already borrowed")

    history = BookTransactionHistory(
        user_id=user.user_id,
        book_id=book.book_id,
        returned=False,
        return_approved=False
    )
    stamp_created(history, user.user_id)
    db.add(history)
    db.commit()
    db.refresh(history)
    logger.info(f"User {user.user_id} borrowed book {book_id} (history {history.history_id})")
    return history.history_id


def return_borrowed_book(db: Session, book_id: int, user: User) -> int:
    book = _get_book_or_404(db, book_id)
    if not book.is_available_for_lending():
        raise OperationNotPermittedError("The requested book is archived or not shareable")
    if _is_owner(book, user):
        raise OperationNotPermittedError("You cannot borrow or return your own book")

    history = history_repository.find_open_loan(db, book_id, user.user_id)
    if history is None:
        raise OperationNotPermittedError("You did not borrow this book")

    history.returned = True
    stamp_modified(history, user.user_id)
    db.commit()
    logger.info(f"User {user.user_id} returned book {book_id} (history {history.history_id})")
    return history.history_id


def approve_return_borrowed_book(db: Session, book_id: int, user: User) -> int:
    book = _get_book_or_404(db, book_id)
    if not book.is_available_for_lending():
        raise OperationNotPermittedError("The requested book is archived or not shareable")
    if not _is_owner(book, user):
        raise OperationNotPermittedError("You cannot approve the return of a book you do not own")

    history = history_repository.find_returned_loan(db, book_id, user.user_id)
    if history is None:
        raise OperationNotPermittedError("The book is not returned yet. You cannot approve its return")

    history.return_approved = True
    stamp_modified(history, user.user_id)
    db.commit()
    logger.info(f"User {user.user_id} approved return of book {book_id} (history {history.history_id})")
    return history.history_id
