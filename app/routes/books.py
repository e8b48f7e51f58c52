from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.book import BookRequest, BookResponse, BorrowedBookResponse
from app.schemas.common import PageResponse
from app.services import book as book_service
from app.services.auth import get_current_user
from app.validation import ensure_valid, validate_book

router = APIRouter(prefix=f"{settings.api_prefix}/books", tags=["Book"])

@router.post("", response_model=int)
def save_book(
    request: BookRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a book owned by the current user."""
    return book_service.save(db, ensure_valid(request, validate_book), current_user)

@router.get("", response_model=PageResponse[BookResponse])
def find_all_books(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Shareable, non archived books of other users."""
    return book_service.find_all_books(db, page, size, current_user)

@router.get("/owner", response_model=PageResponse[BookResponse])
def find_all_books_by_owner(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return book_service.find_all_books_by_owner(db, page, size, current_user)

@router.get("/borrowed", response_model=PageResponse[BorrowedBookResponse])
def find_all_borrowed_books(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Books the current user has borrowed."""
    return book_service.find_all_borrowed_books(db, page, size, current_user)

@router.get("/returned", response_model=PageResponse[BorrowedBookResponse])
def find_all_returned_books(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Borrows of the current user's books."""
    return book_service.find_all_returned_books(db, page, size, current_user)

@router.get("/{book_id}", response_model=BookResponse)
def find_book_by_id(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get book details by ID."""
    return book_service.find_by_id(db, book_id)

@router.patch("/shareable/{book_id}", response_model=int)
def update_shareable_status(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return book_service.update_shareable_status(db, book_id, current_user)

@router.patch("/archived/{book_id}", response_model=int)
def update_archived_status(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return book_service.update_archived_status(db, book_id, current_user)

@router.post("/borrow/{book_id}", response_model=int)
def borrow_book(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return book_service.borrow_book(db, book_id, current_user)

@router.patch("/borrow/return/{book_id}", response_model=int)
def return_borrowed_book(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return book_service.return_borrowed_book(db, book_id, current_user)

@router.patch("/borrow/return/approve/{book_id}", response_model=int)
def approve_return_borrowed_book(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return book_service.approve_return_borrowed_book(db, book_id, current_user)

@router.post("/cover/{book_id}", status_code=status.HTTP_202_ACCEPTED)
def upload_book_cover_picture(
    book_id: int,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Store a cover image for the book (multipart field "file")."""
    book_service.upload_book_cover(db, file.file.read(), file.filename, current_user, book_id)
    return Response(status_code=status.HTTP_202_ACCEPTED)
