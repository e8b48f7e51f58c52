from .auth import RegistrationRequest, AuthenticationRequest, AuthenticationResponse
from .book import BookRequest, BookResponse, BorrowedBookResponse
from .feedback import FeedbackRequest, FeedbackResponse
from .common import PageResponse, ExceptionResponse

__all__ = [
    "RegistrationRequest", "AuthenticationRequest", "AuthenticationResponse",
    "BookRequest", "BookResponse", "BorrowedBookResponse",
    "FeedbackRequest", "FeedbackResponse",
    "PageResponse", "ExceptionResponse",
]
