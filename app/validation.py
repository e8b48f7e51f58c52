"""Request validators.

Each validator takes a bound request model and returns a list of
``(field, message)`` pairs, empty when the request is acceptable. Routes
call ``ensure_valid`` which raises ``RequestValidationFailed`` so the
central handler can answer with a 400.
"""
import math
from typing import Callable, List, Optional, Tuple, TypeVar

from email_validator import EmailNotValidError, validate_email

from app.exceptions import RequestValidationFailed
from app.schemas.auth import AuthenticationRequest, RegistrationRequest
from app.schemas.book import BookRequest
from app.schemas.feedback import FeedbackRequest

FieldError = Tuple[str, str]
T = TypeVar("T")

MIN_PASSWORD_LENGTH = 8


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_email(value: Optional[str], invalid_message: str) -> Optional[str]:
    if _is_blank(value):
        return "Email is mandatory"
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return invalid_message
    return None


def _check_password(value: Optional[str]) -> Optional[str]:
    if _is_blank(value):
        return "Password is mandatory"
    if len(value) < MIN_PASSWORD_LENGTH:
        return f"Password should be at least {MIN_PASSWORD_LENGTH} characters long"
    return None


def validate_registration(request: RegistrationRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    if _is_blank(request.firstname):
        errors.append(("firstname", "Firstname is mandatory"))
    if _is_blank(request.lastname):
        errors.append(("lastname", "Lastname is mandatory"))
    email_error = _check_email(request.email, "Email is not valid")
    if email_error:
        errors.append(("email", email_error))
    password_error = _check_password(request.password)
    if password_error:
        errors.append(("password", password_error))
    return errors


def validate_authentication(request: AuthenticationRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    email_error = _check_email(request.email, "Email format is invalid")
    if email_error:
        errors.append(("email", email_error))
    password_error = _check_password(request.password)
    if password_error:
        errors.append(("password", password_error))
    return errors


def validate_book(request: BookRequest) -> List[FieldError]:
    # Messages are numeric codes the web client translates
    errors: List[FieldError] = []
    if _is_blank(request.title):
        errors.append(("title", "100"))
    if _is_blank(request.authorName):
        errors.append(("authorName", "101"))
    if _is_blank(request.isbn):
        errors.append(("isbn", "102"))
    if _is_blank(request.synopsis):
        errors.append(("synopsis", "103"))
    return errors


def validate_feedback(request: FeedbackRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    if request.note is None:
        errors.append(("note", "200"))
    elif not math.isfinite(request.note):
        errors.append(("note", "202"))
    elif request.note < 0:
        errors.append(("note", "201"))
    elif request.note > 5:
        errors.append(("note", "202"))
    if _is_blank(request.comment):
        errors.append(("comment", "203"))
    if request.bookId is None:
        errors.append(("bookId", "204"))
    return errors


def ensure_valid(request: T, validator: Callable[[T], List[FieldError]]) -> T:
    errors = validator(request)
    if errors:
        raise RequestValidationFailed(errors)
    return request
