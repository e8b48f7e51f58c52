"""Registration, login and account activation."""
import logging
import secrets
from datetime import timedelta
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.config import settings
from app.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    ActivationTokenError,
    BadCredentialsError,
    BusinessErrorCode,
    OperationNotPermittedError,
)
from app.models.token import Token
from app.models.user import User
from app.repositories import token as token_repository
from app.repositories import user as user_repository
from app.schemas.auth import AuthenticationRequest, AuthenticationResponse, RegistrationRequest
from app.services.auth import create_access_token, get_password_hash, verify_password
from app.services.email import EmailService, EmailTemplateName
from app.utils.timezone import ensure_aware, now_utc

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "USER"
ACTIVATION_CODE_LENGTH = 6


def generate_activation_code(length: int = ACTIVATION_CODE_LENGTH) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


def _generate_and_save_activation_token(db: Session, user: User) -> str:
    code = generate_activation_code()
    while token_repository.token_exists(db, code):
        code = generate_activation_code()

    created_at = now_utc()
    db.add(Token(
        token=code,
        created_at=created_at,
        expires_at=created_at + timedelta(minutes=settings.activation_token_minutes),
        user_id=user.user_id
    ))
    db.commit()
    return code


def _send_validation_email(db: Session, user: User, mailer: EmailService) -> None:
    code = _generate_and_save_activation_token(db, user)
    mailer.send_email_async(
        user.email,
        user.full_name(),
        EmailTemplateName.ACTIVATE_ACCOUNT,
        settings.activation_url,
        code,
        "Account activation",
    )


def register(db: Session, request: RegistrationRequest, mailer: EmailService) -> User:
    role = user_repository.find_role_by_name(db, DEFAULT_ROLE)
    if role is None:
        raise RuntimeError(f"ROLE {DEFAULT_ROLE} was not initiated")

    if user_repository.find_by_email(db, request.email) is not None:
        raise OperationNotPermittedError(
            f"Email {request.email} is already registered",
            BusinessErrorCode.EMAIL_ALREADY_REGISTERED,
        )

    user = User(
        firstname=request.firstname,
        lastname=request.lastname,
        email=request.email,
        date_of_birth=request.dateOfBirth,
        password_hash=get_password_hash(request.password),
        account_locked=False,
        enabled=False
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise OperationNotPermittedError(
            f"Email {request.email} is already registered",
            BusinessErrorCode.EMAIL_ALREADY_REGISTERED,
        )
    user_repository.assign_role(db, user, role)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.user_id} ({user.email})")

    _send_validation_email(db, user, mailer)
    return user


def authenticate(db: Session, request: AuthenticationRequest) -> AuthenticationResponse:
    user = user_repository.find_by_email(db, request.email)
    if user is None or not verify_password(request.password, user.password_hash):
        raise BadCredentialsError()
    if user.account_locked:
        raise AccountLockedError()
    if not user.enabled:
        raise AccountDisabledError()

    token = create_access_token(
        subject=user.email,
        extra_claims={"fullName": user.full_name()},
        authorities=user_repository.role_names(db, user.user_id),
    )
    return AuthenticationResponse(token=token)


def activate_account(db: Session, code: str, mailer: EmailService) -> None:
    saved_token = token_repository.find_by_token(db, code)
    if saved_token is None:
        raise ActivationTokenError("Invalid token")

    if saved_token.validated_at is not None:
        raise ActivationTokenError(
            "Activation token has already been used",
            BusinessErrorCode.ACTIVATION_TOKEN_ALREADY_USED,
        )

    user = user_repository.find_by_id(db, saved_token.user_id)
    if user is None:
        raise ActivationTokenError("User not found")

    if now_utc() > ensure_aware(saved_token.expires_at):
        logger.info(f"Activation token for user {user.user_id} expired, sending a new one")
        _send_validation_email(db, user, mailer)
        raise ActivationTokenError(
            "Activation token has expired. A new token has been sent to the same email address",
            BusinessErrorCode.ACTIVATION_TOKEN_EXPIRED,
        )

    user.enabled = True
    saved_token.validated_at = now_utc()
    db.commit()
    logger.info(f"Activated account of user {user.user_id}")
