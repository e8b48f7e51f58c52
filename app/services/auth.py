import logging
from datetime import timedelta
from typing import Dict, List, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.config import settings
from app.models.user import User
from app.database import get_db
from app.repositories import user as user_repository
from app.utils.timezone import now_utc

logger = logging.getLogger(__name__)

# HTTP Bearer token - auto_error=False so we can handle errors ourselves
security = HTTPBearer(auto_error=False)

# Password hashing context - using bcrypt with automatic salt generation
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        # If hash is not a valid bcrypt hash, return False
        logger.error(f"Password verification error: {e}. Hash format may be invalid.")
        return False

def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)

def create_access_token(
    subject: str,
    extra_claims: Optional[Dict[str, object]] = None,
    authorities: Optional[List[str]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed JWT carrying the subject, extra claims and granted authorities."""
    issued_at = now_utc()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = dict(extra_claims or {})
    to_encode.update({
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "authorities": list(authorities or []),
    })
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

def decode_access_token(token: str) -> Dict[str, object]:
    """Decode and verify a token. Raises JWTError when it is tampered with or expired."""
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])

def extract_username(token: str) -> Optional[str]:
    return decode_access_token(token).get("sub")

def is_token_valid(token: str, user: User) -> bool:
    """Subject matches the user and the token has not expired."""
    try:
        return extract_username(token) == user.email
    except JWTError:
        return False

def _is_auth_path(request: Request) -> bool:
    return request.url.path.startswith(f"{settings.api_prefix}/auth")

def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Resolve the caller from the bearer token.

    Auth endpoints are never resolved. A missing header, a token that does not
    decode or a subject that matches no user all yield None instead of an error.
    """
    if _is_auth_path(request):
        return None

    if credentials is None or not credentials.credentials:
        auth_header = request.headers.get("Authorization")
        if auth_header:
            logger.warning(f"Authorization header present but invalid format: {auth_header[:50]}")
        return None

    token = credentials.credentials
    try:
        user_email = extract_username(token)
    except JWTError as e:
        logger.warning(f"JWT validation error: {str(e)}")
        return None

    if not user_email:
        return None

    user = user_repository.find_by_email(db, user_email)
    if user is None or not is_token_valid(token, user):
        return None
    return user

def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Get current authenticated user from JWT token."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials. Please provide a valid Authorization header with Bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
