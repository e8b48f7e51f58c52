from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.schemas.auth import AuthenticationRequest, AuthenticationResponse, RegistrationRequest
from app.services import account
from app.services.email import EmailService, get_email_service
from app.validation import ensure_valid, validate_authentication, validate_registration

router = APIRouter(prefix=f"{settings.api_prefix}/auth", tags=["Authentication"])

@router.post("/register", status_code=status.HTTP_202_ACCEPTED)
def register(
    request: RegistrationRequest,
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service)
):
    """Register a new, disabled account and email its activation code."""
    account.register(db, ensure_valid(request, validate_registration), mailer)
    return Response(status_code=status.HTTP_202_ACCEPTED)

@router.post("/authenticate", response_model=AuthenticationResponse)
def authenticate(request: AuthenticationRequest, db: Session = Depends(get_db)):
    """Login and get access token."""
    return account.authenticate(db, ensure_valid(request, validate_authentication))

@router.get("/activate-account")
def activate_account(
    token: str = Query(..., description="Activation code received by email"),
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service)
):
    """Enable the account the activation code was issued for."""
    account.activate_account(db, token, mailer)
    return Response(status_code=status.HTTP_200_OK)
