from pydantic import BaseModel
from typing import Optional
from datetime import date

# Fields are optional so that app.validation can report every missing one
class RegistrationRequest(BaseModel):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    dateOfBirth: Optional[date] = None

class AuthenticationRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class AuthenticationResponse(BaseModel):
    token: str
