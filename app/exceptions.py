from enum import Enum
from typing import List, Optional, Tuple

from fastapi import status


class BusinessErrorCode(Enum):
    """Application error codes returned alongside the HTTP status."""

    NO_CODE = (0, status.HTTP_500_INTERNAL_SERVER_ERROR, "No code")
    # Not raised by the API; kept so clients keep the same code table
    INCORRECT_USERNAME_OR_PASSWORD = (302, status.HTTP_400_BAD_REQUEST, "Incorrect username or password")
    ACCOUNT_DISABLED = (303, status.HTTP_401_UNAUTHORIZED, "User account disabled")
    BAD_CREDENTIALS = (304, status.HTTP_401_UNAUTHORIZED, "Username or password is incorrect")
    ACCOUNT_LOCKED = (305, status.HTTP_401_UNAUTHORIZED, "User account locked")
    OPERATION_NOT_PERMITTED = (306, status.HTTP_403_FORBIDDEN, "Operation not permitted")
    ENTITY_NOT_FOUND = (307, status.HTTP_404_NOT_FOUND, "Entity not found")
    INVALID_ACTIVATION_TOKEN = (308, status.HTTP_400_BAD_REQUEST, "Invalid activation token")
    ACTIVATION_TOKEN_EXPIRED = (309, status.HTTP_400_BAD_REQUEST, "Activation token has expired")
    ACTIVATION_TOKEN_ALREADY_USED = (310, status.HTTP_400_BAD_REQUEST, "Activation token already used")
    EMAIL_ALREADY_REGISTERED = (311, status.HTTP_400_BAD_REQUEST, "Email already registered")
    FILE_STORAGE_FAILURE = (312, status.HTTP_500_INTERNAL_SERVER_ERROR, "File could not be stored")

    def __init__(self, code: int, http_status: int, description: str):
        self.code = code
        self.http_status = http_status
        self.description = description


class BusinessException(Exception):
    """Base class for errors translated by app.handlers."""

    error_code: BusinessErrorCode = BusinessErrorCode.NO_CODE

    def __init__(self, message: Optional[str] = None, error_code: Optional[BusinessErrorCode] = None):
        if error_code is not None:
            self.error_code = error_code
        self.message = message or self.error_code.description
        super().__init__(self.message)


class EntityNotFoundError(BusinessException):
    error_code = BusinessErrorCode.ENTITY_NOT_FOUND


class OperationNotPermittedError(BusinessException):
    error_code = BusinessErrorCode.OPERATION_NOT_PERMITTED


class BadCredentialsError(BusinessException):
    error_code = BusinessErrorCode.BAD_CREDENTIALS


class AccountDisabledError(BusinessException):
    error_code = BusinessErrorCode.ACCOUNT_DISABLED


class AccountLockedError(BusinessException):
    error_code = BusinessErrorCode.ACCOUNT_LOCKED


class ActivationTokenError(BusinessException):
    error_code = BusinessErrorCode.INVALID_ACTIVATION_TOKEN


class FileStorageError(BusinessException):
    error_code = BusinessErrorCode.FILE_STORAGE_FAILURE


class RequestValidationFailed(Exception):
    """Raised when an explicit request validator reports field errors."""

    def __init__(self, errors: List[Tuple[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors))
