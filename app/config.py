from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path

# Get the backend directory (parent of app directory)
BACKEND_DIR = Path(__file__).parent.parent
ENV_FILE = BACKEND_DIR / ".env"

class Settings(BaseSettings):
    # Server settings (non-confidential, can have defaults)
    host: str = "0.0.0.0"
    port: int = 8088
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:4200"]

    # Database settings - confidential values from .env
    # database_url wins over the db_* parts when set (e.g. sqlite:///./booksocial.db)
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "book_social"
    db_user: str = "username"
    db_password: str = "password"

    # JWT settings - confidential values from .env
    jwt_secret_key: str  # Required from .env (confidential - no default)
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 1440

    # Mail settings (defaults target a local maildev container)
    mail_host: str = "localhost"
    mail_port: int = 1025
    mail_username: Optional[str] = None
    mail_password: Optional[str] = None  # Optional, from .env if provided (confidential)
    mail_use_tls: bool = False
    mail_from: str = "no-reply@booksocial.local"
    mail_workers: int = 2

    # Account activation
    activation_url: str = "http://localhost:4200/activate-account"
    activation_token_minutes: int = 5

    # Uploaded book covers are stored below this directory
    file_upload_path: str = "./uploads"

    class Config:
        env_file = str(ENV_FILE) if ENV_FILE.exists() else ".env"
        case_sensitive = False

settings = Settings()
