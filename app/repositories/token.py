from typing import Optional
from sqlalchemy.orm import Session
from app.models.token import Token


def find_by_token(db: Session, code: str) -> Optional[Token]:
    return db.query(Token).filter(Token.token == code).first()


def token_exists(db: Session, code: str) -> bool:
    return db.query(Token.token_id).filter(Token.token == code).first() is not None
