from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from app.database import Base

class Token(Base):
    """Activation code sent by email after registration."""
    __tablename__ = "token"

    token_id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(20), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    validated_at = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(Integer, ForeignKey("user.user_id", ondelete="CASCADE"), nullable=False, index=True)
