from sqlalchemy import Column, DateTime, Integer, Boolean, ForeignKey
from sqlalchemy.sql import func
from app.database import Base
from app.models.audit import audit_property

class BookTransactionHistory(Base):
    """One borrow of a book by a user.

    The two flags move strictly forward:
    requested (False, False) -> returned (True, False) -> approved (True, True).
    """
    __tablename__ = "book_transaction_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.user_id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("book.book_id", ondelete="CASCADE"), nullable=False, index=True)
    returned = Column(Boolean, default=False, nullable=False)
    return_approved = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    created_by = Column(Integer, nullable=False)
    last_modified_by = Column(Integer, nullable=True)

    audit = audit_property()
