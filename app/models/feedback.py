from sqlalchemy import Column, DateTime, Integer, Float, Text, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from app.database import Base
from app.models.audit import audit_property

class Feedback(Base):
    __tablename__ = "feedback"

    feedback_id = Column(Integer, primary_key=True, autoincrement=True)
    note = Column(Float, nullable=False)
    comment = Column(Text, nullable=False)
    book_id = Column(Integer, ForeignKey("book.book_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    created_by = Column(Integer, nullable=False)
    last_modified_by = Column(Integer, nullable=True)

    audit = audit_property()

    __table_args__ = (
        CheckConstraint("note >= 0 AND note <= 5", name="chk_feedback_note"),
    )
