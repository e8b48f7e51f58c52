from sqlalchemy import Column, String, DateTime, Integer, Boolean, Text, ForeignKey
from sqlalchemy.sql import func
from app.database import Base
from app.models.audit import audit_property

class Book(Base):
    __tablename__ = "book"

    book_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    author_name = Column(String(255), nullable=False)
    isbn = Column(String(20), nullable=False)
    synopsis = Column(Text, nullable=False)
    book_cover = Column(String(512), nullable=True)  # Path on local disk, see services.file_storage
    archived = Column(Boolean, default=False, nullable=False)
    shareable = Column(Boolean, default=False, nullable=False)
    owner_id = Column(Integer, ForeignKey("user.user_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    created_by = Column(Integer, nullable=False)
    last_modified_by = Column(Integer, nullable=True)

    audit = audit_property()

    def is_available_for_lending(self) -> bool:
        return self.shareable and not self.archived
