from .user import User, Role, user_role
from .token import Token
from .book import Book
from .history import BookTransactionHistory
from .feedback import Feedback
from .audit import AuditFields, HasAudit

__all__ = [
    "User",
    "Role",
    "user_role",
    "Token",
    "Book",
    "BookTransactionHistory",
    "Feedback",
    "AuditFields",
    "HasAudit",
]
