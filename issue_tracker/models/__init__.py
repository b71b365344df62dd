"""Database models module."""
from .base import Base
from .user import User
from .issue import Issue, ISSUE_STATUSES
from .comment import Comment

__all__ = [
    "Base",
    "User",
    "Issue",
    "ISSUE_STATUSES",
    "Comment",
]
