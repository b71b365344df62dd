"""Services module."""
from .user import user_service
from .issue import issue_service
from .comment import comment_service
from .mailer import get_mailer

__all__ = [
    "user_service",
    "issue_service",
    "comment_service",
    "get_mailer",
]
