"""Comment schemas."""
from datetime import datetime

from pydantic import Field

from .common import BaseSchema


class CommentCreate(BaseSchema):
    """Comment creation schema; the author comes from the session."""

    issue_id: str = Field(..., min_length=1, description="Issue being commented on")
    comment: str = Field(..., min_length=1, description="Comment text")


class CommentResponse(BaseSchema):
    """Comment response schema."""

    comment_id: str
    issue_id: str
    user_id: str
    user_name: str
    comment: str
    commented_on: datetime
