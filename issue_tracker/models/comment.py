"""Comment model."""
from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, generate_short_id, utcnow


class Comment(Base):
    """Comment on an issue."""

    __tablename__ = "comments"

    comment_id: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True, default=generate_short_id
    )
    issue_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(32), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    commented_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Comment(comment_id={self.comment_id}, issue_id={self.issue_id})>"
