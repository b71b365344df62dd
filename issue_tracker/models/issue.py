"""Issue model."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, generate_short_id, utcnow


ISSUE_STATUSES = ("backlog", "in-progress", "in-test", "done")


class Issue(Base):
    """Issue document."""

    __tablename__ = "issues"

    issue_id: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True, default=generate_short_id
    )
    issue_title: Mapped[str] = mapped_column(String(255), nullable=False)
    reporter_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    reporter_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="backlog", nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    assignee: Mapped[Optional[str]] = mapped_column(String(255))

    # List-valued document fields
    attachments: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    comments: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    watchers: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    is_deleted: Mapped[bool] = mapped_column(default=False, nullable=False)
    reported_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    modified_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Issue(issue_id={self.issue_id}, status={self.status})>"
