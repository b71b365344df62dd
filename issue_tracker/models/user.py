"""User model."""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, generate_short_id, utcnow


class User(Base):
    """User record for authentication and issue ownership."""

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True, default=generate_short_id
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[Optional[str]] = mapped_column(String(32))
    country: Mapped[Optional[str]] = mapped_column(String(64))
    user_verification_status: Mapped[bool] = mapped_column(default=False, nullable=False)

    # Bumped on every credential change; reset tokens carry the value they were issued with
    token_version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_deleted: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    modified_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email={self.email})>"
