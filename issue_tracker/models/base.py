"""Declarative base and shared column helpers."""
import secrets
from datetime import datetime, timezone

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


def generate_short_id() -> str:
    """Short URL-safe public identifier, e.g. ``eKOTSdkn7Q``."""
    return secrets.token_urlsafe(7)


class Base(DeclarativeBase):
    """Base class for all models."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
