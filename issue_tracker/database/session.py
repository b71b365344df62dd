"""Per-request database session dependency."""
import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from .engine import get_session_factory

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; services commit their own writes, failures roll back."""
    session = get_session_factory()()

    try:
        yield session
    except Exception:
        logger.warning("Rolling back database session")
        await session.rollback()
        raise
    finally:
        await session.close()
