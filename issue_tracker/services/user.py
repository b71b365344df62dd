"""User record service."""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import auth_service
from ..core.exceptions import NotFoundError
from ..core.logging import BusinessLogger
from ..models.user import User
from ..schemas.auth import UserUpdate

logger = BusinessLogger()


class UserService:
    """Read, edit and logical delete of user records."""

    async def get_user(self, db: AsyncSession, user_id: str) -> User:
        """Get a live user or raise."""
        user = await auth_service.get_user_by_id(db, user_id)
        if not user:
            raise NotFoundError("No User Found")
        return user

    async def get_users(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: int = 100
    ) -> List[User]:
        """List live users, oldest first."""
        stmt = (
            select(User)
            .where(User.is_deleted.is_(False))
            .order_by(User.created_on, User.id)
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def edit_user(
        self,
        db: AsyncSession,
        user_id: str,
        user_update: UserUpdate
    ) -> User:
        """Apply the provided profile fields."""
        user = await self.get_user(db, user_id)

        for field, value in user_update.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        await db.commit()
        await db.refresh(user)
        logger.log_user_changed(user_id, "edited")
        return user

    async def delete_user(self, db: AsyncSession, user_id: str) -> None:
        """Logically delete a user; the record stays in the store."""
        user = await self.get_user(db, user_id)
        user.is_deleted = True
        await db.commit()
        logger.log_user_changed(user_id, "deleted")


# Global user service instance
user_service = UserService()
