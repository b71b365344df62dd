"""Comment service."""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import BusinessLogger
from ..models.comment import Comment
from ..schemas.auth import SessionClaims
from ..schemas.comment import CommentCreate
from .issue import issue_service

logger = BusinessLogger()


class CommentService:
    """Comments attached to issues."""

    async def add_comment(
        self,
        db: AsyncSession,
        comment_create: CommentCreate,
        author: SessionClaims
    ) -> Comment:
        """Add a comment by the session user and link it to the issue."""
        issue = await issue_service.get_issue(db, comment_create.issue_id)

        comment = Comment(
            issue_id=issue.issue_id,
            user_id=author.user_id,
            user_name=author.full_name,
            comment=comment_create.comment,
        )
        db.add(comment)
        await db.flush()

        issue.comments = [*issue.comments, comment.comment_id]
        await db.commit()
        await db.refresh(comment)

        logger.log_comment_added(comment.comment_id, issue.issue_id, author.user_id)
        return comment

    async def get_comments(self, db: AsyncSession, issue_id: str) -> List[Comment]:
        """Comments on an issue, oldest first."""
        await issue_service.get_issue(db, issue_id)

        stmt = (
            select(Comment)
            .where(Comment.issue_id == issue_id)
            .order_by(Comment.commented_on, Comment.id)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())


# Global comment service instance
comment_service = CommentService()
