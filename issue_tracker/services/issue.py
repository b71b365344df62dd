"""Issue service."""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.logging import BusinessLogger
from ..models.issue import Issue
from ..schemas.auth import SessionClaims
from ..schemas.issue import IssueCreate, IssueUpdate

logger = BusinessLogger()


class IssueService:
    """Issue registration, lookup, edit and delete."""

    async def register_issue(
        self,
        db: AsyncSession,
        issue_create: IssueCreate,
        reporter: SessionClaims
    ) -> Issue:
        """Register an issue reported by the session user."""
        issue = Issue(
            issue_title=issue_create.issue_title,
            reporter_id=reporter.user_id,
            reporter_name=reporter.full_name,
            status=issue_create.status,
            description=issue_create.description,
            attachments=list(issue_create.attachments),
            assignee=issue_create.assignee,
            comments=[],
            watchers=list(issue_create.watchers),
        )
        db.add(issue)
        await db.commit()
        await db.refresh(issue)

        logger.log_issue_changed(issue.issue_id, reporter.user_id, "registered")
        return issue

    async def get_issue(self, db: AsyncSession, issue_id: str) -> Issue:
        """Get a live issue or raise."""
        stmt = select(Issue).where(Issue.issue_id == issue_id, Issue.is_deleted.is_(False))
        result = await db.execute(stmt)
        issue = result.scalar_one_or_none()
        if not issue:
            raise NotFoundError("No Issue Found")
        return issue

    async def get_issues(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: int = 100
    ) -> List[Issue]:
        """List live issues, newest first."""
        stmt = (
            select(Issue)
            .where(Issue.is_deleted.is_(False))
            .order_by(Issue.reported_on.desc(), Issue.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def edit_issue(
        self,
        db: AsyncSession,
        issue_id: str,
        issue_update: IssueUpdate,
        editor: SessionClaims
    ) -> Issue:
        """Apply the provided fields to an issue."""
        issue = await self.get_issue(db, issue_id)

        for field, value in issue_update.model_dump(exclude_unset=True).items():
            # JSON columns are replaced wholesale so the change is tracked
            setattr(issue, field, list(value) if isinstance(value, list) else value)

        await db.commit()
        await db.refresh(issue)
        logger.log_issue_changed(issue_id, editor.user_id, "edited")
        return issue

    async def delete_issue(
        self,
        db: AsyncSession,
        issue_id: str,
        editor: SessionClaims
    ) -> None:
        """Logically delete an issue."""
        issue = await self.get_issue(db, issue_id)
        issue.is_deleted = True
        await db.commit()
        logger.log_issue_changed(issue_id, editor.user_id, "deleted")


# Global issue service instance
issue_service = IssueService()
