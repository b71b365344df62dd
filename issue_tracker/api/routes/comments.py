"""Comment routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.security import is_authorized
from ...database import get_db
from ...schemas.auth import SessionClaims
from ...schemas.comment import CommentCreate, CommentResponse
from ...schemas.common import ApiResponse, generate_response
from ...services.comment import comment_service

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.post("/addComment", response_model=ApiResponse)
async def add_comment(
    comment_create: CommentCreate,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Comment on an issue as the caller."""
    comment = await comment_service.add_comment(db, comment_create, current_user)
    return generate_response("Comment added", CommentResponse.model_validate(comment))


@router.get("/{issue_id}/getCommentsOnIssue", response_model=ApiResponse)
async def get_comments_on_issue(
    issue_id: str,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """List comments on an issue."""
    comments = await comment_service.get_comments(db, issue_id)
    return generate_response(
        "Comment details found",
        [CommentResponse.model_validate(comment) for comment in comments]
    )
