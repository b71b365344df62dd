"""Issue routes."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.security import is_authorized
from ...database import get_db
from ...schemas.auth import SessionClaims
from ...schemas.common import ApiResponse, generate_response, store_result
from ...schemas.issue import IssueCreate, IssueResponse, IssueUpdate
from ...services.issue import issue_service

router = APIRouter(prefix="/issues", tags=["Issues"])


@router.post("/registerIssue", response_model=ApiResponse)
async def register_issue(
    issue_create: IssueCreate,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Register an issue reported by the caller."""
    issue = await issue_service.register_issue(db, issue_create, current_user)
    return generate_response("Issue registered successfully", IssueResponse.model_validate(issue))


@router.get("/allIssues", response_model=ApiResponse)
async def get_all_issues(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """List all issues."""
    issues = await issue_service.get_issues(db, skip=skip, limit=limit)
    return generate_response(
        "All Issue Found",
        [IssueResponse.model_validate(issue) for issue in issues]
    )


@router.get("/{issue_id}/getIssue", response_model=ApiResponse)
async def get_issue(
    issue_id: str,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Get a single issue."""
    issue = await issue_service.get_issue(db, issue_id)
    return generate_response("Issue details found", IssueResponse.model_validate(issue))


@router.put("/{issue_id}/editIssue", response_model=ApiResponse)
async def edit_issue(
    issue_id: str,
    issue_update: IssueUpdate,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Edit an issue."""
    await issue_service.edit_issue(db, issue_id, issue_update, current_user)
    return generate_response("Issue details edited/updated successfully", store_result(modified=True))


@router.put("/{issue_id}/deleteIssue", response_model=ApiResponse)
async def delete_issue(
    issue_id: str,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Delete an issue."""
    await issue_service.delete_issue(db, issue_id, current_user)
    return generate_response("Issue Deleted", store_result())
