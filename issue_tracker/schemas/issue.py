"""Issue schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from ..models.issue import ISSUE_STATUSES
from .common import BaseSchema, reject_null


def _check_status(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in ISSUE_STATUSES:
        raise ValueError(f"status must be one of: {', '.join(ISSUE_STATUSES)}")
    return value


class IssueCreate(BaseSchema):
    """Issue registration schema."""

    issue_title: str = Field(..., min_length=1, max_length=255)
    status: str = Field(default="backlog")
    description: Optional[str] = None
    attachments: List[str] = Field(default_factory=list, description="Attachment URLs")
    assignee: Optional[str] = Field(None, max_length=255)
    watchers: List[str] = Field(default_factory=list, description="Watching user ids")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "issueTitle": "Performance of System",
                "status": "in-progress",
                "description": "This is Test Description",
                "attachments": ["https://issue-bucket.s3.amazonaws.com/screenshot.png"],
                "assignee": "Raju Rastogi",
            }
        }
    )

    @field_validator("status")
    @classmethod
    def _known_status(cls, value):
        return _check_status(value)


class IssueUpdate(BaseSchema):
    """Issue edit schema; only provided fields change."""

    issue_title: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[str] = None
    description: Optional[str] = None
    attachments: Optional[List[str]] = None
    assignee: Optional[str] = Field(None, max_length=255)
    watchers: Optional[List[str]] = None

    @field_validator("issue_title", "status", "attachments", "watchers")
    @classmethod
    def _required_not_null(cls, value):
        return reject_null(value)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value):
        return _check_status(value)


class IssueResponse(BaseSchema):
    """Issue response schema."""

    issue_id: str
    issue_title: str
    reporter_id: str
    reporter_name: str
    status: str
    description: Optional[str] = None
    attachments: List[str]
    assignee: Optional[str] = None
    comments: List[str]
    watchers: List[str]
    reported_on: datetime
    modified_on: datetime
