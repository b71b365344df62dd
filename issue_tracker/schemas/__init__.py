"""Pydantic schemas module."""
from .auth import (
    SignupRequest,
    LoginRequest,
    LoginData,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserUpdate,
    UserDetails,
    SessionClaims,
)
from .issue import (
    IssueCreate,
    IssueUpdate,
    IssueResponse,
)
from .comment import (
    CommentCreate,
    CommentResponse,
)
from .common import (
    ApiResponse,
    HealthResponse,
    generate_response,
    store_result,
)

__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "LoginData",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "UserUpdate",
    "UserDetails",
    "SessionClaims",
    # Issue
    "IssueCreate",
    "IssueUpdate",
    "IssueResponse",
    # Comment
    "CommentCreate",
    "CommentResponse",
    # Common
    "ApiResponse",
    "HealthResponse",
    "generate_response",
    "store_result",
]
