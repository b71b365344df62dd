"""User and account routes."""
import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.auth import AuthService, get_auth_service
from ...core.exceptions import InternalFailureError, UnauthorizedError
from ...core.security import is_authorized
from ...database import get_db
from ...schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SessionClaims,
    SignupRequest,
    UserDetails,
    UserUpdate,
)
from ...schemas.common import ApiResponse, generate_response, store_result
from ...services.mailer import Mailer, get_mailer
from ...services.user import user_service

router = APIRouter(prefix="/users", tags=["Users"])
logger = structlog.get_logger("api.users")


def _require_self(current_user: SessionClaims, user_id: str) -> None:
    if current_user.user_id != user_id:
        raise UnauthorizedError("Not authorized to modify another user")


@router.post("/signup", response_model=ApiResponse)
async def signup(
    signup_request: SignupRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
    mailer: Mailer = Depends(get_mailer)
):
    """Create an unverified user and mail the verification link."""
    user = await auth.create_user(db, signup_request)

    token = auth.create_verification_token(user)
    try:
        await mailer.send_verification_mail(user.email, user.user_id, token)
    except InternalFailureError:
        # Signup stands even when the mail could not be delivered
        logger.warning("Verification mail not sent", user_id=user.user_id)

    return generate_response("User created", UserDetails.model_validate(user))


@router.post("/login", response_model=ApiResponse)
async def login(
    login_request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service)
):
    """Verify credentials and issue a session token."""
    login_data = await auth.login(db, login_request.email, login_request.password)
    return generate_response("Login Successful", login_data)


@router.post("/logout", response_model=ApiResponse)
async def logout(
    current_user: SessionClaims = Depends(is_authorized)
):
    """Logout (the client discards its token; nothing is stored server-side)."""
    return generate_response("Logged Out Successfully")


@router.post("/forgotPassword", response_model=ApiResponse)
async def forgot_password(
    forgot_request: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
    mailer: Mailer = Depends(get_mailer)
):
    """Issue a single-use reset token and mail it."""
    user, token = await auth.request_password_reset(db, forgot_request.email)
    await mailer.send_reset_mail(user.email, token)
    return generate_response("Password reset mail sent", "Mail sent successfully")


@router.post("/resetPassword", response_model=ApiResponse)
async def reset_password(
    reset_request: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service)
):
    """Consume a reset token and set the new password."""
    await auth.reset_password(db, reset_request.reset_token, reset_request.new_password)
    return generate_response("Password updated", "Password reset successful")


@router.get("/{user_id}/verifyUser", response_model=ApiResponse)
async def verify_user(
    user_id: str,
    token: str = Query(..., min_length=1, description="Token from the verification mail"),
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service)
):
    """Confirm the user's email address."""
    already_verified = await auth.verify_user(db, user_id, token)
    if already_verified:
        return generate_response("user already verified", "User Verified Successfully")
    return generate_response("user found & verified", "User Verified Successfully")


@router.get("/view/allUsers", response_model=ApiResponse)
async def get_all_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """List all users."""
    users = await user_service.get_users(db, skip=skip, limit=limit)
    return generate_response(
        "All User Details Found",
        [UserDetails.model_validate(user) for user in users]
    )


@router.get("/{user_id}/userDetails", response_model=ApiResponse)
async def get_user_details(
    user_id: str,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Get a single user's details."""
    user = await user_service.get_user(db, user_id)
    return generate_response("User Details Found", UserDetails.model_validate(user))


@router.put("/{user_id}/edit", response_model=ApiResponse)
async def edit_user(
    user_id: str,
    user_update: UserUpdate,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Edit the caller's own profile."""
    _require_self(current_user, user_id)
    await user_service.edit_user(db, user_id, user_update)
    return generate_response("User details edited", store_result(modified=True))


@router.put("/{user_id}/deleteUser", response_model=ApiResponse)
async def delete_user(
    user_id: str,
    current_user: SessionClaims = Depends(is_authorized),
    db: AsyncSession = Depends(get_db)
):
    """Delete the caller's own account."""
    _require_self(current_user, user_id)
    await user_service.delete_user(db, user_id)
    return generate_response("Deleted the user successfully", store_result())
