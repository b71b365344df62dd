"""Tests for the authentication service."""
from datetime import timedelta

import pytest
from jose import jwt

from issue_tracker.config import settings
from issue_tracker.core.auth import AuthService, normalize_email
from issue_tracker.core.exceptions import (
    AuthenticationFailedError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from issue_tracker.models.user import User
from issue_tracker.schemas.auth import SignupRequest

PASSWORD = "correct-horse-battery"


def _signup(email: str = "mayur@example.com") -> SignupRequest:
    return SignupRequest(first_name="Mayur", last_name="Mahamune", email=email, password=PASSWORD)


@pytest.fixture
def user(auth):
    """An unsaved user record."""
    return User(
        user_id="eKOTSdkn7Q",
        first_name="Mayur",
        last_name="Mahamune",
        email="mayur@example.com",
        hashed_password=auth.hash_password(PASSWORD),
        user_verification_status=False,
        token_version=0,
    )


def test_password_hashing(auth):
    """Test bcrypt hashing and verification."""
    hashed = auth.hash_password(PASSWORD)

    assert hashed != PASSWORD
    assert auth.verify_password(PASSWORD, hashed)
    assert not auth.verify_password("wrong-password", hashed)


def test_normalize_email():
    assert normalize_email("  Mayur@Example.COM ") == "mayur@example.com"
    assert normalize_email(None) == ""


def test_session_token_claims(auth, user):
    """The session token carries identity but never the password."""
    token = auth.create_session_token(user)
    payload = jwt.decode(
        token, settings.auth.secret_key, algorithms=[settings.auth.algorithm],
        issuer=settings.auth.issuer
    )

    assert payload["sub"] == user.user_id
    assert payload["type"] == "access"
    assert payload["iss"] == "issueTrackingTool"
    assert payload["exp"] > payload["iat"]
    assert payload["data"]["userId"] == user.user_id
    assert payload["data"]["email"] == user.email
    assert "hashedPassword" not in payload["data"]
    assert "password" not in payload["data"]


def test_verify_session_token(auth, user):
    claims = auth.verify_session_token(auth.create_session_token(user))

    assert claims.user_id == user.user_id
    assert claims.full_name == "Mayur Mahamune"


def test_expired_session_token(auth, user):
    token = auth.create_session_token(user, expires_delta=timedelta(seconds=-1))

    with pytest.raises(UnauthorizedError):
        auth.verify_session_token(token)


def test_foreign_key_session_token(auth, user):
    """A token signed with another key is rejected."""
    other = AuthService(settings.auth.model_copy(update={"secret_key": "other-key"}))

    with pytest.raises(UnauthorizedError):
        auth.verify_session_token(other.create_session_token(user))


def test_foreign_issuer_session_token(auth, user):
    other = AuthService(settings.auth.model_copy(update={"issuer": "someoneElse"}))

    with pytest.raises(UnauthorizedError):
        auth.verify_session_token(other.create_session_token(user))


def test_token_purposes_do_not_mix(auth, user):
    """Each token type is only accepted for its own purpose."""
    with pytest.raises(UnauthorizedError):
        auth.verify_session_token(auth.create_reset_token(user))

    with pytest.raises(UnauthorizedError):
        auth.verify_session_token(auth.create_verification_token(user))

    with pytest.raises(UnauthorizedError):
        auth.decode_token(auth.create_session_token(user), "reset")


def test_reset_token_carries_version(auth, user):
    user.token_version = 3
    payload = auth.decode_token(auth.create_reset_token(user), "reset")

    assert payload["sub"] == user.user_id
    assert payload["ver"] == 3


@pytest.mark.asyncio
async def test_create_and_authenticate_user(async_session, auth):
    """Test signup followed by authentication."""
    created = await auth.create_user(async_session, _signup("Mayur@Example.com"))

    assert created.email == "mayur@example.com"
    assert created.user_verification_status is False
    assert created.hashed_password != PASSWORD

    user = await auth.authenticate_user(async_session, "MAYUR@example.com", PASSWORD)
    assert user.user_id == created.user_id


@pytest.mark.asyncio
async def test_create_user_duplicate(async_session, auth):
    await auth.create_user(async_session, _signup())

    with pytest.raises(ConflictError):
        await auth.create_user(async_session, _signup())


@pytest.mark.asyncio
async def test_authenticate_failures_look_alike(async_session, auth):
    """Unknown email and wrong password raise the same public error."""
    await auth.create_user(async_session, _signup())

    with pytest.raises(AuthenticationFailedError) as wrong_password:
        await auth.authenticate_user(async_session, "mayur@example.com", "wrong-password")
    with pytest.raises(AuthenticationFailedError) as unknown_email:
        await auth.authenticate_user(async_session, "nobody@example.com", PASSWORD)

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == unknown_email.value.status_code == 400


@pytest.mark.asyncio
async def test_deleted_user_cannot_login(async_session, auth):
    created = await auth.create_user(async_session, _signup())
    created.is_deleted = True
    await async_session.commit()

    with pytest.raises(AuthenticationFailedError):
        await auth.login(async_session, "mayur@example.com", PASSWORD)

    # The email stays taken
    with pytest.raises(ConflictError):
        await auth.create_user(async_session, _signup())


@pytest.mark.asyncio
async def test_request_password_reset_unknown_email(async_session, auth):
    with pytest.raises(NotFoundError):
        await auth.request_password_reset(async_session, "nobody@example.com")


@pytest.mark.asyncio
async def test_reset_token_is_single_use(async_session, auth):
    """A reset token succeeds once; replaying it fails."""
    created = await auth.create_user(async_session, _signup())
    user_id, email = created.user_id, created.email
    _, token = await auth.request_password_reset(async_session, email)

    assert await auth.reset_password(async_session, token, "brand-new-password") == user_id

    with pytest.raises(UnauthorizedError):
        await auth.reset_password(async_session, token, "another-password")

    async_session.expire_all()
    user = await auth.authenticate_user(async_session, email, "brand-new-password")
    assert user.token_version == 1


@pytest.mark.asyncio
async def test_expired_reset_token(async_session, auth):
    created = await auth.create_user(async_session, _signup())
    token = auth.create_reset_token(created, expires_delta=timedelta(seconds=-1))

    with pytest.raises(UnauthorizedError):
        await auth.reset_password(async_session, token, "brand-new-password")

    await auth.authenticate_user(async_session, created.email, PASSWORD)


@pytest.mark.asyncio
async def test_verify_user_is_idempotent(async_session, auth):
    """Verifying twice succeeds and reports the second call as a repeat."""
    created = await auth.create_user(async_session, _signup())
    token = auth.create_verification_token(created)

    assert await auth.verify_user(async_session, created.user_id, token) is False
    assert await auth.verify_user(async_session, created.user_id, token) is True

    user = await auth.get_user_by_id(async_session, created.user_id)
    assert user.user_verification_status is True


@pytest.mark.asyncio
async def test_verify_user_wrong_user(async_session, auth):
    created = await auth.create_user(async_session, _signup())
    token = auth.create_verification_token(created)

    with pytest.raises(UnauthorizedError):
        await auth.verify_user(async_session, "someone-else", token)


def test_overlong_password_never_matches(auth):
    hashed = auth.hash_password(PASSWORD)

    assert auth.verify_password("x" * 100, hashed) is False
    assert auth.verify_password("\U0001F600" * 30, hashed) is False


def test_overlong_password_is_not_hashed(auth):
    with pytest.raises(ValidationError) as exc_info:
        auth.hash_password("\U0001F600" * 30)

    assert exc_info.value.status_code == 400
