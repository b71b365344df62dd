"""Authentication core: password hashing, token issuance and the account workflow."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import AuthSettings, settings
from ..models.base import generate_short_id
from ..models.user import User
from ..schemas.auth import (
    PASSWORD_MAX_BYTES,
    LoginData,
    SessionClaims,
    SignupRequest,
    UserDetails,
)
from .exceptions import (
    AuthenticationFailedError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .logging import BusinessLogger, SecurityLogger

ACCESS_TOKEN = "access"
RESET_TOKEN = "reset"
VERIFY_TOKEN = "verify"


def normalize_email(raw_email: Optional[str]) -> str:
    """Strip whitespace and lower-case an email address."""
    return (raw_email or "").strip().lower()


class AuthService:
    """Authentication service.

    Holds the signing key for the lifetime of the process. Session tokens
    are validated without touching the store; reset and verification tokens
    are checked against the user record they name.
    """

    def __init__(self, auth_settings: AuthSettings):
        self.secret_key = auth_settings.secret_key
        self.algorithm = auth_settings.algorithm
        self.issuer = auth_settings.issuer
        self.access_token_expire_minutes = auth_settings.access_token_expire_minutes
        self.reset_token_expire_minutes = auth_settings.reset_token_expire_minutes
        self.verification_token_expire_hours = auth_settings.verification_token_expire_hours

    def hash_password(self, password: str) -> str:
        """Hash password using bcrypt."""
        encoded = password.encode("utf-8")
        if len(encoded) > PASSWORD_MAX_BYTES:
            raise ValidationError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash."""
        encoded = plain_password.encode("utf-8")
        # Nothing that long was ever hashed
        if len(encoded) > PASSWORD_MAX_BYTES:
            return False
        return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))

    # Tokens

    def _encode(self, claims: dict, token_type: str, expires_delta: timedelta) -> str:
        now = datetime.now(timezone.utc)
        to_encode = claims.copy()
        to_encode.update({
            "iat": now,
            "exp": now + expires_delta,
            "iss": self.issuer,
            "jti": generate_short_id(),
            "type": token_type,
        })
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str, expected_type: str) -> dict:
        """Verify signature, expiry, issuer and purpose; return the payload."""
        try:
            payload = jwt.decode(
                token, self.secret_key, algorithms=[self.algorithm], issuer=self.issuer
            )
        except JWTError as e:
            raise UnauthorizedError(
                "Invalid or expired token", details={"reason": str(e)}
            )

        if payload.get("type") != expected_type or not payload.get("sub"):
            raise UnauthorizedError("Invalid or expired token")

        return payload

    def create_session_token(
        self,
        user: User,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a session token carrying the user's non-secret identity."""
        claims = SessionClaims.model_validate(user)
        return self._encode(
            {"sub": user.user_id, "data": claims.model_dump(by_alias=True)},
            ACCESS_TOKEN,
            expires_delta or timedelta(minutes=self.access_token_expire_minutes),
        )

    def verify_session_token(self, token: str) -> SessionClaims:
        """Decode a session token into its identity claims."""
        payload = self.decode_token(token, ACCESS_TOKEN)
        try:
            claims = SessionClaims.model_validate(payload.get("data") or {})
        except ValueError:
            raise UnauthorizedError("Invalid or expired token")

        if claims.user_id != payload["sub"]:
            raise UnauthorizedError("Invalid or expired token")
        return claims

    def create_reset_token(
        self,
        user: User,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a password reset token bound to the current token version."""
        return self._encode(
            {"sub": user.user_id, "ver": user.token_version},
            RESET_TOKEN,
            expires_delta or timedelta(minutes=self.reset_token_expire_minutes),
        )

    def create_verification_token(
        self,
        user: User,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create an email verification token."""
        return self._encode(
            {"sub": user.user_id},
            VERIFY_TOKEN,
            expires_delta or timedelta(hours=self.verification_token_expire_hours),
        )

    # User lookups

    async def get_user_by_id(
        self,
        db: AsyncSession,
        user_id: str
    ) -> Optional[User]:
        """Get a live user by public id."""
        stmt = select(User).where(User.user_id == user_id, User.is_deleted.is_(False))
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_by_email(
        self,
        db: AsyncSession,
        email: str
    ) -> Optional[User]:
        """Get a live user by email."""
        stmt = select(User).where(
            User.email == normalize_email(email), User.is_deleted.is_(False)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    # Workflow

    async def create_user(
        self,
        db: AsyncSession,
        signup: SignupRequest
    ) -> User:
        """Create a new, unverified user."""
        email = normalize_email(signup.email)

        # Deleted records keep their email
        existing = await db.scalar(select(User.id).where(User.email == email))
        if existing is not None:
            raise ConflictError("User Already Present With this Email")

        db_user = User(
            first_name=signup.first_name.strip(),
            last_name=(signup.last_name or "").strip() or None,
            email=email,
            hashed_password=self.hash_password(signup.password),
            mobile_number=signup.mobile_number,
            country=signup.country,
            user_verification_status=False,
        )

        db.add(db_user)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictError("User Already Present With this Email")
        await db.refresh(db_user)

        BusinessLogger.log_user_signed_up(db_user.user_id, db_user.email)
        return db_user

    async def authenticate_user(
        self,
        db: AsyncSession,
        email: str,
        password: str
    ) -> User:
        """Authenticate user with email and password."""
        user = await self.get_user_by_email(db, email)

        if not user:
            SecurityLogger.log_login_attempt(email, False, "unknown_email")
            raise AuthenticationFailedError(reason="unknown_email")

        if not self.verify_password(password, user.hashed_password):
            SecurityLogger.log_login_attempt(email, False, "wrong_password")
            raise AuthenticationFailedError(reason="wrong_password")

        SecurityLogger.log_login_attempt(email, True)
        return user

    async def login(
        self,
        db: AsyncSession,
        email: str,
        password: str
    ) -> LoginData:
        """Authenticate and issue a fresh session token."""
        user = await self.authenticate_user(db, email, password)
        return LoginData(
            auth_token=self.create_session_token(user),
            user_details=UserDetails.model_validate(user),
        )

    async def request_password_reset(
        self,
        db: AsyncSession,
        email: str
    ) -> tuple[User, str]:
        """Look up the account and issue a reset token for it."""
        user = await self.get_user_by_email(db, email)
        if not user:
            raise NotFoundError("No User Details Found")

        SecurityLogger.log_password_reset_requested(user.user_id)
        return user, self.create_reset_token(user)

    async def reset_password(
        self,
        db: AsyncSession,
        reset_token: str,
        new_password: str
    ) -> str:
        """Consume a reset token and store the new password hash.

        The update only matches while the stored token version equals the
        one in the token, so a token succeeds at most once.
        """
        payload = self.decode_token(reset_token, RESET_TOKEN)
        user_id = payload["sub"]
        version = payload.get("ver")
        if not isinstance(version, int):
            raise UnauthorizedError("Invalid or expired token")

        stmt = (
            update(User)
            .where(
                User.user_id == user_id,
                User.token_version == version,
                User.is_deleted.is_(False),
            )
            .values(
                hashed_password=self.hash_password(new_password),
                token_version=User.token_version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        if result.rowcount != 1:
            await db.rollback()
            SecurityLogger.log_password_reset(user_id, False, "token_already_used")
            raise UnauthorizedError("Invalid or expired token")

        await db.commit()
        SecurityLogger.log_password_reset(user_id, True)
        return user_id

    async def verify_user(
        self,
        db: AsyncSession,
        user_id: str,
        token: str
    ) -> bool:
        """Mark the user verified. Returns True if it already was."""
        payload = self.decode_token(token, VERIFY_TOKEN)
        if payload["sub"] != user_id:
            raise UnauthorizedError("Invalid or expired token")

        user = await self.get_user_by_id(db, user_id)
        if not user:
            raise NotFoundError("No User Found")

        already_verified = user.user_verification_status
        if not already_verified:
            user.user_verification_status = True
            await db.commit()

        BusinessLogger.log_user_verified(user_id, already_verified)
        return already_verified


# Global auth service instance
auth_service = AuthService(settings.auth)


def get_auth_service() -> AuthService:
    """Auth service dependency."""
    return auth_service
