"""Authorization gate for protected routes."""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import (
    APIKeyHeader,
    APIKeyQuery,
    HTTPAuthorizationCredentials,
    HTTPBearer,
)

from ..schemas.auth import SessionClaims
from .auth import AuthService, get_auth_service
from .exceptions import UnauthorizedError
from .logging import SecurityLogger

# Security schemes; none of them rejects on its own so the gate can answer
bearer_scheme = HTTPBearer(auto_error=False)
auth_token_header = APIKeyHeader(name="authToken", auto_error=False)
auth_token_query = APIKeyQuery(name="authToken", auto_error=False)

NOT_AUTHORIZED = "Not authorized: missing, invalid or expired auth token"


def _reject(request: Request, reason: str) -> UnauthorizedError:
    SecurityLogger.log_unauthorized_access(
        path=str(request.url.path),
        method=request.method,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        reason=reason,
    )
    return UnauthorizedError(NOT_AUTHORIZED)


async def is_authorized(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    header_token: Optional[str] = Depends(auth_token_header),
    query_token: Optional[str] = Depends(auth_token_query),
    auth: AuthService = Depends(get_auth_service),
) -> SessionClaims:
    """Admit the request if it carries a valid session token.

    The decoded claims are stored on ``request.state.user`` and returned, so
    handlers take the acting user's identity from here rather than from the
    request body.
    """
    token = (credentials.credentials if credentials else None) or header_token or query_token
    if not token:
        raise _reject(request, "missing_token")

    try:
        claims = auth.verify_session_token(token)
    except UnauthorizedError as e:
        raise _reject(request, e.details.get("reason", "invalid_token"))

    request.state.user = claims
    return claims
