"""API middleware and exception handlers producing the response envelope."""
import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.exceptions import BaseAPIException, ValidationError
from ..core.logging import RequestLogger
from ..schemas.common import generate_response


def envelope_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    """Error envelope as a JSON response."""
    body = generate_response(message, status=status_code, error=True)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        # Log request
        start_time = time.time()
        RequestLogger.log_request(
            method=request.method,
            path=str(request.url.path),
            request_id=request_id,
            extra_data={
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent")
            }
        )

        # Process request
        response = await call_next(request)

        # Calculate response time
        response_time_ms = (time.time() - start_time) * 1000

        # The gate leaves the caller's claims on the request state
        user = getattr(request.state, "user", None)
        RequestLogger.log_response(
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            response_time_ms=response_time_ms,
            user_id=user.user_id if user else None,
            request_id=request_id
        )

        # Add request ID to response headers
        response.headers["X-Request-ID"] = request_id

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Last line of defence: nothing reaches the transport uncaught."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except BaseAPIException as e:
            return envelope_response(e.status_code, e.message)

        except Exception:
            RequestLogger.log_unhandled_error(
                method=request.method,
                path=str(request.url.path),
                request_id=getattr(request.state, "request_id", None),
            )
            return envelope_response(500, "Internal server error")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        # Add security headers
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the "body"/"query" prefix from the location
        location = [str(item) for item in error.get("loc", ())[1:]]
        field = ".".join(location) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Translate API, validation and routing errors into the envelope."""

    @app.exception_handler(BaseAPIException)
    async def _handle_api_exception(request: Request, exc: BaseAPIException):
        return envelope_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _handle_validation_error(request: Request, exc: RequestValidationError):
        error = ValidationError(_validation_message(exc))
        return envelope_response(error.status_code, error.message)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(request: Request, exc: StarletteHTTPException):
        return envelope_response(exc.status_code, str(exc.detail), headers=exc.headers)
