"""Custom exceptions for the application."""


class BaseAPIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = None,
        details: dict = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseAPIException):
    """Missing or malformed required field."""

    def __init__(self, message: str = "Validation failed", details: dict = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details
        )


class NotFoundError(BaseAPIException):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: dict = None):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND_ERROR",
            details=details
        )


class AuthenticationFailedError(BaseAPIException):
    """Bad email/password pair.

    The message is kept generic so callers cannot tell an unknown email
    from a wrong password; ``reason`` is for logs only.
    """

    def __init__(
        self,
        message: str = "Invalid email or password. Login Failed",
        reason: str = None,
        details: dict = None
    ):
        self.reason = reason
        super().__init__(
            message=message,
            status_code=400,
            error_code="AUTHENTICATION_FAILED",
            details=details
        )


class UnauthorizedError(BaseAPIException):
    """Missing, invalid or expired token."""

    def __init__(self, message: str = "Not authorized", details: dict = None):
        super().__init__(
            message=message,
            status_code=401,
            error_code="UNAUTHORIZED",
            details=details
        )


class ConflictError(BaseAPIException):
    """Duplicate value for a unique field."""

    def __init__(self, message: str = "Resource conflict", details: dict = None):
        super().__init__(
            message=message,
            status_code=403,
            error_code="CONFLICT_ERROR",
            details=details
        )


class InternalFailureError(BaseAPIException):
    """Store or delivery failure."""

    def __init__(self, message: str = "Internal failure", details: dict = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="INTERNAL_FAILURE",
            details=details
        )
