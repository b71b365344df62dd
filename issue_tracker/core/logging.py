"""Logging configuration and utilities."""
import logging
import sys
from typing import Any, Dict

import structlog
from structlog.stdlib import LoggerFactory

from ..config import settings


def configure_logging():
    """Configure structured logging."""

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.monitoring.log_level.upper()),
    )

    # Quiet the server and SQL loggers
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)


# "event" is structlog's message key, so business events go under "event_type"
_request_log = structlog.get_logger("api.request")
_user_log = structlog.get_logger("business.user")
_issue_log = structlog.get_logger("business.issue")
_mail_log = structlog.get_logger("business.mail")
_auth_log = structlog.get_logger("security.auth")
_access_log = structlog.get_logger("security.access")


class RequestLogger:
    """Request logging utility."""

    @staticmethod
    def log_request(
        method: str,
        path: str,
        request_id: str = None,
        extra_data: Dict[str, Any] = None
    ):
        """Log incoming request."""
        _request_log.info(
            "Request started",
            method=method,
            path=path,
            request_id=request_id,
            **(extra_data or {})
        )

    @staticmethod
    def log_response(
        method: str,
        path: str,
        status_code: int,
        response_time_ms: float,
        user_id: str = None,
        request_id: str = None,
    ):
        """Log response with timing and the acting user, if any."""
        _request_log.info(
            "Request completed",
            method=method,
            path=path,
            status_code=status_code,
            response_time_ms=round(response_time_ms, 2),
            user_id=user_id,
            request_id=request_id,
        )

    @staticmethod
    def log_unhandled_error(method: str, path: str, request_id: str = None):
        # Called from inside an except block; logs the traceback
        _request_log.exception(
            "Unhandled application error",
            method=method,
            path=path,
            request_id=request_id,
        )


class BusinessLogger:
    """Account, issue and mail events."""

    @staticmethod
    def log_user_signed_up(user_id: str, email: str):
        _user_log.info("User signed up", event_type="user_signed_up", user_id=user_id, email=email)

    @staticmethod
    def log_user_verified(user_id: str, already_verified: bool):
        _user_log.info(
            "User verified",
            event_type="user_verified",
            user_id=user_id,
            already_verified=already_verified,
        )

    @staticmethod
    def log_user_changed(user_id: str, action: str):
        """Log user edit or delete."""
        _user_log.info("User changed", event_type=f"user_{action}", user_id=user_id)

    @staticmethod
    def log_issue_changed(issue_id: str, user_id: str, action: str):
        """Log issue registration, edit or delete."""
        _issue_log.info(
            "Issue changed",
            event_type=f"issue_{action}",
            issue_id=issue_id,
            user_id=user_id,
        )

    @staticmethod
    def log_comment_added(comment_id: str, issue_id: str, user_id: str):
        _issue_log.info(
            "Comment added",
            event_type="comment_added",
            comment_id=comment_id,
            issue_id=issue_id,
            user_id=user_id,
        )

    @staticmethod
    def log_mail_failed(email: str, mail_type: str, error_message: str):
        _mail_log.error(
            "Mail delivery failed",
            event_type="mail_failed",
            email=email,
            mail_type=mail_type,
            error_message=error_message,
        )


class SecurityLogger:
    """Security event logging utility."""

    @staticmethod
    def log_login_attempt(
        email: str,
        success: bool,
        failure_reason: str = None
    ):
        """Log login attempt; the reason never reaches the client."""
        _auth_log.info(
            "Login attempt",
            event_type="login_attempt",
            email=email,
            success=success,
            failure_reason=failure_reason
        )

    @staticmethod
    def log_unauthorized_access(
        path: str,
        method: str,
        ip_address: str = None,
        user_agent: str = None,
        reason: str = None
    ):
        """Log a request turned away by the gate."""
        _access_log.warning(
            "Unauthorized access attempt",
            event_type="unauthorized_access",
            path=path,
            method=method,
            ip_address=ip_address,
            user_agent=user_agent,
            reason=reason
        )

    @staticmethod
    def log_password_reset_requested(user_id: str):
        _auth_log.info(
            "Password reset requested",
            event_type="password_reset_requested",
            user_id=user_id,
        )

    @staticmethod
    def log_password_reset(user_id: str, success: bool, failure_reason: str = None):
        _auth_log.info(
            "Password reset",
            event_type="password_reset",
            user_id=user_id,
            success=success,
            failure_reason=failure_reason,
        )
