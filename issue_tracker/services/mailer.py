"""Outbound mail for verification and password reset links."""
import asyncio
import smtplib
from email.message import EmailMessage
from typing import Optional

import structlog

from ..config import MailSettings, settings
from ..core.exceptions import InternalFailureError
from ..core.logging import BusinessLogger

VERIFICATION_MAIL = "verification"
RESET_MAIL = "reset"


class Mailer:
    """Sends account mails through the configured backend.

    ``console`` only logs the link, which is what development and tests
    use; ``smtp`` delivers through an SMTP relay off the event loop.
    """

    def __init__(self, mail_settings: MailSettings):
        self.settings = mail_settings
        self.logger = structlog.get_logger("mail")

    def verification_link(self, user_id: str, token: str) -> str:
        return f"{self.settings.frontend_url}/verify/{user_id}?token={token}"

    def reset_link(self, token: str) -> str:
        return f"{self.settings.frontend_url}/reset-password?token={token}"

    async def send_verification_mail(self, email: str, user_id: str, token: str) -> None:
        link = self.verification_link(user_id, token)
        await self._send(
            email,
            VERIFICATION_MAIL,
            "Verify your email",
            f"Welcome to Issue Tracker.\n\nConfirm your email address here:\n{link}\n",
        )

    async def send_reset_mail(self, email: str, token: str) -> None:
        link = self.reset_link(token)
        await self._send(
            email,
            RESET_MAIL,
            "Reset your password",
            "We received a request to reset your password.\n\n"
            f"Use this link within the next few minutes:\n{link}\n\n"
            "If you did not ask for this, ignore this mail.\n",
        )

    async def _send(self, email: str, mail_type: str, subject: str, body: str) -> None:
        if self.settings.backend == "console":
            self.logger.info("Mail queued", mail_type=mail_type, email=email, body=body)
            return

        message = EmailMessage()
        message["From"] = self.settings.sender
        message["To"] = email
        message["Subject"] = subject
        message.set_content(body)

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            BusinessLogger.log_mail_failed(email, mail_type, str(e))
            raise InternalFailureError("Failed to send mail")

        self.logger.info("Mail sent", mail_type=mail_type, email=email)

    def _deliver(self, message: EmailMessage) -> None:
        smtp_class = smtplib.SMTP_SSL if self.settings.smtp_use_ssl else smtplib.SMTP
        with smtp_class(self.settings.smtp_host, self.settings.smtp_port, timeout=10) as server:
            if self.settings.smtp_user:
                server.login(self.settings.smtp_user, self.settings.smtp_password)
            server.send_message(message)


_mailer: Optional[Mailer] = None


def get_mailer() -> Mailer:
    """Mailer dependency."""
    global _mailer

    if _mailer is None:
        _mailer = Mailer(settings.mail)
    return _mailer
