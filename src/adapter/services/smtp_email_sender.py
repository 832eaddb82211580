"""
SMTP Email Sender

Delivers verification and setup links over SMTP. When no SMTP host is
configured (local development), the message is logged instead of sent.
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Outbound email could not be handed to the SMTP server"""


def redact_email(email: str) -> str:
    """Redact an email address for logging to avoid PII leakage."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class SmtpEmailSender(IEmailSender):
    def __init__(
        self,
        *,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        from_name: str = "HR Platform",
        base_url: str = "http://localhost:3000",
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.from_name = from_name
        self.base_url = base_url.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.from_email)

    async def send_verification(self, email: str, token: str) -> None:
        link = f"{self.base_url}/verify-email?token={token}"
        await self._send(
            email,
            "Verify your email address",
            f"Welcome aboard!\n\nConfirm your email address by opening:\n{link}\n\n"
            "The link expires in 24 hours.",
        )

    async def send_account_setup(self, email: str, token: str) -> None:
        link = f"{self.base_url}/setup-account?token={token}"
        await self._send(
            email,
            "Set up your account",
            f"An administrator has invited you to set up your account.\n\n"
            f"Choose your password here:\n{link}",
        )

    async def _send(self, to_email: str, subject: str, text_body: str) -> None:
        if not self.is_configured:
            # Dev mode: log the email instead of sending
            logger.info(
                f"Email not sent (SMTP not configured): to={redact_email(to_email)} "
                f"subject={subject!r}"
            )
            return

        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(self._send_sync, to_email, subject, text_body)
        logger.info(f"Email sent: to={redact_email(to_email)} subject={subject!r}")

    def _send_sync(self, to_email: str, subject: str, text_body: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain"))

        context = ssl.create_default_context()
        try:
            if self.smtp_use_tls:
                with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                    server.starttls(context=context)
                    if self.smtp_user and self.smtp_password:
                        server.login(self.smtp_user, self.smtp_password)
                    server.sendmail(self.from_email, to_email, msg.as_string())
            else:
                with smtplib.SMTP_SSL(
                    self.smtp_host, self.smtp_port, context=context, timeout=30
                ) as server:
                    if self.smtp_user and self.smtp_password:
                        server.login(self.smtp_user, self.smtp_password)
                    server.sendmail(self.from_email, to_email, msg.as_string())
        except (smtplib.SMTPException, ssl.SSLError, OSError) as exc:
            raise EmailDeliveryError(
                f"{type(exc).__name__} while sending to {redact_email(to_email)}"
            ) from exc
