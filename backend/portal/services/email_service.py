"""Email service for sending notification emails via SMTP."""

from __future__ import annotations

import logging
from email.message import EmailMessage

from portal.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TEXT_BODY = "Por favor abra este correo en un cliente compatible con HTML."


class EmailService:
    """Service for sending emails via SMTP."""

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> bool:
        """Send an email via SMTP.

        Args:
            to: Recipient email address.
            subject: Email subject line.
            html_body: HTML content of the email.
            text_body: Plain-text alternative; a generic hint when omitted.

        Returns:
            True if sent successfully (or no-op when SMTP unconfigured).

        Raises:
            aiosmtplib.SMTPException: if the relay rejects or drops the message.
        """
        if not settings.SMTP_HOST:
            logger.info("SMTP not configured, skipping email to %s: %s", to, subject)
            return True

        import aiosmtplib

        msg = EmailMessage()
        msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text_body or DEFAULT_TEXT_BODY)
        msg.add_alternative(html_body, subtype="html")

        await aiosmtplib.send(
            msg,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME or None,
            password=settings.SMTP_PASSWORD or None,
            start_tls=settings.SMTP_USE_TLS,
        )
        logger.info("Email sent to %s: %s", to, subject)
        return True
