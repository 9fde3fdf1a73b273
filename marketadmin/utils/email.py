from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from marketadmin.config import settings

logger = logging.getLogger(__name__)


def is_email_enabled() -> bool:
    """Email goes out only when switched on and a server and sender are configured."""
    return bool(
        settings.EMAIL_NOTIFICATIONS_ENABLED
        and settings.SMTP_SERVER
        and settings.EMAIL_FROM
    )


def build_message(*, to_email: str, subject: str, body_text: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.EMAIL_FROM
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(body_text)
    return msg


def _open_connection() -> smtplib.SMTP:
    if settings.SMTP_USE_SSL:
        return smtplib.SMTP_SSL(
            settings.SMTP_SERVER,
            settings.SMTP_PORT,
            timeout=settings.SMTP_TIMEOUT_SECONDS,
        )
    return smtplib.SMTP(
        settings.SMTP_SERVER,
        settings.SMTP_PORT,
        timeout=settings.SMTP_TIMEOUT_SECONDS,
    )


def send_email(*, to_email: str, subject: str, body_text: str) -> bool:
    """
    Deliver one plain-text message.

    Returns True on success. SMTP failures are logged and reported as False.
    """
    if not is_email_enabled():
        return False

    msg = build_message(to_email=to_email, subject=subject, body_text=body_text)
    username: Optional[str] = settings.SMTP_USERNAME or settings.EMAIL_FROM
    password = settings.EMAIL_PASSWORD or ""

    try:
        with _open_connection() as server:
            if settings.SMTP_USE_TLS and not settings.SMTP_USE_SSL:
                server.starttls()
            if password:
                server.login(username, password)
            server.send_message(msg)
        return True
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("Email send failed for '%s': %s", to_email, exc)
        return False
