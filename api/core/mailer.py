"""
Outgoing mail over SMTP.
"""

from __future__ import annotations

import logging
import os
import smtplib
from email.message import EmailMessage

from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class MailError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def smtp_host() -> str:
    return os.environ.get("SMTP_HOST", "localhost").strip() or "localhost"


def smtp_port() -> int:
    return _env_int("SMTP_PORT", 587)


def smtp_user() -> str:
    return os.environ.get("SMTP_USER", "").strip()


def smtp_password() -> str:
    return os.environ.get("SMTP_PASSWORD", "").strip()


def mail_from() -> str:
    return os.environ.get("MAIL_FROM", "info@widgets.local").strip() or "info@widgets.local"


def build_message(*, to: str, subject: str, text_body: str, html_body: str | None = None) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = mail_from()
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(text_body)
    if html_body:
        msg.add_alternative(html_body, subtype="html")
    return msg


def _send(msg: EmailMessage) -> None:
    with smtplib.SMTP(smtp_host(), smtp_port(), timeout=10) as conn:
        user = smtp_user()
        if user:
            conn.starttls()
            conn.login(user, smtp_password())
        conn.send_message(msg)


async def send_mail(*, to: str, subject: str, text_body: str, html_body: str | None = None) -> None:
    msg = build_message(to=to, subject=subject, text_body=text_body, html_body=html_body)
    try:
        await run_in_threadpool(_send, msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.exception("mail_send_failed to=%s subject=%s", to, subject)
        raise MailError(f"Failed to send mail to {to}.") from exc
    logger.info("mail_sent to=%s subject=%s", to, subject)
