"""SMTP email notifications: welcome credentials and password reset links."""

import html
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from gold_portfolio.config import settings

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return bool(settings.smtp_host and settings.smtp_user and settings.smtp_password)


def _send(to: str, subject: str, text: str, html_body: str) -> bool:
    """Send one message. Returns False instead of raising on any SMTP failure."""
    if not is_configured():
        logger.warning("SMTP not configured; skipping email '%s' to %s", subject, to)
        return False

    msg = EmailMessage()
    msg["From"] = formataddr(
        (settings.email_from_name, settings.email_from_address or settings.smtp_user)
    )
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(text)
    msg.add_alternative(html_body, subtype="html")

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as smtp:
            if settings.smtp_use_tls:
                smtp.starttls()
            smtp.login(settings.smtp_user, settings.smtp_password)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed to send email '%s' to %s: %s", subject, to, e)
        return False

    logger.info("Sent email '%s' to %s", subject, to)
    return True


def send_welcome_email(to: str, name: str, password: str) -> bool:
    """Email a newly created member their login credentials."""
    company = settings.company_name
    login_url = settings.app_url
    text = (
        f"Welcome to {company}!\n\n"
        f"Hi {name},\n\n"
        "Your account has been created. Your login credentials:\n"
        f"  Email: {to}\n"
        f"  Password: {password}\n\n"
        f"Log in at {login_url} and change your password after your first login."
    )
    body = (
        f"<p>Hi <strong>{html.escape(name)}</strong>,</p>"
        f"<p>Your {html.escape(company)} account has been created.</p>"
        f"<p>Email: <code>{html.escape(to)}</code><br>Password: <code>{html.escape(password)}</code></p>"
        f'<p><a href="{html.escape(login_url)}">Log in</a> and change your password after your first login.</p>'
    )
    return _send(to, f"Welcome to {company} - Your Account Details", text, body)


def send_password_reset_email(to: str, name: str, reset_token: str) -> bool:
    reset_url = f"{settings.app_url}/reset-password?token={reset_token}"
    minutes = settings.password_reset_expire_minutes
    text = (
        "Reset Your Password\n\n"
        f"Hi {name},\n\n"
        f"Click this link to reset your password:\n{reset_url}\n\n"
        f"This link expires in {minutes} minutes. "
        "If you didn't request this, ignore this email."
    )
    body = (
        f"<p>Hi <strong>{html.escape(name)}</strong>,</p>"
        f"<p>We received a request to reset your {html.escape(settings.company_name)} password.</p>"
        f'<p><a href="{html.escape(reset_url)}">Reset Password</a></p>'
        f"<p>This link will expire in {minutes} minutes.</p>"
        "<p>If you didn't request this, please ignore this email.</p>"
    )
    return _send(to, f"Reset Your Password - {settings.company_name}", text, body)
